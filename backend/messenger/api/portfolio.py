"""REST API for per-user portfolios."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Header, HTTPException, UploadFile

from messenger.core.config import settings
from messenger.core.deps import get_portfolio_service
from messenger.services.portfolios import PortfolioService
from messenger.services.uploads import UploadRejected, any_file_policy, save_upload

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("")
async def get_portfolio(
    username: Optional[str] = None,
    portfolios: PortfolioService = Depends(get_portfolio_service),
):
    if not username:
        raise HTTPException(status_code=400, detail="Username required")
    return portfolios.get(username)


@router.get("/files")
async def get_portfolio_files(
    username: Optional[str] = None,
    portfolios: PortfolioService = Depends(get_portfolio_service),
):
    if not username:
        raise HTTPException(status_code=400, detail="Username required")
    files = portfolios.files(username)
    if files is None:
        logger.debug(f"Portfolio not found for username: {username}")
        raise HTTPException(status_code=404, detail="Portfolio not found")
    return {"files": files}


@router.post("/upload")
async def upload_portfolio(
    files: list[UploadFile] = File(default=[]),
    description: Optional[str] = Form(default=None),
    x_username: Optional[str] = Header(default=None),
    portfolios: PortfolioService = Depends(get_portfolio_service),
):
    if not x_username:
        raise HTTPException(status_code=400, detail="Username required")

    stored = []
    for upload in files:
        try:
            stored.append(
                await save_upload(upload, settings.uploads_dir, any_file_policy(), prefix="files")
            )
        except UploadRejected as e:
            raise HTTPException(status_code=400, detail=f"Upload failed: {e}")

    portfolios.update(x_username, description, stored)
    return {"message": "Portfolio updated"}
