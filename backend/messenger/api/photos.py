from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from messenger.core.config import settings
from messenger.core.deps import get_photo_service
from messenger.services.photos import PhotoService
from messenger.services.uploads import UploadRejected, photo_policy, save_upload

router = APIRouter()


@router.post("/upload-photo")
async def upload_photo(
    photo: Optional[UploadFile] = File(default=None),
    description: Optional[str] = Form(default=None),
    author: Optional[str] = Form(default=None),
    photos: PhotoService = Depends(get_photo_service),
):
    if photo is None:
        raise HTTPException(status_code=400, detail="Photo file is required")
    if not description or not author:
        raise HTTPException(status_code=400, detail="Description and author are required")
    try:
        stored = await save_upload(photo, settings.uploads_dir, photo_policy(), prefix="photo")
    except UploadRejected as e:
        raise HTTPException(status_code=400, detail=str(e))

    record = photos.add(stored, description, author)
    return {"message": "Photo uploaded successfully", "photo": record}


@router.get("/photos")
async def list_photos(photos: PhotoService = Depends(get_photo_service)):
    return {"photos": photos.list()}
