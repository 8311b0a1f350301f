"""REST API for the shared wallpaper."""

from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from pydantic import BaseModel

from messenger.core.config import settings
from messenger.core.deps import get_wallpaper_service
from messenger.core.sandbox import SandboxError
from messenger.services.uploads import UploadRejected, any_file_policy, save_upload
from messenger.services.wallpapers import URL_PREFIX, WallpaperNotFound, WallpaperService

router = APIRouter()


class WallpaperPath(BaseModel):
    path: Optional[str] = None


@router.post("/upload-wallpaper")
async def upload_wallpaper(
    wallpaper: Optional[UploadFile] = File(default=None),
    wallpapers: WallpaperService = Depends(get_wallpaper_service),
):
    if wallpaper is None:
        raise HTTPException(status_code=400, detail="File not found")
    try:
        stored = await save_upload(wallpaper, settings.wallpaper_dir, any_file_policy(), prefix="wallpaper")
    except UploadRejected as e:
        raise HTTPException(status_code=400, detail=f"Upload failed: {e}")

    file_path = URL_PREFIX + stored.filename
    wallpapers.set_current(file_path, stored.content_type)
    return {"message": "Upload successful", "filePath": file_path}


@router.get("/wallpaper")
async def get_wallpaper(wallpapers: WallpaperService = Depends(get_wallpaper_service)):
    return wallpapers.current()


@router.get("/wallpapers")
async def list_wallpapers(wallpapers: WallpaperService = Depends(get_wallpaper_service)):
    return {"wallpapers": wallpapers.list_files()}


@router.post("/set-wallpaper")
async def set_wallpaper(
    body: WallpaperPath, wallpapers: WallpaperService = Depends(get_wallpaper_service)
):
    if not body.path:
        raise HTTPException(status_code=400, detail="Path not found")
    wallpapers.set_current(body.path)
    return {"message": "Wallpaper set"}


@router.post("/delete-wallpaper")
async def delete_wallpaper(
    body: WallpaperPath, wallpapers: WallpaperService = Depends(get_wallpaper_service)
):
    if not body.path:
        raise HTTPException(status_code=400, detail="Path required")
    try:
        wallpapers.delete(body.path)
    except SandboxError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except WallpaperNotFound:
        raise HTTPException(status_code=404, detail="File not found")
    return {"message": "Wallpaper deleted"}
