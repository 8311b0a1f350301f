"""REST API for accounts, login/logout and profiles."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Header, HTTPException, UploadFile
from pydantic import BaseModel

from messenger.core.config import settings
from messenger.core.deps import get_user_directory
from messenger.core.sandbox import SandboxError, resolve_sandboxed_path
from messenger.services.uploads import UploadRejected, any_file_policy, save_upload
from messenger.services.users import UserDirectory, UserError

router = APIRouter()
logger = logging.getLogger(__name__)


class Credentials(BaseModel):
    username: str = ""
    password: str = ""


class UsernameBody(BaseModel):
    username: str = ""


class ProfileUpdate(BaseModel):
    whatsapp: Optional[str] = None
    instagram: Optional[str] = None


def _user_error(e: UserError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=str(e))


async def _store_profile_photo(upload: Optional[UploadFile]) -> Optional[str]:
    if upload is None:
        return None
    try:
        stored = await save_upload(upload, settings.uploads_dir, any_file_policy(), prefix="profile_photo")
    except UploadRejected as e:
        raise HTTPException(status_code=400, detail=str(e))
    return stored.filename


def _remove_profile_photo(filename: Optional[str]) -> None:
    if not filename:
        return
    try:
        path = resolve_sandboxed_path(settings.uploads_dir, filename)
    except SandboxError:
        logger.warning(f"Refusing to delete photo outside uploads: {filename}")
        return
    if path.is_file():
        path.unlink()
        logger.debug(f"Deleted old photo: {path}")


@router.post("/register")
async def register(
    new_username: str = Form(default=""),
    new_password: str = Form(default=""),
    confirm_password: str = Form(default=""),
    profile_photo: Optional[UploadFile] = File(default=None),
    users: UserDirectory = Depends(get_user_directory),
):
    if new_password != confirm_password:
        raise HTTPException(status_code=400, detail="Passwords do not match")
    if users.find_user_by_username(new_username):
        raise HTTPException(status_code=400, detail="Username already exists")

    photo = await _store_profile_photo(profile_photo)
    try:
        users.register(new_username, new_password, confirm_password, photo)
    except UserError as e:
        _remove_profile_photo(photo)
        raise _user_error(e)
    return {"message": "Account created"}


@router.post("/api/add-user")
async def add_user(
    username: str = Form(default=""),
    password: str = Form(default=""),
    confirm_password: str = Form(default=""),
    role: str = Form(default=""),
    added_by: Optional[str] = Form(default=None),
    profile_photo: Optional[UploadFile] = File(default=None),
    users: UserDirectory = Depends(get_user_directory),
):
    photo = await _store_profile_photo(profile_photo)
    try:
        users.add_user(username, password, confirm_password, role, added_by, photo)
    except UserError as e:
        _remove_profile_photo(photo)
        raise _user_error(e)
    return {"message": "User added"}


@router.post("/login")
async def login(body: Credentials, users: UserDirectory = Depends(get_user_directory)):
    try:
        user = users.login(body.username, body.password)
    except UserError as e:
        raise _user_error(e)
    return {"message": "Login successful", "user": user.model_dump()}


@router.post("/logout")
async def logout(body: UsernameBody, users: UserDirectory = Depends(get_user_directory)):
    try:
        users.logout(body.username)
    except UserError as e:
        raise _user_error(e)
    return {"message": "Logout successful"}


@router.get("/users")
async def list_users(users: UserDirectory = Depends(get_user_directory)):
    return [u.model_dump() for u in users.list_users()]


@router.post("/delete-account")
async def delete_account(body: UsernameBody, users: UserDirectory = Depends(get_user_directory)):
    try:
        removed = users.delete_account(body.username)
    except UserError as e:
        raise _user_error(e)
    _remove_profile_photo(removed.profile_photo)
    return {"message": "Account deleted"}


@router.get("/api/profile")
async def get_profile(
    username: Optional[str] = None,
    x_username: Optional[str] = Header(default=None),
    users: UserDirectory = Depends(get_user_directory),
):
    username = username or x_username
    if not username:
        raise HTTPException(status_code=400, detail="Username required")
    try:
        return users.get_profile(username)
    except UserError as e:
        raise _user_error(e)


@router.post("/api/update-profile")
async def update_profile(
    body: ProfileUpdate,
    x_username: Optional[str] = Header(default=None),
    users: UserDirectory = Depends(get_user_directory),
):
    if not x_username:
        raise HTTPException(status_code=400, detail="Username required")
    try:
        users.update_profile(x_username, body.whatsapp, body.instagram)
    except UserError as e:
        raise _user_error(e)
    return {"message": "Profile updated"}


@router.post("/api/update-profile-photo")
async def update_profile_photo(
    profile_photo: Optional[UploadFile] = File(default=None),
    x_username: Optional[str] = Header(default=None),
    users: UserDirectory = Depends(get_user_directory),
):
    if not x_username:
        raise HTTPException(status_code=400, detail="Username required")
    if not users.find_user_by_username(x_username):
        raise HTTPException(status_code=404, detail="User not found")
    if profile_photo is None:
        raise HTTPException(status_code=400, detail="Photo file required")

    photo = await _store_profile_photo(profile_photo)
    try:
        previous = users.update_profile_photo(x_username, photo)
    except UserError as e:
        _remove_profile_photo(photo)
        raise _user_error(e)
    _remove_profile_photo(previous)
    logger.info(f"Profile photo updated for user: {x_username} new photo: {photo}")
    return {"message": "Profile photo updated", "profile_photo": photo}
