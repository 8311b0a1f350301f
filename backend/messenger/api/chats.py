"""REST API for direct messages and per-user chat lists."""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, File, Form, Header, HTTPException, Request, UploadFile
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from messenger.core.config import settings
from messenger.core.deps import (
    get_chat_directory,
    get_message_store,
    get_summary_projector,
)
from messenger.models.chat import Attachment
from messenger.services.chat.directory import ChatDirectory
from messenger.services.chat.messages import MessageStore
from messenger.services.chat.summaries import ChatSummaryProjector
from messenger.services.uploads import UploadRejected, chat_policy, save_upload

router = APIRouter()
logger = logging.getLogger(__name__)


class ReadReceipt(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sender: Optional[str] = Field(default=None, alias="from")
    recipient: Optional[str] = Field(default=None, alias="to")


class OutgoingMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sender: Optional[str] = Field(default=None, alias="from")
    to: Optional[str] = None
    text: Optional[str] = None


@router.get("/chats")
@router.get("/chats/")
async def list_chats_without_user():
    raise HTTPException(status_code=400, detail="Username required")


@router.get("/chats/{username}")
async def list_chats(
    username: str, projector: ChatSummaryProjector = Depends(get_summary_projector)
):
    if not username:
        raise HTTPException(status_code=400, detail="Username required")
    return [s.model_dump() for s in projector.project_summaries(username)]


@router.get("/messages")
async def get_messages(
    user1: Optional[str] = None,
    user2: Optional[str] = None,
    messages: MessageStore = Depends(get_message_store),
):
    if not user1 or not user2:
        raise HTTPException(status_code=400, detail="user1 and user2 query parameters required")
    return [m.to_record() for m in messages.get_messages_between(user1, user2)]


@router.post("/messages")
async def send_message(
    request: Request,
    sender: Optional[str] = Form(default=None, alias="from"),
    to: Optional[str] = Form(default=None),
    text: Optional[str] = Form(default=None),
    file: Optional[UploadFile] = File(default=None),
    x_username: Optional[str] = Header(default=None),
    messages: MessageStore = Depends(get_message_store),
    directory: ChatDirectory = Depends(get_chat_directory),
):
    if request.headers.get("content-type", "").startswith("application/json"):
        # JSON clients send the same fields without an attachment
        try:
            body = OutgoingMessage.model_validate(await request.json())
        except (ValueError, ValidationError):
            raise HTTPException(status_code=400, detail="Invalid JSON body")
        sender, to, text = body.sender, body.to, body.text

    sender = sender or x_username
    if not sender or not to or (not text and file is None):
        raise HTTPException(status_code=400, detail="from, to, and text or file are required")

    attachment = None
    if file is not None:
        try:
            stored = await save_upload(file, settings.uploads_dir, chat_policy(), prefix="file")
        except UploadRejected as e:
            raise HTTPException(status_code=400, detail=str(e))
        attachment = Attachment(url=f"/uploads/{stored.filename}", content_type=stored.content_type)

    message = messages.add_message(sender, to, text or None, attachment)
    directory.ensure_conversation(sender, to)
    return {"msg": "Message sent", "message": message.to_record()}


@router.post("/messages/read")
async def mark_read(
    body: Optional[ReadReceipt] = Body(default=None),
    messages: MessageStore = Depends(get_message_store),
):
    if body is None or not body.sender or not body.recipient:
        raise HTTPException(status_code=400, detail="from and to are required")
    updated = messages.mark_messages_as_read(body.sender, body.recipient)
    logger.debug(f"Mark read {body.sender} -> {body.recipient}: updated={updated}")
    return {"msg": "Messages marked as read" if updated else "No messages updated"}
