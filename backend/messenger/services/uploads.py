"""Validation and storage of uploaded files."""

import logging
import random
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

from messenger.core.config import settings

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


class UploadRejected(Exception):
    pass


@dataclass
class UploadPolicy:
    max_bytes: int
    # Matched against both the file extension and the content type
    allowed: Optional[str] = None

    def check(self, filename: str, content_type: str) -> None:
        if self.allowed is None:
            return
        pattern = re.compile(self.allowed)
        ext = Path(filename).suffix.lower()
        if not (pattern.search(ext) and pattern.search(content_type)):
            raise UploadRejected("File type not allowed")


@dataclass
class StoredFile:
    filename: str
    original_name: str
    content_type: str
    size: int


def chat_policy() -> UploadPolicy:
    return UploadPolicy(
        max_bytes=settings.chat_upload_max_bytes,
        allowed=r"jpeg|jpg|png|gif|mp4|webm|ogg|mov|avi|wmv",
    )


def photo_policy() -> UploadPolicy:
    return UploadPolicy(max_bytes=settings.photo_upload_max_bytes, allowed=r"jpeg|jpg|png|gif")


def any_file_policy() -> UploadPolicy:
    return UploadPolicy(max_bytes=settings.upload_max_bytes)


def _unique_name(prefix: str, original: str) -> str:
    stamp = time.time_ns() // 1_000_000
    return f"{prefix}-{stamp}-{random.randint(0, 999_999_999)}{Path(original).suffix}"


async def save_upload(
    upload: UploadFile, directory: Path, policy: UploadPolicy, prefix: str = "file"
) -> StoredFile:
    """Check the upload against policy and write it into directory under a unique name."""
    original = Path(upload.filename or "upload").name
    content_type = upload.content_type or "application/octet-stream"
    policy.check(original, content_type)

    too_large = UploadRejected(f"File exceeds {policy.max_bytes} bytes")
    if upload.size is not None and upload.size > policy.max_bytes:
        raise too_large

    # The declared size can be missing, so stop reading once past the limit
    chunks = []
    received = 0
    while chunk := await upload.read(CHUNK_SIZE):
        received += len(chunk)
        if received > policy.max_bytes:
            raise too_large
        chunks.append(chunk)
    content = b"".join(chunks)

    directory.mkdir(parents=True, exist_ok=True)
    filename = _unique_name(prefix, original)
    (directory / filename).write_bytes(content)
    logger.debug(f"Stored upload {original} as {directory / filename}")
    return StoredFile(
        filename=filename,
        original_name=original,
        content_type=content_type,
        size=len(content),
    )
