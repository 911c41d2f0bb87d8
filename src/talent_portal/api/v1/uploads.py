from __future__ import annotations

from fastapi import UploadFile

from src.talent_portal.config import settings
from src.talent_portal.errors import PayloadTooLarge


async def read_upload(file: UploadFile) -> bytes:
    """Read an uploaded file, enforcing MAX_UPLOAD_BYTES."""

    content = await file.read(settings.max_upload_bytes + 1)
    if len(content) > settings.max_upload_bytes:
        raise PayloadTooLarge(f"upload {file.filename!r} exceeds {settings.max_upload_bytes} bytes")
    return content
