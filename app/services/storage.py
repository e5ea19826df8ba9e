"""
Local file storage for admin uploads (cover images, profile pictures, CV PDFs).

Files are streamed to UPLOAD_DIR under ``<ms-timestamp>-<random>.<ext>`` and
served back from UPLOAD_URL_PREFIX.
"""
from __future__ import annotations

import logging
import os
import secrets
from dataclasses import dataclass
from pathlib import Path

import aiofiles
from fastapi import UploadFile

from app.config import settings
from app.utils.helpers import timestamp_ms

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024  # 1 MB slices
PDF_CONTENT_TYPE = "application/pdf"


class UploadRejected(ValueError):
    """The upload is not an accepted type."""


class UploadTooLarge(ValueError):
    """The upload exceeded MAX_UPLOAD_SIZE."""


@dataclass
class StoredFile:
    url: str
    public_id: str
    size: int


def is_allowed_content_type(content_type: str) -> bool:
    return content_type.startswith("image/") or content_type == PDF_CONTENT_TYPE


def make_stored_name(original_name: str) -> str:
    ext = Path(original_name).suffix.lower().lstrip(".") or "bin"
    return f"{timestamp_ms()}-{secrets.token_hex(6)}.{ext}"


def safe_remove(path: str) -> None:
    try:
        if path and os.path.exists(path):
            os.remove(path)
    except OSError as exc:
        logger.warning("Could not remove file %r: %s", path, exc)


async def save_upload(
    file: UploadFile,
    upload_dir: str = None,
    max_size: int = None,
) -> StoredFile:
    """Stream ``file`` to disk, enforcing type and size limits."""
    upload_dir = upload_dir or settings.UPLOAD_DIR
    max_size = max_size or settings.MAX_UPLOAD_SIZE

    content_type = file.content_type or ""
    if not is_allowed_content_type(content_type):
        raise UploadRejected("File must be an image (JPG, PNG, GIF) or PDF")

    os.makedirs(upload_dir, exist_ok=True)
    stored_name = make_stored_name(file.filename or "")
    file_path = os.path.join(upload_dir, stored_name)
    file_size = 0

    async with aiofiles.open(file_path, "wb") as out:
        while True:
            chunk = await file.read(CHUNK_SIZE)
            if not chunk:
                break
            file_size += len(chunk)
            if file_size > max_size:
                await out.close()
                safe_remove(file_path)
                raise UploadTooLarge(
                    f"File exceeds the {max_size // (1024 * 1024)} MB size limit."
                )
            await out.write(chunk)

    logger.info("Saved %r → %s (%s bytes)", file.filename, file_path, f"{file_size:,}")

    prefix = settings.UPLOAD_URL_PREFIX.rstrip("/")
    return StoredFile(url=f"{prefix}/{stored_name}", public_id=stored_name, size=file_size)
