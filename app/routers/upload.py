"""
Admin file uploads (cover images, profile pictures, CV PDFs).

The multipart field may be named ``file``, ``image`` or ``resume``.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from app.dependencies.auth import require_admin
from app.models.schemas import AuthUser, UploadResponse
from app.services.storage import UploadRejected, UploadTooLarge, save_upload

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=UploadResponse)
async def upload_file(
    file: Optional[UploadFile] = File(None),
    image: Optional[UploadFile] = File(None),
    resume: Optional[UploadFile] = File(None),
    user: AuthUser = Depends(require_admin),
) -> UploadResponse:
    upload = file or image or resume
    if upload is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file provided")

    try:
        stored = await save_upload(upload)
    except UploadRejected as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    except UploadTooLarge as exc:
        raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail=str(exc))
    finally:
        await upload.close()

    logger.info("Upload %r stored as %s by %s", upload.filename, stored.public_id, user.email)
    return UploadResponse(url=stored.url, public_id=stored.public_id)
