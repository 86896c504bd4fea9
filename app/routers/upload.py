# =============================================================================
# app/routers/upload.py - Image Upload Endpoints
# =============================================================================
# Multipart single-file uploads forwarded to Supabase Storage.
# - POST /upload          field "image"  -> project-images bucket
# - POST /upload/avatar   field "avatar" -> avatars bucket (overwrites allowed)
#
# Image uploads answer {url, message}; avatar uploads answer {url} only.
# =============================================================================

import logging

from fastapi import APIRouter, File, UploadFile
from fastapi.concurrency import run_in_threadpool

from app.config import settings
from app.exceptions import FileTooLargeError, ValidationFailedError
from core.models.common import UploadResponse
from core.services.storage_service import (
    AVATAR_TARGET,
    PROJECT_IMAGE_TARGET,
    StorageService,
    UploadTarget,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Helper Functions
# =============================================================================

async def _read_upload(file: UploadFile) -> bytes:
    """Read the whole upload, enforcing MAX_UPLOAD_SIZE_MB."""
    try:
        content = await file.read()
    finally:
        await file.close()

    if len(content) > settings.max_upload_size_bytes:
        raise FileTooLargeError(
            size_mb=len(content) / (1024 * 1024),
            max_mb=settings.MAX_UPLOAD_SIZE_MB,
        )
    return content


async def _store(file: UploadFile, target: UploadTarget) -> str:
    content = await _read_upload(file)
    return await run_in_threadpool(
        StorageService.upload_image,
        target,
        content,
        file.filename,
        file.content_type,
    )


# =============================================================================
# Endpoints
# =============================================================================

@router.post("", response_model=UploadResponse)
async def upload_image(image: UploadFile | None = File(default=None)):
    """Upload a project image and get its public URL."""
    if image is None:
        raise ValidationFailedError("No file uploaded", field="image")
    url = await _store(image, PROJECT_IMAGE_TARGET)
    return UploadResponse(url=url, message="Uploaded Successfully")


@router.post("/avatar", response_model=UploadResponse, response_model_exclude_none=True)
async def upload_avatar(avatar: UploadFile | None = File(default=None)):
    """Upload an avatar image and get its public URL."""
    if avatar is None:
        raise ValidationFailedError("No avatar uploaded", field="avatar")
    url = await _store(avatar, AVATAR_TARGET)
    return UploadResponse(url=url)
