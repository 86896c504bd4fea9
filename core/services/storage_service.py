# =============================================================================
# core/services/storage_service.py - Supabase Storage Operations
# =============================================================================
# Stores uploaded images in Supabase Storage and returns their public URL.
#
# Two upload targets:
# - project images: bucket "project-images", never overwrites
# - avatars:        bucket "avatars", "avatar-" prefix, overwrites allowed
# =============================================================================

import logging
import os
import secrets
import time
from dataclasses import dataclass

from app.config import settings
from app.exceptions import StorageUploadError
from lib.supabase_client import SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadTarget:
    """Where and how an upload kind is stored."""
    bucket: str
    prefix: str = ""
    upsert: bool = False


PROJECT_IMAGE_TARGET = UploadTarget(bucket=settings.PROJECT_IMAGES_BUCKET)
AVATAR_TARGET = UploadTarget(bucket=settings.AVATARS_BUCKET, prefix="avatar-", upsert=True)


def generate_object_name(original_filename: str | None, prefix: str = "") -> str:
    """
    Build a collision-resistant object name.

    Format: <prefix><epoch millis>-<random hex><original extension>

    Example:
        generate_object_name("shot.PNG", "avatar-")  # "avatar-1718000000000-9f3a6c1be2d4.PNG"
    """
    _, ext = os.path.splitext(original_filename or "")
    millis = int(time.time() * 1000)
    return f"{prefix}{millis}-{secrets.token_hex(6)}{ext}"


class StorageService:
    """
    Service for Supabase Storage operations.

    Handles uploading images and resolving their public URLs.
    """

    @staticmethod
    def upload_image(
        target: UploadTarget,
        content: bytes,
        filename: str | None,
        content_type: str | None = None,
    ) -> str:
        """
        Upload image bytes and return the public URL.

        Args:
            target: Bucket/prefix/overwrite policy
            content: File bytes
            filename: Original client filename (only its extension is kept)
            content_type: MIME type to store with the object

        Returns:
            Public URL of the uploaded object

        Raises:
            StorageUploadError: If upload fails
        """
        object_name = generate_object_name(filename, target.prefix)

        try:
            SupabaseClient.upload_object(
                bucket=target.bucket,
                path=object_name,
                content=content,
                content_type=content_type,
                upsert=target.upsert,
            )
            url = SupabaseClient.get_public_url(target.bucket, object_name)
        except SupabaseClientError as e:
            logger.error(f"Storage upload failed: {e}")
            raise StorageUploadError() from e

        logger.info(f"Uploaded file to storage: {target.bucket}/{object_name}")
        return url
