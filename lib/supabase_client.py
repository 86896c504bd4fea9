# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module wraps the two Supabase services the API depends on:
# - Auth: resolve a bearer token to the user it was issued for
# - Storage: upload image bytes to a bucket and build its public URL
#
# It implements the singleton pattern to reuse a single client connection.
# The supabase SDK is synchronous; callers on the event loop run these
# methods in the threadpool.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   user_id = SupabaseClient.fetch_user_id_for_token(token)
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import create_client, Client

from app.config import settings

# Set up logging for this module
logger = logging.getLogger(__name__)


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Carries a code and optional details for logging; never sent to clients
    verbatim.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Typed wrapper for Supabase Auth and Storage operations.

    All methods are class methods for easy access without instantiation.

    Example:
        user_id = SupabaseClient.fetch_user_id_for_token("eyJhbGciOi...")
        SupabaseClient.upload_object("avatars", "avatar-1.png", data, "image/png", upsert=True)
        url = SupabaseClient.get_public_url("avatars", "avatar-1.png")
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses the service_role key, which storage uploads require.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                ) from e
        return cls._instance

    # -------------------------------------------------------------------------
    # Auth
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_user_id_for_token(cls, token: str) -> str:
        """
        Ask Supabase Auth which user a token belongs to.

        Args:
            token: Raw access token (without the "Bearer " prefix)

        Returns:
            The user id issued by Supabase

        Raises:
            SupabaseClientError: If the token is rejected or the call fails
        """
        client = cls.get_client()

        try:
            response = client.auth.get_user(token)
        except Exception as e:
            raise SupabaseClientError(
                message=f"Token verification failed: {e}",
                code="TOKEN_REJECTED",
            ) from e

        user = getattr(response, "user", None) if response else None
        if user is None or not getattr(user, "id", None):
            raise SupabaseClientError(
                message="No user found for token",
                code="TOKEN_REJECTED",
            )

        return str(user.id)

    # -------------------------------------------------------------------------
    # Storage
    # -------------------------------------------------------------------------

    @classmethod
    def upload_object(
        cls,
        bucket: str,
        path: str,
        content: bytes,
        content_type: str | None = None,
        upsert: bool = False,
    ) -> None:
        """
        Upload raw bytes to a storage bucket.

        Args:
            bucket: Bucket name
            path: Object path inside the bucket
            content: File bytes
            content_type: MIME type stored with the object
            upsert: Overwrite an existing object at the same path

        Raises:
            SupabaseClientError: If upload fails
        """
        client = cls.get_client()

        file_options = {"upsert": "true" if upsert else "false"}
        if content_type:
            file_options["content-type"] = content_type

        try:
            client.storage.from_(bucket).upload(
                path=path,
                file=content,
                file_options=file_options,
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to upload {path}: {e}",
                code="STORAGE_UPLOAD_FAILED",
                details={"bucket": bucket, "path": path},
            ) from e

        logger.debug(f"Uploaded {len(content)} bytes to {bucket}/{path}")

    @classmethod
    def get_public_url(cls, bucket: str, path: str) -> str:
        """
        Get the public URL for an object in a public bucket.

        Raises:
            SupabaseClientError: If the URL cannot be built
        """
        client = cls.get_client()

        try:
            return client.storage.from_(bucket).get_public_url(path)
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to get public URL for {path}: {e}",
                code="PUBLIC_URL_FAILED",
                details={"bucket": bucket, "path": path},
            ) from e
