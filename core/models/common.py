# =============================================================================
# core/models/common.py - Shared Response Schemas
# =============================================================================

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Confirmation body for deletes."""
    message: str = Field(..., examples=["Project deleted"])


class UploadResponse(BaseModel):
    """Result of an image upload."""
    url: str = Field(..., description="Public URL of the stored file")
    message: str | None = Field(default=None, examples=["Uploaded Successfully"])
