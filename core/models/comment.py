# =============================================================================
# core/models/comment.py - Comment Schemas
# =============================================================================

from datetime import datetime

from pydantic import BaseModel


class CommentCreate(BaseModel):
    """Body for POST /comments/{project_id}. text must be non-empty."""
    text: str | None = None


class CommentResponse(BaseModel):
    """A row of the comments table."""
    id: int
    project_id: int
    user_id: str
    text: str
    created_at: datetime | None = None


class CommentWithAuthor(CommentResponse):
    """
    Comment joined with its author's display name.

    user_name is null when the author has no users row.
    """
    user_name: str | None = None
