# =============================================================================
# core/models/project.py - Project Schemas
# =============================================================================
# These models define the API contract for project operations:
# - ProjectCreate / ProjectUpdate: request bodies
# - ProjectResponse: a bare projects row (create/update results)
# - ProjectWithStats: a row annotated with likes, comments_count, liked
# - ProjectStats: like count + viewer liked-state (like/unlike results)
# =============================================================================

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator


class ProjectCreate(BaseModel):
    """
    Body for POST /projects.

    Only title is required. Tags that are absent or not a list are stored
    as an empty list.

    Example:
        {
            "title": "Pixel Garden",
            "short_desc": "Grow a garden one pixel at a time",
            "tags": ["canvas", "game"]
        }
    """
    title: str | None = None
    short_desc: str | None = None
    full_desc: str | None = None
    image: str | None = None
    github: str | None = None
    live: str | None = None
    tags: Any = Field(default=None, description="List of tag strings")


class ProjectUpdate(BaseModel):
    """
    Body for PATCH /projects/{id}.

    Despite the verb this is a full replacement: every field not sent is
    written as an empty string (tags as an empty list). Title and
    short_desc must be non-blank.
    """
    title: str | None = ""
    short_desc: str | None = ""
    full_desc: str | None = ""
    image: str | None = ""
    github: str | None = ""
    live: str | None = ""
    tags: Any = Field(default_factory=list, description="List of tag strings")


class ProjectResponse(BaseModel):
    """A row of the projects table."""
    id: int
    title: str
    short_desc: str | None = None
    full_desc: str | None = None
    image: str | None = None
    github: str | None = None
    live: str | None = None
    tags: list[str] = Field(default_factory=list)
    user_id: str
    created_at: datetime | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def null_tags_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class ProjectWithStats(ProjectResponse):
    """
    Project row plus aggregated counts.

    liked is always false for anonymous viewers.
    """
    likes: int = 0
    comments_count: int = 0
    liked: bool = False


class ProjectStats(BaseModel):
    """Like count for a project and whether the caller has liked it."""
    likes: int = Field(..., ge=0)
    liked: bool
