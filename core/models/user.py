# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# A user row mirrors an identity issued by Supabase Auth. The row is created
# the first time the frontend syncs a freshly verified identity and is later
# enriched with optional profile fields by its owner.
# =============================================================================

from datetime import datetime

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """
    Payload for syncing an identity into the users table.

    All three fields are required; they are declared optional so a missing
    field produces the API's own 400 message rather than a parser error.

    Example:
        {
            "id": "8d0f7c1e-5a3b-4c2d-9e8f-1a2b3c4d5e6f",
            "email": "ada@example.com",
            "name": "Ada Lovelace"
        }
    """
    id: str | None = Field(default=None, description="Identity-provider user id")
    email: str | None = Field(default=None, description="Email address")
    name: str | None = Field(default=None, description="Display name")


class UserProfileUpdate(BaseModel):
    """
    Replacement profile fields for PUT /users/me.

    Every field is overwritten; omitted fields are stored as null.
    """
    username: str | None = None
    bio: str | None = None
    github: str | None = None
    linkedin: str | None = None
    website: str | None = None
    avatar: str | None = Field(default=None, description="Avatar URL (see POST /upload/avatar)")


class UserResponse(BaseModel):
    """A row of the users table."""
    id: str
    email: str | None = None
    name: str | None = None
    username: str | None = None
    bio: str | None = None
    github: str | None = None
    linkedin: str | None = None
    website: str | None = None
    avatar: str | None = None
    created_at: datetime | None = None
