# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Who is making a request. Endpoints that require login receive an AuthUser;
# endpoints with optional login receive a Viewer, which is either an AuthUser
# or an AnonymousUser.
# =============================================================================

from typing import Union

from pydantic import BaseModel, ConfigDict


class AuthUser(BaseModel):
    """
    Authenticated caller, resolved from the bearer token.

    Only the identity-provider user id is known at this point; the local
    profile row is fetched separately when needed.
    """
    model_config = ConfigDict(frozen=True)

    id: str


class AnonymousUser(BaseModel):
    """Caller without a usable token."""
    model_config = ConfigDict(frozen=True)


Viewer = Union[AuthUser, AnonymousUser]


def viewer_id(viewer: Viewer) -> str | None:
    """Return the user id of an authenticated viewer, None for anonymous."""
    if isinstance(viewer, AuthUser):
        return viewer.id
    return None
