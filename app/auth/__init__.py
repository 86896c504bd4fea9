# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Bearer-token authentication backed by Supabase Auth.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.dependencies import (
    get_current_user,
    get_current_user_optional,
    get_identity_verifier,
)
from app.auth.models import AnonymousUser, AuthUser, Viewer, viewer_id
from app.auth.verifier import IdentityVerifier

__all__ = [
    "get_current_user",
    "get_current_user_optional",
    "get_identity_verifier",
    "AnonymousUser",
    "AuthUser",
    "IdentityVerifier",
    "Viewer",
    "viewer_id",
]
