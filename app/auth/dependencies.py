# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Two guards built on the Identity Verifier:
#
# - get_current_user: login required. Missing or unverifiable token -> 401.
# - get_current_user_optional: login optional. Any failure -> AnonymousUser.
#
# Both are plain functions, so FastAPI runs them in the threadpool and the
# blocking Supabase call never stalls the event loop.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.auth.models import AnonymousUser, AuthUser, Viewer
from app.auth.verifier import IdentityVerifier, identity_verifier
from app.exceptions import UnauthenticatedError

logger = logging.getLogger(__name__)

# Returns None instead of raising so both guards control the error shape
bearer_scheme = HTTPBearer(auto_error=False)


def get_identity_verifier() -> IdentityVerifier:
    """
    Get the Identity Verifier.

    Tests override this dependency with an in-memory token map.
    """
    return identity_verifier


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> AuthUser:
    """
    Require an authenticated caller.

    Raises:
        UnauthenticatedError: 401 if the header is missing (the verifier is
            not called) or the token is rejected
    """
    if credentials is None:
        raise UnauthenticatedError("No token provided")

    user_id = verifier.verify(credentials.credentials)
    if user_id is None:
        raise UnauthenticatedError("Invalid auth token")

    return AuthUser(id=user_id)


def get_current_user_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> Viewer:
    """
    Resolve the caller if possible.

    Returns AnonymousUser for a missing header, malformed header or
    rejected token instead of failing the request.
    """
    if credentials is None:
        return AnonymousUser()

    user_id = verifier.verify(credentials.credentials)
    if user_id is None:
        logger.debug("Optional auth: token rejected, continuing as anonymous")
        return AnonymousUser()

    return AuthUser(id=user_id)
