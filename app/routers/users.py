# =============================================================================
# app/routers/users.py - User Endpoints
# =============================================================================
# The frontend signs users in with Supabase Auth and then calls POST /users
# so that a local profile row exists for the identity.
#
# GET /users and DELETE /users/{id} are unauthenticated.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from app.auth import AuthUser, get_current_user
from app.dependencies import DbConn
from core.models.common import MessageResponse
from core.models.user import UserCreate, UserProfileUpdate, UserResponse
from core.services.user_service import UserService

router = APIRouter()


@router.post("", response_model=UserResponse)
async def sync_user(
    conn: DbConn,
    request: UserCreate | None = None,
):
    """
    Create the local row for an identity.

    Calling it again for the same id returns the stored row unchanged.
    """
    return await UserService.sync_user(conn, request or UserCreate())


@router.get("/me", response_model=UserResponse)
async def get_me(
    conn: DbConn,
    user: AuthUser = Depends(get_current_user),
):
    """Get the caller's profile."""
    return await UserService.get_user(conn, user)


@router.get("", response_model=list[UserResponse])
async def list_users(conn: DbConn):
    """List all users, newest first."""
    return await UserService.list_users(conn)


@router.put("/me", response_model=UserResponse)
async def update_me(
    conn: DbConn,
    user: AuthUser = Depends(get_current_user),
    request: UserProfileUpdate | None = None,
):
    """
    Replace the caller's profile fields.

    Fields not sent are cleared.
    """
    return await UserService.update_profile(conn, user, request or UserProfileUpdate())


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: Annotated[str, Path(description="User id")],
    conn: DbConn,
):
    """Delete a user by id."""
    await UserService.delete_user(conn, user_id)
    return MessageResponse(message="Deleted successfully")
