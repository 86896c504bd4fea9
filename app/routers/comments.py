# =============================================================================
# app/routers/comments.py - Comment Endpoints
# =============================================================================
# POST and DELETE require authentication; listing is public.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from app.auth import AuthUser, get_current_user
from app.dependencies import DbConn
from core.models.comment import CommentCreate, CommentResponse, CommentWithAuthor
from core.models.common import MessageResponse
from core.services.comment_service import CommentService

router = APIRouter()


@router.post("/{project_id}", response_model=CommentResponse)
async def add_comment(
    project_id: Annotated[int, Path(description="Project id")],
    conn: DbConn,
    user: AuthUser = Depends(get_current_user),
    request: CommentCreate | None = None,
):
    """Comment on a project."""
    return await CommentService.add_comment(conn, project_id, user, request or CommentCreate())


@router.get("/{project_id}", response_model=list[CommentWithAuthor])
async def list_comments(
    project_id: Annotated[int, Path(description="Project id")],
    conn: DbConn,
):
    """List a project's comments, oldest first, with author names."""
    return await CommentService.list_comments(conn, project_id)


@router.delete("/{comment_id}", response_model=MessageResponse)
async def delete_comment(
    comment_id: Annotated[int, Path(description="Comment id")],
    conn: DbConn,
    user: AuthUser = Depends(get_current_user),
):
    """Delete one of the caller's comments. 403 for anyone else's."""
    await CommentService.delete_comment(conn, comment_id, user)
    return MessageResponse(message="Comment deleted")
