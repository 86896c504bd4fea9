# =============================================================================
# app/routers/projects.py - Project Endpoints
# =============================================================================
# CRUD, likes, and per-viewer aggregated counts.
#
# Auth:
# - GET /projects, GET /projects/{id}: optional (decides "liked")
# - everything else: required
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from app.auth import AuthUser, Viewer, get_current_user, get_current_user_optional
from app.dependencies import DbConn
from core.models.common import MessageResponse
from core.models.project import (
    ProjectCreate,
    ProjectResponse,
    ProjectStats,
    ProjectUpdate,
    ProjectWithStats,
)
from core.services.project_service import ProjectService

router = APIRouter()

ProjectId = Annotated[int, Path(description="Project id")]


@router.post("", response_model=ProjectResponse)
async def create_project(
    conn: DbConn,
    user: AuthUser = Depends(get_current_user),
    request: ProjectCreate | None = None,
):
    """
    Create a project owned by the caller.

    Only title is required; tags default to an empty list.
    """
    return await ProjectService.create_project(conn, user, request or ProjectCreate())


@router.get("", response_model=list[ProjectWithStats])
async def list_projects(
    conn: DbConn,
    viewer: Viewer = Depends(get_current_user_optional),
):
    """
    List all projects, newest first.

    Each project carries likes, comments_count and liked. liked is always
    false without a valid token.
    """
    return await ProjectService.list_projects(conn, viewer)


@router.get("/me", response_model=list[ProjectWithStats])
async def list_my_projects(
    conn: DbConn,
    user: AuthUser = Depends(get_current_user),
):
    """List the caller's projects, newest first."""
    return await ProjectService.list_user_projects(conn, user)


@router.get("/{project_id}", response_model=ProjectWithStats)
async def get_project(
    project_id: ProjectId,
    conn: DbConn,
    viewer: Viewer = Depends(get_current_user_optional),
):
    """Get one project with its counts. 404 if it doesn't exist."""
    return await ProjectService.get_project(conn, project_id, viewer)


@router.post("/{project_id}/like", response_model=ProjectStats)
async def like_project(
    project_id: ProjectId,
    conn: DbConn,
    user: AuthUser = Depends(get_current_user),
):
    """Like a project. Repeating the call changes nothing."""
    return await ProjectService.like_project(conn, project_id, user)


@router.delete("/{project_id}/like", response_model=ProjectStats)
async def unlike_project(
    project_id: ProjectId,
    conn: DbConn,
    user: AuthUser = Depends(get_current_user),
):
    """Remove the caller's like. Succeeds even if the caller never liked it."""
    return await ProjectService.unlike_project(conn, project_id, user)


@router.patch("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: ProjectId,
    conn: DbConn,
    user: AuthUser = Depends(get_current_user),
    request: ProjectUpdate | None = None,
):
    """
    Replace a project's fields.

    Fields not sent are cleared. Title and short_desc must not be blank.
    403 if the caller does not own a project with this id.
    """
    return await ProjectService.update_project(conn, project_id, user, request or ProjectUpdate())


@router.delete("/{project_id}", response_model=MessageResponse)
async def delete_project(
    project_id: ProjectId,
    conn: DbConn,
    user: AuthUser = Depends(get_current_user),
):
    """
    Delete a project with its likes and comments.

    403 if the caller does not own a project with this id.
    """
    await ProjectService.delete_project(conn, project_id, user)
    return MessageResponse(message="Project deleted")
