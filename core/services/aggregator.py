# =============================================================================
# core/services/aggregator.py - Project Aggregator
# =============================================================================
# Computes, per project, how many likes and comments it has and whether the
# current viewer liked it.
#
# Query shapes:
# - stats_for(): likes + liked for one project (after like/unlike)
# - annotated_projects_query(): all (or one owner's) projects in one query
# - annotated_project_query(): a single project in one query
# - project_exists(): guard before inserting votes or comments
#
# Listing joins votes AND comments onto projects, so a project with 3 votes
# and 2 comments produces 6 joined rows. Both counts use COUNT(DISTINCT ...)
# to undo that cartesian product.
# =============================================================================

import logging

from sqlalchemy import Select, and_, distinct, false, func, select
from sqlalchemy.ext.asyncio import AsyncConnection

from app.auth.models import Viewer, viewer_id
from core.models.project import ProjectStats
from lib.tables import comments, projects, votes

logger = logging.getLogger(__name__)


def _liked_column(viewer: Viewer):
    """EXISTS(vote by viewer on this project), or constant false for anonymous viewers."""
    user_id = viewer_id(viewer)
    if user_id is None:
        return false().label("liked")

    # Aliased so it never correlates with the votes join of the listing query
    viewer_votes = votes.alias("viewer_votes")
    return (
        select(viewer_votes.c.project_id)
        .where(
            and_(
                viewer_votes.c.project_id == projects.c.id,
                viewer_votes.c.user_id == user_id,
            )
        )
        .exists()
        .label("liked")
    )


def annotated_projects_query(viewer: Viewer, owner_id: str | None = None) -> Select:
    """
    Build the listing query: every project with likes, comments_count, liked.

    Args:
        viewer: Who is looking; decides the liked column
        owner_id: Restrict to projects owned by this user

    Returns:
        SELECT ordered newest first
    """
    joined = (
        projects
        .outerjoin(votes, votes.c.project_id == projects.c.id)
        .outerjoin(comments, comments.c.project_id == projects.c.id)
    )

    query = (
        select(
            projects,
            func.count(distinct(votes.c.user_id)).label("likes"),
            func.count(distinct(comments.c.id)).label("comments_count"),
            _liked_column(viewer),
        )
        .select_from(joined)
        .group_by(projects.c.id)
        .order_by(projects.c.created_at.desc(), projects.c.id.desc())
    )

    if owner_id is not None:
        query = query.where(projects.c.user_id == owner_id)

    return query


def annotated_project_query(project_id: int, viewer: Viewer) -> Select:
    """Build the single-project query using correlated count subqueries."""
    likes = (
        select(func.count())
        .select_from(votes)
        .where(votes.c.project_id == projects.c.id)
        .scalar_subquery()
    )
    comments_count = (
        select(func.count())
        .select_from(comments)
        .where(comments.c.project_id == projects.c.id)
        .scalar_subquery()
    )

    return select(
        projects,
        likes.label("likes"),
        comments_count.label("comments_count"),
        _liked_column(viewer),
    ).where(projects.c.id == project_id)


async def stats_for(
    conn: AsyncConnection,
    project_id: int,
    viewer: Viewer,
) -> ProjectStats:
    """
    Count likes for a project and check whether the viewer liked it.

    Args:
        conn: Open database connection
        project_id: Project to count
        viewer: AuthUser or AnonymousUser; anonymous viewers never "like"

    Returns:
        ProjectStats(likes=..., liked=...)
    """
    likes_result = await conn.execute(
        select(func.count())
        .select_from(votes)
        .where(votes.c.project_id == project_id)
    )
    likes = likes_result.scalar_one()

    liked = False
    user_id = viewer_id(viewer)
    if user_id is not None:
        liked_result = await conn.execute(
            select(votes.c.project_id).where(
                and_(
                    votes.c.project_id == project_id,
                    votes.c.user_id == user_id,
                )
            )
        )
        liked = liked_result.first() is not None

    return ProjectStats(likes=int(likes), liked=liked)


async def project_exists(conn: AsyncConnection, project_id: int) -> bool:
    """True when a project with this id is stored."""
    result = await conn.execute(
        select(projects.c.id).where(projects.c.id == project_id)
    )
    return result.first() is not None
