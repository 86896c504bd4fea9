# =============================================================================
# core/services/project_service.py - Project Business Logic
# =============================================================================
# Handles project CRUD, likes, and ownership-scoped mutations.
# Separates HTTP concerns from database/business logic.
#
# Ownership rule: update/delete are scoped by "id AND user_id". When the
# scoped statement touches no row the caller gets 403, whether the project
# belongs to someone else or does not exist at all.
# =============================================================================

import logging
from typing import Any

from sqlalchemy import and_, delete, insert, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection

from app.auth.models import AuthUser, Viewer
from app.exceptions import (
    DatabaseError,
    ForbiddenError,
    ProjectNotFoundError,
    ValidationFailedError,
)
from core.models.project import (
    ProjectCreate,
    ProjectResponse,
    ProjectStats,
    ProjectUpdate,
    ProjectWithStats,
)
from core.services.aggregator import (
    annotated_project_query,
    annotated_projects_query,
    project_exists,
    stats_for,
)
from lib.database import insert_ignoring_conflicts
from lib.tables import comments, projects, votes
from lib.utils import coerce_tags, is_blank, text_or_default

logger = logging.getLogger(__name__)


class ProjectService:
    """
    Service for project operations.

    Every method receives the request's connection; writes are committed
    before returning.
    """

    @staticmethod
    async def create_project(
        conn: AsyncConnection,
        user: AuthUser,
        data: ProjectCreate,
    ) -> ProjectResponse:
        """
        Create a project owned by the caller.

        Raises:
            ValidationFailedError: If title is missing or empty
            DatabaseError: If the insert fails
        """
        if not data.title:
            raise ValidationFailedError("Title required", field="title")

        values = {
            "title": data.title,
            "short_desc": data.short_desc,
            "full_desc": data.full_desc,
            "image": data.image,
            "github": data.github,
            "live": data.live,
            "tags": coerce_tags(data.tags),
            "user_id": user.id,
        }

        try:
            result = await conn.execute(
                insert(projects).values(**values).returning(*projects.c)
            )
            row = result.mappings().one()
            await conn.commit()
        except SQLAlchemyError as e:
            logger.error(f"Create project error: {e}")
            await conn.rollback()
            raise DatabaseError("Failed to create project") from e

        logger.info(f"Created project: {row['id']} for user: {user.id}")
        return ProjectResponse.model_validate(dict(row))

    @staticmethod
    async def list_projects(
        conn: AsyncConnection,
        viewer: Viewer,
    ) -> list[ProjectWithStats]:
        """List every project, newest first, annotated for the viewer."""
        try:
            result = await conn.execute(annotated_projects_query(viewer))
            rows = result.mappings().all()
        except SQLAlchemyError as e:
            logger.error(f"GET /projects error: {e}")
            raise DatabaseError("Failed to load projects") from e

        return [ProjectWithStats.model_validate(dict(row)) for row in rows]

    @staticmethod
    async def list_user_projects(
        conn: AsyncConnection,
        user: AuthUser,
    ) -> list[ProjectWithStats]:
        """List the caller's own projects, newest first."""
        try:
            result = await conn.execute(
                annotated_projects_query(user, owner_id=user.id)
            )
            rows = result.mappings().all()
        except SQLAlchemyError as e:
            logger.error(f"GET /projects/me error: {e}")
            raise DatabaseError("Failed to load your projects") from e

        return [ProjectWithStats.model_validate(dict(row)) for row in rows]

    @staticmethod
    async def get_project(
        conn: AsyncConnection,
        project_id: int,
        viewer: Viewer,
    ) -> ProjectWithStats:
        """
        Get one project with its counts.

        Raises:
            ProjectNotFoundError: If no project has this id
        """
        try:
            result = await conn.execute(annotated_project_query(project_id, viewer))
            row = result.mappings().first()
        except SQLAlchemyError as e:
            logger.error(f"GET /projects/{project_id} error: {e}")
            raise DatabaseError("Failed to load project") from e

        if row is None:
            raise ProjectNotFoundError(project_id)

        return ProjectWithStats.model_validate(dict(row))

    @staticmethod
    async def like_project(
        conn: AsyncConnection,
        project_id: int,
        user: AuthUser,
    ) -> ProjectStats:
        """
        Record a like. Liking twice is a no-op.

        Returns:
            Fresh stats after the insert

        Raises:
            ProjectNotFoundError: If no project has this id
        """
        stmt = insert_ignoring_conflicts(conn, votes, "user_id", "project_id").values(
            user_id=user.id,
            project_id=project_id,
        )

        try:
            if not await project_exists(conn, project_id):
                raise ProjectNotFoundError(project_id)
            await conn.execute(stmt)
            await conn.commit()
            return await stats_for(conn, project_id, user)
        except IntegrityError as e:
            # Project deleted between the check and the insert
            logger.warning(f"Like on missing project {project_id}: {e}")
            await conn.rollback()
            raise ProjectNotFoundError(project_id) from e
        except SQLAlchemyError as e:
            logger.error(f"Like project error: {e}")
            await conn.rollback()
            raise DatabaseError("Failed to like project") from e

    @staticmethod
    async def unlike_project(
        conn: AsyncConnection,
        project_id: int,
        user: AuthUser,
    ) -> ProjectStats:
        """
        Remove the caller's like, if any. Not having liked is not an error.

        Returns:
            Fresh stats after the delete
        """
        stmt = delete(votes).where(
            and_(
                votes.c.user_id == user.id,
                votes.c.project_id == project_id,
            )
        )

        try:
            await conn.execute(stmt)
            await conn.commit()
            return await stats_for(conn, project_id, user)
        except SQLAlchemyError as e:
            logger.error(f"Unlike project error: {e}")
            await conn.rollback()
            raise DatabaseError("Failed to unlike project") from e

    @staticmethod
    async def update_project(
        conn: AsyncConnection,
        project_id: int,
        user: AuthUser,
        data: ProjectUpdate,
    ) -> ProjectResponse:
        """
        Replace a project's editable fields.

        Raises:
            ValidationFailedError: If title or short_desc is blank
            ForbiddenError: If no project with this id is owned by the caller
        """
        if is_blank(data.title):
            raise ValidationFailedError("Title required", field="title")
        if is_blank(data.short_desc):
            raise ValidationFailedError("Short description required", field="short_desc")

        values: dict[str, Any] = {
            "title": data.title,
            "short_desc": data.short_desc,
            "full_desc": text_or_default(data.full_desc),
            "image": text_or_default(data.image),
            "github": text_or_default(data.github),
            "live": text_or_default(data.live),
            "tags": coerce_tags(data.tags),
        }

        stmt = (
            update(projects)
            .where(
                and_(
                    projects.c.id == project_id,
                    projects.c.user_id == user.id,
                )
            )
            .values(**values)
            .returning(*projects.c)
        )

        try:
            result = await conn.execute(stmt)
            row = result.mappings().first()
            await conn.commit()
        except SQLAlchemyError as e:
            logger.error(f"Update project error: {e}")
            await conn.rollback()
            raise DatabaseError("Failed to update project") from e

        if row is None:
            raise ForbiddenError("Not allowed to edit")

        logger.info(f"Updated project: {project_id}")
        return ProjectResponse.model_validate(dict(row))

    @staticmethod
    async def delete_project(
        conn: AsyncConnection,
        project_id: int,
        user: AuthUser,
    ) -> None:
        """
        Delete a project together with its votes and comments.

        The three deletes run in one transaction. If the caller does not own
        the project the transaction is rolled back, so nothing is removed.

        Raises:
            ForbiddenError: If no project with this id is owned by the caller
        """
        try:
            await conn.execute(delete(votes).where(votes.c.project_id == project_id))
            await conn.execute(delete(comments).where(comments.c.project_id == project_id))
            result = await conn.execute(
                delete(projects)
                .where(
                    and_(
                        projects.c.id == project_id,
                        projects.c.user_id == user.id,
                    )
                )
                .returning(projects.c.id)
            )
            deleted = result.first()

            if deleted is None:
                await conn.rollback()
            else:
                await conn.commit()
        except SQLAlchemyError as e:
            logger.error(f"Delete project error: {e}")
            await conn.rollback()
            raise DatabaseError("Failed to delete project") from e

        if deleted is None:
            raise ForbiddenError("Not allowed to delete")

        logger.info(f"Deleted project: {project_id} (with votes and comments)")
