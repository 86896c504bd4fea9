# =============================================================================
# core/services/comment_service.py - Comment Business Logic
# =============================================================================
# Add, list, and author-only delete for project comments.
# =============================================================================

import logging

from sqlalchemy import and_, delete, insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection

from app.auth.models import AuthUser
from app.exceptions import (
    DatabaseError,
    ForbiddenError,
    ProjectNotFoundError,
    ValidationFailedError,
)
from core.models.comment import CommentCreate, CommentResponse, CommentWithAuthor
from core.services.aggregator import project_exists
from lib.tables import comments, users

logger = logging.getLogger(__name__)


class CommentService:
    """Service for comment operations."""

    @staticmethod
    async def add_comment(
        conn: AsyncConnection,
        project_id: int,
        user: AuthUser,
        data: CommentCreate,
    ) -> CommentResponse:
        """
        Add a comment to a project.

        Raises:
            ValidationFailedError: If text is missing or empty
            ProjectNotFoundError: If no project has this id
        """
        if not data.text:
            raise ValidationFailedError("Comment text required", field="text")

        try:
            if not await project_exists(conn, project_id):
                raise ProjectNotFoundError(project_id)
            result = await conn.execute(
                insert(comments)
                .values(project_id=project_id, user_id=user.id, text=data.text)
                .returning(*comments.c)
            )
            row = result.mappings().one()
            await conn.commit()
        except IntegrityError as e:
            logger.warning(f"Comment on missing project {project_id}: {e}")
            await conn.rollback()
            raise ProjectNotFoundError(project_id) from e
        except SQLAlchemyError as e:
            logger.error(f"Add comment error: {e}")
            await conn.rollback()
            raise DatabaseError("Failed to add comment") from e

        logger.info(f"Added comment {row['id']} on project {project_id}")
        return CommentResponse.model_validate(dict(row))

    @staticmethod
    async def list_comments(
        conn: AsyncConnection,
        project_id: int,
    ) -> list[CommentWithAuthor]:
        """
        List a project's comments, oldest first, with author names.

        Comments whose author has no users row come back with user_name=None.
        """
        query = (
            select(comments, users.c.name.label("user_name"))
            .select_from(comments.outerjoin(users, comments.c.user_id == users.c.id))
            .where(comments.c.project_id == project_id)
            .order_by(comments.c.created_at.asc(), comments.c.id.asc())
        )

        try:
            result = await conn.execute(query)
            rows = result.mappings().all()
        except SQLAlchemyError as e:
            logger.error(f"List comments error: {e}")
            raise DatabaseError("Failed to load comments") from e

        return [CommentWithAuthor.model_validate(dict(row)) for row in rows]

    @staticmethod
    async def delete_comment(
        conn: AsyncConnection,
        comment_id: int,
        user: AuthUser,
    ) -> None:
        """
        Delete a comment written by the caller.

        Raises:
            ForbiddenError: If the comment does not exist or has another author
        """
        try:
            check = await conn.execute(
                select(comments.c.id).where(
                    and_(
                        comments.c.id == comment_id,
                        comments.c.user_id == user.id,
                    )
                )
            )
            owned = check.first() is not None

            if owned:
                await conn.execute(delete(comments).where(comments.c.id == comment_id))
                await conn.commit()
        except SQLAlchemyError as e:
            logger.error(f"Delete comment error: {e}")
            await conn.rollback()
            raise DatabaseError("Failed to delete comment") from e

        if not owned:
            raise ForbiddenError("Not allowed to delete this comment")

        logger.info(f"Deleted comment: {comment_id}")
