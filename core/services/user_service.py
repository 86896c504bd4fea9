# =============================================================================
# core/services/user_service.py - User Business Logic
# =============================================================================
# Keeps the local users table in step with Supabase Auth identities and
# lets each user edit their own profile.
#
# Listing and deleting users are public operations, as the frontend
# expects them to be.
# =============================================================================

import logging

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection

from app.auth.models import AuthUser
from app.exceptions import DatabaseError, UserNotFoundError, ValidationFailedError
from core.models.user import UserCreate, UserProfileUpdate, UserResponse
from lib.database import insert_ignoring_conflicts
from lib.tables import users

logger = logging.getLogger(__name__)


class UserService:
    """Service for user profile operations."""

    @staticmethod
    async def sync_user(conn: AsyncConnection, data: UserCreate) -> UserResponse:
        """
        Insert a user for a verified identity unless the id already exists.

        Returns:
            The newly inserted row, or the existing row for a known id

        Raises:
            ValidationFailedError: If id, email or name is missing
        """
        if not data.id or not data.email or not data.name:
            raise ValidationFailedError("id, email, and name are required")

        stmt = (
            insert_ignoring_conflicts(conn, users, "id")
            .values(id=data.id, email=data.email, name=data.name)
            .returning(*users.c)
        )

        try:
            result = await conn.execute(stmt)
            row = result.mappings().first()
            await conn.commit()

            if row is None:
                # Conflict: the identity was synced before
                existing = await conn.execute(select(users).where(users.c.id == data.id))
                row = existing.mappings().first()
            else:
                logger.info(f"Created user: {data.id}")
        except SQLAlchemyError as e:
            logger.error(f"Sync user error: {e}")
            await conn.rollback()
            raise DatabaseError("Insert failed") from e

        if row is None:
            # Deleted between the insert and the lookup
            return UserResponse(id=data.id, email=data.email, name=data.name)

        return UserResponse.model_validate(dict(row))

    @staticmethod
    async def get_user(conn: AsyncConnection, user: AuthUser) -> UserResponse:
        """
        Get the caller's profile row.

        Raises:
            UserNotFoundError: If the identity was never synced
        """
        try:
            result = await conn.execute(select(users).where(users.c.id == user.id))
            row = result.mappings().first()
        except SQLAlchemyError as e:
            logger.error(f"Fetch user error: {e}")
            raise DatabaseError("Failed to fetch user") from e

        if row is None:
            raise UserNotFoundError(user.id)

        return UserResponse.model_validate(dict(row))

    @staticmethod
    async def list_users(conn: AsyncConnection) -> list[UserResponse]:
        """List all users, newest first."""
        try:
            result = await conn.execute(
                select(users).order_by(users.c.created_at.desc(), users.c.id.desc())
            )
            rows = result.mappings().all()
        except SQLAlchemyError as e:
            logger.error(f"List users error: {e}")
            raise DatabaseError("Database error") from e

        return [UserResponse.model_validate(dict(row)) for row in rows]

    @staticmethod
    async def update_profile(
        conn: AsyncConnection,
        user: AuthUser,
        data: UserProfileUpdate,
    ) -> UserResponse:
        """
        Overwrite the caller's profile fields.

        Fields missing from the body are written as null.

        Raises:
            UserNotFoundError: If the identity was never synced
        """
        stmt = (
            update(users)
            .where(users.c.id == user.id)
            .values(
                username=data.username,
                bio=data.bio,
                github=data.github,
                linkedin=data.linkedin,
                website=data.website,
                avatar=data.avatar,
            )
            .returning(*users.c)
        )

        try:
            result = await conn.execute(stmt)
            row = result.mappings().first()
            await conn.commit()
        except SQLAlchemyError as e:
            logger.error(f"Update user error: {e}")
            await conn.rollback()
            raise DatabaseError("Failed to update user") from e

        if row is None:
            raise UserNotFoundError(user.id)

        logger.info(f"Updated profile: {user.id}")
        return UserResponse.model_validate(dict(row))

    @staticmethod
    async def delete_user(conn: AsyncConnection, user_id: str) -> None:
        """Delete a user by id. Deleting an unknown id is not an error."""
        try:
            await conn.execute(delete(users).where(users.c.id == user_id))
            await conn.commit()
        except SQLAlchemyError as e:
            logger.error(f"Delete user error: {e}")
            await conn.rollback()
            raise DatabaseError("Delete failed") from e

        logger.info(f"Deleted user: {user_id}")
