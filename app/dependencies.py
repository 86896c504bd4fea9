# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated, AsyncIterator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncConnection

from lib.database import database


async def get_db_connection() -> AsyncIterator[AsyncConnection]:
    """
    Check out a pooled connection for the duration of the request.

    The connection is returned to the pool on every exit path; anything
    the handler did not commit is rolled back.
    """
    async with database.connection() as conn:
        yield conn


# Type alias for dependency injection
DbConn = Annotated[AsyncConnection, Depends(get_db_connection)]
