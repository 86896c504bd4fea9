# =============================================================================
# lib/tables.py - Table Definitions
# =============================================================================
# SQLAlchemy Core metadata for the four tables the API reads and writes.
# Queries are built from these Table objects and compiled to parameterized
# SQL by the active dialect (asyncpg in production, aiosqlite in tests).
#
# No ON DELETE CASCADE: project deletion removes votes and comments itself.
# Votes and comments must reference an existing project (FOREIGN KEY).
# =============================================================================

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    Table,
    Text,
    func,
)
from sqlalchemy.dialects.postgresql import ARRAY, UUID

metadata = MetaData()

# TEXT[] on Postgres, JSON elsewhere
TagList = ARRAY(Text).with_variant(JSON(), "sqlite")

# uuid on Postgres, TEXT elsewhere
VoterId = UUID(as_uuid=False).with_variant(Text(), "sqlite")


users = Table(
    "users",
    metadata,
    # Identity-provider user id, not generated here
    Column("id", Text, primary_key=True),
    Column("email", Text, nullable=False),
    Column("name", Text, nullable=False),
    Column("username", Text),
    Column("bio", Text),
    Column("github", Text),
    Column("linkedin", Text),
    Column("website", Text),
    Column("avatar", Text),
    Column("created_at", DateTime(timezone=True), server_default=func.now(), nullable=False),
)

projects = Table(
    "projects",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", Text, nullable=False),
    Column("short_desc", Text),
    Column("full_desc", Text),
    Column("image", Text),
    Column("github", Text),
    Column("live", Text),
    Column("tags", TagList, nullable=False),
    # Owner's identity-provider id; a users row is not required
    Column("user_id", Text, nullable=False),
    Column("created_at", DateTime(timezone=True), server_default=func.now(), nullable=False),
)

votes = Table(
    "votes",
    metadata,
    Column("user_id", VoterId, nullable=False),
    Column("project_id", Integer, ForeignKey("projects.id"), nullable=False),
    PrimaryKeyConstraint("user_id", "project_id"),
)

comments = Table(
    "comments",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("project_id", Integer, ForeignKey("projects.id"), nullable=False),
    Column("user_id", Text, nullable=False),
    Column("text", Text, nullable=False),
    Column("created_at", DateTime(timezone=True), server_default=func.now(), nullable=False),
)
