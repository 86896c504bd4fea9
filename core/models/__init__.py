# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - user.py: User sync/profile schemas
# - project.py: Project CRUD schemas and aggregated stats
# - comment.py: Comment schemas
# - common.py: Message and upload responses
#
# These models define the "contract" between API and clients.
# =============================================================================

from .comment import CommentCreate, CommentResponse, CommentWithAuthor
from .common import MessageResponse, UploadResponse
from .project import (
    ProjectCreate,
    ProjectResponse,
    ProjectStats,
    ProjectUpdate,
    ProjectWithStats,
)
from .user import UserCreate, UserProfileUpdate, UserResponse

__all__ = [
    # Comment
    "CommentCreate",
    "CommentResponse",
    "CommentWithAuthor",
    # Common
    "MessageResponse",
    "UploadResponse",
    # Project
    "ProjectCreate",
    "ProjectResponse",
    "ProjectStats",
    "ProjectUpdate",
    "ProjectWithStats",
    # User
    "UserCreate",
    "UserProfileUpdate",
    "UserResponse",
]
