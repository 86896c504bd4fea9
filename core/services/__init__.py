# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .comment_service import CommentService
from .project_service import ProjectService
from .storage_service import StorageService
from .user_service import UserService

__all__ = [
    "CommentService",
    "ProjectService",
    "StorageService",
    "UserService",
]
