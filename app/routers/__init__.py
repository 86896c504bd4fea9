# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by resource:
# - health.py: Health check endpoints
# - users.py: Identity sync and profiles
# - projects.py: Project CRUD and likes
# - comments.py: Project comments
# - upload.py: Image uploads
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import users
from . import projects
from . import comments
from . import upload

__all__ = [
    "health",
    "users",
    "projects",
    "comments",
    "upload",
]
