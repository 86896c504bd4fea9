# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable infrastructure:
# - database.py: Process-wide pooled SQLAlchemy engine
# - tables.py: Table metadata for users, projects, votes, comments
# - supabase_client.py: Supabase Auth + Storage wrapper
# - utils.py: Input normalization helpers
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.database import Database, database, insert_ignoring_conflicts
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import coerce_tags, is_blank, text_or_default

__all__ = [
    # Database
    "Database",
    "database",
    "insert_ignoring_conflicts",
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Utils
    "coerce_tags",
    "is_blank",
    "text_or_default",
]
