# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Small input-normalization helpers used by the services.
# =============================================================================

from typing import Any


def is_blank(value: Any) -> bool:
    """
    Check whether a submitted text field counts as empty.

    None, non-strings and whitespace-only strings are all blank.

    Example:
        is_blank("  ")     # True
        is_blank("Title")  # False
    """
    return not isinstance(value, str) or not value.strip()


def coerce_tags(value: Any) -> list[str]:
    """
    Normalize a submitted tags value to a list of strings.

    Anything that is not list-shaped becomes an empty list. Items are
    kept in order and converted to strings.

    Example:
        coerce_tags(["python", "fastapi"])  # ["python", "fastapi"]
        coerce_tags("python")               # []
        coerce_tags(None)                   # []
    """
    if not isinstance(value, (list, tuple)):
        return []
    return [str(tag) for tag in value if tag is not None]


def text_or_default(value: Any, default: str = "") -> str:
    """Return value if it is a string, otherwise the default."""
    return value if isinstance(value, str) else default
