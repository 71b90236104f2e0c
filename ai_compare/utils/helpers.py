"""General helper functions for the server."""

from importlib.metadata import PackageNotFoundError, version

from ai_compare.constants import PROMPT_LOG_PREVIEW_CHARS


def get_version() -> str:
    """Read version from package metadata."""
    try:
        return version("ai-compare")
    except PackageNotFoundError:
        return "unknown"


def preview(text: str, limit: int = PROMPT_LOG_PREVIEW_CHARS) -> str:
    """Return the first `limit` characters of text for log lines."""
    return text[:limit]
