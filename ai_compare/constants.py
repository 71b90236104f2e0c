"""Shared constants."""

from typing import Final

# Characters of the prompt echoed into the request log
PROMPT_LOG_PREVIEW_CHARS: Final[int] = 50

EMPTY_PROMPT_ERROR: Final[str] = "Prompt cannot be empty"
INTERNAL_ERROR: Final[str] = "Internal server error"
HEALTH_STATUS: Final[str] = "Server is running"

DEFAULT_MAX_OUTPUT_TOKENS: Final[int] = 500
