"""AI Compare: relay one prompt to three LLM providers side by side."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("ai-compare")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = ["__version__"]
