"""Exception types raised inside the relay."""


class AICompareError(Exception):
    """Base class for relay errors."""


class PromptValidationError(AICompareError, ValueError):
    """Raised when the incoming prompt is missing or blank."""


class ProviderError(AICompareError):
    """Raised inside a provider adapter; always recovered by ProviderClient."""
