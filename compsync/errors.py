"""Error types and formatting utilities for consistent error messages.

Every engine error is attributable to a single component; callers catch them
per component so that one failure never blocks the rest of a batch.

Error Style Guide:
- User-facing errors use 'Error: ' prefix
- Use present tense: 'must be', 'is required'
- Include actionable hints where helpful
"""


class SyncError(Exception):
    """Base class for failures while syncing a single component."""

    def __init__(self, message: str, component: str | None = None):
        super().__init__(message)
        self.component = component


class TransportError(SyncError):
    """Raised when a registry fetch fails or times out."""


class NotFoundError(TransportError):
    """Raised when the registry does not serve the requested component."""


class LocalIOError(SyncError):
    """Raised when writing or verifying a local component file fails."""


def format_error(message: str) -> str:
    """Format an error message with consistent prefix.

    Examples:
        >>> format_error("component 'button' not found")
        "Error: component 'button' not found"
    """
    return f"Error: {message}"


def format_suggestion(message: str, suggestion: str) -> str:
    """Format an error message with a helpful suggestion.

    Examples:
        >>> format_suggestion("config file not found", "run 'compsync init' to create one")
        "Error: config file not found. Hint: run 'compsync init' to create one"
    """
    return f"{format_error(message)}. Hint: {suggestion}"


__all__ = [
    "SyncError",
    "TransportError",
    "NotFoundError",
    "LocalIOError",
    "format_error",
    "format_suggestion",
]
