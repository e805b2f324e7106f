"""
Custom exceptions for mjprompt.

Compilation and in-memory mutation never raise; these exceptions belong to the
edges: presenter input, settings, the persisted document and the clipboard.
"""

from pathlib import Path


class MjpromptError(Exception):
    """Base exception for all mjprompt errors."""

    pass


class ValidationError(MjpromptError):
    """Raised when presenter input does not name a valid axis, index or value."""

    def __init__(self, message: str, field: str = "") -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Name of the field that failed validation (optional)
        """
        self.field = field
        super().__init__(message)


class ConfigurationError(MjpromptError):
    """Raised when there is a settings problem."""

    pass


class PersistenceError(MjpromptError):
    """Raised when the stored document cannot be read or decoded."""

    def __init__(self, message: str, path: Path | str = "") -> None:
        """
        Initialize persistence error.

        Args:
            message: Error message
            path: Path of the document involved
        """
        self.path = str(path)
        super().__init__(message)


class ClipboardError(MjpromptError):
    """Raised when the system clipboard rejects a write."""

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        """
        Initialize clipboard error.

        Args:
            message: Error message
            original_error: The underlying exception raised by the clipboard backend
        """
        self.original_error = original_error
        super().__init__(message)
