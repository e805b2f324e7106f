"""
Utility functions for the CLI.

This module contains exit code constants and helpers for turning user input
(1-based indexes, axis names) into core arguments.
"""

from mjprompt.utils.exceptions import ValidationError

# Exit codes
EXIT_ERROR = 1
EXIT_VALIDATION_OR_CONFIG = 2


def to_index(position: int, length: int, field: str) -> int:
    """
    Convert a 1-based position shown to the user into a list index.

    Raises:
        ValidationError: If position is outside 1..length
    """
    if not 1 <= position <= length:
        if length == 0:
            raise ValidationError(f"No {field} entries to choose from.", field=field)
        raise ValidationError(
            f"Position {position} is out of range; expected 1 to {length}.", field=field
        )
    return position - 1


__all__ = [
    "EXIT_ERROR",
    "EXIT_VALIDATION_OR_CONFIG",
    "to_index",
]
