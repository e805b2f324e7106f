"""
Error handling for the CLI.

This module maps library exceptions to exit codes and user messages so the
command bodies stay free of try/except for known errors.
"""

import sys
from collections.abc import Callable

import click

from mjprompt.cli import progress
from mjprompt.cli.utils import EXIT_ERROR, EXIT_VALIDATION_OR_CONFIG
from mjprompt.utils.exceptions import (
    ClipboardError,
    ConfigurationError,
    MjpromptError,
    ValidationError,
)


def map_exception_to_exit(exc: BaseException) -> tuple[int, str]:
    """Map library and known exceptions to (exit_code, user_message)."""
    if isinstance(exc, ValidationError):
        msg = exc.args[0] if exc.args else "Validation failed."
        if getattr(exc, "field", None):
            msg = f"{msg} (field: {exc.field})"
        return (EXIT_VALIDATION_OR_CONFIG, msg)
    if isinstance(exc, ConfigurationError):
        return (EXIT_VALIDATION_OR_CONFIG, exc.args[0] if exc.args else "Invalid configuration.")
    if isinstance(exc, ClipboardError):
        detail = exc.args[0] if exc.args else "clipboard unavailable"
        return (EXIT_ERROR, f"error copying command: {detail}")
    if isinstance(exc, MjpromptError):
        return (EXIT_ERROR, exc.args[0] if exc.args else "An error occurred.")
    # Unhandled
    return (EXIT_ERROR, str(exc) if exc.args else "An unexpected error occurred.")


def run_with_error_handling(
    fn: Callable[[], None],
    *,
    quiet: bool = False,
    debug: bool = False,
) -> None:
    """
    Run fn(); on exception map to exit code and message, print and sys.exit.
    """
    try:
        fn()
    except MjpromptError as e:
        code, msg = map_exception_to_exit(e)
        if quiet:
            click.echo(msg, err=True)
        else:
            progress.print_error(msg)
        sys.exit(code)
    except Exception as e:
        if debug:
            raise
        code, msg = map_exception_to_exit(e)
        if quiet:
            click.echo(msg, err=True)
        else:
            progress.print_error(msg)
        sys.exit(EXIT_ERROR)


__all__ = [
    "map_exception_to_exit",
    "run_with_error_handling",
]
