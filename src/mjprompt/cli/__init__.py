"""
Command-line interface for mjprompt.

This package contains CLI implementations using Click.
Uses only the public API: from mjprompt import ...
"""

from mjprompt.cli.commands import cli, main

__all__ = ["cli", "main"]
