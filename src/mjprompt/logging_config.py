"""
Logging configuration for mjprompt.

Everything logs under the `mjprompt` logger. No handler is attached until
set_verbosity or configure_logging is called, so library users keep control of
their own logging setup.

Verbosity levels:
- 0 (default): INFO, document load/save and clipboard failures
- 1: INFO plus the compiled command text
- 2: DEBUG plus document paths and validation detail

MJPROMPT_VERBOSITY (0/1/2) supplies the level when no CLI flag is given.
"""

import logging
import os

LOG_FORMAT = "%(levelname)s [%(name)s] %(message)s"
ROOT_LOGGER_NAME = "mjprompt"
VERBOSITY_ENV = "MJPROMPT_VERBOSITY"

# verbosity -> (logger level, log command text)
_VERBOSITY_LEVELS: dict[int, tuple[int, bool]] = {
    0: (logging.INFO, False),
    1: (logging.INFO, True),
    2: (logging.DEBUG, True),
}

_log_commands: bool = False


def _root_logger() -> logging.Logger:
    """Return the mjprompt logger, attaching a stderr handler on first use."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    return root


def set_verbosity(level: int) -> None:
    """Set logging verbosity; values below 0 act as 0, values above 2 as 2."""
    global _log_commands
    clamped = max(0, min(2, level))
    log_level, _log_commands = _VERBOSITY_LEVELS[clamped]
    _root_logger().setLevel(log_level)


def configure_logging(verbose_level: int = 0, quiet: bool = False) -> None:
    """Configure logging for the CLI or UI; quiet means WARNING and no command text."""
    global _log_commands
    if quiet:
        _root_logger().setLevel(logging.WARNING)
        _log_commands = False
        return
    set_verbosity(verbose_level)


def log_commands() -> bool:
    """Return True if compiled command text should be logged (verbosity 1 or 2)."""
    return _log_commands


def get_verbosity_from_env() -> int:
    """Read MJPROMPT_VERBOSITY; anything but "1" or "2" means 0."""
    raw = os.environ.get(VERBOSITY_ENV, "").strip()
    return int(raw) if raw in ("1", "2") else 0


def get_logger(name: str) -> logging.Logger:
    """Return a child logger under mjprompt (e.g. mjprompt.core.store)."""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


__all__ = [
    "configure_logging",
    "get_logger",
    "get_verbosity_from_env",
    "log_commands",
    "set_verbosity",
]
