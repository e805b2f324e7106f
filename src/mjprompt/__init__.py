"""
mjprompt - Midjourney prompt builder

A Python package that keeps a structured image-generation request (subject text
plus style, color, character and theme choices) and compiles it into a single
`/imagine prompt: ...` command.

Library usage:
- Build or load a PromptConfig, mutate it through its setters and axes, and call
  compile() for the command string. compile() never raises.
- PromptStore loads the persisted document (falling back to defaults on any
  problem) and saves it best effort.
- PromptSession wraps both for presenters: copy on change, copy gating and
  clipboard status messages.
- Logging: control verbosity with set_verbosity(0|1|2) or configure_logging(verbose_level, quiet);
  MJPROMPT_VERBOSITY env (0/1/2) is read when the CLI runs.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("mjprompt")
except PackageNotFoundError:
    # Package is not installed (e.g., running from source in development)
    __version__ = "0.0.0.dev"

from mjprompt.core.algorithm import Algorithm, Aspect, allowed_aspects, remap_aspect
from mjprompt.core.choices import ChoiceSet, ThemeList
from mjprompt.core.config import Settings
from mjprompt.core.prompt import AXES, DEFAULT_STYLIZE, PromptConfig
from mjprompt.core.session import PromptSession
from mjprompt.core.store import PromptStore
from mjprompt.logging_config import configure_logging, set_verbosity
from mjprompt.utils.exceptions import (
    ClipboardError,
    ConfigurationError,
    MjpromptError,
    PersistenceError,
    ValidationError,
)

__all__ = [
    "AXES",
    "Algorithm",
    "Aspect",
    "ChoiceSet",
    "ClipboardError",
    "ConfigurationError",
    "DEFAULT_STYLIZE",
    "MjpromptError",
    "PersistenceError",
    "PromptConfig",
    "PromptSession",
    "PromptStore",
    "Settings",
    "ThemeList",
    "ValidationError",
    "allowed_aspects",
    "configure_logging",
    "remap_aspect",
    "set_verbosity",
]
