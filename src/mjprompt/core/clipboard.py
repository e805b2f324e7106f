"""System clipboard access for compiled commands."""

import pyperclip

from mjprompt.logging_config import get_logger
from mjprompt.utils.exceptions import ClipboardError

logger = get_logger(__name__)


def copy_text(text: str) -> None:
    """
    Write text to the system clipboard.

    Raises:
        ClipboardError: If no clipboard backend is available or the write fails
    """
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        logger.debug("Clipboard write failed: %s", e)
        raise ClipboardError(str(e) or "clipboard unavailable", original_error=e) from e
