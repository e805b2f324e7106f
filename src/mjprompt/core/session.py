"""
Presenter-facing session around one PromptConfig.

A presenter (CLI or UI) opens a session once at start, mutates the
configuration through it, calls refresh() after every change and close() once
at shutdown. Copy gating (blank text) and clipboard failures are handled here
and surfaced only as status text.
"""

from collections.abc import Callable

from mjprompt.core.clipboard import copy_text
from mjprompt.core.prompt import PromptConfig
from mjprompt.core.store import PromptStore
from mjprompt.logging_config import get_logger, log_commands
from mjprompt.utils.exceptions import ClipboardError

logger = get_logger(__name__)

BLANK_TEXT_MESSAGE = "enter a prompt to copy the command"


class PromptSession:
    """Owns the live configuration and its store for one process."""

    def __init__(
        self,
        config: PromptConfig,
        store: PromptStore,
        clipboard: Callable[[str], None] | None = None,
    ) -> None:
        self.config = config
        self.store = store
        self._clipboard = clipboard
        self._closed = False
        self.last_error: ClipboardError | None = None

    @classmethod
    def open(
        cls, store: PromptStore, clipboard: Callable[[str], None] | None = None
    ) -> "PromptSession":
        """Load the stored configuration (or defaults) and start a session."""
        return cls(store.load(), store, clipboard)

    @property
    def command(self) -> str:
        return self.config.compile()

    @property
    def can_copy(self) -> bool:
        """Copying is offered only once there is subject text."""
        return bool(self.config.text.strip())

    def copy(self) -> str:
        """
        Copy the compiled command to the clipboard.

        Returns:
            The status text now held in config.copied_command
        """
        if not self.can_copy:
            return BLANK_TEXT_MESSAGE
        command = self.config.compile()
        try:
            write = self._clipboard if self._clipboard is not None else copy_text
            write(command)
        except ClipboardError as e:
            self.last_error = e
            logger.warning("Could not copy command: %s", e)
            self.config.copied_command = f"error copying command: {e}"
        else:
            self.last_error = None
            if log_commands():
                logger.info("Copied command: %s", command)
            self.config.copied_command = f"copied command:\n{command}"
        return self.config.copied_command

    def refresh(self, previous_command: str) -> str:
        """
        Re-copy after a change when copy on change is on.

        Args:
            previous_command: The compiled command before the change

        Returns:
            The current status text
        """
        if (
            self.config.copy_on_change
            and self.can_copy
            and self.config.compile() != previous_command
        ):
            return self.copy()
        return self.config.copied_command

    def close(self) -> bool:
        """Persist the configuration; later calls do nothing."""
        if self._closed:
            return False
        self._closed = True
        return self.store.save(self.config)


__all__ = ["BLANK_TEXT_MESSAGE", "PromptSession"]
