"""
Settings for mjprompt.

This module handles where the prompt document lives and how the local UI is
served. Values come from the environment (and a .env file when present).
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv
from platformdirs import user_data_path

from mjprompt.logging_config import get_logger
from mjprompt.utils.exceptions import ConfigurationError

logger = get_logger(__name__)

# Load environment variables from .env file
load_dotenv()

# Directory and file names kept for compatibility with existing documents
DATA_DIR_NAME = "midjourney_prompt"
DOCUMENT_NAME = "promt.yaml"

DEFAULT_UI_HOST = "127.0.0.1"
DEFAULT_UI_PORT = 7860


def default_data_dir() -> Path:
    """Return the per-user local data directory for the prompt document."""
    return user_data_path(DATA_DIR_NAME, appauthor=False, roaming=False)


def data_dir_from_env() -> Path | None:
    """Return MJPROMPT_DATA_DIR as a path, or None when it is unset."""
    data_dir = os.getenv("MJPROMPT_DATA_DIR", "").strip()
    return Path(data_dir).expanduser() if data_dir else None


@dataclass
class Settings:
    """Runtime settings for mjprompt."""

    data_dir: Path | None = None
    document_name: str = DOCUMENT_NAME

    # Gradio UI
    ui_host: str = DEFAULT_UI_HOST
    ui_port: int = DEFAULT_UI_PORT
    ui_share: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Create a Settings instance from environment variables.

        Environment variables:
            MJPROMPT_DATA_DIR: Optional directory holding the prompt document
            MJPROMPT_UI_HOST: Optional host for the UI server
            MJPROMPT_UI_PORT: Optional port for the UI server
            MJPROMPT_UI_SHARE: Optional "1"/"true"/"yes" to create a share link

        Raises:
            ConfigurationError: If MJPROMPT_UI_PORT is not an integer
        """

        raw_port = os.getenv("MJPROMPT_UI_PORT", "").strip()
        try:
            port = int(raw_port) if raw_port else DEFAULT_UI_PORT
        except ValueError as e:
            raise ConfigurationError(
                f"MJPROMPT_UI_PORT must be an integer, got {raw_port!r}."
            ) from e
        share = os.getenv("MJPROMPT_UI_SHARE", "").strip().lower() in ("1", "true", "yes")

        return cls(
            data_dir=data_dir_from_env(),
            ui_host=os.getenv("MJPROMPT_UI_HOST", DEFAULT_UI_HOST),
            ui_port=port,
            ui_share=share,
        )

    @property
    def document_path(self) -> Path:
        """Full path of the persisted prompt document."""
        directory = self.data_dir if self.data_dir is not None else default_data_dir()
        return directory / self.document_name

    def validate(self) -> None:
        """
        Validate the settings.

        Raises:
            ConfigurationError: If settings are invalid
        """
        logger.debug("Validating settings")
        if not 0 < self.ui_port < 65536:
            raise ConfigurationError(f"ui_port must be between 1 and 65535, got {self.ui_port}.")
        if not self.document_name:
            raise ConfigurationError("document_name cannot be empty")
