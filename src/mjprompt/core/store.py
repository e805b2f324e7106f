"""
Load and save the prompt configuration as a YAML document.

The document lives at a fixed per-user location and is read once at start and
written once at shutdown. Reading never fails: a missing, unreadable or invalid
document yields the default configuration. Writing is best effort.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as SchemaError

from mjprompt.core.algorithm import Algorithm, Aspect, parse_algorithm
from mjprompt.core.choices import ChoiceSet, ThemeList
from mjprompt.core.config import Settings, data_dir_from_env
from mjprompt.core.prompt import MAX_SEED, MAX_STYLIZE, MIN_STYLIZE, PromptConfig
from mjprompt.logging_config import get_logger
from mjprompt.utils.exceptions import PersistenceError

logger = get_logger(__name__)


class ChoiceSetDocument(BaseModel):
    """Schema for one single-select axis."""

    model_config = ConfigDict(extra="forbid")

    current: str | None
    choices: list[str]


class PromptDocument(BaseModel):
    """Schema for the persisted prompt document."""

    model_config = ConfigDict(extra="forbid")

    style: ChoiceSetDocument
    themes: list[tuple[str, bool]]
    color: ChoiceSetDocument
    body: ChoiceSetDocument
    hair: ChoiceSetDocument
    pose: ChoiceSetDocument
    algorithm: Algorithm
    aspect: Aspect
    stylize: int = Field(ge=MIN_STYLIZE, le=MAX_STYLIZE)
    video: bool
    copy_on_change: bool
    use_seed: bool
    seed: int = Field(ge=0, le=MAX_SEED)

    @field_validator("algorithm", mode="before")
    @classmethod
    def _accept_legacy_algorithm(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                return parse_algorithm(value)
            except ValueError:
                return value
        return value

    @classmethod
    def from_config(cls, config: PromptConfig) -> "PromptDocument":
        def axis(choice_set: ChoiceSet) -> ChoiceSetDocument:
            return ChoiceSetDocument(
                current=choice_set.current, choices=list(choice_set.options)
            )

        return cls(
            style=axis(config.style),
            themes=list(config.themes.entries),
            color=axis(config.color),
            body=axis(config.body),
            hair=axis(config.hair),
            pose=axis(config.pose),
            algorithm=config.algorithm,
            aspect=config.aspect,
            stylize=config.stylize,
            video=config.video,
            copy_on_change=config.copy_on_change,
            use_seed=config.use_seed,
            seed=config.seed,
        )

    def to_config(self) -> PromptConfig:
        def axis(doc: ChoiceSetDocument) -> ChoiceSet:
            return ChoiceSet(options=list(doc.choices) or [""], current=doc.current)

        return PromptConfig(
            style=axis(self.style),
            themes=ThemeList(entries=list(self.themes)),
            color=axis(self.color),
            body=axis(self.body),
            hair=axis(self.hair),
            pose=axis(self.pose),
            algorithm=self.algorithm,
            aspect=self.aspect,
            stylize=self.stylize,
            use_seed=self.use_seed,
            seed=self.seed,
            video=self.video,
            copy_on_change=self.copy_on_change,
        )


class PromptStore:
    """Reads and writes the prompt document at a fixed path."""

    def __init__(self, path: Path | str | None = None) -> None:
        """
        Args:
            path: Document path; defaults to the document in MJPROMPT_DATA_DIR
                or the per-user data directory
        """
        if path is None:
            path = Settings(data_dir=data_dir_from_env()).document_path
        self.path = Path(path)

    def _read_document(self) -> PromptDocument:
        """
        Read and validate the document.

        Raises:
            PersistenceError: If the file is missing, unreadable, malformed or invalid.
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise PersistenceError("No stored prompt document.", self.path) from e
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Failed to read prompt document: {e}", self.path) from e

        try:
            data = yaml.safe_load(raw)
        except (yaml.YAMLError, RecursionError) as e:
            raise PersistenceError(f"Failed to parse prompt document: {e}", self.path) from e

        if not isinstance(data, dict):
            raise PersistenceError("Prompt document is empty or not a mapping.", self.path)

        try:
            return PromptDocument.model_validate(data)
        except SchemaError as e:
            errors = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            raise PersistenceError(f"Invalid prompt document: {errors}", self.path) from e

    def load(self) -> PromptConfig:
        """
        Load the stored configuration, or the defaults if it cannot be used.

        Returns:
            The stored PromptConfig, or PromptConfig.default() on any failure
        """
        try:
            document = self._read_document()
        except PersistenceError as e:
            if isinstance(e.__cause__, FileNotFoundError):
                logger.debug("No prompt document at %s; using defaults", self.path)
            else:
                logger.warning("%s Using defaults.", e)
            return PromptConfig.default()
        logger.debug("Loaded prompt document from %s", self.path)
        return document.to_config()

    def save(self, config: PromptConfig) -> bool:
        """
        Write every persisted field of config, replacing the document.

        Failures are logged and swallowed.

        Returns:
            True if the document was written
        """
        try:
            data = PromptDocument.from_config(config).model_dump(mode="json")
        except SchemaError as e:
            logger.warning("Not saving prompt document, configuration is out of range: %s", e)
            return False
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                yaml.safe_dump(data, sort_keys=False, allow_unicode=True), encoding="utf-8"
            )
        except OSError as e:
            logger.warning("Could not save prompt document to %s: %s", self.path, e)
            return False
        logger.info("Saved prompt document to %s", self.path)
        return True


__all__ = ["ChoiceSetDocument", "PromptDocument", "PromptStore"]
