"""
Attribute axes for a prompt.

ChoiceSet holds one axis (style, color, body, hair, pose): an editable list of
candidate options and at most one current selection. ThemeList is the
multi-select axis where any number of labelled entries may be enabled.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass
class ChoiceSet:
    """Reorderable candidate options plus an optional current selection."""

    options: list[str] = field(default_factory=lambda: [""])
    current: str | None = None

    @classmethod
    def of(cls, options: Iterable[str]) -> "ChoiceSet":
        """Create an unselected set from an initial option list."""
        return cls(options=list(options) or [""])

    def select(self, value: str | None) -> None:
        """Set the current selection; None clears it. Not checked against options."""
        self.current = value

    def add_option(self) -> None:
        """Append an empty placeholder option for the presenter to fill in."""
        self.options.append("")

    def remove_option(self, index: int) -> None:
        """
        Remove the option at index.

        The last remaining option is never removed. A selection pointing at the
        removed option is left as is; render() then omits it.
        """
        if len(self.options) <= 1:
            return
        del self.options[index]

    def edit_option(self, index: int, text: str) -> None:
        """Replace the option at index in place; a selection of it follows the edit."""
        old = self.options[index]
        self.options[index] = text
        if self.current is not None and self.current == old and old not in self.options:
            self.current = text

    def selectable(self) -> list[str]:
        """Options a presenter should offer (non-empty, storage order)."""
        return [option for option in self.options if option]

    def render(self) -> str | None:
        """Return the trimmed selection, or None when unset, blank or stale."""
        if self.current is None or self.current not in self.options:
            return None
        value = self.current.strip()
        return value or None


@dataclass
class ThemeList:
    """Ordered (label, enabled) entries; labels need not be unique."""

    entries: list[tuple[str, bool]] = field(default_factory=list)

    @classmethod
    def of(cls, labels: Iterable[str], enabled: bool = False) -> "ThemeList":
        return cls(entries=[(label, enabled) for label in labels])

    def __len__(self) -> int:
        return len(self.entries)

    def add(self) -> None:
        """Append a blank, enabled entry."""
        self.entries.append(("", True))

    def remove(self, index: int) -> None:
        del self.entries[index]

    def toggle(self, index: int) -> None:
        label, enabled = self.entries[index]
        self.entries[index] = (label, not enabled)

    def set_enabled(self, index: int, enabled: bool) -> None:
        label, _ = self.entries[index]
        self.entries[index] = (label, enabled)

    def edit_label(self, index: int, text: str) -> None:
        _, enabled = self.entries[index]
        self.entries[index] = (text, enabled)

    def render(self) -> list[str]:
        """Trimmed labels of enabled, non-blank entries in storage order."""
        rendered = []
        for label, enabled in self.entries:
            value = label.strip()
            if enabled and value:
                rendered.append(value)
        return rendered


__all__ = ["ChoiceSet", "ThemeList"]
