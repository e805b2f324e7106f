"""
Prompt configuration and the command compiler.

PromptConfig aggregates every user choice for one image request and compiles it
into the single `/imagine prompt: ...` command string the service understands.
compile() is a pure function of the current state: no I/O, never raises.
"""

from dataclasses import dataclass, field

from mjprompt.core.algorithm import (
    DEFAULT_ALGORITHM,
    DEFAULT_ASPECT,
    Algorithm,
    Aspect,
    remap_aspect,
)
from mjprompt.core.choices import ChoiceSet, ThemeList

COMMAND_PREFIX = "/imagine prompt: "

DEFAULT_STYLIZE = 2500
MIN_STYLIZE = 625
MAX_STYLIZE = 60000
MAX_SEED = 2**32 - 1

# Names of the single-select axes, in display order
AXES = ("style", "color", "body", "hair", "pose")

DEFAULT_STYLES = ("ultra realistic", "lo-fi anime")
DEFAULT_THEMES = ("cyberpunk", "steampunk")
DEFAULT_COLORS = ("vibrant", "muted", "grayscale", "high contrast")
DEFAULT_BODIES = ("feminine", "masculine")
DEFAULT_HAIR = ("blonde", "brown", "black", "red", "light brown")
DEFAULT_POSES = ("dynamic", "relaxed", "confident")


@dataclass
class PromptConfig:
    """All choices for one image request. `text` and `copied_command` are never persisted."""

    style: ChoiceSet = field(default_factory=lambda: ChoiceSet.of(DEFAULT_STYLES))
    themes: ThemeList = field(default_factory=lambda: ThemeList.of(DEFAULT_THEMES))
    color: ChoiceSet = field(default_factory=lambda: ChoiceSet.of(DEFAULT_COLORS))
    body: ChoiceSet = field(default_factory=lambda: ChoiceSet.of(DEFAULT_BODIES))
    hair: ChoiceSet = field(default_factory=lambda: ChoiceSet.of(DEFAULT_HAIR))
    pose: ChoiceSet = field(default_factory=lambda: ChoiceSet.of(DEFAULT_POSES))
    algorithm: Algorithm = DEFAULT_ALGORITHM
    aspect: Aspect = DEFAULT_ASPECT
    stylize: int = DEFAULT_STYLIZE
    use_seed: bool = False
    seed: int = 0
    video: bool = False
    copy_on_change: bool = True

    # Session-only state
    text: str = field(default="", compare=False)
    copied_command: str = field(default="", compare=False)

    @classmethod
    def default(cls) -> "PromptConfig":
        """Return a fresh configuration with the built-in option lists."""
        return cls()

    def axis(self, name: str) -> ChoiceSet:
        """
        Return the single-select axis called `name`.

        Raises:
            KeyError: If name is not one of AXES
        """
        if name not in AXES:
            raise KeyError(name)
        choice_set: ChoiceSet = getattr(self, name)
        return choice_set

    def set_text(self, text: str) -> None:
        self.text = text

    def set_algorithm(self, algorithm: Algorithm) -> None:
        """Switch algorithm and remap the aspect if the new algorithm rejects it."""
        self.algorithm = algorithm
        self.aspect = remap_aspect(self.aspect, algorithm)

    def set_aspect(self, aspect: Aspect) -> None:
        self.aspect = aspect

    def set_stylize(self, value: int) -> None:
        """Set stylize strength, clamped to [MIN_STYLIZE, MAX_STYLIZE]."""
        self.stylize = max(MIN_STYLIZE, min(MAX_STYLIZE, int(value)))

    def reset_stylize(self) -> None:
        self.stylize = DEFAULT_STYLIZE

    def set_use_seed(self, enabled: bool) -> None:
        self.use_seed = enabled

    def set_seed(self, value: int) -> None:
        """Set the seed, clamped to the unsigned 32-bit range."""
        self.seed = max(0, min(MAX_SEED, int(value)))

    def set_video(self, enabled: bool) -> None:
        self.video = enabled

    def set_copy_on_change(self, enabled: bool) -> None:
        self.copy_on_change = enabled

    def compile(self) -> str:
        """
        Compile the configuration into the service command.

        Segments are appended in a fixed order; defaults (stylize 2500, square,
        v3) are implicit and never emitted.

        Returns:
            The command string; the bare prefix plus text when nothing else is set
        """
        parts = [COMMAND_PREFIX + self.text.strip()]

        style = self.style.render()
        if style:
            parts.append(f", {style}")
        body = self.body.render()
        if body:
            parts.append(f", {body} body")
        hair = self.hair.render()
        if hair:
            parts.append(f", {hair} hair")
        pose = self.pose.render()
        if pose:
            parts.append(f", {pose} pose")
        for theme in self.themes.render():
            parts.append(f", {theme}")
        color = self.color.render()
        if color:
            parts.append(f", {color} colors")

        if self.stylize != DEFAULT_STYLIZE:
            parts.append(f" --stylize {self.stylize}")
        ratio = self.aspect.ratio
        if ratio is not None:
            parts.append(f" --ar {ratio[0]}:{ratio[1]}")
        if self.video:
            parts.append(" --video")
        if self.use_seed:
            parts.append(f" --sameseed {self.seed}")
        if self.algorithm != Algorithm.V3:
            parts.append(f" --{self.algorithm.value}")

        return "".join(parts)


__all__ = [
    "AXES",
    "COMMAND_PREFIX",
    "DEFAULT_STYLIZE",
    "MAX_SEED",
    "MAX_STYLIZE",
    "MIN_STYLIZE",
    "PromptConfig",
]
