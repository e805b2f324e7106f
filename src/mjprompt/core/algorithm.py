"""
Rendering algorithms and aspect presets.

Each Algorithm permits a fixed, ordered subset of Aspect presets. When the
algorithm changes, an aspect outside the new subset is remapped to the closest
permitted one (tall -> portrait, wide/ultrawide -> landscape).
"""

from enum import Enum


class Aspect(str, Enum):
    """Named width:height ratio categories; square carries no ratio."""

    SQUARE = "square"
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"
    TALL = "tall"
    WIDE = "wide"
    ULTRAWIDE = "ultrawide"

    @property
    def ratio(self) -> tuple[int, int] | None:
        """(width, height), or None for square."""
        return _RATIOS.get(self)

    @property
    def label(self) -> str:
        """Display text for pickers, e.g. 'portrait 2:3'."""
        if self.ratio is None:
            return self.value
        w, h = self.ratio
        return f"{self.value} {w}:{h}"


_RATIOS: dict[Aspect, tuple[int, int]] = {
    Aspect.PORTRAIT: (2, 3),
    Aspect.LANDSCAPE: (3, 2),
    Aspect.TALL: (1, 2),
    Aspect.WIDE: (16, 9),
    Aspect.ULTRAWIDE: (21, 9),
}


class Algorithm(str, Enum):
    """Rendering algorithms understood by the service; v3 is the implicit default."""

    V3 = "v3"
    TEST = "test"
    TESTP = "testp"

    def allowed_aspects(self) -> tuple[Aspect, ...]:
        return _ALLOWED_ASPECTS[self]


_ALL_ASPECTS = tuple(Aspect)
_BASIC_ASPECTS = (Aspect.SQUARE, Aspect.PORTRAIT, Aspect.LANDSCAPE)

_ALLOWED_ASPECTS: dict[Algorithm, tuple[Aspect, ...]] = {
    Algorithm.V3: _ALL_ASPECTS,
    Algorithm.TEST: _BASIC_ASPECTS,
    Algorithm.TESTP: _BASIC_ASPECTS,
}

# Closest permitted preset for aspects the test algorithms reject
_ASPECT_FALLBACKS: dict[Aspect, Aspect] = {
    Aspect.TALL: Aspect.PORTRAIT,
    Aspect.WIDE: Aspect.LANDSCAPE,
    Aspect.ULTRAWIDE: Aspect.LANDSCAPE,
}

DEFAULT_ALGORITHM = Algorithm.V3
DEFAULT_ASPECT = Aspect.SQUARE


def allowed_aspects(algorithm: Algorithm) -> tuple[Aspect, ...]:
    """Return the aspect presets the algorithm permits, in display order."""
    return _ALLOWED_ASPECTS[algorithm]


def remap_aspect(aspect: Aspect, algorithm: Algorithm) -> Aspect:
    """
    Return the aspect to use after switching to `algorithm`.

    Permitted aspects are returned unchanged; a rejected aspect maps to its
    fallback, or stays as is when it has none.
    """
    if aspect in allowed_aspects(algorithm):
        return aspect
    return _ASPECT_FALLBACKS.get(aspect, aspect)


def parse_algorithm(value: str) -> Algorithm:
    """Parse a wire string into an Algorithm ('testphoto' is accepted for testp)."""
    normalized = value.strip().lower()
    if normalized == "testphoto":
        return Algorithm.TESTP
    return Algorithm(normalized)


def parse_aspect(value: str) -> Aspect:
    """Parse a wire string or display label ('portrait 2:3') into an Aspect."""
    normalized = value.strip().lower()
    return Aspect(normalized.split(" ", 1)[0])


__all__ = [
    "Algorithm",
    "Aspect",
    "DEFAULT_ALGORITHM",
    "DEFAULT_ASPECT",
    "allowed_aspects",
    "parse_algorithm",
    "parse_aspect",
    "remap_aspect",
]
