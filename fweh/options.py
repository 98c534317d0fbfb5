"""Value types describing one framing run, and the parsers that build them."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .errors import InvalidParameterError


@dataclass(frozen=True)
class Point:
    """A pair of floating-point coordinates used for offsets."""

    x: float = 0.0
    y: float = 0.0

    def __post_init__(self) -> None:
        if not (math.isfinite(self.x) and math.isfinite(self.y)):
            raise InvalidParameterError(f"point coordinates must be finite, got ({self.x}, {self.y})")

    def to_int(self) -> tuple[int, int]:
        """Truncate both coordinates toward zero."""
        return int(self.x), int(self.y)


@dataclass(frozen=True)
class AspectRatio:
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise InvalidParameterError(
                f"aspect ratio must be positive, got {self.width}:{self.height}"
            )

    def as_float(self) -> float:
        return self.width / self.height

    def __str__(self) -> str:
        return f"{self.width}:{self.height}"


class BackgroundKind(Enum):
    COLOR = "colr"
    GRADIENT = "grad"
    IMAGE = "imag"


@dataclass(frozen=True)
class BackgroundSpec:
    """What to paint behind the image; resolved to pixels once the canvas size is known."""

    kind: BackgroundKind = BackgroundKind.COLOR
    value: str = "black"

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.value}"


@dataclass(frozen=True)
class ShadowSpec:
    """Drop-shadow settings.

    ``radius`` is the blur radius in pixels and doubles as the margin added
    around the source so the blur is not clipped.  ``opacity`` is clamped
    to [0, 1].
    """

    offset: Point = field(default_factory=lambda: Point(25.0, 25.0))
    color: str = "black"
    radius: float = 25.0
    opacity: float = 1.0

    def __post_init__(self) -> None:
        if not math.isfinite(self.radius) or self.radius < 0:
            raise InvalidParameterError(
                f"shadow radius must be a non-negative number, got {self.radius}"
            )
        if not math.isfinite(self.opacity):
            raise InvalidParameterError(f"shadow opacity must be finite, got {self.opacity}")
        object.__setattr__(self, "opacity", min(1.0, max(0.0, float(self.opacity))))


@dataclass(frozen=True)
class ProcessingOptions:
    """Everything a single :func:`fweh.process` call needs besides the paths."""

    scale: float = 110.0  # canvas size as a percentage of the source
    roundness: float = 0.0  # corner radius as a percentage of min(width, height)
    offset: Point = field(default_factory=Point)  # relative to the centred position
    shadow: Optional[ShadowSpec] = None
    background: BackgroundSpec = field(default_factory=BackgroundSpec)
    ratio: Optional[AspectRatio] = None  # None keeps the source's own ratio

    def __post_init__(self) -> None:
        if not math.isfinite(self.scale) or self.scale <= 0:
            raise InvalidParameterError(f"scale must be a positive number, got {self.scale}")
        if not math.isfinite(self.roundness):
            raise InvalidParameterError(f"roundness must be finite, got {self.roundness}")
        object.__setattr__(self, "roundness", min(100.0, max(0.0, float(self.roundness))))


# ---------------------------------------------------------------------------
# Parsers for the textual forms used on the command line and in config files
# ---------------------------------------------------------------------------

_BACKGROUND_KINDS = {kind.value: kind for kind in BackgroundKind}


def parse_point(spec: str) -> Point:
    """Parse ``"x,y"`` into a :class:`Point`."""
    parts = spec.split(",")
    if len(parts) != 2:
        raise InvalidParameterError(f"Invalid point format: {spec!r} (expected 'x,y')")
    try:
        x, y = (float(part.strip()) for part in parts)
    except ValueError:
        raise InvalidParameterError(f"Invalid point format: {spec!r}") from None
    if not (math.isfinite(x) and math.isfinite(y)):
        raise InvalidParameterError(f"Point coordinates must be finite: {spec!r}")
    return Point(x, y)


def parse_ratio(spec: str) -> AspectRatio:
    """Parse ``"W:H"`` (e.g. ``16:9``) into an :class:`AspectRatio`."""
    parts = spec.split(":")
    if len(parts) != 2:
        raise InvalidParameterError(f"Invalid aspect ratio: {spec!r} (expected 'W:H')")
    try:
        width, height = (int(part.strip()) for part in parts)
    except ValueError:
        raise InvalidParameterError(f"Invalid aspect ratio: {spec!r}") from None
    return AspectRatio(width, height)


def parse_background(spec: str) -> BackgroundSpec:
    """Parse ``"kind:value"`` where kind is ``colr``, ``grad`` or ``imag``.

    Only the first ``:`` separates kind from value, so image paths may
    contain colons.
    """
    kind_name, sep, value = spec.partition(":")
    kind = _BACKGROUND_KINDS.get(kind_name.strip().lower())
    if not sep or kind is None:
        allowed = ", ".join(_BACKGROUND_KINDS)
        raise InvalidParameterError(
            f"Invalid background: {spec!r} (expected one of {allowed} followed by ':value')"
        )
    if not value:
        raise InvalidParameterError(f"Invalid background: {spec!r} has an empty value")
    return BackgroundSpec(kind, value)
