"""Colour and gradient specification parsing.

Accepted colour forms are ``#RGB``, ``#RRGGBB``, ``#RRGGBBAA`` and a small
fixed set of names.  Gradients are colour stops joined with ``-``
(e.g. ``blue-red`` or ``#000-#fff-black``).
"""
from __future__ import annotations

import re

from .errors import ColorError

RGBA = tuple[int, int, int, int]

_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")

GRADIENT_STOP_SEPARATOR = "-"

NAMED_COLORS: dict[str, RGBA] = {
    "black": (0, 0, 0, 255),
    "white": (255, 255, 255, 255),
    "red": (255, 0, 0, 255),
    "green": (0, 255, 0, 255),
    "blue": (0, 0, 255, 255),
    "yellow": (255, 255, 0, 255),
    "cyan": (0, 255, 255, 255),
    "magenta": (255, 0, 255, 255),
    "transparent": (0, 0, 0, 0),
}


def resolve_color(spec: str) -> RGBA:
    """Resolve a colour specification to an ``(r, g, b, a)`` tuple.

    Raises:
        ColorError: if *spec* is neither a supported hex form nor a known name.
    """
    text = spec.strip()
    if text.startswith("#"):
        return _parse_hex(text)

    try:
        return NAMED_COLORS[text.lower()]
    except KeyError:
        raise ColorError(f"Unknown color name: {spec!r}") from None


def resolve_gradient(spec: str) -> list[RGBA]:
    """Split a gradient specification into its resolved colour stops."""
    return [resolve_color(part) for part in spec.split(GRADIENT_STOP_SEPARATOR)]


def _parse_hex(text: str) -> RGBA:
    digits = text[1:]
    if not _HEX_RE.match(digits):
        raise ColorError(f"Invalid hex color format: {text!r}")

    if len(digits) == 3:
        r, g, b = (int(d, 16) * 17 for d in digits)
        return (r, g, b, 255)
    if len(digits) == 6:
        r, g, b = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
        return (r, g, b, 255)
    if len(digits) == 8:
        r, g, b, a = (int(digits[i : i + 2], 16) for i in (0, 2, 4, 6))
        return (r, g, b, a)
    raise ColorError(f"Invalid hex color format: {text!r}")
