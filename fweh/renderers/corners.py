"""
Anti-aliased rounded corners.

Each corner is rasterised with an integer midpoint-circle scan run at 16x
the target radius on both axes.  Summing the sub-steps that fall inside one
destination pixel gives a coverage value between 1 and 256 (16 x 16
sub-pixels), which scales the pixel's existing alpha.  Pixels of the
corner square that lie beyond the arc are cleared outright.

One routine serves all four corners: it works in "corner-local"
coordinates, and a small mapping function per corner reflects those onto
real buffer coordinates.
"""
from __future__ import annotations

import logging
from typing import Callable

import numpy as np

from ..buffer import PixelBuffer
from ..errors import RoundingError

logger = logging.getLogger(__name__)

CornerRadii = tuple[int, int, int, int]  # top_left, top_right, bottom_right, bottom_left
CoordinateMap = Callable[[int, int], tuple[int, int]]

_SUPERSAMPLE = 16


def round_corners(buffer: PixelBuffer, radius_percent: float) -> PixelBuffer:
    """Return a copy of *buffer* with all four corners rounded.

    The radius is *radius_percent* of ``min(width, height)``, floored to whole
    pixels and capped at half that dimension, so any percentage of 50 or more
    yields the inscribed circle (or stadium/ellipse-like shape for
    non-square images).  A zero radius returns an identical copy.
    """
    width, height = buffer.size
    shortest = min(width, height)
    radius = int(shortest * radius_percent / 100)
    radius = max(0, min(radius, shortest // 2))
    logger.debug("Rounding corners with pixel radius: %d", radius)

    result = buffer.copy()
    if radius == 0:
        return result
    apply_corner_radii(result, (radius, radius, radius, radius))
    return result


def apply_corner_radii(buffer: PixelBuffer, radii: CornerRadii) -> None:
    """Round the corners of *buffer* in place, one radius per corner.

    Raises:
        RoundingError: if two radii on the same edge add up to more than the
            length of that edge.
    """
    width, height = buffer.size
    top_left, top_right, bottom_right, bottom_left = radii
    if min(radii) < 0:
        raise RoundingError(f"corner radii must be non-negative, got {radii}")
    if top_left + top_right > width or bottom_left + bottom_right > width:
        raise RoundingError(f"corner radii {radii} exceed image width {width}")
    if top_left + bottom_left > height or top_right + bottom_right > height:
        raise RoundingError(f"corner radii {radii} exceed image height {height}")

    alpha = buffer.alpha
    _round_corner(alpha, top_left, lambda x, y: (x - 1, y - 1))
    _round_corner(alpha, top_right, lambda x, y: (width - x, y - 1))
    _round_corner(alpha, bottom_right, lambda x, y: (width - x, height - y))
    _round_corner(alpha, bottom_left, lambda x, y: (x - 1, height - y))


def _round_corner(alpha: np.ndarray, radius: int, coordinates: CoordinateMap) -> None:
    """Rasterise one corner arc into the *alpha* plane.

    ``coordinates(x, y)`` maps corner-local pixel coordinates (1-based,
    measured from the outer corner) to ``(column, row)`` in *alpha*.  The
    scan walks one octant; every emitted value is also applied to the pixel
    mirrored across the diagonal.
    """
    if radius == 0:
        return
    r0 = radius
    r = _SUPERSAMPLE * radius

    def locate(i: int, j: int) -> tuple[int, int]:
        col, row = coordinates(r0 - i, r0 - j)
        return row, col

    def draw(coverage: int, i: int, j: int) -> None:
        pos = locate(i, j)
        alpha[pos] = (coverage * int(alpha[pos]) + 128) // 256

    def clear(i: int, j: int) -> None:
        alpha[locate(i, j)] = 0

    x = 0
    y = r - 1
    p = 2 - r
    coverage = 0
    skip_draw = True
    done = False

    while not done:
        # Everything past the arc in the current column, and its mirror.
        column = x // 16
        for j in range(y // 16 + 1, r0):
            clear(column, j)
        for i in range(y // 16 + 1, r0):
            clear(i, column)

        # Moving into a new destination column: flush the previous one.
        if not skip_draw:
            draw(coverage, x // 16 - 1, y // 16)
            draw(coverage, y // 16, x // 16 - 1)
            coverage = 0

        for _ in range(_SUPERSAMPLE):
            skip_draw = False
            if x >= y:
                done = True
                break

            coverage += y % 16 + 1
            if p < 0:
                x += 1
                p += 2 * x + 2
            else:
                # Moving into a new destination row.
                if y % 16 == 0:
                    draw(coverage, x // 16, y // 16)
                    draw(coverage, y // 16, x // 16)
                    skip_draw = True
                    coverage = (x + 1) % 16 * 16
                x += 1
                p -= 2 * (y - x) + 2
                y -= 1

    # The pixel straddling the diagonal is counted from both octants.
    if x // 16 == y // 16:
        if x == y:
            coverage += y % 16 + 1
        s = y % 16 + 1
        draw(2 * coverage - s * s, x // 16, y // 16)

    # Solid square beyond the arc.
    for i in range(y // 16 + 1, r0):
        for j in range(y // 16 + 1, r0):
            clear(i, j)
