"""Canvas sizing and placement math."""
from __future__ import annotations

import math
from typing import NamedTuple

from .errors import InvalidParameterError
from .options import AspectRatio, Point


class CanvasLayout(NamedTuple):
    new_width: int
    new_height: int
    pad_left: int
    pad_right: int
    pad_top: int
    pad_bottom: int


def compute_canvas(width: int, height: int, target_ratio: float,
                   scale_percent: float) -> CanvasLayout:
    """Size a canvas of *target_ratio* around a *width* x *height* image.

    The scaled source dimension on the axis that already matches the target
    shape is kept, and the other axis is derived from *target_ratio*.  The
    leftover space on each axis is split in two, with the odd pixel going to
    the trailing edge.
    """
    if width <= 0 or height <= 0:
        raise InvalidParameterError(f"image dimensions must be positive, got {width}x{height}")
    if not math.isfinite(scale_percent) or scale_percent <= 0:
        raise InvalidParameterError(f"scale must be a positive number, got {scale_percent}")
    if not math.isfinite(target_ratio) or target_ratio <= 0:
        raise InvalidParameterError(f"aspect ratio must be a positive number, got {target_ratio}")

    scale_factor = scale_percent / 100.0
    original_ratio = width / height
    scaled_width = int(width * scale_factor)
    scaled_height = int(height * scale_factor)

    if target_ratio > original_ratio:
        new_height = scaled_height
        new_width = int(new_height * target_ratio)
    else:
        new_width = scaled_width
        new_height = int(new_width / target_ratio)

    pad_width = max(0, new_width - scaled_width)
    pad_height = max(0, new_height - scaled_height)
    pad_left = pad_width // 2
    pad_top = pad_height // 2

    return CanvasLayout(
        new_width=new_width,
        new_height=new_height,
        pad_left=pad_left,
        pad_right=pad_width - pad_left,
        pad_top=pad_top,
        pad_bottom=pad_height - pad_top,
    )


def reduced_aspect_ratio(width: int, height: int) -> AspectRatio:
    """Return the image's own aspect ratio in lowest terms (1920x1080 -> 16:9)."""
    divisor = math.gcd(width, height)
    return AspectRatio(width // divisor, height // divisor)


def center_position(canvas_width: int, canvas_height: int, item_width: int,
                    item_height: int, offset: Point = Point()) -> tuple[int, int]:
    """Top-left corner that centres an item on the canvas, shifted by *offset*."""
    x = (canvas_width - item_width) / 2 + offset.x
    y = (canvas_height - item_height) / 2 + offset.y
    return int(x), int(y)
