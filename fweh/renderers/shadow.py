"""
Drop-shadow generation.

Strategy
--------
1. Copy the source's alpha channel into a larger canvas with a margin of
   ``radius`` pixels on every side, so the blur has room to spread.
2. Soften that silhouette with ``ceil(radius / 2)`` passes of a 3x3 box blur.
   Repeated box blurs converge towards a Gaussian; the pass count is part
   of the look and must stay as is.
3. Tint it with the shadow colour and scale its alpha by the opacity.
4. Grow the canvas by the shadow offset and draw the untouched source on
   top of the displaced shadow.
"""
from __future__ import annotations

import logging
import math
import os
from concurrent.futures import Future, ThreadPoolExecutor
from typing import NamedTuple, Optional

import numpy as np
from PIL import Image, ImageFilter

from ..buffer import PixelBuffer
from ..colors import resolve_color
from ..errors import ColorError, ShadowError
from ..options import ShadowSpec
from .compositor import overlay

logger = logging.getLogger(__name__)

# Below this many pixels, thread start-up costs more than it saves.
_PARALLEL_MIN_PIXELS = 65_536


class ShadowLayer(NamedTuple):
    layer: PixelBuffer
    width: int
    height: int
    image_x: int  # where the source's top-left sits inside the layer
    image_y: int


def make_shadow(source: PixelBuffer, spec: ShadowSpec) -> ShadowLayer:
    """Return *source* drawn over its drop shadow on a canvas that fits both.

    The canvas measures ``source + 2 * radius + |offset|`` on each axis, so
    the shadow is never clipped whichever way the offset points.

    The offset is the shadow's displacement from the source, with positive
    ``x`` to the right and positive ``y`` downwards.  The shadow is drawn
    at ``(max(0, offset.x), max(0, offset.y))`` and the source at
    ``margin + max(0, -offset)``, so only the side the shadow falls on grows.

    Raises:
        ShadowError: if the shadow colour cannot be resolved.  This happens
            before any buffer is allocated.
    """
    try:
        red, green, blue, _ = resolve_color(spec.color)
    except ColorError as exc:
        raise ShadowError(str(exc)) from exc

    offset_x, offset_y = spec.offset.to_int()
    logger.debug(
        "Adding drop shadow with radius %s and offset (%d, %d)",
        spec.radius, offset_x, offset_y,
    )

    margin = int(spec.radius)
    shadow_width = source.width + 2 * margin
    shadow_height = source.height + 2 * margin

    mask = build_alpha_mask(source, margin, margin, shadow_width, shadow_height)
    blurred = blur_alpha(mask.alpha, spec.radius)

    shadow = PixelBuffer.new(shadow_width, shadow_height, (red, green, blue, 0))
    shadow.alpha[:] = np.minimum(255.0, blurred * spec.opacity).astype(np.uint8)

    final_width = shadow_width + abs(offset_x)
    final_height = shadow_height + abs(offset_y)
    layer = PixelBuffer.new(final_width, final_height)

    # The shadow sits on the side the offset points to and the source on
    # the other, so the two are exactly ``offset`` apart.
    shadow_x, shadow_y = max(0, offset_x), max(0, offset_y)
    layer.pixels[shadow_y:shadow_y + shadow_height, shadow_x:shadow_x + shadow_width] = shadow.pixels

    image_x = margin + max(0, -offset_x)
    image_y = margin + max(0, -offset_y)
    overlay(layer, source, image_x, image_y)

    return ShadowLayer(layer, final_width, final_height, image_x, image_y)


def blur_alpha(alpha: np.ndarray, radius: float) -> np.ndarray:
    """Box-blur an alpha plane ``ceil(radius / 2)`` times; returns float64."""
    passes = math.ceil(radius / 2)
    image = Image.fromarray(np.ascontiguousarray(alpha, dtype=np.uint8))
    for _ in range(passes):
        image = image.filter(ImageFilter.BoxBlur(1))
    logger.debug("Blurred shadow mask with %d box-blur passes", passes)
    return np.asarray(image, dtype=np.float64)


def build_alpha_mask(source: PixelBuffer, offset_x: int, offset_y: int,
                     width: int, height: int,
                     max_workers: Optional[int] = None) -> PixelBuffer:
    """Copy *source*'s alpha into a new ``width`` x ``height`` silhouette.

    The source lands at ``(offset_x, offset_y)``; every copied pixel is white
    with the source's alpha, everything else stays fully transparent.  Rows
    are split into disjoint bands that worker threads fill independently.
    """
    mask = PixelBuffer.new(width, height)
    rows = min(source.height, height - offset_y)
    cols = min(source.width, width - offset_x)
    if rows <= 0 or cols <= 0:
        return mask

    src_alpha = source.alpha
    out = mask.pixels

    def _fill_rows(lo: int, hi: int) -> None:
        band = out[offset_y + lo:offset_y + hi, offset_x:offset_x + cols]
        band[:, :, :3] = 255
        band[:, :, 3] = src_alpha[lo:hi, :cols]

    workers = max_workers or min(os.cpu_count() or 1, rows)
    if rows * cols < _PARALLEL_MIN_PIXELS or workers <= 1:
        _fill_rows(0, rows)
        return mask

    chunk = (rows + workers - 1) // workers
    ranges = [(lo, min(lo + chunk, rows)) for lo in range(0, rows, chunk)]
    with ThreadPoolExecutor(max_workers=len(ranges)) as pool:
        futures: list[Future[None]] = [pool.submit(_fill_rows, lo, hi) for lo, hi in ranges]
        for fut in futures:
            fut.result()
    return mask
