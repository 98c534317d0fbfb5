"""Straight-alpha source-over compositing of one buffer onto another."""
from __future__ import annotations

import numpy as np
from PIL import Image

from ..buffer import PixelBuffer


def overlay(dest: PixelBuffer, src: PixelBuffer, x: int, y: int) -> None:
    """Blend *src* onto *dest* in place with its top-left corner at ``(x, y)``.

    Any part of *src* falling outside *dest* (including negative
    coordinates) is clipped.  Colours are unpremultiplied; the blend is
    Porter-Duff source-over, so translucent source pixels let the
    destination show through and the result alpha is
    ``a_src + a_dst * (1 - a_src)``.
    """
    x0, y0 = max(x, 0), max(y, 0)
    x1, y1 = min(x + src.width, dest.width), min(y + src.height, dest.height)
    if x1 <= x0 or y1 <= y0:
        return

    under = np.ascontiguousarray(dest.pixels[y0:y1, x0:x1])
    over = np.ascontiguousarray(src.pixels[y0 - y:y1 - y, x0 - x:x1 - x])
    blended = Image.alpha_composite(Image.fromarray(under), Image.fromarray(over))
    dest.pixels[y0:y1, x0:x1] = np.asarray(blended)
