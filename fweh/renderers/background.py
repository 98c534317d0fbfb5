"""Background canvases: flat colour, vertical gradient, or a fitted image."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from ..buffer import PixelBuffer
from ..colors import resolve_color, resolve_gradient
from ..errors import BackgroundError, ColorError, InvalidParameterError
from ..options import BackgroundKind, BackgroundSpec

logger = logging.getLogger(__name__)


def make_background(width: int, height: int, spec: BackgroundSpec) -> PixelBuffer:
    """Produce a *width* x *height* background described by *spec*.

    Raises:
        BackgroundError: if the colour, gradient or image cannot be used.
    """
    if width <= 0 or height <= 0:
        raise InvalidParameterError(
            f"background dimensions must be positive, got {width}x{height}"
        )
    logger.debug("Creating %s background %r with dimensions %dx%d",
                 spec.kind.name.lower(), spec.value, width, height)
    try:
        return _GENERATORS[spec.kind](width, height, spec.value)
    except ColorError as exc:
        raise BackgroundError(str(exc)) from exc


def _color_background(width: int, height: int, color: str) -> PixelBuffer:
    return PixelBuffer.new(width, height, resolve_color(color))


def _gradient_background(width: int, height: int, gradient: str) -> PixelBuffer:
    """Top-to-bottom linear gradient through every stop; rows are uniform.

    Row 0 is exactly the first stop and the last row exactly the last one.
    Channels, alpha included, are interpolated independently and rounded
    half up.
    """
    stops = np.array(resolve_gradient(gradient), dtype=np.float64)
    if len(stops) < 2:
        raise BackgroundError(f"Gradient needs at least two colors, got {gradient!r}")

    segments = len(stops) - 1
    # Divides by height - 1 rather than height so the last row lands exactly
    # on the final stop.
    progress = np.arange(height, dtype=np.float64) / max(height - 1, 1)
    position = progress * segments
    index = np.minimum(position.astype(np.intp), segments)
    next_index = np.minimum(index + 1, segments)
    t = (position - index)[:, None]

    rows = stops[index] * (1.0 - t) + stops[next_index] * t
    rows = np.floor(rows + 0.5).clip(0, 255).astype(np.uint8)

    pixels = np.broadcast_to(rows[:, None, :], (height, width, 4))
    return PixelBuffer(np.array(pixels))


def _image_background(width: int, height: int, path: str) -> PixelBuffer:
    """Scale and centre-crop the image at *path* to fill the canvas exactly."""
    image_path = Path(path)
    if not image_path.is_file():
        raise BackgroundError(f"background image not found: {image_path}")
    try:
        with Image.open(image_path) as img:
            fitted = ImageOps.fit(img.convert("RGBA"), (width, height),
                                  method=Image.Resampling.LANCZOS)
    except (OSError, UnidentifiedImageError, Image.DecompressionBombError, ValueError) as exc:
        raise BackgroundError(f"cannot read background image {image_path}: {exc}") from exc
    return PixelBuffer.from_image(fitted)


_GENERATORS: dict[BackgroundKind, Callable[[int, int, str], PixelBuffer]] = {
    BackgroundKind.COLOR: _color_background,
    BackgroundKind.GRADIENT: _gradient_background,
    BackgroundKind.IMAGE: _image_background,
}
