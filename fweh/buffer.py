"""Owned RGBA pixel buffer plus image load/save helpers."""
from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Sequence

import numpy as np
from PIL import Image, UnidentifiedImageError

from .errors import ImageLoadError, ImageSaveError

logger = logging.getLogger(__name__)

# Output formats that cannot carry an alpha channel.
_OPAQUE_FORMATS = frozenset({"JPEG", "BMP", "PPM"})


class PixelBuffer:
    """A row-major grid of RGBA8 pixels with unpremultiplied alpha.

    The pixels live in a ``(height, width, 4)`` ``uint8`` array that this
    object owns; the accessors take ``(x, y)`` and refuse out-of-range
    coordinates instead of wrapping around like NumPy indexing would.
    """

    __slots__ = ("pixels",)

    def __init__(self, pixels: np.ndarray) -> None:
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ValueError(f"expected a (height, width, 4) array, got shape {pixels.shape}")
        self.pixels = np.ascontiguousarray(pixels, dtype=np.uint8)

    @classmethod
    def new(cls, width: int, height: int,
            fill: Sequence[int] = (0, 0, 0, 0)) -> "PixelBuffer":
        pixels = np.empty((height, width, 4), dtype=np.uint8)
        pixels[:, :] = fill
        return cls(pixels)

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelBuffer":
        return cls(np.array(image.convert("RGBA"), dtype=np.uint8))

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.pixels)

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(self.pixels.copy())

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def alpha(self) -> np.ndarray:
        """Writable ``(height, width)`` view of the alpha plane."""
        return self.pixels[:, :, 3]

    def _check(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"pixel ({x}, {y}) out of bounds for {self.width}x{self.height} buffer"
            )

    def get_pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        self._check(x, y)
        r, g, b, a = self.pixels[y, x]
        return int(r), int(g), int(b), int(a)

    def put_pixel(self, x: int, y: int, rgba: Sequence[int]) -> None:
        self._check(x, y)
        self.pixels[y, x] = rgba

    def get_alpha(self, x: int, y: int) -> int:
        self._check(x, y)
        return int(self.pixels[y, x, 3])

    def set_alpha(self, x: int, y: int, value: int) -> None:
        self._check(x, y)
        self.pixels[y, x, 3] = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self.pixels.shape == other.pixels.shape and np.array_equal(self.pixels, other.pixels)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PixelBuffer({self.width}x{self.height})"


def load_image(path: str | Path) -> PixelBuffer:
    """Decode *path* into an RGBA :class:`PixelBuffer`."""
    path = Path(path)
    try:
        with Image.open(path) as img:
            buffer = PixelBuffer.from_image(img)
    except (OSError, UnidentifiedImageError, Image.DecompressionBombError, ValueError) as exc:
        raise ImageLoadError(f"{path}: {exc}") from exc
    logger.debug("Loaded input image: %dx%d", buffer.width, buffer.height)
    return buffer


def save_image(buffer: PixelBuffer, path: str | Path) -> Path:
    """Encode *buffer* to *path*, choosing the format from the file suffix.

    The image is written to a temporary file next to *path* and moved into
    place afterwards, so a failed encode never leaves a partial output file.
    """
    path = Path(path)
    fmt = Image.registered_extensions().get(path.suffix.lower())
    if fmt is None:
        raise ImageSaveError(f"unsupported output format {path.suffix!r} for {path}")

    image = buffer.to_image()
    if fmt in _OPAQUE_FORMATS:
        image = image.convert("RGB")

    tmp_path: Path | None = None
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.stem}.", suffix=path.suffix,
                                        dir=path.parent)
        os.close(fd)
        tmp_path = Path(tmp_name)
        image.save(tmp_path, format=fmt)
        os.chmod(tmp_path, 0o666 & ~_current_umask())
        os.replace(tmp_path, path)
    except (OSError, ValueError, KeyError) as exc:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        raise ImageSaveError(f"{path}: {exc}") from exc
    logger.debug("Saved %dx%d image as %s to %s", buffer.width, buffer.height, fmt, path)
    return path


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask
