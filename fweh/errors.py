"""Exception hierarchy for the framing pipeline.

Every error raised by fweh derives from :class:`FramerError`, so callers can
catch a failed run with a single ``except`` clause.  Errors that map onto a
built-in category also derive from that built-in (``ValueError``,
``FileNotFoundError``).
"""
from __future__ import annotations

from pathlib import Path


class FramerError(Exception):
    """Base class for every failure of a framing run."""


class ImageLoadError(FramerError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to load image: {reason}")


class ImageSaveError(FramerError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to save image: {reason}")


class ColorError(FramerError, ValueError):
    """A colour or gradient specification could not be resolved."""


class BackgroundError(FramerError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to create background: {reason}")


class ShadowError(FramerError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to add shadow: {reason}")


class RoundingError(FramerError, ValueError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to round corners: {reason}")


class InvalidParameterError(FramerError, ValueError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid parameter: {reason}")


class InputFileNotFoundError(FramerError, FileNotFoundError):
    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(f"Input file not found: {self.path}")


class OutputDirectoryNotFoundError(FramerError, FileNotFoundError):
    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(f"Output directory not found: {self.path}")
