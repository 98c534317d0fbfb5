from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .api import process
from .config import Config, ShadowConfig, load_config
from .errors import FramerError
from .options import (
    AspectRatio,
    BackgroundKind,
    BackgroundSpec,
    Point,
    ProcessingOptions,
    ShadowSpec,
)

try:
    __version__ = version("fweh")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "__version__",
    "AspectRatio",
    "BackgroundKind",
    "BackgroundSpec",
    "Config",
    "FramerError",
    "Point",
    "ProcessingOptions",
    "ShadowConfig",
    "ShadowSpec",
    "load_config",
    "process",
]
