"""
Shared pytest fixtures and configuration for fweh tests.

This module provides:
- Image fixtures (programmatically generated with Pillow)
- Buffer fixtures for the pixel stages
- Configuration fixtures
- Logging isolation between tests
"""
from __future__ import annotations

import logging

import pytest
from PIL import Image


# ==============================================================================
# Global pytest configuration
# ==============================================================================

@pytest.fixture(autouse=True)
def reset_fweh_logger():
    """Drop handlers the CLI installs so every test starts from a clean logger."""
    yield
    logger = logging.getLogger("fweh")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


# ==============================================================================
# Buffer fixtures
# ==============================================================================

@pytest.fixture
def red_square():
    """Return an opaque 100x100 red PixelBuffer."""
    from fweh.buffer import PixelBuffer
    return PixelBuffer.new(100, 100, (255, 0, 0, 255))


@pytest.fixture
def small_opaque():
    """Return an opaque 40x30 PixelBuffer with a horizontal ramp in red."""
    from fweh.buffer import PixelBuffer
    buf = PixelBuffer.new(40, 30, (0, 128, 255, 255))
    for x in range(40):
        buf.pixels[:, x, 0] = x * 6
    return buf


# ==============================================================================
# Image file fixtures
# ==============================================================================

@pytest.fixture
def red_square_png(tmp_path):
    """Write an opaque 100x100 red PNG and return its path."""
    path = tmp_path / "red.png"
    Image.new("RGBA", (100, 100), (255, 0, 0, 255)).save(path)
    return path


@pytest.fixture
def wide_png(tmp_path):
    """Write an opaque 160x90 PNG with a vertical split (blue | green)."""
    path = tmp_path / "wide.png"
    img = Image.new("RGBA", (160, 90), (0, 0, 255, 255))
    img.paste((0, 255, 0, 255), (80, 0, 160, 90))
    img.save(path)
    return path


@pytest.fixture
def background_png(tmp_path):
    """Write a 64x48 checkered PNG usable as an image background."""
    path = tmp_path / "bg.png"
    img = Image.new("RGB", (64, 48), (255, 255, 255))
    for y in range(48):
        for x in range(64):
            if (x // 8 + y // 8) % 2:
                img.putpixel((x, y), (0, 0, 0))
    img.save(path)
    return path


# ==============================================================================
# Configuration fixtures
# ==============================================================================

@pytest.fixture
def default_options():
    """Return default processing options."""
    from fweh.options import ProcessingOptions
    return ProcessingOptions()


@pytest.fixture
def identity_options():
    """Return options that leave the input untouched: no padding, no effects."""
    from fweh.options import BackgroundKind, BackgroundSpec, ProcessingOptions
    return ProcessingOptions(
        scale=100.0,
        roundness=0.0,
        background=BackgroundSpec(BackgroundKind.COLOR, "black"),
    )


@pytest.fixture
def temp_config(tmp_path):
    """Write a small config to a temporary file and return its path."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "scale: 100\n"
        "roundness: 10\n"
        "background: \"colr:white\"\n"
        "shadow:\n"
        "  enabled: true\n"
        "  offset: \"4,6\"\n"
        "  radius: 5\n"
    )
    return config_path
