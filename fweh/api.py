"""Programmatic API: frame one image file into another."""
from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .buffer import load_image, save_image
from .config import Config, load_config, load_config_from_dict
from .errors import InputFileNotFoundError, InvalidParameterError, OutputDirectoryNotFoundError
from .layout import center_position, compute_canvas, reduced_aspect_ratio
from .options import ProcessingOptions
from .renderers import make_background, make_shadow, overlay, round_corners

logger = logging.getLogger(__name__)

_CONTROL_CHAR_RE = re.compile(r"[\x00-\x1f\x7f]")


def process(
    input_path: str | Path,
    output_path: str | Path,
    options: ProcessingOptions | Config | Mapping[str, Any] | str | Path | None = None,
) -> Path:
    """Frame the image at *input_path* and write the result to *output_path*.

    Args:
        input_path: Image to frame; any format Pillow can read.
        output_path: Destination file; the format follows its suffix.
        options: Processing options as one of:
            - ``None`` (use defaults)
            - ``ProcessingOptions`` instance
            - ``Config`` instance
            - dict-like mapping using the same schema as ``config.yaml``
            - path to a YAML config file

    Returns:
        The output path.

    Raises:
        FramerError: on any failure.  Nothing is written to *output_path*
            unless every stage succeeded.
    """
    resolved = _resolve_options(options)
    source_path = _check_input_path(input_path)
    target_path = _check_output_path(output_path)

    logger.info("Processing image: %s", source_path)
    image = load_image(source_path)
    width, height = image.size

    ratio = resolved.ratio or reduced_aspect_ratio(width, height)
    logger.debug("Target aspect ratio: %s", ratio)

    if resolved.roundness > 0:
        logger.debug("Rounding corners with radius %s%%", resolved.roundness)
        image = round_corners(image, resolved.roundness)

    layer = image
    if resolved.shadow is not None:
        layer = make_shadow(image, resolved.shadow).layer

    canvas = compute_canvas(width, height, ratio.as_float(), resolved.scale)
    logger.debug("Creating background of size %dx%d", canvas.new_width, canvas.new_height)
    background = make_background(canvas.new_width, canvas.new_height, resolved.background)

    x, y = center_position(canvas.new_width, canvas.new_height, width, height, resolved.offset)
    logger.debug("Placing layer at position (%d, %d)", x, y)
    overlay(background, layer, x, y)

    save_image(background, target_path)
    logger.info("Successfully processed image: %s", target_path)
    return target_path


def _resolve_options(
    options: ProcessingOptions | Config | Mapping[str, Any] | str | Path | None,
) -> ProcessingOptions:
    if options is None:
        return ProcessingOptions()
    if isinstance(options, ProcessingOptions):
        return options
    if isinstance(options, Config):
        return options.to_options()
    if isinstance(options, Mapping):
        return load_config_from_dict(options).to_options()
    if isinstance(options, (str, Path)):
        config_path = Path(options)
        if not config_path.is_file():
            raise InvalidParameterError(f"config file not found: {config_path}")
        return load_config(config_path).to_options()
    raise TypeError(
        "options must be None, ProcessingOptions, Config, a dict-like mapping, or a config path."
    )


def _check_input_path(path_like: str | Path) -> Path:
    if _CONTROL_CHAR_RE.search(str(path_like)):
        raise InvalidParameterError("input path contains invalid control characters")
    path = Path(path_like)
    if not path.is_file():
        raise InputFileNotFoundError(path)
    return path


def _check_output_path(path_like: str | Path) -> Path:
    if _CONTROL_CHAR_RE.search(str(path_like)):
        raise InvalidParameterError("output path contains invalid control characters")
    path = Path(path_like)
    parent = path.parent
    if not parent.is_dir():
        raise OutputDirectoryNotFoundError(parent)
    return path
