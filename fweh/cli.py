import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .api import process
from .config import apply_overrides, load_config
from .errors import FramerError
from .logging_setup import configure_logging, get_logger


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fweh",
        description="Frame an image with rounded corners, a drop shadow, and a background",
    )
    parser.add_argument("input", type=Path, help="Input image file")
    parser.add_argument(
        "-o", "--output", type=Path, default=Path("output.png"),
        help="Output filename (default: output.png)",
    )
    parser.add_argument(
        "-c", "--config", type=Path, default=None, help="Path to config.yaml (optional)"
    )
    # Everything below defaults to None so unset flags fall back to the config file.
    parser.add_argument(
        "-s", "--scale", type=float, default=None,
        help="Canvas size as a percentage of the image (default: 110)",
    )
    parser.add_argument(
        "-b", "--background", type=str, default=None,
        help="Background type and value, e.g. colr:black, grad:blue-red, "
             "imag:/path/to/image.png (default: colr:black)",
    )
    parser.add_argument(
        "-r", "--ratio", type=str, default=None, help="Target aspect ratio, e.g. 16:9"
    )
    parser.add_argument(
        "--roundness", type=float, default=None,
        help="Corner radius as a percentage of the shorter side, 0-100 (default: 0)",
    )
    parser.add_argument(
        "--offset", type=str, default=None,
        help="Image offset from the centre in pixels, e.g. 0,0",
    )
    parser.add_argument(
        "--shadow-offset", type=str, default=None,
        help="Shadow offset in pixels, e.g. 25,25 (enables the shadow)",
    )
    parser.add_argument(
        "--shadow-color", type=str, default=None, help="Shadow color (default: black)"
    )
    parser.add_argument(
        "--shadow-radius", type=float, default=None, help="Shadow blur radius (default: 25)"
    )
    parser.add_argument(
        "--shadow-opacity", type=float, default=None,
        help="Shadow opacity, 0.0-1.0 (default: 1.0)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log every processing step"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main() -> None:
    """CLI entry point: parse arguments, frame the image, and print the output path."""
    args = _build_parser().parse_args()
    configure_logging(logging.DEBUG if args.verbose else None)
    logger = get_logger()

    try:
        config = load_config(args.config)
        config = apply_overrides(config, {
            "scale": args.scale,
            "roundness": args.roundness,
            "offset": args.offset,
            "background": args.background,
            "ratio": args.ratio,
            "shadow_offset": args.shadow_offset,
            "shadow_color": args.shadow_color,
            "shadow_radius": args.shadow_radius,
            "shadow_opacity": args.shadow_opacity,
        })
        output_path = process(args.input, args.output, config.to_options())
    except FramerError as exc:
        logger.error("Failed to process image: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    print(output_path)


if __name__ == "__main__":
    main()
