from __future__ import annotations

import argparse
import logging
from pathlib import Path

from scratchapixel.logging_config import setup_logging
from scratchapixel.patterns.checkerboard import CheckerboardSpec, render_checkerboard
from scratchapixel.ppm import RGB

logger = logging.getLogger(__name__)


def _hex_color(text: str) -> RGB:
    try:
        return RGB.from_hex(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="scratchapixel")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    cb = sub.add_parser("checkerboard", help="Render a two-color checkerboard into a binary PPM (P6) file.")
    cb.add_argument("--out", type=Path, required=True)
    cb.add_argument("--width", type=int, default=64)
    cb.add_argument("--height", type=int, default=64)
    cb.add_argument("--cell", type=int, default=8, help="Checker cell size in pixels.")
    cb.add_argument("--even", type=_hex_color, default=RGB(0, 0, 0), help="Color of even cells (#rrggbb).")
    cb.add_argument("--odd", type=_hex_color, default=RGB(255, 255, 255), help="Color of odd cells (#rrggbb).")

    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    if args.cmd == "checkerboard":
        try:
            spec = CheckerboardSpec(width=args.width, height=args.height, cell_px=args.cell, even=args.even, odd=args.odd)
        except ValueError as e:
            parser.error(str(e))
        image = render_checkerboard(spec)
        try:
            image.write_file(args.out)
        except OSError as e:
            logger.error("could not write %s: %s", args.out, e)
            return 1
        logger.info("wrote %s (%dx%d)", args.out, spec.width, spec.height)
        return 0

    raise AssertionError(f"Unhandled cmd: {args.cmd}")
