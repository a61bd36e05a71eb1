#!/usr/bin/env python3
"""CLI entry point for the hexpic image → ASCII converter.

Usage examples
--------------

    # Convert a local file at the default 80x40 grid
    python -m tools.img2ascii photo.png

    # Fetch a remote image, 120 columns wide, brighter and inverted
    python -m tools.img2ascii --url https://example.com/cat.jpg -W 120 --brightness 0.2 --invert

    # Exact grid size, block charset, written to a file
    python -m tools.img2ascii logo.png -W 60 -H 20 --no-preserve-aspect --charset-name blocks -o logo.txt
"""

from __future__ import annotations

import argparse
import logging
import sys
import textwrap
from pathlib import Path

from dotenv import load_dotenv

from hexpic import HexPic
from hexpic.ascii.charsets import CHARSETS
from hexpic.ascii.errors import HexPicError
from hexpic.config.settings import get_settings
from hexpic.utils.logging_config import setup_logging

logger = logging.getLogger("hexpic.cli")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="img2ascii",
        description="Convert a raster image into monospace ASCII art.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
            Each output character stands for one pixel of the image scaled
            to the character grid. With aspect preservation (the default)
            one axis shrinks so the grid keeps the image's proportions.
        """),
    )

    input_grp = p.add_argument_group("input")
    input_grp.add_argument("path", nargs="?", help="Path to the image file.")
    input_grp.add_argument("--url", help="Fetch the image from an http(s) or data: URL instead.")

    grid_grp = p.add_argument_group("grid")
    grid_grp.add_argument("-W", "--width", type=int, help="Grid width in characters (default: 80).")
    grid_grp.add_argument("-H", "--height", type=int, help="Grid height in characters (default: 40).")
    grid_grp.add_argument(
        "--no-preserve-aspect",
        dest="preserve_aspect_ratio",
        action="store_false",
        default=None,
        help="Use the requested width and height exactly.",
    )

    tone_grp = p.add_argument_group("tone")
    charset_src = tone_grp.add_mutually_exclusive_group()
    charset_src.add_argument("--charset", help="Glyph ramp from darkest to lightest.")
    charset_src.add_argument(
        "--charset-name",
        choices=sorted(CHARSETS),
        help="Use a named glyph ramp.",
    )
    tone_grp.add_argument("--invert", action="store_true", default=None, help="Invert tones.")
    tone_grp.add_argument("--contrast", type=float, help="Contrast multiplier (default: 1.0).")
    tone_grp.add_argument("--brightness", type=float, help="Brightness in [-1, 1] (default: 0).")
    tone_grp.add_argument(
        "--background",
        dest="background_color",
        help="Color transparent pixels are flattened against, e.g. '#ffffff'.",
    )

    out_grp = p.add_argument_group("output")
    out_grp.add_argument("-o", "--output", help="Write the ASCII art to this file instead of stdout.")
    out_grp.add_argument("--workers", type=int, help="Threads used to score rows.")
    out_grp.add_argument("--stats", action="store_true", help="Print the effective grid size to stderr.")
    out_grp.add_argument("--debug", action="store_true", help="Enable debug logging.")

    return p


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    parser = _build_parser()
    args = parser.parse_args(argv)

    if (args.path is None) == (args.url is None):
        parser.error("Provide exactly one of PATH or --url.")

    log_dir = get_settings().log_dir
    setup_logging(
        level=logging.WARNING,
        debug=args.debug,
        server_name="img2ascii" if log_dir else None,
        log_dir=log_dir,
    )

    overrides = {
        "width": args.width,
        "height": args.height,
        "charset": CHARSETS[args.charset_name] if args.charset_name else args.charset,
        "invert": args.invert,
        "contrast": args.contrast,
        "brightness": args.brightness,
        "preserve_aspect_ratio": args.preserve_aspect_ratio,
        "background_color": args.background_color,
    }

    try:
        converter = HexPic(workers=args.workers, **overrides)
        if args.url:
            result = converter.from_url(args.url)
        else:
            result = converter.from_file(args.path)
    except HexPicError as e:
        print(f"img2ascii: error: {e}", file=sys.stderr)
        return 1

    if args.output:
        Path(args.output).write_text(result.ascii, encoding="utf-8")
        logger.info("Wrote %dx%d ASCII art to %s", result.width, result.height, args.output)
    else:
        sys.stdout.write(result.ascii)

    if args.stats:
        print(f"Grid: {result.width}x{result.height}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
