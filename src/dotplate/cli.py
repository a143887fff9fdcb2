#!/usr/bin/env python3
"""
Command-line entry point for dot-plate generation.

Typical usage:
    $ dotplate 8 -o plates/eight.png --circular --palette protanopia
    $ dotplate "HELLO WORLD" -o hello.svg --format auto --seed 42
    $ dotplate 5 --config plate.json

Prints a JSON summary of the generated plate to stdout.
"""

import argparse
import json
import logging
import sys
from dataclasses import asdict, fields
from typing import Any, Dict, List, Optional

from .config import OUTPUT_FORMATS, PlateConfig
from .generator import PlateGenerator
from .palettes import palette_help_text

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = "colorvision-test.png"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dotplate",
        description="Generate dot plates that hide text in two colors (educational use only).",
        epilog=palette_help_text(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("text", nargs="?", help="Text to hide in the plate; words go on separate lines")
    parser.add_argument("-o", "--output", default=DEFAULT_OUTPUT, help=f"Output file (default: {DEFAULT_OUTPUT})")
    parser.add_argument("--config", help="JSON file with plate options (snake_case or camelCase keys)")
    parser.add_argument("--list-palettes", action="store_true", help="List color palettes and exit")
    parser.add_argument("-v", "--verbose", action="store_true", default=None, help="Log packing progress")

    canvas = parser.add_argument_group("canvas")
    canvas.add_argument("--width", type=int)
    canvas.add_argument("--height", type=int)
    canvas.add_argument("--margin", type=float)
    canvas.add_argument("--circular", action="store_true", default=None, help="Circular plate")
    canvas.add_argument("--circular-background-color")
    canvas.add_argument("--transparent", action="store_true", default=None, help="No background fill")

    circles = parser.add_argument_group("circles")
    circles.add_argument("--min-radius", type=float)
    circles.add_argument("--max-radius", type=float)
    circles.add_argument("--padding", type=float, help="Minimum gap between circles")
    circles.add_argument("--max-attempts", type=int)
    circles.add_argument("--on-color", help="Color of text circles, e.g. '#FF6B35'")
    circles.add_argument("--off-color", help="Color of field circles, e.g. '#4ECDC4'")
    circles.add_argument("--tolerance", type=float, help="Mixed-sample fraction a circle may straddle")
    circles.add_argument("--palette", help="Named palette, overrides --on-color/--off-color")

    text = parser.add_argument_group("text")
    text.add_argument("--font-size", type=float, help="Starting font size")
    text.add_argument("--font-family", help="Font family list, e.g. 'Arial, sans-serif'")
    text.add_argument("--text-color")
    text.add_argument("--background-color")
    text.add_argument("--luminance-threshold", type=float)
    text.add_argument("--max-text-fit", action="store_true", default=None,
                      help="Use a larger text area in circular mode")

    output = parser.add_argument_group("output")
    output.add_argument("--format", choices=OUTPUT_FORMATS)
    output.add_argument("--seed", type=int, help="Seed for reproducible plates")
    return parser


def load_options(path: Optional[str]) -> Dict[str, Any]:
    if not path:
        return {}
    with open(path, encoding="utf-8") as f:
        options = json.load(f)
    if not isinstance(options, dict):
        raise ValueError(f"{path}: expected a JSON object of options")
    return options


def config_from_args(args: argparse.Namespace) -> PlateConfig:
    """File options first, explicit flags on top."""
    options = load_options(args.config)
    merged = PlateConfig.from_options(options)
    overrides = {f.name: getattr(args, f.name) for f in fields(PlateConfig)
                 if getattr(args, f.name, None) is not None}
    return PlateConfig(**{**asdict(merged), **overrides})


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.list_palettes:
        print(palette_help_text())
        return 0
    if not args.text:
        parser.error("text is required")

    try:
        config = config_from_args(args)
        result = PlateGenerator(config).generate(args.text, args.output)
    except (OSError, TypeError, ValueError) as e:
        logger.error("%s", e)
        return 1

    print(json.dumps(asdict(result), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
