"""monsterid command line entry point."""

import argparse
import io
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

from PIL import Image

from monsterid.config_manager import ConfigManager, parse_background
from monsterid.image_processing import DirectoryPartStore, MonsterProcessor
from monsterid.models import CONFIG_FILE, TRANSPARENT

logger = logging.getLogger("monsterid")


def to_png_bytes(image: Image.Image) -> bytes:
    """Encode an image as a PNG byte string."""
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="monsterid",
        description="Generate a deterministic monster avatar from any input.",
    )
    parser.add_argument(
        "input",
        help="Text to derive the monster from, or '-' to read raw bytes from stdin",
    )
    parser.add_argument(
        "-o", "--output", type=Path, default=Path("monster.png"),
        help="PNG file to write (default: monster.png)",
    )
    parser.add_argument(
        "--hex", action="store_true",
        help="Treat input as a hex string (e.g. an identity hash)",
    )
    parser.add_argument(
        "--config", type=Path, default=CONFIG_FILE,
        help=f"Configuration file (default: {CONFIG_FILE})",
    )
    parser.add_argument("--parts-dir", type=Path, help="Directory of part PNGs")
    parser.add_argument("--background", help="Background color, e.g. '#ff0000'")
    parser.add_argument(
        "--transparent", action="store_true", help="Start from a transparent canvas"
    )
    parser.add_argument(
        "--greyscale", action="store_true", help="Render the monster in greyscale"
    )
    parser.add_argument(
        "--no-artistic", action="store_true", help="Disable body and limb coloring"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def read_input(args: argparse.Namespace) -> bytes:
    """Turn the positional argument into the bytes to hash.

    Raises:
        ValueError: If --hex is given and the input is not valid hex
    """
    if args.input == "-":
        return sys.stdin.buffer.read()
    if args.hex:
        return bytes.fromhex(args.input)
    return args.input.encode("utf-8")


def main(argv: Optional["list[str]"] = None) -> int:
    """Run the monsterid command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = ConfigManager(args.config).load()
    try:
        data = read_input(args)
        if args.background:
            config.background = parse_background(args.background)
    except ValueError as e:
        print(f"monsterid: {e}", file=sys.stderr)
        return 2

    options = config.to_options()
    if args.transparent:
        options = replace(options, background=TRANSPARENT)
    if args.greyscale:
        options = replace(options, greyscale=True)
    if args.no_artistic:
        options = replace(options, artistic=False)

    parts_dir = args.parts_dir or config.parts_dir
    store = DirectoryPartStore(parts_dir, cache=config.cache_parts)
    processor = MonsterProcessor(store, options)

    image = processor.generate(data)
    args.output.write_bytes(to_png_bytes(image))
    logger.info("Wrote %s (%dx%d)", args.output, image.width, image.height)
    return 0


if __name__ == "__main__":
    sys.exit(main())
