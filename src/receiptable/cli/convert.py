"""CLI tool for converting images and hex text to printer data."""

import argparse
import sys
from pathlib import Path

from PIL import UnidentifiedImageError

from receiptable.codecs import CodecError, MalformedInput, decode_hex
from receiptable.images import image_to_bmp, image_to_escpos, image_to_escpos_dump, load_image
from receiptable.models.options import OddNibblePolicy

DEFAULT_SUFFIXES = {
    "escpos": ".bin",
    "dump": ".txt",
    "bmp": ".bmp",
    "raw": ".bin",
}


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for receiptable-convert."""
    parser = argparse.ArgumentParser(
        description="Convert an image to ESC/POS raster commands or BMP, or hex text to raw bytes.",
        prog="receiptable-convert",
    )
    parser.add_argument(
        "input",
        type=Path,
        help="Input image file, or hex text file with --format raw",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output file path (default: input name with a format specific suffix)",
    )
    parser.add_argument(
        "--format",
        choices=list(DEFAULT_SUFFIXES),
        default="escpos",
        help="Output format (default: escpos)",
    )
    parser.add_argument("--x-scale", type=int, choices=[1, 2], default=1, help="Horizontal scale (default: 1)")
    parser.add_argument("--y-scale", type=int, choices=[1, 2], default=1, help="Vertical scale (default: 1)")
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Skip unknown characters in hex text instead of failing",
    )
    parser.add_argument(
        "--odd-nibbles",
        choices=[p.value for p in OddNibblePolicy],
        default=OddNibblePolicy.PAD_RIGHT.value,
        help="How to handle a lone trailing hex digit (default: pad-right)",
    )
    return parser


def _convert_hex(args: argparse.Namespace) -> bytes:
    text = args.input.read_text()
    return decode_hex(text, strict=not args.lenient, odd_nibble_policy=args.odd_nibbles)


def _convert_image(args: argparse.Namespace) -> bytes:
    image = load_image(args.input.read_bytes())
    if args.format == "bmp":
        return image_to_bmp(image)
    if args.format == "dump":
        return (image_to_escpos_dump(image, args.x_scale, args.y_scale) + "\n").encode("ascii")
    return image_to_escpos(image, args.x_scale, args.y_scale)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for receiptable-convert CLI."""
    args = build_parser().parse_args(argv)

    if not args.input.exists():
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        return 1

    output_path = args.output or args.input.with_suffix(DEFAULT_SUFFIXES[args.format])
    if output_path == args.input:
        print("Error: Output would overwrite the input file", file=sys.stderr)
        return 1

    try:
        if args.format == "raw":
            output = _convert_hex(args)
        else:
            output = _convert_image(args)
    except MalformedInput as e:
        print(f"Error decoding hex: {e}\n{e.caret_snippet()}", file=sys.stderr)
        return 1
    except UnidentifiedImageError:
        print(f"Error: Cannot read image: {args.input}", file=sys.stderr)
        return 1
    except CodecError as e:
        print(f"Error converting image: {e}", file=sys.stderr)
        return 1

    try:
        output_path.write_bytes(output)
        print(f"Wrote {len(output)} bytes to {output_path}")
    except OSError as e:
        print(f"Error writing output: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
