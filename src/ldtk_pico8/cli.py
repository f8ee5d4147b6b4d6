"""Command line interface for the LDtk to PICO-8 converter."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .converter import ConvertOptions, convert_ldtk_to_p8
from .errors import Pico8ConversionError
from .merge import OverlapPolicy


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ldtk-pico8",
        description=(
            "Convert an LDtk project into a PICO-8 .p8 cartridge.\n"
            "The first level becomes the map, its (single) tileset becomes the sprite sheet "
            "and the tileset's enum tags become sprite flags.\n"
            "The bottom half of the sprite sheet shares memory with map rows 32-63; "
            "--overlap-strategy decides what happens when both are used."
        ),
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("project", help="LDtk project file (.ldtk)")
    parser.add_argument(
        "-o",
        "--overlap-strategy",
        choices=[p.value for p in OverlapPolicy],
        default=OverlapPolicy.ERROR.value,
        help=(
            "How to handle overlapping sprite & map data:\n"
            "  error  - fail if both use the shared space (default)\n"
            "  map    - map data overwrites sprite data\n"
            "  sprite - sprite data is kept, map data fills the rest"
        ),
    )
    parser.add_argument(
        "--output",
        help="Write the cart to this file instead of standard output",
    )
    parser.add_argument(
        "--no-script",
        action="store_true",
        help="Leave out the __lua__ map viewer script",
    )
    parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Overwrite an existing output file",
    )
    return parser


def write_output(cart: str, output: Path, force: bool) -> None:
    if output.exists() and not force:
        raise Pico8ConversionError(
            f"Output file already exists (use --force to overwrite): {output}"
        )
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(cart + "\n", encoding="utf-8")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = ConvertOptions(
            overlap_policy=OverlapPolicy.parse(args.overlap_strategy),
            include_script=not args.no_script,
        )

        result = convert_ldtk_to_p8(Path(args.project), options)
        for diagnostic in result.diagnostics:
            print(diagnostic, file=sys.stderr)

        if args.output:
            write_output(result.cart, Path(args.output), args.force)
            print(f"wrote {args.output}", file=sys.stderr)
        else:
            print(result.cart)
        return 0
    except Pico8ConversionError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
