"""Command-line entry point: one image operation per run.

Usage:
    pngops --triangle --points 0.0.100.0.50.80 --thickness 2 --color 255.0.0 in.png -o out.png
    pngops --biggest_rect --old_color 255.255.255 --new_color 0.0.255 -i in.png
    pngops --collage --number_x 3 --number_y 2 in.png
    pngops --info in.png
"""

import argparse
import sys
from typing import Optional, Sequence

from pngops.canvas import Color
from pngops.codec import load_canvas, read_info, save_canvas
from pngops.config import (
    CollageOptions,
    InfoOptions,
    RectOptions,
    RunConfig,
    TriangleOptions,
    default_output,
    default_preview_scale,
)
from pngops.errors import (
    EXIT_OK,
    ArgumentError,
    InputFileError,
    InvalidGeometry,
    OperationFlagError,
    PngOpsError,
)
from pngops.raster import Point, render_triangle
from pngops.rect import recolor_largest_rect
from pngops.tile import tile


class _Parser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting, so errors map to our exit codes."""

    def error(self, message):
        raise ArgumentError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog="pngops",
        description="Draw triangles, recolor the largest single-color rectangle, "
                    "or tile a PNG into a collage. Only one operation per run.",
    )
    parser.add_argument("input_file", nargs="?", help="Input PNG file (same as -i)")
    parser.add_argument("-i", "--input", dest="input", help="Input PNG file name")
    parser.add_argument("-o", "--output", dest="output", help="Output PNG file name (default: out.png)")
    parser.add_argument("--info", action="store_true", help="Show information about the input PNG file")
    parser.add_argument("--preview", action="store_true", help="Show the result in a window before exiting")
    parser.add_argument("--verbose", action="store_true", help="Print diagnostic messages")

    tri = parser.add_argument_group("triangle")
    tri.add_argument("--triangle", action="store_true", help="Draw a triangle")
    tri.add_argument("--points", metavar="x1.y1.x2.y2.x3.y3", help="Vertex coordinates")
    tri.add_argument("--thickness", type=int, help="Line thickness, > 0")
    tri.add_argument("--color", metavar="r.g.b", help="Line color, 0-255 per channel")
    tri.add_argument("--fill", action="store_true", help="Fill the triangle")
    tri.add_argument("--fill_color", metavar="r.g.b", help="Fill color, required with --fill")

    rect = parser.add_argument_group("biggest rectangle")
    rect.add_argument("--biggest_rect", action="store_true",
                      help="Find and recolor the largest rectangle of a specific color")
    rect.add_argument("--old_color", metavar="r.g.b", help="Color of the rectangle to find")
    rect.add_argument("--new_color", metavar="r.g.b", help="Color to repaint it with")

    collage = parser.add_argument_group("collage")
    collage.add_argument("--collage", action="store_true", help="Create a collage from the input image")
    collage.add_argument("--number_x", type=int, help="Repetitions along the X axis, > 0")
    collage.add_argument("--number_y", type=int, help="Repetitions along the Y axis, > 0")
    return parser


# ---------------------------------------------------------------------------
# Value parsing
# ---------------------------------------------------------------------------

def parse_color(text: Optional[str], option: str = "color") -> Color:
    """Parse 'r.g.b' with every channel in 0..255."""
    if not text:
        raise ArgumentError(f"--{option} is required")
    parts = text.split(".")
    try:
        channels = tuple(int(p) for p in parts)
    except ValueError:
        channels = ()
    if len(channels) != 3 or not all(0 <= c <= 255 for c in channels):
        raise ArgumentError(
            f"Incorrect color format '{text}' for --{option}. Expected r.g.b with components in 0-255"
        )
    return channels


def parse_points(text: Optional[str]) -> tuple[Point, Point, Point]:
    """Parse 'x1.y1.x2.y2.x3.y3'. Coordinates may be negative."""
    if not text:
        raise ArgumentError("--points is required")
    try:
        values = [int(p) for p in text.split(".")]
    except ValueError:
        values = []
    if len(values) != 6:
        raise ArgumentError(f"Incorrect points format '{text}'. Expected x1.y1.x2.y2.x3.y3")
    return (values[0], values[1]), (values[2], values[3]), (values[4], values[5])


def format_color(color: Color) -> str:
    return ".".join(str(c) for c in color)


# ---------------------------------------------------------------------------
# Config building
# ---------------------------------------------------------------------------

def build_config(args: argparse.Namespace) -> RunConfig:
    """Validate parsed arguments and freeze them into a RunConfig.

    --info is not an image operation: it may be given alongside one, whose
    arguments are still validated, but then only the header info is printed.
    """
    selected = [name for name in ("triangle", "biggest_rect", "collage") if getattr(args, name)]
    input_path = args.input or args.input_file

    if (selected or args.info) and not input_path:
        raise InputFileError("Input file is required for this operation")
    if len(selected) > 1:
        raise OperationFlagError(
            "Only one operation allowed at a time (got " + ", ".join(f"--{s}" for s in selected) + ")"
        )
    if not selected and not args.info:
        raise OperationFlagError("No operation specified. Use --help for options")

    op = selected[0] if selected else None
    if op == "triangle":
        if args.thickness is None:
            raise ArgumentError("--triangle requires --points, --thickness and --color")
        if args.thickness <= 0:
            raise InvalidGeometry(f"--thickness must be > 0, got {args.thickness}")
        if args.fill and not args.fill_color:
            raise ArgumentError("--fill requires --fill_color")
        operation = TriangleOptions(
            points=parse_points(args.points),
            thickness=args.thickness,
            line_color=parse_color(args.color, "color"),
            fill=args.fill,
            fill_color=parse_color(args.fill_color, "fill_color") if args.fill else None,
        )
    elif op == "biggest_rect":
        operation = RectOptions(
            old_color=parse_color(args.old_color, "old_color"),
            new_color=parse_color(args.new_color, "new_color"),
        )
    elif op == "collage":
        if args.number_x is None or args.number_y is None:
            raise ArgumentError("--collage requires --number_x and --number_y")
        if args.number_x <= 0 or args.number_y <= 0:
            raise InvalidGeometry("--collage requires --number_x > 0 and --number_y > 0")
        operation = CollageOptions(number_x=args.number_x, number_y=args.number_y)

    if args.info:
        operation = InfoOptions()

    return RunConfig(
        operation=operation,
        input_path=input_path,
        output_path=args.output or default_output(),
        preview=args.preview,
        preview_scale=default_preview_scale(),
        verbose=args.verbose,
    )


# ---------------------------------------------------------------------------
# Execution
# ---------------------------------------------------------------------------

def _log(config: RunConfig, message: str) -> None:
    if config.verbose:
        print(f"[pngops] {message}")


def run(config: RunConfig) -> int:
    """Execute the configured operation. Raises PngOpsError on failure."""
    operation = config.operation

    if isinstance(operation, InfoOptions):
        info = read_info(config.input_path)
        print(f"PNG file: {config.input_path}")
        for line in info.lines():
            print(f"  {line}")
        return EXIT_OK

    canvas = load_canvas(config.input_path)
    _log(config, f"Loaded {config.input_path} ({canvas.width}x{canvas.height})")

    if isinstance(operation, TriangleOptions):
        v0, v1, v2 = operation.points
        render_triangle(
            canvas, v0, v1, v2,
            thickness=operation.thickness,
            line_color=operation.line_color,
            fill=operation.fill,
            fill_color=operation.fill_color,
        )
        _log(config, f"Drew triangle {v0} {v1} {v2}, thickness {operation.thickness}")
    elif isinstance(operation, RectOptions):
        found = recolor_largest_rect(canvas, operation.old_color, operation.new_color)
        if found is None:
            print(f"No rectangle of color {format_color(operation.old_color)} found")
        else:
            print(f"Recolored rectangle {found} to {format_color(operation.new_color)}")
    elif isinstance(operation, CollageOptions):
        canvas = tile(canvas, operation.number_x, operation.number_y)
        _log(config, f"Collage is {canvas.width}x{canvas.height}")

    save_canvas(canvas, config.output_path)

    if config.preview:
        from pngops.preview import Preview
        _log(config, f"Opening preview at scale {config.preview_scale}")
        Preview(canvas, scale=config.preview_scale, title=f"pngops - {config.output_path}").show()

    print(f"Operation completed successfully. Output: {config.output_path}")
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser()
    if not argv:
        parser.print_help()
        return EXIT_OK

    try:
        args = parser.parse_args(argv)
        config = build_config(args)
        return run(config)
    except PngOpsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return e.exit_code


if __name__ == "__main__":
    sys.exit(main())
