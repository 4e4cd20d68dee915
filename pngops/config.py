"""Run configuration: environment defaults plus the parsed, immutable operation options."""

import os
from dataclasses import dataclass
from typing import Optional, Union

from dotenv import load_dotenv

from pngops.canvas import Color
from pngops.raster import Point

# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

load_dotenv()

DEFAULT_OUTPUT = "out.png"
DEFAULT_PREVIEW_SCALE = 8


def default_output() -> str:
    return os.getenv("PNGOPS_OUTPUT", DEFAULT_OUTPUT) or DEFAULT_OUTPUT


def default_preview_scale() -> int:
    raw = os.getenv("PNGOPS_PREVIEW_SCALE", "")
    try:
        scale = int(raw)
    except ValueError:
        return DEFAULT_PREVIEW_SCALE
    return scale if scale > 0 else DEFAULT_PREVIEW_SCALE


# ---------------------------------------------------------------------------
# Operation options
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TriangleOptions:
    points: tuple[Point, Point, Point]
    thickness: int
    line_color: Color
    fill: bool = False
    fill_color: Optional[Color] = None


@dataclass(frozen=True)
class RectOptions:
    old_color: Color
    new_color: Color


@dataclass(frozen=True)
class CollageOptions:
    number_x: int
    number_y: int


@dataclass(frozen=True)
class InfoOptions:
    pass


Operation = Union[TriangleOptions, RectOptions, CollageOptions, InfoOptions]


@dataclass(frozen=True)
class RunConfig:
    """Everything one invocation needs. Built once by the CLI, never mutated."""
    operation: Operation
    input_path: str
    output_path: str = DEFAULT_OUTPUT
    preview: bool = False
    preview_scale: int = DEFAULT_PREVIEW_SCALE
    verbose: bool = False
