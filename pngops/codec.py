"""PNG <-> Canvas conversion on top of Pillow.

Whatever the PNG color type or bit depth, the canvas is 8-bit RGB. Alpha is
dropped on load and written back fully opaque.
"""

import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from pngops.canvas import Canvas
from pngops.errors import CodecError, InputFileError

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

# IHDR color type codes
COLOR_TYPES = {
    0: "Grayscale",
    2: "RGB",
    3: "Palette",
    4: "Grayscale with Alpha",
    6: "RGBA",
}
INTERLACE_METHODS = {0: "None", 1: "Adam7"}

# Pillow modes that hold more than 8 bits per sample (16-bit grayscale PNGs)
_WIDE_MODES = ("I", "I;16", "I;16B", "I;16L")


@dataclass(frozen=True)
class PngInfo:
    """Header fields of a PNG file."""
    width: int
    height: int
    bit_depth: int
    color_type: int
    interlace: int

    @property
    def color_type_name(self) -> str:
        return COLOR_TYPES.get(self.color_type, "Unknown")

    @property
    def interlace_name(self) -> str:
        return INTERLACE_METHODS.get(self.interlace, "Unknown")

    def lines(self) -> list[str]:
        return [
            f"Width: {self.width}",
            f"Height: {self.height}",
            f"Bit depth: {self.bit_depth}",
            f"Color type: {self.color_type_name} ({self.color_type})",
            f"Interlace method: {self.interlace_name}",
        ]


def _check_readable(path: Path) -> None:
    if not path.exists():
        raise InputFileError(f"Input file not found: {path}")
    if not path.is_file():
        raise InputFileError(f"Input is not a file: {path}")


def read_info(path: Union[str, Path]) -> PngInfo:
    """Read width, height, bit depth, color type and interlace from the IHDR chunk."""
    path = Path(path)
    _check_readable(path)
    with open(path, "rb") as f:
        header = f.read(33)
    # signature (8) + chunk length (4) + b"IHDR" (4) + 13 data bytes
    if len(header) < 29 or header[:8] != PNG_SIGNATURE or header[12:16] != b"IHDR":
        raise CodecError(f"{path} is not a valid PNG file")
    width, height, bit_depth, color_type, _compression, _filter, interlace = struct.unpack(
        ">IIBBBBB", header[16:29]
    )
    return PngInfo(width, height, bit_depth, color_type, interlace)


def image_to_canvas(img: Image.Image) -> Canvas:
    """Normalize a decoded Pillow image to an RGB Canvas."""
    if img.mode in _WIDE_MODES:
        # keep the high byte of each 16-bit sample
        gray = (np.asarray(img, dtype=np.uint32) >> 8).clip(0, 255).astype(np.uint8)
        return Canvas.from_array(np.dstack([gray, gray, gray]))
    if img.mode != "RGB":
        if img.mode == "P" and "transparency" in img.info:
            img = img.convert("RGBA")
        img = img.convert("RGB")
    return Canvas.from_array(np.asarray(img, dtype=np.uint8))


def load_canvas(path: Union[str, Path]) -> Canvas:
    """Decode a PNG file into a Canvas."""
    path = Path(path)
    _check_readable(path)
    try:
        with Image.open(path) as img:
            if img.format != "PNG":
                raise CodecError(f"{path} is not a PNG file (detected {img.format})")
            img.load()
            return image_to_canvas(img)
    except UnidentifiedImageError as e:
        raise CodecError(f"{path} is not recognized as an image") from e
    except OSError as e:
        raise CodecError(f"Could not decode {path}: {e}") from e


def canvas_to_image(canvas: Canvas, scale: int = 1) -> Image.Image:
    """Convert a Canvas buffer to an opaque RGBA Pillow image, optionally upscaled."""
    if canvas.width == 0 or canvas.height == 0:
        raise CodecError(f"Cannot encode an empty {canvas.width}x{canvas.height} canvas")
    rgb = canvas.array()
    alpha = np.full(rgb.shape[:2] + (1,), 255, dtype=np.uint8)
    img = Image.fromarray(np.concatenate([rgb, alpha], axis=2))
    if scale > 1:
        img = img.resize((canvas.width * scale, canvas.height * scale), Image.NEAREST)
    return img


def save_canvas(canvas: Canvas, path: Union[str, Path]) -> None:
    """Encode a Canvas as an 8-bit RGBA PNG."""
    img = canvas_to_image(canvas)
    try:
        img.save(path, format="PNG")
    except OSError as e:
        raise CodecError(f"Could not write {path}: {e}") from e
