"""Collage: repeat a canvas nx times across and my times down."""

import numpy as np

from pngops.canvas import Canvas
from pngops.errors import AllocationFailure, InvalidGeometry


def tile(canvas: Canvas, nx: int, my: int) -> Canvas:
    """Return a new (width * nx) x (height * my) canvas made of copies of `canvas`.

    Pixel (tn * width + x, tm * height + y) of the result equals pixel (x, y)
    of the source for every tile index. The source is not modified.
    A zero count or an empty source gives an empty 0x0 canvas.
    """
    if nx < 0 or my < 0:
        raise InvalidGeometry(f"Tile counts must be >= 0, got {nx}x{my}")
    if nx == 0 or my == 0 or canvas.width == 0 or canvas.height == 0:
        return Canvas(0, 0)

    try:
        tiled = np.tile(canvas.array(), (my, nx, 1))
        return Canvas.from_array(tiled)
    except MemoryError as e:
        raise AllocationFailure(
            f"Could not allocate a {canvas.width * nx}x{canvas.height * my} collage"
        ) from e
