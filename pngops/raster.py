"""Thick lines and triangles on a Canvas.

All arithmetic is integer. Nothing here clips coordinates itself: every pixel
goes through Canvas.set, which drops out-of-bounds writes.
"""

from typing import Iterator, Optional

from pngops.canvas import Canvas, Color
from pngops.errors import ArgumentError, InvalidGeometry

# (x, y) in canvas space, may lie outside the canvas
Point = tuple[int, int]


def line_points(p0: Point, p1: Point) -> Iterator[Point]:
    """Yield every point of the digital line from p0 to p1, endpoints included.

    Bresenham stepping with the error term starting at half the major delta:
    each iteration advances x, y or both, so consecutive points are always
    8-connected.
    """
    x0, y0 = p0
    x1, y1 = p1
    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    # half the major delta, truncated toward zero
    err = dx // 2 if dx > dy else -(dy // 2)
    while True:
        yield x0, y0
        if x0 == x1 and y0 == y1:
            return
        e2 = err
        if e2 > -dx:
            err -= dy
            x0 += sx
        if e2 < dy:
            err += dx
            y0 += sy


def stamp(canvas: Canvas, cx: int, cy: int, thickness: int, color: Color) -> None:
    """Paint a thickness x thickness square around (cx, cy)."""
    offset = (thickness - 1) // 2
    left = cx - offset
    top = cy - offset
    for y in range(top, top + thickness):
        for x in range(left, left + thickness):
            canvas.set(x, y, color)


def draw_line(canvas: Canvas, p0: Point, p1: Point, color: Color, thickness: int = 1) -> None:
    """Draw a line of constant thickness by stamping a square at each path point."""
    if thickness <= 0:
        return
    if thickness == 1:
        for x, y in line_points(p0, p1):
            canvas.set(x, y, color)
        return
    for x, y in line_points(p0, p1):
        stamp(canvas, x, y, thickness, color)


def edge(a: Point, b: Point, p: Point) -> int:
    """Signed doubled area of (a, b, p). Positive when p is left of a->b in y-down space."""
    return (b[0] - a[0]) * (p[1] - a[1]) - (b[1] - a[1]) * (p[0] - a[0])


def fill_triangle(canvas: Canvas, v0: Point, v1: Point, v2: Point, color: Color) -> int:
    """Fill every pixel whose three edge values are >= 0. Returns the number of pixels written."""
    min_x = max(min(v0[0], v1[0], v2[0]), 0)
    min_y = max(min(v0[1], v1[1], v2[1]), 0)
    max_x = min(max(v0[0], v1[0], v2[0]), canvas.width - 1)
    max_y = min(max(v0[1], v1[1], v2[1]), canvas.height - 1)

    if edge(v0, v1, v2) < 0:
        v1, v2 = v2, v1

    written = 0
    for y in range(min_y, max_y + 1):
        for x in range(min_x, max_x + 1):
            p = (x, y)
            if edge(v1, v2, p) >= 0 and edge(v2, v0, p) >= 0 and edge(v0, v1, p) >= 0:
                canvas.set(x, y, color)
                written += 1
    return written


def render_triangle(
    canvas: Canvas,
    v0: Point,
    v1: Point,
    v2: Point,
    thickness: int,
    line_color: Color,
    fill: bool = False,
    fill_color: Optional[Color] = None,
) -> None:
    """Optionally fill a triangle, then stroke its three edges.

    The outline is drawn after the fill so it is never covered by fill color.
    Arguments are validated before the canvas is touched.
    """
    if thickness <= 0:
        raise InvalidGeometry(f"Line thickness must be > 0, got {thickness}")
    if fill and fill_color is None:
        raise ArgumentError("A fill color is required when fill is requested")

    if fill:
        fill_triangle(canvas, v0, v1, v2, fill_color)

    draw_line(canvas, v0, v1, line_color, thickness)
    draw_line(canvas, v1, v2, line_color, thickness)
    draw_line(canvas, v2, v0, line_color, thickness)
