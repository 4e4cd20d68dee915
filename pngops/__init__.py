"""Raster edits on RGB pixel canvases: triangles, largest-rectangle recolor, collages."""

from pngops.canvas import Canvas, Color
from pngops.raster import draw_line, fill_triangle, render_triangle
from pngops.rect import Rectangle, find_largest_rect, recolor_largest_rect
from pngops.tile import tile

__all__ = [
    "Canvas",
    "Color",
    "Rectangle",
    "draw_line",
    "fill_triangle",
    "find_largest_rect",
    "recolor_largest_rect",
    "render_triangle",
    "tile",
]
