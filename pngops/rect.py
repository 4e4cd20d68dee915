"""Largest single-color rectangle search.

Each row turns the canvas into a histogram of how many matching pixels stack
up above (and including) that row; the largest rectangle under the histogram
is found with a monotonic stack. Every column is pushed and popped at most
once per row, so a full scan is O(W * H).
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from pngops.canvas import Canvas, Color


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned rectangle: top-left corner plus size."""
    x: int
    y: int
    width: int
    height: int

    @property
    def area(self) -> int:
        return self.width * self.height

    def __str__(self) -> str:
        return f"{self.width}x{self.height} at ({self.x}, {self.y})"


def match_mask(canvas: Canvas, color: Color) -> np.ndarray:
    """Boolean (height, width) mask of pixels exactly equal to color."""
    return np.all(canvas.array() == np.asarray(color, dtype=np.uint8), axis=2)


def largest_in_histogram(heights: list[int]) -> tuple[int, int, int, int]:
    """Largest rectangle under a histogram.

    Returns (area, left, right, height) with right exclusive. On ties the
    first rectangle found wins. area is 0 for an all-zero histogram.
    """
    best = (0, 0, 0, 0)
    stack: list[int] = []
    n = len(heights)
    for c in range(n + 1):
        current = heights[c] if c < n else 0
        while stack and heights[stack[-1]] >= current:
            bar = heights[stack.pop()]
            left = stack[-1] + 1 if stack else 0
            area = bar * (c - left)
            if area > best[0]:
                best = (area, left, c, bar)
        stack.append(c)
    return best


def find_largest_rect(canvas: Canvas, color: Color) -> Optional[Rectangle]:
    """Find the maximum-area rectangle made only of `color` pixels.

    Returns None if the color does not occur. Ties keep the rectangle found
    first while scanning rows top to bottom.
    """
    if canvas.width == 0 or canvas.height == 0:
        return None

    mask = match_mask(canvas, color)
    heights = np.zeros(canvas.width, dtype=np.int64)
    best_area = 0
    best: Optional[Rectangle] = None

    for row in range(canvas.height):
        heights = np.where(mask[row], heights + 1, 0)
        area, left, right, bar = largest_in_histogram(heights.tolist())
        if area > best_area:
            best_area = area
            best = Rectangle(x=left, y=row - bar + 1, width=right - left, height=bar)

    return best


def recolor_largest_rect(canvas: Canvas, old_color: Color, new_color: Color) -> Optional[Rectangle]:
    """Repaint the largest old_color rectangle with new_color, in place.

    Returns the rectangle that was repainted, or None when old_color is not
    present (the canvas is left unchanged).
    """
    found = find_largest_rect(canvas, old_color)
    if found is not None:
        canvas.rect(found.x, found.y, found.width, found.height, new_color)
    return found
