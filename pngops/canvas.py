"""RGB pixel buffer with bounds-checked access."""

import numpy as np

from pngops.errors import InvalidGeometry

# Type alias for RGB tuples
Color = tuple[int, int, int]

BLACK: Color = (0, 0, 0)


class Canvas:
    """Owned RGB pixel grid.

    Pixels are stored as a flat bytearray in RGB order: [R0,G0,B0, R1,G1,B1, ...]
    Row-major: pixel (x, y) is at index (y * width + x) * 3.
    Every coordinate outside the grid is absorbed: reads return a default,
    writes are dropped.
    """

    def __init__(self, width: int = 0, height: int = 0):
        if width < 0 or height < 0:
            raise InvalidGeometry(f"Canvas size must be non-negative, got {width}x{height}")
        self.width = width
        self.height = height
        self.buffer = bytearray(width * height * 3)

    @classmethod
    def from_array(cls, pixels: np.ndarray) -> "Canvas":
        """Build a canvas from an (H, W, 3) uint8 array. The data is copied."""
        if pixels.ndim != 3 or pixels.shape[2] != 3:
            raise InvalidGeometry(f"Expected an (H, W, 3) array, got shape {pixels.shape}")
        height, width = pixels.shape[:2]
        canvas = cls(width, height)
        canvas.buffer[:] = np.ascontiguousarray(pixels, dtype=np.uint8).tobytes()
        return canvas

    def __repr__(self) -> str:
        return f"Canvas({self.width}x{self.height})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Canvas):
            return NotImplemented
        return (self.width, self.height) == (other.width, other.height) and self.buffer == other.buffer

    def clear(self, color: Color = BLACK) -> None:
        """Fill entire canvas with a color (default black)."""
        if color == BLACK:
            self.buffer[:] = b'\x00' * len(self.buffer)
        else:
            self.buffer[:] = bytes(color) * (self.width * self.height)

    def set(self, x: int, y: int, color: Color) -> None:
        """Set a single pixel. Out-of-bounds writes are silently ignored."""
        if 0 <= x < self.width and 0 <= y < self.height:
            idx = (y * self.width + x) * 3
            self.buffer[idx] = color[0]
            self.buffer[idx + 1] = color[1]
            self.buffer[idx + 2] = color[2]

    def get(self, x: int, y: int, default: Color = BLACK) -> Color:
        """Get a pixel's color. Returns `default` for out-of-bounds."""
        if 0 <= x < self.width and 0 <= y < self.height:
            idx = (y * self.width + x) * 3
            return (self.buffer[idx], self.buffer[idx + 1], self.buffer[idx + 2])
        return default

    def rect(self, x: int, y: int, w: int, h: int, color: Color) -> None:
        """Paint a filled rectangle, clipped to the canvas."""
        x0, y0 = max(x, 0), max(y, 0)
        x1, y1 = min(x + w, self.width), min(y + h, self.height)
        if x0 >= x1 or y0 >= y1:
            return
        self.array()[y0:y1, x0:x1] = color

    def array(self) -> np.ndarray:
        """Writable (height, width, 3) uint8 view over the pixel buffer."""
        if not self.buffer:
            return np.zeros((self.height, self.width, 3), dtype=np.uint8)
        return np.frombuffer(self.buffer, dtype=np.uint8).reshape(self.height, self.width, 3)

    def copy(self) -> "Canvas":
        clone = Canvas(self.width, self.height)
        clone.buffer[:] = self.buffer
        return clone
