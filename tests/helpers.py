from pngops.canvas import Canvas

RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)
BLACK = (0, 0, 0)


def painted(canvas: Canvas, color) -> set:
    """All (x, y) whose pixel equals color."""
    return {
        (x, y)
        for y in range(canvas.height)
        for x in range(canvas.width)
        if canvas.get(x, y) == color
    }
