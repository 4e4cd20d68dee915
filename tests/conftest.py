import pytest

from pngops.canvas import Canvas

from helpers import RED


@pytest.fixture
def canvas10():
    return Canvas(10, 10)


@pytest.fixture
def red_block_canvas():
    """4x4 black canvas with a 2x2 red block at (1, 1)."""
    canvas = Canvas(4, 4)
    canvas.rect(1, 1, 2, 2, RED)
    return canvas
