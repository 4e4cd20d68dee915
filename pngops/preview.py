"""Pygame preview window. Shows an upscaled view of a canvas."""

import os

# Keep pygame from printing its banner into CLI output
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from pngops.canvas import Canvas


class Preview:
    """Opens a window that displays the Canvas contents, upscaled to be visible."""

    def __init__(self, canvas: Canvas, scale: int = 8, title: str = "pngops preview"):
        self.canvas = canvas
        self.scale = max(1, scale)
        self.width = max(1, canvas.width * self.scale)
        self.height = max(1, canvas.height * self.scale)

        pygame.init()
        self.screen = pygame.display.set_mode((self.width, self.height))
        pygame.display.set_caption(title)
        self.clock = pygame.time.Clock()
        # Surface at the canvas resolution, upscaled on every update
        self.surface = pygame.Surface((max(1, canvas.width), max(1, canvas.height)), 0, 32)

    def update(self) -> bool:
        """Blit canvas to screen. Returns False if window was closed."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                return False

        if self.canvas.width and self.canvas.height:
            # pygame surfaces are indexed (x, y), the canvas array is (y, x)
            pygame.surfarray.blit_array(self.surface, self.canvas.array().swapaxes(0, 1))

        self.screen.blit(pygame.transform.scale(self.surface, (self.width, self.height)), (0, 0))
        pygame.display.flip()
        return True

    def tick(self, fps: int = 30) -> None:
        """Limit framerate."""
        self.clock.tick(fps)

    def show(self, fps: int = 30) -> None:
        """Keep the window open until it is closed or Escape is pressed."""
        try:
            while self.update():
                self.tick(fps)
        except KeyboardInterrupt:
            pass
        finally:
            self.close()

    def close(self) -> None:
        pygame.quit()
