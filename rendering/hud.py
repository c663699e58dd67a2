"""Heads-up display with flock statistics."""

import pygame
from OpenGL.GL import *

from config import boids as config


class Hud:
    """Draws lines of text in the top-left corner using pygame fonts."""

    def __init__(self, font_name: str = "monospace", font_size: int = 18, line_height: int = 25):
        pygame.font.init()
        self.font = pygame.font.SysFont(font_name, font_size)
        self.line_height = line_height
        self.color = tuple(int(c * 255) for c in config.COLORS["text"])

    def draw_lines(self, lines, screen_size: tuple, x: int = 10, y: int = 10):
        """
        Draw each string on its own line.

        Args:
            lines: Strings to draw, top to bottom
            screen_size: (width, height) of the screen
            x: Left margin in pixels
            y: Top margin in pixels
        """
        glMatrixMode(GL_PROJECTION)
        glPushMatrix()
        glLoadIdentity()
        glOrtho(0, screen_size[0], 0, screen_size[1], -1, 1)
        glMatrixMode(GL_MODELVIEW)
        glPushMatrix()
        glLoadIdentity()

        glDisable(GL_DEPTH_TEST)
        glEnable(GL_BLEND)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)

        for row, text in enumerate(lines):
            surface = self.font.render(text, True, self.color)
            data = pygame.image.tostring(surface, "RGBA", True)
            w, h = surface.get_size()
            glRasterPos2f(x, screen_size[1] - (y + row * self.line_height) - h)
            glDrawPixels(w, h, GL_RGBA, GL_UNSIGNED_BYTE, data)

        glDisable(GL_BLEND)
        glEnable(GL_DEPTH_TEST)

        glPopMatrix()
        glMatrixMode(GL_PROJECTION)
        glPopMatrix()
        glMatrixMode(GL_MODELVIEW)
