"""Wireframe of the wrap-around cube plus a small axes marker."""

from OpenGL.GL import *
from config import boids as config


class BoundsBox:
    """Draws the [-R, R]^3 cube boids wrap around in."""

    def __init__(self, half_extent: float):
        self.half_extent = float(half_extent)
        self.color = config.GRID["color"]
        self.axes_length = config.GRID["axes_length"]

    def draw(self):
        e = self.half_extent

        glBegin(GL_LINES)
        glColor3f(*self.color)

        # Edges parallel to x
        for y in (-e, e):
            for z in (-e, e):
                glVertex3f(-e, y, z); glVertex3f(e, y, z)

        # Edges parallel to y
        for x in (-e, e):
            for z in (-e, e):
                glVertex3f(x, -e, z); glVertex3f(x, e, z)

        # Edges parallel to z
        for x in (-e, e):
            for y in (-e, e):
                glVertex3f(x, y, -e); glVertex3f(x, y, e)

        # Axes at the origin: x red, y green, z blue
        a = self.axes_length
        glColor3f(1.0, 0.0, 0.0)
        glVertex3f(0, 0, 0); glVertex3f(a, 0, 0)
        glColor3f(0.0, 1.0, 0.0)
        glVertex3f(0, 0, 0); glVertex3f(0, a, 0)
        glColor3f(0.0, 0.0, 1.0)
        glVertex3f(0, 0, 0); glVertex3f(0, 0, a)

        glEnd()
