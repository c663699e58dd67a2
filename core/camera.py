"""Orbit camera circling the center of the bounds cube."""

import math
import numpy as np
from OpenGL.GL import *
from OpenGL.GLU import *
from config import boids as config


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class Camera:
    """Orbit camera: spherical coordinates (radius, theta, phi) around a target."""

    def __init__(self, target=(0.0, 0.0, 0.0)):
        self.radius = config.CAMERA["initial_radius"]
        self.target_radius = self.radius
        self.theta = config.CAMERA["initial_theta"]
        self.phi = config.CAMERA["initial_phi"]
        self.target = np.array(target, dtype=np.float64)
        self.zoom_smoothing = 8.0

    def offset(self) -> np.ndarray:
        """Unit vector from the target toward the camera."""
        theta = math.radians(self.theta)
        phi = math.radians(self.phi)
        return np.array([
            math.cos(phi) * math.cos(theta),
            math.sin(phi),
            math.cos(phi) * math.sin(theta),
        ])

    def get_position(self) -> np.ndarray:
        return self.target + self.radius * self.offset()

    def rotate(self, d_theta: float, d_phi: float):
        """Orbit by the given angles in degrees; phi stops short of the poles."""
        self.theta = (self.theta + d_theta) % 360
        self.phi = _clamp(self.phi + d_phi, config.CAMERA["min_phi"], config.CAMERA["max_phi"])

    def zoom(self, delta: float):
        self.radius = _clamp(self.radius + delta, config.CAMERA["min_radius"], config.CAMERA["max_radius"])
        self.target_radius = self.radius

    def zoom_smooth(self, delta: float):
        self.target_radius = _clamp(
            self.target_radius + delta, config.CAMERA["min_radius"], config.CAMERA["max_radius"]
        )

    def update(self, dt: float):
        """Ease the radius toward the wheel-zoom target."""
        self.radius += (self.target_radius - self.radius) * min(1.0, self.zoom_smoothing * dt)

    def apply(self):
        """Load the view transform into the OpenGL modelview matrix."""
        pos = self.get_position()
        glLoadIdentity()
        gluLookAt(
            pos[0], pos[1], pos[2],
            self.target[0], self.target[1], self.target[2],
            0, 1, 0
        )
