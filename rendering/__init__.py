"""Rendering components for the 3D boids viewer."""

from .bounds import BoundsBox
from .boid_mesh import BoidMesh
from .hud import Hud

__all__ = ["BoundsBox", "BoidMesh", "Hud"]
