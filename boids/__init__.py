"""Boids flocking simulation components."""

from .boid import Boid, create_boid
from .settings import FlockConfigError, FlockSettings
from .flock import Flock, create_flock, initialize_flock, step_flock

__all__ = [
    "Boid",
    "create_boid",
    "FlockConfigError",
    "FlockSettings",
    "Flock",
    "create_flock",
    "initialize_flock",
    "step_flock",
]
