"""Validated flocking parameters."""

import math
import numbers
from dataclasses import dataclass, fields, replace
from typing import Optional

from config import boids as config


class FlockConfigError(ValueError):
    """Raised when flock parameters cannot produce a valid simulation."""


@dataclass(frozen=True)
class FlockSettings:
    """
    Tunable scalars for one simulation run.

    Attributes:
        count: Number of boids, fixed for the lifetime of the flock
        bounds: Half-extent R of the wrap-around cube [-R, R]^3
        alignment_radius: Neighbor radius for the alignment rule
        cohesion_radius: Neighbor radius for the cohesion rule
        separation_radius: Neighbor radius for the separation rule
        alignment_force: Magnitude of a non-zero alignment steer
        cohesion_force: Magnitude of a non-zero cohesion steer
        separation_force: Magnitude of a non-zero separation steer
        velocity_range: Initial velocity axes are sampled in [-range, range]
        seed: Seed for the initial state; None draws fresh entropy
    """
    count: int = 500
    bounds: float = 500.0
    alignment_radius: float = 50.0
    cohesion_radius: float = 30.0
    separation_radius: float = 30.0
    alignment_force: float = 0.02
    cohesion_force: float = 0.03
    separation_force: float = 0.08
    velocity_range: float = 5.0
    seed: Optional[int] = None

    @classmethod
    def from_config(cls, **overrides) -> "FlockSettings":
        """Build settings from ``config.boids.BOIDS`` with keyword overrides."""
        known = {f.name for f in fields(cls)}
        unknown = set(overrides) - known
        if unknown:
            raise FlockConfigError(f"Unknown flock setting(s): {', '.join(sorted(unknown))}")

        values = {name: config.BOIDS[name] for name in known if name in config.BOIDS}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values).validate()

    def with_overrides(self, **overrides) -> "FlockSettings":
        return replace(self, **overrides).validate()

    def validate(self) -> "FlockSettings":
        """Check every parameter, returning self so calls can be chained."""
        if isinstance(self.count, bool) or not isinstance(self.count, numbers.Integral):
            raise FlockConfigError(f"count must be an integer, got {self.count!r}")
        if self.count < 1:
            raise FlockConfigError(f"count must be at least 1, got {self.count}")

        positive = ("bounds", "alignment_radius", "cohesion_radius",
                    "separation_radius", "velocity_range")
        for name in positive:
            value = _as_float(name, getattr(self, name))
            if value <= 0:
                raise FlockConfigError(f"{name} must be positive, got {value}")

        for name in ("alignment_force", "cohesion_force", "separation_force"):
            value = _as_float(name, getattr(self, name))
            if value < 0:
                raise FlockConfigError(f"{name} must not be negative, got {value}")

        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, numbers.Integral)):
            raise FlockConfigError(f"seed must be an integer or None, got {self.seed!r}")

        return self


def _as_float(name: str, value) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise FlockConfigError(f"{name} must be a number, got {value!r}") from None
    if not math.isfinite(value):
        raise FlockConfigError(f"{name} must be finite, got {value}")
    return value
