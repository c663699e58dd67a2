"""Individual boid entity with position, velocity, and per-tick steering."""

import numpy as np
from dataclasses import dataclass, field


@dataclass
class Boid:
    """
    A single boid (bird-oid object) in the simulation.

    Attributes:
        index: Stable identity, the boid's slot in the flock's ordered sequence
        position: 3D position vector
        velocity: 3D velocity vector, unit length after every tick
        acceleration: Sum of the three steering vectors (rebuilt each tick)
        alignment: Steering toward the neighbors' average heading
        cohesion: Steering toward the neighbors' average position
        separation: Steering away from crowding neighbors
    """
    index: int = 0
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    acceleration: np.ndarray = field(default_factory=lambda: np.zeros(3))
    alignment: np.ndarray = field(default_factory=lambda: np.zeros(3))
    cohesion: np.ndarray = field(default_factory=lambda: np.zeros(3))
    separation: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def look_target(self) -> np.ndarray:
        """Point the boid faces, used by the renderer to orient its cone."""
        return self.position + self.velocity


def random_unit_velocity(rng: np.random.Generator, velocity_range: float = 5.0) -> np.ndarray:
    """Sample each axis in [-range, range] and normalize, resampling a zero vector."""
    while True:
        raw = rng.uniform(-velocity_range, velocity_range, size=3)
        length = np.linalg.norm(raw)
        if length > 0:
            return raw / length


def create_boid(
    index: int,
    bounds: float,
    rng: np.random.Generator,
    velocity_range: float = 5.0
) -> Boid:
    """
    Create a boid with a random heading somewhere inside the bounds cube.

    Args:
        index: Slot the boid will occupy in its flock
        bounds: Half-extent of the cube positions are drawn from
        rng: Random generator, the only source of randomness in a run
        velocity_range: Range each velocity axis is sampled from before normalizing

    Returns:
        Boid with unit velocity and zeroed acceleration/steering vectors
    """
    velocity = random_unit_velocity(rng, velocity_range)
    position = rng.uniform(-bounds, bounds, size=3)
    return Boid(index=index, position=position, velocity=velocity)
