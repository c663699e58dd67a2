"""Flock storage and the per-tick flocking engine, compiled with Numba."""

import math
from typing import Iterator, List, Optional, Tuple

import numpy as np
from numba import njit, prange

from .boid import Boid, create_boid
from .settings import FlockConfigError, FlockSettings


# ============================================================================
# NUMBA JIT-COMPILED STEERING RULES
# ============================================================================
# No fastmath anywhere below: results must be bit-for-bit reproducible and the
# radius tests must see exactly the distances a plain sqrt produces.

@njit(cache=True)
def _scaled_steer(sx: float, sy: float, sz: float, max_force: float) -> np.ndarray:
    """Rescale a raw steer to length max_force, leaving a zero steer at zero."""
    steer = np.zeros(3)
    mag = math.sqrt(sx * sx + sy * sy + sz * sz)
    if mag > 0.0:
        steer[0] = sx / mag * max_force
        steer[1] = sy / mag * max_force
        steer[2] = sz / mag * max_force
    return steer


@njit(cache=True)
def alignment_steer(
    i: int,
    positions: np.ndarray,
    velocities: np.ndarray,
    radius: float,
    max_force: float
) -> np.ndarray:
    """Steer toward the average velocity of neighbors within radius."""
    px, py, pz = positions[i, 0], positions[i, 1], positions[i, 2]
    avg_x, avg_y, avg_z = 0.0, 0.0, 0.0
    total = 0

    for j in range(positions.shape[0]):
        if j == i:
            continue
        dx = px - positions[j, 0]
        dy = py - positions[j, 1]
        dz = pz - positions[j, 2]
        if math.sqrt(dx * dx + dy * dy + dz * dz) <= radius:
            avg_x += velocities[j, 0]
            avg_y += velocities[j, 1]
            avg_z += velocities[j, 2]
            total += 1

    if total == 0:
        return np.zeros(3)

    return _scaled_steer(
        avg_x / total - velocities[i, 0],
        avg_y / total - velocities[i, 1],
        avg_z / total - velocities[i, 2],
        max_force
    )


@njit(cache=True)
def cohesion_steer(
    i: int,
    positions: np.ndarray,
    velocities: np.ndarray,
    radius: float,
    max_force: float
) -> np.ndarray:
    """Steer toward the average position of neighbors within radius."""
    px, py, pz = positions[i, 0], positions[i, 1], positions[i, 2]
    avg_x, avg_y, avg_z = 0.0, 0.0, 0.0
    total = 0

    for j in range(positions.shape[0]):
        if j == i:
            continue
        dx = px - positions[j, 0]
        dy = py - positions[j, 1]
        dz = pz - positions[j, 2]
        if math.sqrt(dx * dx + dy * dy + dz * dz) <= radius:
            avg_x += positions[j, 0]
            avg_y += positions[j, 1]
            avg_z += positions[j, 2]
            total += 1

    if total == 0:
        return np.zeros(3)

    # Direction to the local center, less the current heading
    return _scaled_steer(
        (avg_x / total - px) - velocities[i, 0],
        (avg_y / total - py) - velocities[i, 1],
        (avg_z / total - pz) - velocities[i, 2],
        max_force
    )


@njit(cache=True)
def separation_steer(
    i: int,
    positions: np.ndarray,
    velocities: np.ndarray,
    radius: float,
    max_force: float
) -> np.ndarray:
    """Steer away from neighbors within radius, each weighted as a unit vector."""
    px, py, pz = positions[i, 0], positions[i, 1], positions[i, 2]
    avg_x, avg_y, avg_z = 0.0, 0.0, 0.0
    total = 0

    for j in range(positions.shape[0]):
        if j == i:
            continue
        dx = px - positions[j, 0]
        dy = py - positions[j, 1]
        dz = pz - positions[j, 2]
        dist = math.sqrt(dx * dx + dy * dy + dz * dz)
        if dist <= radius:
            # A coincident neighbor has no away direction; it still counts
            if dist > 0.0:
                avg_x += dx / dist
                avg_y += dy / dist
                avg_z += dz / dist
            total += 1

    if total == 0:
        return np.zeros(3)

    return _scaled_steer(
        avg_x / total - velocities[i, 0],
        avg_y / total - velocities[i, 1],
        avg_z / total - velocities[i, 2],
        max_force
    )


# ============================================================================
# NUMBA JIT-COMPILED TICK PASSES
# ============================================================================

@njit(parallel=True, cache=True)
def compute_steering_numba(
    positions: np.ndarray,
    velocities: np.ndarray,
    alignment: np.ndarray,
    cohesion: np.ndarray,
    separation: np.ndarray,
    alignment_radius: float,
    cohesion_radius: float,
    separation_radius: float,
    alignment_force: float,
    cohesion_force: float,
    separation_force: float,
    num_boids: int
):
    """Read pass: stage all three steering vectors for every boid.

    positions and velocities are only read here; each iteration writes its
    own rows of the staging buffers, so iterations are independent.
    """
    for i in prange(num_boids):
        alignment[i, :] = alignment_steer(i, positions, velocities, alignment_radius, alignment_force)
        cohesion[i, :] = cohesion_steer(i, positions, velocities, cohesion_radius, cohesion_force)
        separation[i, :] = separation_steer(i, positions, velocities, separation_radius, separation_force)


@njit(parallel=True, cache=True)
def integrate_numba(
    positions: np.ndarray,
    velocities: np.ndarray,
    accelerations: np.ndarray,
    alignment: np.ndarray,
    cohesion: np.ndarray,
    separation: np.ndarray,
    bounds: float,
    num_boids: int
):
    """Write pass: apply the staged steering, renormalize, move and wrap."""
    for i in prange(num_boids):
        ax = alignment[i, 0] + cohesion[i, 0] + separation[i, 0]
        ay = alignment[i, 1] + cohesion[i, 1] + separation[i, 1]
        az = alignment[i, 2] + cohesion[i, 2] + separation[i, 2]
        accelerations[i, 0] = ax
        accelerations[i, 1] = ay
        accelerations[i, 2] = az

        vx = velocities[i, 0] + ax
        vy = velocities[i, 1] + ay
        vz = velocities[i, 2] + az
        speed = math.sqrt(vx * vx + vy * vy + vz * vz)

        # Constant unit speed; a zero sum keeps the previous heading
        if speed > 0.0:
            velocities[i, 0] = vx / speed
            velocities[i, 1] = vy / speed
            velocities[i, 2] = vz / speed

        for dim in range(3):
            pos = positions[i, dim] + velocities[i, dim]
            # Teleport to the opposite face, not a modulo
            if pos > bounds:
                pos = -bounds
            elif pos < -bounds:
                pos = bounds
            positions[i, dim] = pos


# ============================================================================
# FLOCK CLASS
# ============================================================================

class Flock:
    """
    Fixed-size flock stored as contiguous arrays, one row per boid.

    State (positions, velocities, accelerations) and the staged steering
    buffers (alignment, cohesion, separation) are separate arrays, so the
    steering pass can never observe a half-updated tick.
    """

    def __init__(self, positions: np.ndarray, velocities: np.ndarray, settings: FlockSettings):
        positions = np.array(positions, dtype=np.float64, order="C")
        velocities = np.array(velocities, dtype=np.float64, order="C")

        if positions.ndim != 2 or positions.shape[1] != 3:
            raise FlockConfigError(f"positions must have shape (n, 3), got {positions.shape}")
        if velocities.shape != positions.shape:
            raise FlockConfigError(
                f"velocities shape {velocities.shape} does not match positions {positions.shape}"
            )
        if not (np.isfinite(positions).all() and np.isfinite(velocities).all()):
            raise FlockConfigError("positions and velocities must be finite")

        self.settings = settings
        self.num_boids = positions.shape[0]
        self.bounds = np.float64(settings.bounds)
        self.tick = 0

        # Boid state
        self.positions = positions
        self.velocities = velocities
        self.accelerations = np.zeros((self.num_boids, 3), dtype=np.float64)

        # Staged steering, rebuilt from scratch every tick
        self.alignment = np.zeros((self.num_boids, 3), dtype=np.float64)
        self.cohesion = np.zeros((self.num_boids, 3), dtype=np.float64)
        self.separation = np.zeros((self.num_boids, 3), dtype=np.float64)

    @classmethod
    def from_boids(cls, boids: List[Boid], settings: FlockSettings) -> "Flock":
        """Pack fully populated boids into a flock, in list order."""
        if boids:
            positions = np.stack([b.position for b in boids])
            velocities = np.stack([b.velocity for b in boids])
        else:
            positions = np.zeros((0, 3))
            velocities = np.zeros((0, 3))
        return cls(positions, velocities, settings)

    @classmethod
    def from_arrays(
        cls,
        positions,
        velocities,
        settings: Optional[FlockSettings] = None
    ) -> "Flock":
        """Build a flock from an explicit state, e.g. a saved snapshot or a test fixture."""
        if settings is None:
            settings = FlockSettings.from_config()
        return cls(positions, velocities, settings)

    def __len__(self) -> int:
        return self.num_boids

    def _slot(self, index: int) -> int:
        """Normalize a possibly negative index to its row, as list indexing does."""
        if not -self.num_boids <= index < self.num_boids:
            raise IndexError(f"boid index {index} out of range for flock of {self.num_boids}")
        return int(index) % self.num_boids

    def __getitem__(self, index: int) -> Boid:
        """Boid view of one row; its arrays alias the flock's storage."""
        index = self._slot(index)
        return Boid(
            index=index,
            position=self.positions[index],
            velocity=self.velocities[index],
            acceleration=self.accelerations[index],
            alignment=self.alignment[index],
            cohesion=self.cohesion[index],
            separation=self.separation[index],
        )

    def __iter__(self) -> Iterator[Boid]:
        for i in range(self.num_boids):
            yield self[i]

    # ------------------------------------------------------------------
    # Single-rule queries
    # ------------------------------------------------------------------

    def alignment_for(self, index: int, radius: Optional[float] = None) -> np.ndarray:
        radius = self.settings.alignment_radius if radius is None else radius
        return alignment_steer(self._slot(index), self.positions, self.velocities,
                               float(radius), float(self.settings.alignment_force))

    def cohesion_for(self, index: int, radius: Optional[float] = None) -> np.ndarray:
        radius = self.settings.cohesion_radius if radius is None else radius
        return cohesion_steer(self._slot(index), self.positions, self.velocities,
                              float(radius), float(self.settings.cohesion_force))

    def separation_for(self, index: int, radius: Optional[float] = None) -> np.ndarray:
        radius = self.settings.separation_radius if radius is None else radius
        return separation_steer(self._slot(index), self.positions, self.velocities,
                                float(radius), float(self.settings.separation_force))

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def compute_steering(self):
        """Stage alignment, cohesion and separation for every boid."""
        s = self.settings
        compute_steering_numba(
            self.positions,
            self.velocities,
            self.alignment,
            self.cohesion,
            self.separation,
            float(s.alignment_radius),
            float(s.cohesion_radius),
            float(s.separation_radius),
            float(s.alignment_force),
            float(s.cohesion_force),
            float(s.separation_force),
            self.num_boids
        )

    def integrate(self):
        """Apply the staged steering to every boid."""
        integrate_numba(
            self.positions,
            self.velocities,
            self.accelerations,
            self.alignment,
            self.cohesion,
            self.separation,
            float(self.bounds),
            self.num_boids
        )

    def step(self):
        """Advance exactly one tick: full steering pass, then full integration pass."""
        self.compute_steering()
        self.integrate()
        self.tick += 1

    # ------------------------------------------------------------------
    # Read-only views for consumers
    # ------------------------------------------------------------------

    def look_targets(self) -> np.ndarray:
        """Per-boid point to face: position + velocity."""
        return self.positions + self.velocities

    def snapshot(self) -> Tuple[np.ndarray, np.ndarray]:
        """Copies of positions and velocities."""
        return self.positions.copy(), self.velocities.copy()


# ============================================================================
# ENTRY POINTS
# ============================================================================

def create_flock(
    size: int,
    settings: FlockSettings,
    rng: Optional[np.random.Generator] = None
) -> Flock:
    """Create size independent random boids."""
    if rng is None:
        rng = np.random.default_rng(settings.seed)
    boids = [
        create_boid(i, settings.bounds, rng, settings.velocity_range)
        for i in range(size)
    ]
    return Flock.from_boids(boids, settings)


def initialize_flock(size: int, bounds: float, seed: Optional[int] = None, **overrides) -> Flock:
    """
    One-time setup of a random flock.

    Args:
        size: Number of boids (at least 1)
        bounds: Half-extent R of the wrap-around cube
        seed: Seed for initial positions and headings
        **overrides: Any other FlockSettings field (radii, force caps, ...)

    Raises:
        FlockConfigError: If any parameter is invalid
    """
    if size is None or bounds is None:
        raise FlockConfigError("initialize_flock needs both a size and bounds")
    settings = FlockSettings.from_config(count=size, bounds=bounds, seed=seed, **overrides)
    return create_flock(settings.count, settings)


def step_flock(flock: Flock):
    """Advance the flock by one tick in place."""
    flock.step()


def warmup():
    """Compile the kernels on a tiny flock so the first real tick does not stall."""
    settings = FlockSettings()
    flock = Flock(
        np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0]]),
        np.array([[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]]),
        settings
    )
    flock.step()
    flock.alignment_for(0)
    flock.cohesion_for(0)
    flock.separation_for(0)
