"""Summary statistics for watching a flock organize."""

import math
import numpy as np
from numba import njit, prange


def order_parameter(velocities: np.ndarray) -> float:
    """Magnitude of the mean heading: 0 for random headings, 1 when all agree."""
    if len(velocities) == 0:
        return 0.0
    speeds = np.linalg.norm(velocities, axis=1, keepdims=True)
    headings = np.divide(velocities, speeds, out=np.zeros_like(velocities), where=speeds > 0)
    return float(np.linalg.norm(headings.mean(axis=0)))


def centroid(positions: np.ndarray) -> np.ndarray:
    if len(positions) == 0:
        return np.zeros(3)
    return positions.mean(axis=0)


def spread(positions: np.ndarray) -> float:
    """Root-mean-square distance from the centroid."""
    if len(positions) == 0:
        return 0.0
    offsets = positions - centroid(positions)
    return float(np.sqrt((offsets ** 2).sum(axis=1).mean()))


@njit(parallel=True, cache=True)
def _count_neighbors(positions: np.ndarray, radius: float, counts: np.ndarray, num_boids: int):
    for i in prange(num_boids):
        total = 0
        for j in range(num_boids):
            if j == i:
                continue
            dx = positions[i, 0] - positions[j, 0]
            dy = positions[i, 1] - positions[j, 1]
            dz = positions[i, 2] - positions[j, 2]
            if math.sqrt(dx * dx + dy * dy + dz * dz) <= radius:
                total += 1
        counts[i] = total


def neighbor_counts(positions: np.ndarray, radius: float) -> np.ndarray:
    """Number of other boids within radius of each boid (inclusive)."""
    positions = np.ascontiguousarray(positions, dtype=np.float64)
    counts = np.zeros(len(positions), dtype=np.int64)
    _count_neighbors(positions, float(radius), counts, len(positions))
    return counts


def summarize(flock) -> dict:
    """Snapshot of the flock's organization for the HUD and the headless runner."""
    counts = neighbor_counts(flock.positions, flock.settings.alignment_radius)
    return {
        "tick": flock.tick,
        "count": flock.num_boids,
        "order": order_parameter(flock.velocities),
        "spread": spread(flock.positions),
        "mean_neighbors": float(counts.mean()) if len(counts) else 0.0,
    }
