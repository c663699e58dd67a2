"""Boid cones built with Numba and streamed to the GPU through VBOs."""

import math
import numpy as np
from numba import njit, prange
from OpenGL.GL import *
from OpenGL.arrays import vbo

from config import boids as config


# 3 side faces + 1 base face, 3 vertices each
VERTS_PER_BOID = 12


@njit(parallel=True, cache=True)
def build_cone_vertices(
    positions: np.ndarray,
    look_targets: np.ndarray,
    vertices: np.ndarray,
    cone_length: float,
    cone_radius: float,
    num_boids: int
):
    """Three-sided cone centered on each boid, tip pointing at its look target."""
    half = cone_length * 0.5

    for i in prange(num_boids):
        px, py, pz = positions[i, 0], positions[i, 1], positions[i, 2]

        fx = look_targets[i, 0] - px
        fy = look_targets[i, 1] - py
        fz = look_targets[i, 2] - pz
        f_len = math.sqrt(fx * fx + fy * fy + fz * fz)
        if f_len < 1e-9:
            fx, fy, fz = 0.0, 0.0, 1.0
        else:
            fx /= f_len
            fy /= f_len
            fz /= f_len

        # Right = forward x world_up, falling back to world_right near vertical
        rx, ry, rz = -fz, 0.0, fx
        r_len = math.sqrt(rx * rx + rz * rz)
        if r_len < 0.1:
            rx, ry, rz = 0.0, fz, -fy
            r_len = math.sqrt(ry * ry + rz * rz)
        rx /= r_len
        ry /= r_len
        rz /= r_len

        # Up = right x forward
        ux = ry * fz - rz * fy
        uy = rz * fx - rx * fz
        uz = rx * fy - ry * fx

        tip = (px + fx * half, py + fy * half, pz + fz * half)
        bx, by, bz = px - fx * half, py - fy * half, pz - fz * half

        base = i * VERTS_PER_BOID
        rim = np.empty((3, 3))
        for k in range(3):
            angle = 2.0 * math.pi * k / 3.0
            c = math.cos(angle) * cone_radius
            s = math.sin(angle) * cone_radius
            rim[k, 0] = bx + rx * c + ux * s
            rim[k, 1] = by + ry * c + uy * s
            rim[k, 2] = bz + rz * c + uz * s

        for k in range(3):
            v = base + k * 3
            k2 = (k + 1) % 3
            for d in range(3):
                vertices[v, d] = tip[d]
                vertices[v + 1, d] = rim[k, d]
                vertices[v + 2, d] = rim[k2, d]

        for d in range(3):
            vertices[base + 9, d] = rim[0, d]
            vertices[base + 10, d] = rim[2, d]
            vertices[base + 11, d] = rim[1, d]


class BoidMesh:
    """Renders every boid in a flock as a white cone."""

    def __init__(self, num_boids: int):
        self.num_boids = num_boids
        self.cone_length = float(config.BOIDS["cone_length"])
        self.cone_radius = float(config.BOIDS["cone_radius"])
        self.color = config.COLORS["boid"]

        self._vertices = np.zeros((num_boids * VERTS_PER_BOID, 3), dtype=np.float32)
        self._vbo = None

    def _init_vbo(self):
        self._vbo = vbo.VBO(self._vertices, usage=GL_DYNAMIC_DRAW)

    def update(self, flock):
        """Rebuild vertices from the flock's positions and look targets."""
        build_cone_vertices(
            flock.positions,
            flock.look_targets(),
            self._vertices,
            self.cone_length,
            self.cone_radius,
            flock.num_boids
        )

    def draw(self):
        if self.num_boids == 0:
            return
        if self._vbo is None:
            self._init_vbo()

        total_verts = self.num_boids * VERTS_PER_BOID
        self._vbo.set_array(self._vertices)
        self._vbo.bind()
        glEnableClientState(GL_VERTEX_ARRAY)
        glVertexPointer(3, GL_FLOAT, 0, None)

        glColor3f(*self.color)
        glDrawArrays(GL_TRIANGLES, 0, total_verts)

        self._vbo.unbind()
        glDisableClientState(GL_VERTEX_ARRAY)
