"""
3D Boids Simulation
===================

Flocking from three local rules (alignment, cohesion, separation) inside a
wrap-around cube, with an orbit camera.

Controls:
    - W/S: Rotate camera up/down
    - A/D: Rotate camera left/right
    - Q/E: Zoom in/out
    - Mouse drag: Rotate camera
    - Mouse wheel: Zoom
    - Space: Pause/resume
    - . (period): Single tick while paused
    - ESC: Quit
"""

from core import Application


def main():
    app = Application()
    app.run()


if __name__ == "__main__":
    main()
