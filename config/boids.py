"""Configuration for 3D Boids flocking simulation."""

WINDOW = {
    "width": 1280,
    "height": 720,
    "title": "3D Boids"
}

CAMERA = {
    "fov": 75.0,
    "near_clip": 0.1,
    "far_clip": 100000.0,
    "initial_radius": 1300.0,  # Whole cube in view
    "initial_theta": 90.0,
    "initial_phi": 0.0,
    "min_radius": 50.0,
    "max_radius": 5000.0,
    "min_phi": -89.0,
    "max_phi": 89.0,
    "keyboard_rotate_speed": 60.0,
    "keyboard_zoom_speed": 400.0,
    "mouse_sensitivity": 0.3
}

GRID = {
    "color": (1.0, 1.0, 0.0),
    "axes_length": 20.0
}

BOIDS = {
    "count": 500,
    "bounds": 500.0,           # Half-extent of the wrap-around cube
    "velocity_range": 5.0,     # Initial velocity axes sampled in [-range, range]
    "seed": None,              # None -> fresh entropy each run

    # Neighbor radii
    "alignment_radius": 50.0,
    "cohesion_radius": 30.0,
    "separation_radius": 30.0,

    # Steering force caps
    "alignment_force": 0.02,
    "cohesion_force": 0.03,
    "separation_force": 0.08,

    # Cone mesh
    "cone_length": 15.0,
    "cone_radius": 5.0,
}

COLORS = {
    "background": (0.53, 0.81, 0.92, 1.0),  # Sky blue
    "boid": (1.0, 1.0, 1.0),
    "text": (0.1, 0.1, 0.1)
}
