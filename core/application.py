"""Viewer application: drives the flock one tick per frame and draws it."""

import pygame
from pygame.locals import *
from OpenGL.GL import *
from OpenGL.GLU import *

from config import boids as config
from .camera import Camera
from .input_handler import InputHandler
from rendering import BoundsBox, BoidMesh, Hud
from boids import FlockSettings, create_flock, step_flock
from boids.flock import warmup
from boids.metrics import summarize


class Application:
    """Main application managing the frame loop and rendering."""

    def __init__(self, settings: FlockSettings = None):
        self.settings = settings or FlockSettings.from_config()

        print("[init] Compiling kernels...")
        warmup()
        self.flock = create_flock(self.settings.count, self.settings)
        print(f"[init] {self.flock.num_boids} boids in a cube of half-extent {self.settings.bounds:g}")

        pygame.init()
        pygame.display.set_mode(
            (config.WINDOW["width"], config.WINDOW["height"]),
            DOUBLEBUF | OPENGL
        )
        pygame.display.set_caption(config.WINDOW["title"])

        self.camera = Camera()
        self.input_handler = InputHandler(self.camera)

        self.bounds_box = BoundsBox(self.settings.bounds)
        self.boid_mesh = BoidMesh(self.flock.num_boids)
        self.hud = Hud()

        self.clock = pygame.time.Clock()
        self.running = True
        self.fps = 0.0
        self._stats = summarize(self.flock)

        self._setup_gl()

    def _setup_gl(self):
        glClearColor(*config.COLORS["background"])
        glEnable(GL_DEPTH_TEST)

        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        gluPerspective(
            config.CAMERA["fov"],
            config.WINDOW["width"] / config.WINDOW["height"],
            config.CAMERA["near_clip"],
            config.CAMERA["far_clip"]
        )
        glMatrixMode(GL_MODELVIEW)

    def _handle_events(self):
        for event in pygame.event.get():
            if not self.input_handler.handle_event(event):
                self.running = False

    def _update(self, dt: float):
        self.input_handler.handle_continuous_input(dt)
        self.camera.update(dt)

        # Fixed step: one tick per frame regardless of dt
        ticks = self.input_handler.ticks_to_run()
        for _ in range(ticks):
            step_flock(self.flock)
        if ticks and self.flock.tick % 30 == 0:
            self._stats = summarize(self.flock)

    def _render(self):
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)
        self.camera.apply()

        self.bounds_box.draw()
        self.boid_mesh.update(self.flock)
        self.boid_mesh.draw()

        state = "paused" if self.input_handler.paused else "running"
        screen_size = (config.WINDOW["width"], config.WINDOW["height"])
        self.hud.draw_lines([
            f"Boids: {self.flock.num_boids}  |  Tick: {self.flock.tick}  |  FPS: {self.fps:.0f}  |  {state}",
            f"Order: {self._stats['order']:.3f}  |  Neighbors: {self._stats['mean_neighbors']:.1f}",
        ], screen_size)

        pygame.display.flip()

    def run(self):
        """Main loop; exits on window close or ESC."""
        while self.running:
            dt = self.clock.tick(60) / 1000.0
            self.fps = self.clock.get_fps()

            self._handle_events()
            self._update(dt)
            self._render()

        pygame.quit()
        print(f"[exit] Stopped at tick {self.flock.tick}")
