"""Input handling for camera control and simulation playback."""

import pygame
from pygame.locals import *
from config import boids as config

from .camera import Camera


class InputHandler:
    """
    Translates pygame input into camera moves and playback commands.

    Space toggles pause, '.' advances a single tick while paused.
    """

    def __init__(self, camera: Camera):
        self.camera = camera
        self.mouse_dragging = False
        self.last_mouse_pos = (0, 0)
        self.paused = False
        self.pending_steps = 0

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Handle a single pygame event.
        Returns False if the application should quit, True otherwise.
        """
        if event.type == QUIT:
            return False
        elif event.type == KEYDOWN:
            if event.key == K_ESCAPE:
                return False
            if event.key == K_SPACE:
                self.paused = not self.paused
            elif event.key == K_PERIOD and self.paused:
                self.pending_steps += 1
        elif event.type == MOUSEBUTTONDOWN and event.button == 1:
            self.mouse_dragging = True
            self.last_mouse_pos = pygame.mouse.get_pos()
        elif event.type == MOUSEBUTTONUP and event.button == 1:
            self.mouse_dragging = False
        elif event.type == MOUSEWHEEL:
            self.camera.zoom_smooth(-event.y * config.CAMERA["keyboard_zoom_speed"] * 0.25)

        return True

    def ticks_to_run(self) -> int:
        """Ticks the simulation should advance this frame."""
        if not self.paused:
            return 1
        steps, self.pending_steps = self.pending_steps, 0
        return steps

    def handle_continuous_input(self, dt: float):
        """Held keys and mouse drags, polled once per frame."""
        keys = pygame.key.get_pressed()
        rot = config.CAMERA["keyboard_rotate_speed"] * dt
        zoom = config.CAMERA["keyboard_zoom_speed"] * dt

        d_theta = (keys[K_d] - keys[K_a]) * rot
        d_phi = (keys[K_w] - keys[K_s]) * rot
        if d_theta or d_phi:
            self.camera.rotate(d_theta, d_phi)

        if keys[K_q]:
            self.camera.zoom(-zoom)
        if keys[K_e]:
            self.camera.zoom(zoom)

        if self.mouse_dragging:
            x, y = pygame.mouse.get_pos()
            sensitivity = config.CAMERA["mouse_sensitivity"]
            self.camera.rotate(
                (x - self.last_mouse_pos[0]) * sensitivity,
                -(y - self.last_mouse_pos[1]) * sensitivity
            )
            self.last_mouse_pos = (x, y)
