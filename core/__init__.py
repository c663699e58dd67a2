"""Viewer application: window, orbit camera and input."""

from .camera import Camera
from .input_handler import InputHandler
from .application import Application

__all__ = ["Camera", "InputHandler", "Application"]
