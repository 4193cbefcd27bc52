"""Terminal host for the developer console."""

from .app import app
from .render import Renderer

__all__ = [
    "Renderer",
    "app",
]
