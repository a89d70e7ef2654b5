"""Image resize plugin."""

from .routes import create_router
from .task import ResizeTask

__all__ = ["ResizeTask", "create_router"]
