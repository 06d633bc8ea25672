"""Public package exports for Canvas API client."""

from .async_client import AsyncCanvasClient
from .config import CanvasClientConfig
from .core.error_bridge import cancel_on_error, continue_on_error, fatal_error_handler
from .resources.course import CourseService
from .resources.folder import FolderService

__all__ = [
    "AsyncCanvasClient",
    "CanvasClientConfig",
    "CourseService",
    "FolderService",
    "fatal_error_handler",
    "cancel_on_error",
    "continue_on_error",
]
