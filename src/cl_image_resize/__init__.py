"""cl_image_resize - object store backed image resize service."""

from .app import create_app, create_object_store
from .common.errors import ResizeError
from .common.object_store import ObjectNotFoundError, ObjectStore, ObjectStoreError
from .common.object_store_impl import LocalObjectStore
from .common.schemas import MediaTypeDecision, OutputDimensions, ResizeRequest, ResizeResponse
from .config import Settings, get_settings
from .plugins.image_resize.task import ResizeTask

__version__ = "0.1.0"

__all__ = [
    "LocalObjectStore",
    "MediaTypeDecision",
    "ObjectNotFoundError",
    "ObjectStore",
    "ObjectStoreError",
    "OutputDimensions",
    "ResizeError",
    "ResizeRequest",
    "ResizeResponse",
    "ResizeTask",
    "Settings",
    "__version__",
    "create_app",
    "create_object_store",
    "get_settings",
]
