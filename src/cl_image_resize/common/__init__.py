"""Common module - protocols, schemas, errors and the wire codec."""

from .errors import ResizeError
from .object_store import ObjectStore, ObjectStoreError
from .schemas import ResizeRequest, ResizeResponse

__all__ = [
    "ObjectStore",
    "ObjectStoreError",
    "ResizeError",
    "ResizeRequest",
    "ResizeResponse",
]
