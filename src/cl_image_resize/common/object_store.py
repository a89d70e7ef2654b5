"""
ObjectStore Protocol - interface for bucket/key addressed blob storage.

Design goals:
- Scoped acquisition: every reader and writer is a context manager
- Backend exceptions never leak; implementations raise ObjectStoreError
- One store instance per request, released with close()
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import BinaryIO, Protocol, runtime_checkable


class ObjectStoreError(Exception):
    """Base class for storage-related errors."""

    def __init__(self, bucket: str, key: str, reason: str):
        self.bucket: str = bucket
        self.key: str = key
        super().__init__(f"{reason} (bucket='{bucket}', key='{key}')")


class ObjectNotFoundError(ObjectStoreError):
    def __init__(self, bucket: str, key: str):
        super().__init__(bucket, key, "Object not found")


# ---------------------------------------------------------------------------
# Storage Protocol
# ---------------------------------------------------------------------------


@runtime_checkable
class ObjectStore(Protocol):
    """
    Protocol for an object store client.

    Implementations own:
    - connection / credentials
    - translation of backend errors into ObjectStoreError

    Callers interact ONLY via (bucket, key) pairs.
    """

    def open_reader(self, bucket: str, key: str) -> AbstractContextManager[BinaryIO]:
        """
        Open an object for reading.

        The stream is closed when the context exits. Errors raised while
        opening or reading are surfaced as ObjectStoreError.
        """
        ...

    def new_writer(
        self,
        bucket: str,
        key: str,
        *,
        content_type: str | None = None,
    ) -> AbstractContextManager[BinaryIO]:
        """
        Open a sink that creates or overwrites an object.

        The object is committed when the context exits without error.
        Errors raised while writing or committing are surfaced as
        ObjectStoreError.
        """
        ...

    def close(self) -> None:
        """Release the underlying client."""
        ...
