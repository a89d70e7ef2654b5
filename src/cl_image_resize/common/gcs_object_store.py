"""Google Cloud Storage implementation of ObjectStore."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import BinaryIO, cast, override

from google.api_core.exceptions import GoogleAPIError, NotFound
from google.auth.exceptions import GoogleAuthError
from google.cloud import storage
from google.cloud.storage.exceptions import DataCorruption, InvalidResponse
from loguru import logger

from .object_store import ObjectNotFoundError, ObjectStore, ObjectStoreError

# Failures surfaced by Blob.open() streams: API errors, resumable upload
# errors, credential refresh errors and transport errors (requests raises
# OSError subclasses)
_BACKEND_ERRORS = (GoogleAPIError, GoogleAuthError, InvalidResponse, DataCorruption, OSError)


class GCSObjectStore(ObjectStore):
    """ObjectStore backed by ``google.cloud.storage``.

    Credentials are resolved by the client library (Application Default
    Credentials) unless a ready client is injected.
    """

    def __init__(self, client: storage.Client | None = None, project: str | None = None):
        self._client: storage.Client = (
            client if client is not None else create_gcs_client(project)
        )

    @override
    @contextmanager
    def open_reader(self, bucket: str, key: str) -> Iterator[BinaryIO]:
        blob = self._client.bucket(bucket).blob(key)
        try:
            # Blob.open() is lazy; reload() surfaces a missing object here
            blob.reload()
            stream = cast(BinaryIO, blob.open("rb"))
        except NotFound as exc:
            raise ObjectNotFoundError(bucket, key) from exc
        except _BACKEND_ERRORS as exc:
            raise ObjectStoreError(bucket, key, f"Failed to open object: {exc}") from exc

        with stream:
            try:
                yield stream
            except NotFound as exc:
                raise ObjectNotFoundError(bucket, key) from exc
            except _BACKEND_ERRORS as exc:
                raise ObjectStoreError(bucket, key, f"Failed to read object: {exc}") from exc

    @override
    @contextmanager
    def new_writer(
        self,
        bucket: str,
        key: str,
        *,
        content_type: str | None = None,
    ) -> Iterator[BinaryIO]:
        blob = self._client.bucket(bucket).blob(key)
        try:
            sink = cast(BinaryIO, blob.open("wb", content_type=content_type))
        except _BACKEND_ERRORS as exc:
            raise ObjectStoreError(bucket, key, f"Failed to open writer: {exc}") from exc

        # The upload is only finalized by close(); an abandoned writer never
        # becomes an object.
        try:
            yield sink
            sink.close()
        except _BACKEND_ERRORS as exc:
            raise ObjectStoreError(bucket, key, f"Failed to write object: {exc}") from exc

        logger.debug(f"Uploaded gs://{bucket}/{key}")

    @override
    def close(self) -> None:
        self._client.close()


def create_gcs_client(project: str | None = None) -> storage.Client:
    """Create a storage client, logging credential problems before re-raising."""
    try:
        return storage.Client(project=project)
    except GoogleAuthError as exc:
        logger.error(f"Could not resolve Google Cloud credentials: {exc}")
        raise
