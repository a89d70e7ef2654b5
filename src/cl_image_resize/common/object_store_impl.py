from __future__ import annotations

import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from os import PathLike
from pathlib import Path
from typing import BinaryIO, override

from loguru import logger

from .object_store import ObjectNotFoundError, ObjectStore, ObjectStoreError


class LocalObjectStore(ObjectStore):
    """
    Local filesystem implementation of ObjectStore.

    Layout:
        base_dir/
            <bucket>/
                <key>
    """

    _PART_SUFFIX: str = ".part"

    def __init__(self, base_dir: str | PathLike[str]):
        self._base_dir: Path = Path(base_dir).expanduser().resolve()
        self._base_dir.mkdir(parents=True, exist_ok=True)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _safe_path(self, bucket: str, key: str) -> Path:
        """
        Resolve and validate a bucket/key pair.
        Prevents path traversal.
        """
        bucket_dir = (self._base_dir / bucket).resolve()
        if bucket_dir.parent != self._base_dir:
            raise ObjectStoreError(bucket, key, "Invalid bucket name (path traversal detected)")

        resolved = (bucket_dir / key).resolve()
        if bucket_dir not in resolved.parents:
            raise ObjectStoreError(bucket, key, "Invalid key (path traversal detected)")

        return resolved

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    @override
    @contextmanager
    def open_reader(self, bucket: str, key: str) -> Iterator[BinaryIO]:
        path = self._safe_path(bucket, key)
        try:
            stream = open(path, "rb")
        except FileNotFoundError as exc:
            raise ObjectNotFoundError(bucket, key) from exc
        except OSError as exc:
            raise ObjectStoreError(bucket, key, f"Failed to open object: {exc}") from exc

        with stream:
            try:
                yield stream
            except OSError as exc:
                raise ObjectStoreError(bucket, key, f"Failed to read object: {exc}") from exc

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    @override
    @contextmanager
    def new_writer(
        self,
        bucket: str,
        key: str,
        *,
        content_type: str | None = None,
    ) -> Iterator[BinaryIO]:
        # content_type has no filesystem counterpart
        dst = self._safe_path(bucket, key)

        try:
            dst.parent.mkdir(parents=True, exist_ok=True)
            # One temp file per writer; concurrent writers of a key never share it
            fd, part_name = tempfile.mkstemp(
                dir=dst.parent, prefix=f"{dst.name}.", suffix=self._PART_SUFFIX
            )
        except OSError as exc:
            raise ObjectStoreError(bucket, key, f"Failed to open writer: {exc}") from exc

        part = Path(part_name)
        try:
            with os.fdopen(fd, "wb") as sink:
                yield sink
            os.replace(part, dst)
        except OSError as exc:
            part.unlink(missing_ok=True)
            raise ObjectStoreError(bucket, key, f"Failed to write object: {exc}") from exc
        except BaseException:
            part.unlink(missing_ok=True)
            raise

        logger.debug(f"Stored {dst}")

    @override
    def close(self) -> None:
        pass

    def resolve_path(self, bucket: str, key: str) -> Path:
        """Absolute filesystem path of an object (it may not exist yet)."""
        return self._safe_path(bucket, key)
