"""Shared test helpers: msgpack bodies, object access and a tracking store."""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, override

import msgpack

from cl_image_resize.common.object_store import ObjectStore
from cl_image_resize.common.object_store_impl import LocalObjectStore

TEST_BUCKET = "test-bucket"


def pack_request(**fields: object) -> bytes:
    """Encode a request body the way a client would."""
    packed: bytes = msgpack.packb(fields, use_bin_type=True)
    return packed


def unpack_response(body: bytes) -> dict[str, object]:
    payload: dict[str, object] = msgpack.unpackb(body, raw=False)
    return payload


def put_object(store: ObjectStore, bucket: str, key: str, data: bytes) -> None:
    with store.new_writer(bucket, key) as sink:
        _ = sink.write(data)


def get_object(store: ObjectStore, bucket: str, key: str) -> bytes:
    with store.open_reader(bucket, key) as stream:
        return stream.read()


def list_objects(store_dir: Path, bucket: str = TEST_BUCKET) -> list[str]:
    """Keys currently stored in a bucket of a LocalObjectStore."""
    bucket_dir = store_dir / bucket
    if not bucket_dir.exists():
        return []
    return sorted(
        path.relative_to(bucket_dir).as_posix()
        for path in bucket_dir.rglob("*")
        if path.is_file()
    )


class TrackingObjectStore(LocalObjectStore):
    """LocalObjectStore that records opened and released handles."""

    def __init__(self, base_dir: Path):
        super().__init__(base_dir)
        self.readers_opened: int = 0
        self.readers_closed: int = 0
        self.writes: list[str] = []
        self.closed: bool = False

    @property
    def readers_open(self) -> int:
        return self.readers_opened - self.readers_closed

    @override
    @contextmanager
    def open_reader(self, bucket: str, key: str) -> Iterator[BinaryIO]:
        with super().open_reader(bucket, key) as stream:
            self.readers_opened += 1
            try:
                yield stream
            finally:
                self.readers_closed += 1

    @override
    @contextmanager
    def new_writer(
        self,
        bucket: str,
        key: str,
        *,
        content_type: str | None = None,
    ) -> Iterator[BinaryIO]:
        self.writes.append(key)
        with super().new_writer(bucket, key, content_type=content_type) as sink:
            yield sink

    @override
    def close(self) -> None:
        self.closed = True
