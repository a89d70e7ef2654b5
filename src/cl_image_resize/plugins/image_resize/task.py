"""Image resize task implementation."""

from collections.abc import Callable, Iterator
from contextlib import closing, contextmanager

from loguru import logger

from ...common.artifacts import META_CONTENT_TYPE, meta_key, meta_record, resized_key
from ...common.errors import (
    ClientInitError,
    MetaWriteError,
    ReadError,
    ResizeError,
    UnsupportedTypeError,
    WriteError,
)
from ...common.object_store import ObjectStore, ObjectStoreError
from ...common.schemas import ResizeRequest, ResizeResponse
from ...common.wire import decode_request, validate_request
from ...utils.media_types import read_prefix, resolve_media_type
from .algo.dimensions import calculate_new_dimensions
from .algo.image_resize import decode_image, encode_image, resize_image

StoreFactory = Callable[[], ObjectStore]

THUMBNAIL_MESSAGE = "Can't resize a thumbnail"


class ResizeTask:
    """Runs the resize pipeline for one request body.

    The task keeps no per-request state: a store client is created for each
    call and released before it returns, so one instance can serve
    concurrent requests.

    The resized image is encoded in memory before anything is written, so
    a decode, resize or encode failure leaves the bucket untouched. Only a
    failed image write can leave the `.meta` object behind.

    Example:
        task = ResizeTask(lambda: LocalObjectStore("./object_store"))
        response = task.execute(msgpack.packb({
            "filename": "cat.jpg", "bucket": "photos", "width": 100, "height": 0,
        }))
    """

    def __init__(self, store_factory: StoreFactory):
        self._store_factory: StoreFactory = store_factory

    def execute(self, body: bytes) -> ResizeResponse:
        """Run the pipeline and convert any failure into a response.

        Args:
            body: msgpack encoded request

        Returns:
            Exactly one ResizeResponse, never raises for pipeline failures
        """
        try:
            return self.run(body)

        except ResizeError as exc:
            if exc.is_client_error:
                logger.warning(f"Rejected resize request: {exc}")
            else:
                logger.error(f"Resize failed: {exc}")
            return ResizeResponse.from_error(exc)

        except Exception:
            logger.exception("Unexpected error while resizing")
            return ResizeResponse.from_error(ResizeError())

    def run(self, body: bytes) -> ResizeResponse:
        """Run the pipeline, raising ResizeError on the first failing stage."""
        request = validate_request(decode_request(body))

        if request.is_thumbnail:
            logger.info(f"Skipping thumbnail {request.bucket}/{request.filename}")
            return ResizeResponse(message=THUMBNAIL_MESSAGE, status_code=200)

        logger.info(
            f"Resizing {request.bucket}/{request.filename} "
            f"to {request.width}x{request.height}"
        )

        with self._connect() as store:
            # Sniff the prefix, then reopen for the full body
            prefix = self._read_prefix(store, request)
            decision = resolve_media_type(prefix)
            output_format = decision.output_format
            if output_format is None:
                raise UnsupportedTypeError(decision.sniffed_type)

            content = self._read_all(store, request)

            image = decode_image(content)
            dimensions = calculate_new_dimensions(
                image.width, image.height, request.width, request.height
            )
            encoded = encode_image(resize_image(image, dimensions), output_format)

            # Meta first; it is left in place if the image write fails
            self._write(
                store,
                request.bucket,
                meta_key(request.filename),
                meta_record(decision.sniffed_type),
                content_type=META_CONTENT_TYPE,
                error=MetaWriteError,
            )
            destination = resized_key(request.filename, dimensions, output_format)
            self._write(
                store,
                request.bucket,
                destination,
                encoded,
                content_type=decision.sniffed_type,
                error=WriteError,
            )

        logger.info(f"Wrote {request.bucket}/{destination} ({len(encoded)} bytes)")
        return ResizeResponse.ok(dimensions)

    # ------------------------------------------------------------------
    # Store access
    # ------------------------------------------------------------------

    @contextmanager
    def _connect(self) -> Iterator[ObjectStore]:
        try:
            store = self._store_factory()
        except Exception as exc:
            raise ClientInitError(str(exc)) from exc

        with closing(store):
            yield store

    def _read_prefix(self, store: ObjectStore, request: ResizeRequest) -> bytes:
        try:
            with store.open_reader(request.bucket, request.filename) as stream:
                return read_prefix(stream)
        except ObjectStoreError as exc:
            raise ReadError(str(exc)) from exc

    def _read_all(self, store: ObjectStore, request: ResizeRequest) -> bytes:
        try:
            with store.open_reader(request.bucket, request.filename) as stream:
                return stream.read()
        except ObjectStoreError as exc:
            raise ReadError(str(exc)) from exc

    def _write(
        self,
        store: ObjectStore,
        bucket: str,
        key: str,
        data: bytes,
        *,
        content_type: str,
        error: type[WriteError],
    ) -> None:
        try:
            with store.new_writer(bucket, key, content_type=content_type) as sink:
                _ = sink.write(data)
        except ObjectStoreError as exc:
            raise error(str(exc)) from exc
