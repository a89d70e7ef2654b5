"""
Resize pipeline errors.

Every failure kind carries a preset HTTP-style status code and a
human-readable message, so stages only raise the right class and the
pipeline turns it into a response without inspecting it further.
"""

from __future__ import annotations

from typing import ClassVar


class ResizeError(Exception):
    """Base class for all pipeline failures."""

    status_code: ClassVar[int] = 500
    message: ClassVar[str] = "Internal error"

    def __init__(self, detail: str | None = None):
        self.detail: str | None = detail
        super().__init__(self.message if detail is None else f"{self.message}: {detail}")

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500


# ---------------------------------------------------------------------------
# Client side (400)
# ---------------------------------------------------------------------------


class DecodeError(ResizeError):
    status_code = 400
    message = "Failed to parse request data"


class ValidationError(ResizeError):
    status_code = 400
    message = "Incorrect filename, bucket, width, or height"


class UnsupportedTypeError(ResizeError):
    status_code = 400
    message = "File type not allowed"

    def __init__(self, mime_type: str):
        self.mime_type: str = mime_type
        super().__init__(mime_type)


# ---------------------------------------------------------------------------
# Server side (500)
# ---------------------------------------------------------------------------


class ClientInitError(ResizeError):
    message = "Failed to create client"


class ReadError(ResizeError):
    message = "Failed to read source file"


class SniffReadError(ReadError):
    """The sniffing prefix could not be read in full."""

    message = "Failed to determine MIME type"


class DecodeImageError(ResizeError):
    message = "Failed to decode source image"


class ResizeImageError(ResizeError):
    message = "Failed to resize image"


class EncodeImageError(ResizeError):
    message = "Failed to encode image"


class WriteError(ResizeError):
    message = "Failed to write resized image"


class MetaWriteError(WriteError):
    message = "Failed to write .meta content"
