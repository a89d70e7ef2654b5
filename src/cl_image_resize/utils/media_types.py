from collections.abc import Mapping
from types import MappingProxyType
from typing import BinaryIO, Final

import magic

from ..common.errors import SniffReadError
from ..common.schemas import MediaTypeDecision

SNIFF_LENGTH: Final[int] = 512
DEFAULT_MIME_TYPE: Final[str] = "application/octet-stream"

# media type -> output format identifier
ALLOWED_MIME_TYPES: Final[Mapping[str, str]] = MappingProxyType(
    {
        "image/gif": "gif",
        "image/x-icon": "ico",
        "image/jpeg": "jpeg",
        "image/webp": "webp",
        "image/png": "png",
    }
)

# libmagic spellings that differ from the allow-list
_MIME_ALIASES: Final[Mapping[str, str]] = MappingProxyType(
    {
        "image/vnd.microsoft.icon": "image/x-icon",
        "image/pjpeg": "image/jpeg",
    }
)


def read_prefix(stream: BinaryIO, length: int = SNIFF_LENGTH) -> bytes:
    """
    Read exactly `length` bytes from the start of a stream.

    Raises:
        SniffReadError: If the stream ends before `length` bytes
    """
    prefix = b""
    while len(prefix) < length:
        chunk = stream.read(length - len(prefix))
        if not chunk:
            raise SniffReadError(f"short read: {len(prefix)} of {length} bytes")
        prefix += chunk
    return prefix


def sniff_mime_type(prefix: bytes) -> str:
    mime_type = magic.from_buffer(prefix, mime=True)
    if not mime_type:
        mime_type = DEFAULT_MIME_TYPE
    return _MIME_ALIASES.get(mime_type, mime_type)


def resolve_media_type(prefix: bytes) -> MediaTypeDecision:
    sniffed_type = sniff_mime_type(prefix)
    return MediaTypeDecision(
        sniffed_type=sniffed_type,
        output_format=ALLOWED_MIME_TYPES.get(sniffed_type),
    )
