"""Destination keys and contents of the objects written back to the store."""

import json

from .schemas import OutputDimensions

META_SUFFIX = ".meta"
META_CONTENT_TYPE = "application/json"


def meta_key(filename: str) -> str:
    return f"{filename}{META_SUFFIX}"


def resized_key(filename: str, dimensions: OutputDimensions, output_format: str) -> str:
    """Key of the resized image, e.g. ``cat.jpg-100x50.jpeg``.

    Identical requests map to identical keys; a rerun overwrites the
    previous output.
    """
    return f"{filename}-{dimensions.width}x{dimensions.height}.{output_format}"


def meta_record(mime_type: str) -> bytes:
    """Sidecar contents, e.g. ``{"mime":"image/jpeg"}``."""
    return json.dumps({"mime": mime_type}, separators=(",", ":")).encode("utf-8")
