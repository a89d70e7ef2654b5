"""MessagePack codec for request and response bodies."""

from typing import Final

import msgpack
from pydantic import ValidationError as PydanticValidationError

from .errors import DecodeError, ValidationError
from .schemas import ResizeRequest, ResizeResponse

MSGPACK_MEDIA_TYPE: Final[str] = "application/msgpack"


def decode_request(body: bytes) -> ResizeRequest:
    """
    Decode a msgpack body into a ResizeRequest.

    Args:
        body: Raw request body

    Returns:
        The decoded request, not yet validated

    Raises:
        DecodeError: If the body is not a msgpack map of the expected field types
    """
    try:
        payload = msgpack.unpackb(body, raw=False)
    except (ValueError, TypeError, msgpack.UnpackException) as exc:
        raise DecodeError(str(exc)) from exc

    if not isinstance(payload, dict):
        raise DecodeError(f"expected a map, got {type(payload).__name__}")

    try:
        return ResizeRequest.model_validate(payload)
    except PydanticValidationError as exc:
        raise DecodeError(str(exc)) from exc


def validate_request(request: ResizeRequest) -> ResizeRequest:
    """Reject requests without a source or without any target dimension."""
    if not request.filename or not request.bucket:
        raise ValidationError("filename and bucket are required")
    if request.width < 0 or request.height < 0:
        raise ValidationError("width and height must not be negative")
    if request.width == 0 and request.height == 0:
        raise ValidationError("width or height is required")
    return request


def encode_response(response: ResizeResponse) -> bytes:
    packed: bytes = msgpack.packb(response.model_dump(), use_bin_type=True)
    return packed
