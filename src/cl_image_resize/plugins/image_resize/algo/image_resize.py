"""Pure image decode / resize / encode logic (in-memory)."""

from collections.abc import Mapping
from io import BytesIO
from types import MappingProxyType
from typing import Final

from PIL import Image, UnidentifiedImageError

from ....common.errors import DecodeImageError, EncodeImageError, ResizeImageError
from ....common.schemas import OutputDimensions

RESAMPLING_FILTER: Final = Image.Resampling.LANCZOS
JPEG_QUALITY: Final[int] = 95
ICO_MAX_SIZE: Final[int] = 256

PIL_FORMATS: Final[Mapping[str, str]] = MappingProxyType(
    {
        "gif": "GIF",
        "ico": "ICO",
        "jpeg": "JPEG",
        "jpg": "JPEG",
        "webp": "WEBP",
        "png": "PNG",
    }
)


def get_pil_format(format_str: str) -> str:
    """Convert an output format identifier to the PIL format name."""
    return PIL_FORMATS.get(format_str.lower(), format_str.upper())


def decode_image(content: bytes) -> Image.Image:
    """
    Decode image bytes into an RGB or RGBA raster.

    Only the first frame of animated images is decoded. Palette and
    greyscale images are expanded so that resampling is not limited to
    nearest-neighbour.

    Args:
        content: Full encoded image

    Returns:
        A fully loaded image that does not reference `content`

    Raises:
        DecodeImageError: If Pillow cannot identify or decode the data
    """
    try:
        with Image.open(BytesIO(content)) as img:
            img.load()
            has_alpha = img.mode in ("RGBA", "LA", "PA") or "transparency" in img.info
            mode = "RGBA" if has_alpha else "RGB"
            return img.convert(mode) if img.mode != mode else img.copy()
    except (
        UnidentifiedImageError,
        OSError,
        SyntaxError,
        ValueError,
        Image.DecompressionBombError,
    ) as exc:
        raise DecodeImageError(str(exc)) from exc


def resize_image(image: Image.Image, dimensions: OutputDimensions) -> Image.Image:
    """Return a new image resized with the Lanczos filter."""
    if dimensions.width <= 0 or dimensions.height <= 0:
        raise ResizeImageError(f"invalid target size {dimensions.width}x{dimensions.height}")
    return image.resize((dimensions.width, dimensions.height), RESAMPLING_FILTER)


def encode_image(image: Image.Image, output_format: str) -> bytes:
    """
    Encode an image to `output_format` (gif, ico, jpeg, webp or png).

    ICO output holds a single icon at the raster size, so neither side may
    exceed 256 pixels.

    Raises:
        EncodeImageError: If Pillow cannot write the image in that format
    """
    fmt = output_format.lower()

    # JPEG does not support alpha channel
    if fmt in ("jpg", "jpeg") and image.mode != "RGB":
        image = image.convert("RGB")

    save_kwargs: dict[str, object] = {}
    if fmt in ("jpg", "jpeg"):
        save_kwargs["quality"] = JPEG_QUALITY
    elif fmt == "ico":
        # Without explicit sizes Pillow only writes its stock square icons
        if image.width > ICO_MAX_SIZE or image.height > ICO_MAX_SIZE:
            raise EncodeImageError(
                f"ICO sides are limited to {ICO_MAX_SIZE}px, got {image.width}x{image.height}"
            )
        save_kwargs["sizes"] = [image.size]

    buffer = BytesIO()
    try:
        image.save(buffer, format=get_pil_format(fmt), **save_kwargs)
    except (OSError, ValueError, KeyError) as exc:
        raise EncodeImageError(str(exc)) from exc

    return buffer.getvalue()
