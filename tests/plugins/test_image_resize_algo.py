"""Unit tests for the in-memory decode / resize / encode helpers."""

from collections.abc import Callable
from io import BytesIO

import pytest
from PIL import Image

from cl_image_resize.common.errors import DecodeImageError, EncodeImageError, ResizeImageError
from cl_image_resize.common.schemas import OutputDimensions
from cl_image_resize.plugins.image_resize.algo.image_resize import (
    decode_image,
    encode_image,
    get_pil_format,
    resize_image,
)

ImageFactory = Callable[..., bytes]


# ============================================================================
# Format Helpers
# ============================================================================


def test_get_pil_format_allowed_formats():
    """Test every output format identifier maps to a PIL format."""
    assert get_pil_format("gif") == "GIF"
    assert get_pil_format("ico") == "ICO"
    assert get_pil_format("jpeg") == "JPEG"
    assert get_pil_format("webp") == "WEBP"
    assert get_pil_format("png") == "PNG"


def test_get_pil_format_case_insensitive():
    """Test get_pil_format is case insensitive."""
    assert get_pil_format("JPEG") == "JPEG"
    assert get_pil_format("Png") == "PNG"


# ============================================================================
# Decode
# ============================================================================


def test_decode_image_reads_dimensions(make_image: ImageFactory):
    """Test decoding yields the source size in RGB."""
    img = decode_image(make_image(400, 200, "JPEG"))

    assert img.size == (400, 200)
    assert img.mode == "RGB"


def test_decode_image_keeps_alpha(make_image: ImageFactory):
    """Test RGBA sources stay RGBA."""
    img = decode_image(make_image(64, 32, "PNG", mode="RGBA"))

    assert img.mode == "RGBA"


def test_decode_image_expands_palette(make_image: ImageFactory):
    """Test palette images are expanded so Lanczos applies."""
    img = decode_image(make_image(64, 64, "GIF"))

    assert img.mode in ("RGB", "RGBA")
    assert img.size == (64, 64)


def test_decode_image_rejects_garbage():
    """Test undecodable bytes raise DecodeImageError."""
    with pytest.raises(DecodeImageError):
        _ = decode_image(b"\x89PNG\r\n\x1a\n" + b"\x00" * 1024)


def test_decode_image_rejects_truncated_data(make_image: ImageFactory):
    """Test a truncated file fails to decode."""
    data = make_image(400, 200, "PNG")

    with pytest.raises(DecodeImageError):
        _ = decode_image(data[: len(data) // 2])


# ============================================================================
# Resize
# ============================================================================


def test_resize_image_returns_new_image(make_image: ImageFactory):
    """Test resize produces a new raster of the requested size."""
    src = decode_image(make_image(400, 200))

    resized = resize_image(src, OutputDimensions(width=100, height=50))

    assert resized.size == (100, 50)
    assert src.size == (400, 200)


def test_resize_image_stretches(make_image: ImageFactory):
    """Test both dimensions are honoured even when the ratio changes."""
    src = decode_image(make_image(400, 200))

    resized = resize_image(src, OutputDimensions(width=30, height=90))

    assert resized.size == (30, 90)


@pytest.mark.parametrize(("width", "height"), [(0, 10), (10, 0), (-5, 10)])
def test_resize_image_rejects_non_positive_size(
    make_image: ImageFactory, width: int, height: int
):
    """Test non-positive target sizes raise ResizeImageError."""
    src = decode_image(make_image(40, 20))

    with pytest.raises(ResizeImageError):
        _ = resize_image(src, OutputDimensions(width=width, height=height))


# ============================================================================
# Encode
# ============================================================================


@pytest.mark.parametrize(
    ("output_format", "pil_format"),
    [("jpeg", "JPEG"), ("png", "PNG"), ("gif", "GIF"), ("webp", "WEBP"), ("ico", "ICO")],
)
def test_encode_image_formats(make_image: ImageFactory, output_format: str, pil_format: str):
    """Test encoded bytes decode back in the requested format."""
    img = decode_image(make_image(64, 48))

    data = encode_image(img, output_format)

    with Image.open(BytesIO(data)) as out:
        assert out.format == pil_format
        assert out.size == (64, 48)


def test_encode_image_jpeg_drops_alpha(make_image: ImageFactory):
    """Test RGBA rasters are flattened for JPEG."""
    img = decode_image(make_image(32, 32, "PNG", mode="RGBA"))

    data = encode_image(img, "jpeg")

    with Image.open(BytesIO(data)) as out:
        assert out.mode == "RGB"


def test_encode_image_png_keeps_alpha(make_image: ImageFactory):
    """Test RGBA rasters keep transparency in PNG."""
    img = decode_image(make_image(32, 32, "PNG", mode="RGBA"))

    data = encode_image(img, "png")

    with Image.open(BytesIO(data)) as out:
        assert out.mode == "RGBA"


def test_encode_image_unknown_format_fails(make_image: ImageFactory):
    """Test an unknown format raises EncodeImageError."""
    img = decode_image(make_image(16, 16))

    with pytest.raises(EncodeImageError):
        _ = encode_image(img, "not-a-format")


@pytest.mark.parametrize("size", [(10, 10), (100, 50), (256, 256)])
def test_encode_image_ico_keeps_raster_size(make_image: ImageFactory, size: tuple[int, int]):
    """Test ICO output holds exactly one icon at the raster size."""
    img = decode_image(make_image(size[0], size[1], "PNG", mode="RGBA"))

    data = encode_image(img, "ico")

    with Image.open(BytesIO(data)) as out:
        assert out.format == "ICO"
        assert out.size == size
        assert out.info["sizes"] == {size}


@pytest.mark.parametrize("size", [(300, 300), (257, 10), (10, 257)])
def test_encode_image_ico_rejects_large_raster(make_image: ImageFactory, size: tuple[int, int]):
    """Test rasters wider or taller than 256 pixels cannot be stored as ICO."""
    img = decode_image(make_image(size[0], size[1]))

    with pytest.raises(EncodeImageError):
        _ = encode_image(img, "ico")
