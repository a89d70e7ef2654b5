"""Test configuration and fixtures for cl_image_resize.

This module provides:
- Sample image generation (deterministic noise, always > 512 bytes)
- Local object store fixtures backed by tmp_path
- Resize task and API client fixtures
"""

import random
from collections.abc import Callable
from io import BytesIO
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from cl_image_resize.app import create_app
from cl_image_resize.config import Settings
from cl_image_resize.plugins.image_resize.task import ResizeTask
from tests.helpers import TrackingObjectStore

ImageFactory = Callable[..., bytes]


# ============================================================================
# Sample Images
# ============================================================================


@pytest.fixture
def make_image() -> ImageFactory:
    """Return a factory producing encoded noise images.

    Noise keeps every encoding well above the 512-byte sniffing prefix.
    """

    def _make(
        width: int = 400,
        height: int = 200,
        format: str = "JPEG",
        mode: str = "RGB",
        seed: int = 0,
    ) -> bytes:
        rng = random.Random(seed)
        img = Image.frombytes(mode, (width, height), rng.randbytes(width * height * len(mode)))
        buffer = BytesIO()
        img.save(buffer, format=format)
        return buffer.getvalue()

    return _make


# ============================================================================
# Object Store Fixtures
# ============================================================================


@pytest.fixture
def store_dir(tmp_path: Path) -> Path:
    path = tmp_path / "object_store"
    path.mkdir()
    return path


@pytest.fixture
def object_store(store_dir: Path) -> TrackingObjectStore:
    """Provide a local object store rooted in tmp_path."""
    return TrackingObjectStore(store_dir)


@pytest.fixture
def resize_task(object_store: TrackingObjectStore) -> ResizeTask:
    return ResizeTask(lambda: object_store)


# ============================================================================
# API Fixtures
# ============================================================================


@pytest.fixture
def api_client(object_store: TrackingObjectStore, store_dir: Path) -> TestClient:
    """Provide FastAPI TestClient wired to the local object store."""
    settings = Settings(storage_backend="local", local_storage_dir=str(store_dir))
    app = create_app(settings, store_factory=lambda: object_store)
    return TestClient(app)
