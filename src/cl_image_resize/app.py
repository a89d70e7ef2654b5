"""Application factory - wires settings, object store and the resize route."""

from functools import partial

from fastapi import FastAPI

from .common.object_store import ObjectStore
from .common.object_store_impl import LocalObjectStore
from .config import Settings, get_settings
from .log import configure_logging
from .plugins.image_resize.routes import create_router
from .plugins.image_resize.task import ResizeTask, StoreFactory


def create_object_store(settings: Settings) -> ObjectStore:
    """Create a store client for the configured backend.

    Called once per request; the caller closes the returned store.
    """
    if settings.storage_backend == "local":
        return LocalObjectStore(settings.local_storage_dir)

    # Imported lazily so the local backend works without GCP credentials
    from .common.gcs_object_store import GCSObjectStore

    return GCSObjectStore(project=settings.gcs_project)


def create_app(
    settings: Settings | None = None,
    store_factory: StoreFactory | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Settings to use; defaults to environment based settings
        store_factory: Overrides how a per-request store is created

    Returns:
        FastAPI app exposing the resize endpoint at `settings.route_path`

    Example:
        import uvicorn
        from cl_image_resize import create_app

        uvicorn.run(create_app(), host="0.0.0.0", port=8080)
    """
    settings = settings if settings is not None else get_settings()
    configure_logging(settings.log_level)

    factory: StoreFactory = (
        store_factory if store_factory is not None else partial(create_object_store, settings)
    )

    app = FastAPI(title="cl_image_resize")
    app.include_router(create_router(ResizeTask(factory), settings.route_path))
    return app
