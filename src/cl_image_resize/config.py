from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CL_IMAGE_RESIZE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Object store ─────────────────────────────────────────────────────────
    storage_backend: Literal["gcs", "local"] = "gcs"
    local_storage_dir: str = "./object_store"  # only used by the local backend
    gcs_project: str | None = None

    # ── HTTP ─────────────────────────────────────────────────────────────────
    route_path: str = "/Resize"
    host: str = "127.0.0.1"
    port: int = 8080

    # ── Logging ──────────────────────────────────────────────────────────────
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
