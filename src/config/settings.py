from functools import lru_cache
from typing import List, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Centralized configuration loaded from environment variables or .env."""

    # Azure App Service exposes mounted storage as WEBSITE_MOUNT_<mount name>
    upload_root: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("UPLOAD_ROOT", "WEBSITE_MOUNT_userupload-files"),
    )
    storage_backend: str = Field("local", alias="STORAGE_BACKEND")

    azure_storage_connection_string: Optional[str] = Field(None, alias="AZURE_STORAGE_CONNECTION_STRING")
    upload_container: str = Field("userupload-files", alias="UPLOAD_CONTAINER")
    upload_prefix: str = Field("", alias="UPLOAD_PREFIX")

    copy_chunk_size: int = Field(1024 * 1024, alias="COPY_CHUNK_SIZE", gt=0)
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://localhost:3001",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:3001",
        ],
        alias="CORS_ORIGINS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()  # type: ignore[arg-type]
