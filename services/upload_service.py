"""Upload business logic service."""
import asyncio
from functools import lru_cache
from typing import List, Sequence

from loguru import logger

from src.config.settings import Settings, get_settings
from src.ingestion.models import IngestionResult, UploadItem
from src.ingestion.service import IngestionService, Storage
from src.storage.blob_root import BlobStorageRoot
from src.storage.root import StorageRoot


def build_storage(settings: Settings) -> Storage:
    """
    Create the storage root selected by STORAGE_BACKEND.

    Args:
        settings: Application settings

    Returns:
        StorageRoot for "local", BlobStorageRoot for "blob"
    """
    backend = settings.storage_backend.lower()
    if backend == "local":
        return StorageRoot(settings.upload_root)
    if backend == "blob":
        return BlobStorageRoot(
            container=settings.upload_container,
            connection_string=settings.azure_storage_connection_string,
            prefix=settings.upload_prefix,
        )
    raise ValueError(f"Unknown STORAGE_BACKEND '{settings.storage_backend}' (expected 'local' or 'blob')")


@lru_cache(maxsize=1)
def get_storage() -> Storage:
    """Return the process-wide storage root."""
    storage = build_storage(get_settings())
    logger.info("Using upload storage {}", storage)
    return storage


def get_ingestion_service() -> IngestionService:
    return IngestionService(get_storage(), chunk_size=get_settings().copy_chunk_size)


async def ingest_uploads(service: IngestionService, items: Sequence[UploadItem]) -> IngestionResult:
    """
    Run a batch upload off the event loop.

    Writing is blocking file I/O, so it runs in the default thread pool.
    """
    loop = asyncio.get_event_loop()
    return await loop.run_in_executor(None, service.ingest, list(items))


async def list_uploads(storage: Storage) -> List[str]:
    """List stored files, creating the storage root if needed."""
    loop = asyncio.get_event_loop()

    def _list() -> List[str]:
        storage.ensure_exists()
        return storage.list_files()

    return await loop.run_in_executor(None, _list)
