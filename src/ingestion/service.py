from __future__ import annotations

from typing import List, Optional, Sequence, Union

from loguru import logger

from src.ingestion.models import FAILED, SKIPPED, STORED, IngestionResult, ItemOutcome, UploadItem
from src.storage.blob_root import BlobStorageRoot
from src.storage.errors import StorageError
from src.storage.naming import sanitize_name
from src.storage.root import DEFAULT_CHUNK_SIZE, StorageRoot

NO_FILES_MESSAGE = "Please select at least one file to upload."
ERROR_MESSAGE = "An error occurred while uploading files."

Storage = Union[StorageRoot, BlobStorageRoot]


def success_message(count: int) -> str:
    return f"Successfully uploaded {count} file(s)."


class IngestionService:
    """
    Stores a batch of uploaded files under a storage root.

    - Items are written one at a time in input order.
    - Empty items (size 0) are skipped without touching storage.
    - The first failing item stops the batch; files already written stay.
    - Never raises: every failure becomes an unsuccessful IngestionResult,
      with the details going to the log only.
    """

    def __init__(self, storage: Storage, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        self.storage = storage
        self.chunk_size = chunk_size

    def ingest(self, items: Optional[Sequence[UploadItem]]) -> IngestionResult:
        if not items:
            return IngestionResult(success=False, message=NO_FILES_MESSAGE)

        try:
            self.storage.ensure_exists()
        except Exception:
            logger.exception("Storage root unavailable, no files processed ({})", self.storage)
            return IngestionResult(success=False, message=ERROR_MESSAGE)

        stored_names: List[str] = []
        outcomes: List[ItemOutcome] = []
        for item in items:
            outcome = self._store_item(item)
            outcomes.append(outcome)
            if outcome.failed:
                logger.error(
                    "Upload batch aborted at {} after {} stored file(s): {}",
                    outcome.name,
                    len(stored_names),
                    outcome.error,
                )
                return IngestionResult(
                    success=False,
                    message=ERROR_MESSAGE,
                    stored_names=stored_names,
                    outcomes=outcomes,
                )
            if outcome.status == STORED:
                stored_names.append(outcome.stored_name)

        return IngestionResult(
            success=True,
            message=success_message(len(stored_names)),
            stored_names=stored_names,
            outcomes=outcomes,
        )

    def _store_item(self, item: UploadItem) -> ItemOutcome:
        if item.size == 0:
            logger.debug("Skipping empty upload {!r}", item.name)
            return ItemOutcome(name=item.name, status=SKIPPED)
        try:
            target = self.storage.resolve_path(item.name)
            written = self.storage.write(target, item.content, self.chunk_size)
        except StorageError as exc:
            logger.warning("Upload of {!r} failed: {}", item.name, exc)
            return ItemOutcome(name=item.name, status=FAILED, error=str(exc))
        except Exception as exc:
            logger.exception("Unexpected error while uploading {!r}", item.name)
            return ItemOutcome(name=item.name, status=FAILED, error=repr(exc))

        stored_name = sanitize_name(item.name)
        logger.info("File uploaded: {} ({} bytes)", stored_name, written)
        return ItemOutcome(name=item.name, status=STORED, stored_name=stored_name, bytes_written=written)
