from __future__ import annotations

from typing import BinaryIO, List, Optional

from azure.core.exceptions import AzureError, ResourceExistsError
from azure.storage.blob import BlobServiceClient, ContainerClient
from loguru import logger

from src.storage.errors import StorageUnavailable, WriteFailure
from src.storage.naming import sanitize_name


class BlobStorageRoot:
    """
    Upload store backed by an Azure Blob container.

    Mirrors StorageRoot: blobs are flat under an optional prefix and keyed by
    the sanitized base name of the uploaded file.
    """

    def __init__(
        self,
        container: str,
        connection_string: Optional[str] = None,
        prefix: str = "",
        container_client: Optional[ContainerClient] = None,
    ) -> None:
        self.container = container
        self.prefix = prefix.strip("/") + "/" if prefix.strip("/") else ""
        self.connection_string = connection_string
        self._client = container_client

    @property
    def client(self) -> ContainerClient:
        # Built on first use so a missing connection string surfaces as StorageUnavailable
        if self._client is None:
            if not self.connection_string:
                raise StorageUnavailable("AZURE_STORAGE_CONNECTION_STRING is required for blob storage")
            try:
                service = BlobServiceClient.from_connection_string(self.connection_string)
            except ValueError as exc:
                raise StorageUnavailable(f"invalid blob connection string: {exc}") from exc
            self._client = service.get_container_client(self.container)
        return self._client

    def __repr__(self) -> str:
        return f"BlobStorageRoot({self.container!r}, prefix={self.prefix!r})"

    def ensure_exists(self) -> str:
        try:
            self.client.create_container()
            logger.info("Created blob container {}", self.container)
        except ResourceExistsError:
            pass
        except AzureError as exc:
            raise StorageUnavailable(f"cannot create container {self.container}: {exc}") from exc
        return self.container

    def resolve_path(self, name: str) -> str:
        return f"{self.prefix}{sanitize_name(name)}"

    def list_files(self) -> List[str]:
        try:
            names = []
            for blob in self.client.list_blobs(name_starts_with=self.prefix or None):
                rest = blob.name[len(self.prefix):]
                # Only direct children, same as a non-recursive directory listing
                if rest and "/" not in rest:
                    names.append(rest)
            return names
        except AzureError as exc:
            raise StorageUnavailable(f"cannot list container {self.container}: {exc}") from exc

    def write(self, blob_name: str, stream: BinaryIO, chunk_size: Optional[int] = None) -> int:
        """Upload ``stream`` to ``blob_name``, replacing any existing blob.

        Block size comes from the client configuration; ``chunk_size`` is
        accepted for parity with StorageRoot.write.
        """
        counter = _CountingReader(stream)
        try:
            self.client.upload_blob(blob_name, counter, overwrite=True)
        except (AzureError, OSError) as exc:
            raise WriteFailure(f"failed uploading {blob_name}: {exc}") from exc
        return counter.count


class _CountingReader:
    """Wraps a binary stream and counts the bytes read through it."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self.count = 0

    def read(self, size: int = -1) -> bytes:
        data = self._stream.read(size)
        self.count += len(data)
        return data
