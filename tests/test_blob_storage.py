import io
from types import SimpleNamespace

import pytest
from azure.core.exceptions import HttpResponseError, ResourceExistsError

from src.ingestion.service import IngestionService
from src.storage.blob_root import BlobStorageRoot
from src.storage.errors import StorageUnavailable, WriteFailure


class FakeContainerClient:
    """In-memory stand-in for azure.storage.blob.ContainerClient."""

    def __init__(self, exists=False, fail_on=None):
        self.exists = exists
        self.blobs = {}
        self.fail_on = fail_on
        self.create_calls = 0

    def create_container(self):
        self.create_calls += 1
        if self.exists:
            raise ResourceExistsError("ContainerAlreadyExists")
        self.exists = True

    def list_blobs(self, name_starts_with=None):
        if not self.exists:
            raise HttpResponseError("ContainerNotFound")
        prefix = name_starts_with or ""
        return [SimpleNamespace(name=n) for n in self.blobs if n.startswith(prefix)]

    def upload_blob(self, name, data, overwrite=False):
        if name == self.fail_on:
            raise HttpResponseError("InternalError")
        if name in self.blobs and not overwrite:
            raise ResourceExistsError("BlobAlreadyExists")
        self.blobs[name] = data.read()


def test_ensure_exists_tolerates_existing_container():
    client = FakeContainerClient(exists=True)
    root = BlobStorageRoot("uploads", container_client=client)
    root.ensure_exists()
    root.ensure_exists()
    assert client.create_calls == 2


def test_missing_connection_string_is_unavailable_on_use():
    root = BlobStorageRoot("uploads", connection_string=None)
    with pytest.raises(StorageUnavailable):
        root.ensure_exists()
    with pytest.raises(StorageUnavailable):
        root.list_files()


def test_ingest_without_connection_string_fails_cleanly(item):
    result = IngestionService(BlobStorageRoot("uploads")).ingest([item("a.txt", b"a")])
    assert not result.success
    assert result.stored_names == []


def test_resolve_path_applies_prefix_and_sanitizes():
    root = BlobStorageRoot("uploads", prefix="/incoming/", container_client=FakeContainerClient())
    assert root.resolve_path("../../etc/passwd") == "incoming/passwd"


def test_list_files_skips_nested_blobs():
    client = FakeContainerClient(exists=True)
    client.blobs = {"incoming/a.txt": b"a", "incoming/sub/b.txt": b"b", "other/c.txt": b"c"}
    root = BlobStorageRoot("uploads", prefix="incoming", container_client=client)
    assert root.list_files() == ["a.txt"]


def test_list_files_unavailable_container():
    root = BlobStorageRoot("uploads", container_client=FakeContainerClient())
    with pytest.raises(StorageUnavailable):
        root.list_files()


def test_write_overwrites_and_counts_bytes():
    client = FakeContainerClient(exists=True)
    root = BlobStorageRoot("uploads", container_client=client)
    root.write("a.txt", io.BytesIO(b"old content"))
    assert root.write("a.txt", io.BytesIO(b"new")) == 3
    assert client.blobs["a.txt"] == b"new"


def test_write_failure_is_wrapped():
    client = FakeContainerClient(exists=True, fail_on="a.txt")
    root = BlobStorageRoot("uploads", container_client=client)
    with pytest.raises(WriteFailure):
        root.write("a.txt", io.BytesIO(b"x"))


def test_ingest_into_blob_container(item):
    client = FakeContainerClient()
    root = BlobStorageRoot("uploads", container_client=client)
    result = IngestionService(root).ingest(
        [item("a.txt", b"hello"), item("b.txt", b"b"), item("c.txt", b"c")]
    )
    assert result.success
    assert client.blobs["a.txt"] == b"hello"
    assert set(root.list_files()) == {"a.txt", "b.txt", "c.txt"}


def test_ingest_into_blob_container_stops_at_failure(item):
    client = FakeContainerClient(fail_on="b.txt")
    root = BlobStorageRoot("uploads", container_client=client)
    result = IngestionService(root).ingest(
        [item("a.txt", b"a"), item("b.txt", b"b"), item("c.txt", b"c")]
    )
    assert not result.success
    assert result.stored_names == ["a.txt"]
    assert "c.txt" not in client.blobs
