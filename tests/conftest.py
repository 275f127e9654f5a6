import io

import pytest

from src.ingestion.models import UploadItem
from src.storage.root import StorageRoot


@pytest.fixture
def root_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def storage(root_dir):
    return StorageRoot(root_dir)


def make_item(name: str, data: bytes, size=None) -> UploadItem:
    return UploadItem(name=name, content=io.BytesIO(data), size=len(data) if size is None else size)


@pytest.fixture
def item():
    return make_item
