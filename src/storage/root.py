from __future__ import annotations

import shutil
from pathlib import Path
from typing import BinaryIO, List, Optional, Union

from loguru import logger

from src.storage.errors import InvalidName, StorageUnavailable, WriteFailure
from src.storage.naming import sanitize_name

DEFAULT_CHUNK_SIZE = 1024 * 1024


class StorageRoot:
    """
    Local directory holding uploaded files.

    - The directory is created on first access, parents included.
    - Client filenames are reduced to their base name before joining, so a
      resolved path is always a direct child of the root.
    - Listing is non-recursive and returns regular files only.
    """

    def __init__(self, root_path: Optional[Union[str, Path]]) -> None:
        if root_path is None or not str(root_path).strip():
            self.root_path: Optional[Path] = None
        else:
            self.root_path = Path(root_path).expanduser().absolute()

    def __repr__(self) -> str:
        return f"StorageRoot({str(self.root_path)!r})"

    def _root(self) -> Path:
        if self.root_path is None:
            raise StorageUnavailable("storage root path is not configured")
        return self.root_path

    def ensure_exists(self) -> Path:
        root = self._root()
        if root.is_dir():
            return root
        if root.exists():
            raise StorageUnavailable(f"storage root is not a directory: {root}")
        try:
            root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageUnavailable(f"cannot create storage root {root}: {exc}") from exc
        logger.info("Created storage root {}", root)
        return root

    def resolve_path(self, name: str) -> Path:
        root = self._root()
        base = sanitize_name(name)
        candidate = root / base
        # A symlinked root is fine; the file itself must land directly in it.
        if candidate.resolve().parent != root.resolve():
            raise InvalidName(name, "file name resolves outside the storage root")
        return candidate

    def list_files(self) -> List[str]:
        root = self._root()
        try:
            return [entry.name for entry in root.iterdir() if entry.is_file() and not entry.is_symlink()]
        except OSError as exc:
            raise StorageUnavailable(f"cannot list storage root {root}: {exc}") from exc

    def write(self, path: Path, stream: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> int:
        """Overwrite ``path`` with the full contents of ``stream``; return bytes written."""
        try:
            with open(path, "wb") as out:
                shutil.copyfileobj(stream, out, chunk_size)
                return out.tell()
        except OSError as exc:
            raise WriteFailure(f"failed writing {path.name}: {exc}") from exc
