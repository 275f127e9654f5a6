from __future__ import annotations

import argparse
import sys
from contextlib import ExitStack
from pathlib import Path
from typing import List, Optional

from src.config.logging import configure_logging
from src.config.settings import get_settings
from src.ingestion.models import UploadItem
from src.ingestion.service import IngestionService
from src.storage.errors import StorageError
from src.storage.root import StorageRoot
from services.upload_service import build_storage


def _storage(root: Optional[str]):
    if root:
        return StorageRoot(root)
    return build_storage(get_settings())


def cmd_list(args: argparse.Namespace) -> int:
    storage = _storage(args.root)
    try:
        storage.ensure_exists()
        names = storage.list_files()
    except StorageError as exc:
        print(f"Storage unavailable: {exc}", file=sys.stderr)
        return 1
    for name in names:
        print(name)
    return 0


def cmd_upload(args: argparse.Namespace) -> int:
    service = IngestionService(_storage(args.root), chunk_size=get_settings().copy_chunk_size)
    with ExitStack() as stack:
        items: List[UploadItem] = []
        for raw in args.files:
            path = Path(raw)
            try:
                handle = stack.enter_context(path.open("rb"))
            except OSError as exc:
                print(f"Cannot open {path}: {exc}", file=sys.stderr)
                return 1
            items.append(UploadItem(name=path.name, content=handle, size=path.stat().st_size))
        result = service.ingest(items)

    print(result.message)
    for name in result.stored_names:
        print(f"  {name}")
    return 0 if result.success else 1


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Upload files to the configured storage root, or list it.")
    parser.add_argument("--root", help="Storage directory (defaults to UPLOAD_ROOT)")
    parser.add_argument("--log-level", default=None, help="Log level (defaults to LOG_LEVEL)")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List stored files")
    upload = sub.add_parser("upload", help="Upload one or more files")
    upload.add_argument("files", nargs="+", help="Files to upload")

    args = parser.parse_args(argv)
    configure_logging(args.log_level or get_settings().log_level)

    if args.command == "list":
        return cmd_list(args)
    return cmd_upload(args)


if __name__ == "__main__":
    sys.exit(main())
