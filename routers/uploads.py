"""Uploads router for storing and listing files."""
from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile, status
from loguru import logger

from schemas.uploads import FileListResponse, UploadResponse
from services.upload_service import get_ingestion_service, get_storage, ingest_uploads, list_uploads
from src.ingestion.models import UploadItem
from src.ingestion.service import IngestionService, Storage
from src.storage.errors import StorageError

router = APIRouter()

STORAGE_UNAVAILABLE = "File storage is currently unavailable."


def _to_item(upload: UploadFile) -> UploadItem:
    size = upload.size
    if size is None:
        # Older multipart parsers leave size unset; measure the spooled file.
        upload.file.seek(0, 2)
        size = upload.file.tell()
        upload.file.seek(0)
    return UploadItem(name=upload.filename or "", content=upload.file, size=size)


def _to_items(files: Optional[List[UploadFile]]) -> List[UploadItem]:
    items = [_to_item(upload) for upload in files or []]
    # An empty file input still posts one part with no filename and no content
    return [item for item in items if item.name or item.size]


@router.get("", response_model=FileListResponse)
async def list_files(storage: Storage = Depends(get_storage)):
    """List the files currently stored (order is not guaranteed)."""
    try:
        return FileListResponse(files=await list_uploads(storage))
    except StorageError:
        logger.exception("Listing uploads failed")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=STORAGE_UNAVAILABLE)


@router.post("", response_model=UploadResponse)
async def upload_files(
    response: Response,
    files: Optional[List[UploadFile]] = File(None),
    service: IngestionService = Depends(get_ingestion_service),
):
    """
    Store one or more uploaded files.

    Files are written in the order they were sent. The first failure stops
    the batch; files written before it are kept and reported in
    `stored_names`.

    Returns:
        UploadResponse with the outcome and the refreshed file listing
    """
    items = _to_items(files)
    result = await ingest_uploads(service, items)

    if not items:
        response.status_code = status.HTTP_400_BAD_REQUEST
    elif not result.success:
        response.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    try:
        listing = await list_uploads(service.storage)
    except StorageError:
        logger.exception("Listing uploads after ingestion failed")
        listing = []

    return UploadResponse(
        success=result.success,
        message=result.message,
        stored_names=result.stored_names,
        files=listing,
    )
