"""Upload request/response models."""
from typing import List

from pydantic import BaseModel, Field


class FileListResponse(BaseModel):
    """Files currently held in the storage root."""
    files: List[str] = Field(default_factory=list)


class UploadResponse(BaseModel):
    """Response model for the upload endpoint.

    `stored_names` lists the files written by this request in upload order;
    `files` is the storage listing refreshed after the upload.
    """
    success: bool
    message: str
    stored_names: List[str] = Field(default_factory=list)
    files: List[str] = Field(default_factory=list)
