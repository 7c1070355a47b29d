"""Pydantic request/response schemas for the API."""

from file_uploader.schemas.health import HealthResponse
from file_uploader.schemas.upload import (
    FileListResponse,
    FileRemovedResponse,
    FileUrlResponse,
    UploaderSummary,
    UploadResponse,
)

__all__ = [
    "FileListResponse",
    "FileRemovedResponse",
    "FileUrlResponse",
    "HealthResponse",
    "UploadResponse",
    "UploaderSummary",
]
