"""Upload use cases: per-uploader service and the registry of named uploaders."""

from file_uploader.application.use_cases.uploads.registry import (
    RegisteredUploader,
    UploaderRegistry,
)
from file_uploader.application.use_cases.uploads.upload_service import UploadService

__all__ = [
    "RegisteredUploader",
    "UploadService",
    "UploaderRegistry",
]
