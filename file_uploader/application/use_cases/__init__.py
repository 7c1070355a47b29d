"""Application use cases: one entry point per workflow."""

from file_uploader.application.use_cases.uploads import UploaderRegistry, UploadService

__all__ = [
    "UploadService",
    "UploaderRegistry",
]
