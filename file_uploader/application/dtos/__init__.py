"""Application DTOs."""

from file_uploader.application.dtos.upload import LocalListing, StoredFile, UploadedSource

__all__ = ["LocalListing", "StoredFile", "UploadedSource"]
