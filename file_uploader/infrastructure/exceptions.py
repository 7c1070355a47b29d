"""Infrastructure exceptions for storage operations.

Storage errors extend UploaderException so presentation can map them
to HTTP responses consistently. Everything a storage medium can fail with
(network, permissions, disk full) surfaces as a BackendIOError subclass.
"""

from file_uploader.domain.exceptions import UploaderException


class BackendIOError(UploaderException):
    """Base exception for failures surfaced by the underlying storage medium."""


class StorageWriteError(BackendIOError):
    """File write failed."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(
            f"Failed to write file: {key}",
            "STORAGE_WRITE_ERROR",
            {"key": key, "reason": reason},
        )


class StorageReadError(BackendIOError):
    """File read failed."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(
            f"Failed to read file: {key}",
            "STORAGE_READ_ERROR",
            {"key": key, "reason": reason},
        )


class StorageDeleteError(BackendIOError):
    """File deletion failed."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(
            f"Failed to delete file: {key}",
            "STORAGE_DELETE_ERROR",
            {"key": key, "reason": reason},
        )


class StorageListError(BackendIOError):
    """Key enumeration failed."""

    def __init__(self, location: str, reason: str) -> None:
        super().__init__(
            f"Failed to list files in: {location}",
            "STORAGE_LIST_ERROR",
            {"location": location, "reason": reason},
        )


class StorageUnavailableError(BackendIOError):
    """Directory or bucket is missing and the backend is not allowed to create it."""

    def __init__(self, location: str, reason: str) -> None:
        super().__init__(
            f"Storage location unavailable: {location}",
            "STORAGE_UNAVAILABLE",
            {"location": location, "reason": reason},
        )


class StoragePermissionError(BackendIOError):
    """Key resolves outside the backend's namespace."""

    def __init__(self, key: str, operation: str) -> None:
        super().__init__(
            f"Permission denied for {operation} on {key}",
            "STORAGE_PERMISSION_ERROR",
            {"key": key, "operation": operation},
        )


class StorageNotFoundError(UploaderException):
    """File or object not found in storage."""

    def __init__(self, key: str) -> None:
        super().__init__(
            f"File not found: {key}",
            "STORAGE_NOT_FOUND",
            {"key": key},
        )
