"""Domain exceptions for the file uploader.

Business-rule violations raised before any storage write happens. The
presentation layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class UploaderException(Exception):
    """Base exception for all file uploader errors.

    Presentation layer maps these to HTTP responses using message,
    error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. mime_type, key).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body used by the API."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class DisallowedTypeError(UploaderException):
    """Raised when the declared MIME type is not in a non-empty allowlist."""

    def __init__(self, mime_type: str, allowed_types: frozenset[str]) -> None:
        """Initialize with the rejected type and the configured allowlist.

        Args:
            mime_type: The MIME type declared by the caller.
            allowed_types: The uploader's allowlist.
        """
        super().__init__(
            f"Files of type {mime_type} are not allowed.",
            "DISALLOWED_TYPE",
            {"mime_type": mime_type, "allowed_types": sorted(allowed_types)},
        )


class SourceNotFoundError(UploaderException):
    """Raised when upload_from_path is given a path that is not an existing file."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"Source file not found: {path}",
            "SOURCE_NOT_FOUND",
            {"path": path},
        )


class UploaderNotFoundError(UploaderException):
    """Raised when no uploader is configured under the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Uploader not found: {name}",
            "UPLOADER_NOT_FOUND",
            {"uploader": name},
        )


class ConfigurationError(UploaderException):
    """Raised when the uploaders configuration is missing or invalid."""

    def __init__(self, message: str, source: str | None = None) -> None:
        details = {"source": source} if source else {}
        super().__init__(message, "CONFIGURATION_ERROR", details)
