"""Domain layer: enums and business-rule exceptions (no infrastructure imports)."""

from file_uploader.domain.enums import BackendKind
from file_uploader.domain.exceptions import (
    ConfigurationError,
    DisallowedTypeError,
    SourceNotFoundError,
    UploaderException,
    UploaderNotFoundError,
)

__all__ = [
    "BackendKind",
    "ConfigurationError",
    "DisallowedTypeError",
    "SourceNotFoundError",
    "UploaderException",
    "UploaderNotFoundError",
]
