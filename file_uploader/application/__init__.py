"""Application layer: interfaces, services, use cases.

Depends only on domain, core configuration and protocol definitions (DIP).
Infrastructure implements the interfaces (storage backends).
"""

from file_uploader.application.interfaces import IStorageBackend
from file_uploader.application.services.name_generator import NameGenerator
from file_uploader.application.use_cases.uploads import UploaderRegistry, UploadService

__all__ = [
    "IStorageBackend",
    "NameGenerator",
    "UploadService",
    "UploaderRegistry",
]
