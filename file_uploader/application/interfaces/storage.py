"""Storage backend port. Implementations: LocalStorageBackend, S3StorageBackend."""

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from file_uploader.application.dtos.upload import StoredFile
from file_uploader.domain.enums import BackendKind


@runtime_checkable
class IStorageBackend(Protocol):
    """Protocol for storage backends (local filesystem, S3-compatible).

    Kind-specific behaviour stays inside each implementation: object stores
    persist content_type/metadata with the object, local backends drop them;
    list_stored_keys() flattens whatever list_keys() natively returns.
    """

    kind: BackendKind

    async def write(
        self,
        key: str,
        data: bytes,
        content_type: str | None = None,
        metadata: Mapping[str, str] | None = None,
    ) -> StoredFile:
        """Persist data under key. Raises a BackendIOError on failure."""
        ...

    async def read(self, key: str) -> tuple[StoredFile, bytes]:
        """Return stored file info and content. Raises StorageNotFoundError."""
        ...

    async def exists(self, key: str) -> bool:
        """Return True if key exists."""
        ...

    async def delete(self, key: str) -> bool:
        """Delete key. Returns True if deleted, False if not found."""
        ...

    async def list_keys(self) -> Any:
        """Return the backend-native listing."""
        ...

    async def list_stored_keys(self) -> list[str]:
        """Return a flat list of keys as the service exposes them."""
        ...
