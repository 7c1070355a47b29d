"""Upload operations for one named uploader: validate, name, persist, enumerate, delete."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

import aiofiles
import aiofiles.os

from file_uploader.application.dtos.upload import StoredFile, UploadedSource
from file_uploader.application.interfaces.storage import IStorageBackend
from file_uploader.application.services.name_generator import NameGenerator
from file_uploader.domain.exceptions import DisallowedTypeError, SourceNotFoundError
from file_uploader.shared.telemetry.tracing import add_span_attributes, traced
from file_uploader.shared.utils.content_types import sniff_content_type

logger = logging.getLogger(__name__)


class UploadService:
    """Single uploader: one backend, one root path, one MIME allowlist.

    Stateless across calls apart from the configuration it was built with.
    An empty allowlist accepts every type.
    """

    def __init__(
        self,
        backend: IStorageBackend,
        root_path: str,
        allowed_types: Iterable[str] = (),
        name_generator: NameGenerator | None = None,
        name: str | None = None,
    ) -> None:
        self._backend = backend
        self._root_path = root_path
        self._allowed_types = frozenset(allowed_types)
        self.name_generator = name_generator or NameGenerator()
        self.name = name

    @property
    def backend(self) -> IStorageBackend:
        return self._backend

    def set_backend(self, backend: IStorageBackend) -> UploadService:
        """Swap the backend. Not safe while other calls are in flight."""
        self._backend = backend
        return self

    @property
    def root_path(self) -> str:
        return self._root_path

    @property
    def allowed_types(self) -> frozenset[str]:
        return self._allowed_types

    def is_allowed(self, mime_type: str) -> bool:
        """Return True when the allowlist is empty or contains mime_type."""
        return not self._allowed_types or mime_type in self._allowed_types

    def _check_type(self, mime_type: str) -> None:
        if not self.is_allowed(mime_type):
            raise DisallowedTypeError(mime_type, self._allowed_types)

    @traced("upload_service.upload")
    async def upload(self, source: UploadedSource) -> str:
        """Store source under a freshly generated key and return the key.

        Raises:
            DisallowedTypeError: declared MIME type not in a non-empty allowlist.
            BackendIOError: the backend failed to persist the bytes.
        """
        self._check_type(source.declared_mime_type)
        key = self.name_generator.generate(source.original_name)
        stored = await self._backend.write(
            key,
            source.read_bytes(),
            content_type=source.declared_mime_type,
        )
        add_span_attributes(key=key, size=stored.size)
        logger.info(
            "Stored %s as %s (%d bytes, uploader=%s)",
            source.original_name,
            key,
            stored.size,
            self.name,
        )
        return key

    @traced("upload_service.upload_from_path")
    async def upload_from_path(
        self,
        path: str | os.PathLike[str],
        delete_source_after: bool = True,
        content_type: str | None = None,
    ) -> str:
        """Store a local file under its own base name (no uniqueness token).

        The MIME type is content_type when given, otherwise detected from the
        file contents (the name only counts for an empty file). The source is
        removed after a successful write unless delete_source_after is False.

        Raises:
            SourceNotFoundError: path is not an existing file.
            DisallowedTypeError: MIME type not in a non-empty allowlist.
            BackendIOError: the backend failed to persist the bytes.
        """
        source = Path(path)
        if not source.is_file():
            raise SourceNotFoundError(str(path))
        async with aiofiles.open(source, "rb") as f:
            data = await f.read()
        mime_type = content_type or sniff_content_type(data, source.name)
        self._check_type(mime_type)

        key = source.name
        await self._backend.write(key, data, content_type=mime_type)
        if delete_source_after:
            await aiofiles.os.remove(source)
        logger.info(
            "Stored local file %s as %s (uploader=%s, source_removed=%s)",
            source,
            key,
            self.name,
            delete_source_after,
        )
        return key

    @traced("upload_service.remove")
    async def remove(self, key: str) -> bool:
        """Delete key. Returns False when it did not exist."""
        removed = await self._backend.delete(key)
        if removed:
            logger.info("Removed %s (uploader=%s)", key, self.name)
        return removed

    def get_url(self, key: str) -> str:
        """Return root_path + key verbatim; no existence check, no escaping."""
        return self._root_path + key

    @traced("upload_service.list_files")
    async def list_files(self) -> list[str]:
        """Return every stored key prefixed with root_path (empty list when none)."""
        keys = await self._backend.list_stored_keys()
        logger.debug("Listed %d file(s) (uploader=%s)", len(keys), self.name)
        return [self._root_path + key for key in keys]

    @traced("upload_service.download")
    async def download(self, key: str) -> tuple[StoredFile, bytes]:
        """Return stored file info and content. Raises StorageNotFoundError."""
        return await self._backend.read(key)
