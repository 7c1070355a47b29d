"""Local filesystem storage with path validation and atomic writes."""

from __future__ import annotations

import asyncio
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path

import aiofiles
import aiofiles.os

from file_uploader.application.dtos.upload import LocalListing, StoredFile
from file_uploader.domain.enums import BackendKind
from file_uploader.infrastructure.exceptions import (
    StorageDeleteError,
    StorageListError,
    StorageNotFoundError,
    StoragePermissionError,
    StorageReadError,
    StorageUnavailableError,
    StorageWriteError,
)

TEMP_PREFIX = ".tmp_"


class LocalStorageBackend:
    """Local filesystem storage with atomic writes and path traversal protection.

    Keys are paths relative to directory and are validated against it.
    Writes use temp file + rename. The filesystem has no metadata channel,
    so content_type and metadata passed to write() are discarded.
    """

    kind = BackendKind.LOCAL

    def __init__(self, directory: str, create: bool = False) -> None:
        """Initialize local storage.

        Args:
            directory: Base directory for all files.
            create: Create directory on first use when it does not exist.
        """
        self.directory = Path(directory).resolve()
        self.create = create

    def _ensure_directory(self) -> None:
        """Raise StorageUnavailableError when directory is missing and may not be created."""
        if self.directory.is_dir():
            return
        if not self.create:
            raise StorageUnavailableError(
                str(self.directory), "directory does not exist and create is disabled"
            )
        try:
            self.directory.mkdir(parents=True, exist_ok=True, mode=0o750)
        except OSError as e:
            raise StorageUnavailableError(str(self.directory), str(e)) from e

    def _get_full_path(self, key: str, operation: str) -> Path:
        """Resolve and validate path under directory. Raises StoragePermissionError if traversal."""
        full_path = (self.directory / key).resolve()
        try:
            relative = full_path.relative_to(self.directory)
        except ValueError as e:
            raise StoragePermissionError(key, operation) from e
        if relative == Path("."):
            raise StoragePermissionError(key, operation)
        return full_path

    async def write(
        self,
        key: str,
        data: bytes,
        content_type: str | None = None,
        metadata: Mapping[str, str] | None = None,
    ) -> StoredFile:
        """Write data atomically under key."""
        target_path = self._get_full_path(key, "write")
        self._ensure_directory()
        temp_path: str | None = None
        try:
            target_path.parent.mkdir(parents=True, exist_ok=True, mode=0o750)
            temp_fd, temp_path = tempfile.mkstemp(
                dir=target_path.parent,
                prefix=TEMP_PREFIX,
                suffix=target_path.suffix,
            )
            os.close(temp_fd)
            async with aiofiles.open(temp_path, "wb") as f:
                await f.write(data)
            os.chmod(temp_path, 0o640)
            os.replace(temp_path, target_path)
            temp_path = None
        except OSError as e:
            raise StorageWriteError(key, str(e)) from e
        finally:
            if temp_path is not None and os.path.exists(temp_path):
                os.unlink(temp_path)
        return StoredFile(key=key, size=len(data))

    async def read(self, key: str) -> tuple[StoredFile, bytes]:
        """Return file info and content."""
        file_path = self._get_full_path(key, "read")
        if not file_path.is_file():
            raise StorageNotFoundError(key)
        try:
            async with aiofiles.open(file_path, "rb") as f:
                data = await f.read()
        except OSError as e:
            raise StorageReadError(key, str(e)) from e
        return StoredFile(key=key, size=len(data)), data

    async def exists(self, key: str) -> bool:
        """Return True if a file is stored under key."""
        try:
            return self._get_full_path(key, "exists").is_file()
        except StoragePermissionError:
            return False

    async def delete(self, key: str) -> bool:
        """Delete file and prune emptied parent directories. Returns True if deleted."""
        file_path = self._get_full_path(key, "delete")
        if not file_path.is_file():
            return False
        try:
            await aiofiles.os.remove(file_path)
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageDeleteError(key, str(e)) from e
        parent = file_path.parent
        while parent != self.directory:
            try:
                if any(parent.iterdir()):
                    break
                parent.rmdir()
                parent = parent.parent
            except OSError:
                break
        return True

    def _walk(self) -> LocalListing:
        keys: list[str] = []
        dirs: list[str] = []
        for root, dirnames, filenames in os.walk(self.directory):
            base = Path(root)
            for dirname in dirnames:
                dirs.append((base / dirname).relative_to(self.directory).as_posix())
            for filename in filenames:
                if filename.startswith(TEMP_PREFIX):
                    continue
                keys.append((base / filename).relative_to(self.directory).as_posix())
        return LocalListing(keys=sorted(keys), dirs=sorted(dirs))

    async def list_keys(self) -> LocalListing:
        """Return every file key and directory below directory (recursive)."""
        self._ensure_directory()
        try:
            return await asyncio.to_thread(self._walk)
        except OSError as e:
            raise StorageListError(str(self.directory), str(e)) from e

    async def list_stored_keys(self) -> list[str]:
        """Return the keys part of the native listing."""
        listing = await self.list_keys()
        return list(listing.keys)
