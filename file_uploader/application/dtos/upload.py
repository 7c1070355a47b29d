"""DTOs for upload use cases (no dependency on storage clients)."""

from dataclasses import dataclass, field
from typing import BinaryIO


@dataclass(frozen=True)
class UploadedSource:
    """One incoming file for the duration of a single upload call."""

    stream: BinaryIO
    original_name: str
    declared_mime_type: str
    source_path: str | None = None

    def read_bytes(self) -> bytes:
        """Read the whole stream, rewinding first when it is seekable."""
        if getattr(self.stream, "seekable", lambda: False)():
            self.stream.seek(0)
        return self.stream.read()


@dataclass(frozen=True)
class StoredFile:
    """A file held by a backend, identified by its key.

    content_type is only known to backends with a metadata channel
    (object stores); local backends report None.
    """

    key: str
    size: int
    content_type: str | None = None


@dataclass(frozen=True)
class LocalListing:
    """Native listing of the local backend: file keys and directories, relative to the root."""

    keys: list[str] = field(default_factory=list)
    dirs: list[str] = field(default_factory=list)
