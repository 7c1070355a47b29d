"""Named uploaders: one UploadService per configured entry."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from file_uploader.application.interfaces.storage import IStorageBackend
from file_uploader.application.services.name_generator import NameGenerator
from file_uploader.application.use_cases.uploads.upload_service import UploadService
from file_uploader.core.config import Settings
from file_uploader.core.uploaders_config import (
    LocalUploaderConfig,
    S3UploaderConfig,
    UploadersConfig,
    resolve_public_path,
)
from file_uploader.domain.enums import BackendKind
from file_uploader.domain.exceptions import UploaderNotFoundError
from file_uploader.shared.utils.generators import TokenSource

logger = logging.getLogger(__name__)

BackendBuilder = Callable[
    [BackendKind, LocalUploaderConfig | S3UploaderConfig, UploadersConfig, Settings],
    IStorageBackend,
]


@dataclass(frozen=True)
class RegisteredUploader:
    """A configured uploader and the service built for it."""

    name: str
    kind: BackendKind
    service: UploadService


class UploaderRegistry:
    """Lookup of UploadService instances by uploader name."""

    def __init__(self, uploaders: list[RegisteredUploader] | None = None) -> None:
        self._uploaders = {u.name: u for u in uploaders or []}

    @classmethod
    def from_config(
        cls,
        config: UploadersConfig,
        settings: Settings,
        build_backend: BackendBuilder,
        token_source: TokenSource | None = None,
    ) -> UploaderRegistry:
        """Build one UploadService per uploader entry.

        All services share a single NameGenerator so generated keys stay
        unique across uploaders within the process.

        Args:
            config: Validated uploaders configuration.
            settings: Application settings (public base URL, default S3 client).
            build_backend: Creates the storage backend for one entry.
            token_source: Token source for generated keys; uniqid-style when None.

        Raises:
            ConfigurationError: an entry references an unknown S3 service_id.
        """
        name_generator = NameGenerator(token_source)
        uploaders: list[RegisteredUploader] = []
        for name, kind, entry in config.entries():
            backend = build_backend(kind, entry, config, settings)
            service = UploadService(
                backend=backend,
                root_path=resolve_public_path(name, entry, config, settings),
                allowed_types=entry.allowed_types,
                name_generator=name_generator,
                name=name,
            )
            uploaders.append(RegisteredUploader(name=name, kind=kind, service=service))
            logger.info(
                "Configured uploader %s (backend=%s, root_path=%s)",
                name,
                kind.value,
                service.root_path,
            )
        return cls(uploaders)

    def get(self, name: str) -> UploadService:
        """Return the service for name. Raises UploaderNotFoundError."""
        try:
            return self._uploaders[name].service
        except KeyError as e:
            raise UploaderNotFoundError(name) from e

    def names(self) -> list[str]:
        return list(self._uploaders)

    def __contains__(self, name: object) -> bool:
        return name in self._uploaders

    def __iter__(self) -> Iterator[RegisteredUploader]:
        return iter(self._uploaders.values())

    def __len__(self) -> int:
        return len(self._uploaders)
