"""Storage backend factory: builds a local or S3 backend from one uploader entry."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any

from file_uploader.application.interfaces.storage import IStorageBackend
from file_uploader.core.uploaders_config import (
    LocalUploaderConfig,
    S3ClientConfig,
    S3UploaderConfig,
    UploadersConfig,
    resolve_s3_client_config,
)
from file_uploader.domain.enums import BackendKind
from file_uploader.domain.exceptions import ConfigurationError

if TYPE_CHECKING:
    from file_uploader.core.config import Settings


class StorageFactory:
    """Factory for storage backends based on uploader configuration.

    boto3 clients are created once per service_id and shared by every S3
    uploader that references it.
    """

    def __init__(self) -> None:
        self._clients: dict[str, Any] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _build_s3_client(client_config: S3ClientConfig) -> Any:
        import boto3

        secret = (
            client_config.secret_key.get_secret_value()
            if client_config.secret_key is not None
            else None
        )
        return boto3.client(
            "s3",
            region_name=client_config.region,
            endpoint_url=client_config.endpoint_url,
            aws_access_key_id=client_config.access_key,
            aws_secret_access_key=secret,
        )

    def get_s3_client(
        self, service_id: str, config: UploadersConfig, settings: "Settings"
    ) -> Any:
        """Return the shared boto3 client for service_id, creating it on first use."""
        with self._lock:
            if service_id not in self._clients:
                client_config = resolve_s3_client_config(service_id, config, settings)
                self._clients[service_id] = self._build_s3_client(client_config)
            return self._clients[service_id]

    def create_backend(
        self,
        kind: BackendKind,
        uploader: LocalUploaderConfig | S3UploaderConfig,
        config: UploadersConfig,
        settings: "Settings",
    ) -> IStorageBackend:
        """Create the backend for one uploader entry.

        Args:
            kind: Section the entry was declared in.
            uploader: The entry's configuration.
            config: Whole uploaders configuration (for s3_clients lookup).
            settings: Application settings (default S3 client).

        Returns:
            LocalStorageBackend or S3StorageBackend.

        Raises:
            ConfigurationError: kind and entry disagree, or unknown service_id.
        """
        if kind == BackendKind.LOCAL and isinstance(uploader, LocalUploaderConfig):
            from file_uploader.infrastructure.external.storage.local_storage import (
                LocalStorageBackend,
            )

            return LocalStorageBackend(directory=uploader.directory, create=uploader.create)
        if kind == BackendKind.AWS_S3 and isinstance(uploader, S3UploaderConfig):
            from file_uploader.infrastructure.external.storage.s3_storage import (
                S3StorageBackend,
            )

            client = self.get_s3_client(uploader.service_id, config, settings)
            return S3StorageBackend(
                client=client,
                bucket=uploader.bucket_name,
                directory=uploader.options.directory,
                acl=uploader.options.acl,
                create=uploader.options.create,
            )
        raise ConfigurationError(
            f"Unsupported storage backend: {kind}. Supported: 'local', 'aws_s3'",
            "uploaders",
        )
