"""Uploaders configuration: named local and S3 uploaders loaded from YAML.

Shape::

    uploaders:
      local:
        <name>: {allowed_types: [...], directory: str, create: bool}
      aws_s3:
        <name>: {allowed_types: [...], bucket_name: str, service_id: str,
                 options: {directory: str, create: bool, acl: str}}
    s3_clients:
      <service_id>: {region: str, endpoint_url: str, access_key: str, secret_key: str}

Each named entry becomes one independently configured UploadService.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError, model_validator

from file_uploader.core.config import Settings
from file_uploader.domain.enums import BackendKind
from file_uploader.domain.exceptions import ConfigurationError


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class LocalUploaderConfig(_FrozenModel):
    """Local filesystem uploader."""

    allowed_types: list[str] = Field(default_factory=list)
    directory: str
    create: bool = False
    public_path: str | None = None


class S3Options(_FrozenModel):
    """Object-store options: key prefix, bucket auto-creation, canned ACL."""

    directory: str = ""
    create: bool = False
    acl: str | None = None


class S3UploaderConfig(_FrozenModel):
    """S3-compatible object store uploader."""

    allowed_types: list[str] = Field(default_factory=list)
    bucket_name: str
    service_id: str = "default"
    options: S3Options = Field(default_factory=S3Options)
    public_path: str | None = None


class S3ClientConfig(_FrozenModel):
    """Connection settings for one S3 client, referenced by service_id."""

    region: str = "us-east-1"
    endpoint_url: str | None = None
    access_key: str | None = None
    secret_key: SecretStr | None = None


class UploaderSections(_FrozenModel):
    local: dict[str, LocalUploaderConfig] = Field(default_factory=dict)
    aws_s3: dict[str, S3UploaderConfig] = Field(default_factory=dict)


class UploadersConfig(_FrozenModel):
    """Validated uploaders configuration."""

    uploaders: UploaderSections = Field(default_factory=UploaderSections)
    s3_clients: dict[str, S3ClientConfig] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_unique_names(self) -> "UploadersConfig":
        """Uploader names are shared between sections and must not repeat."""
        duplicated = set(self.uploaders.local) & set(self.uploaders.aws_s3)
        if duplicated:
            raise ValueError(
                f"Uploader names must be unique across backends: {sorted(duplicated)}"
            )
        return self

    def entries(self) -> list[tuple[str, BackendKind, LocalUploaderConfig | S3UploaderConfig]]:
        """Return (name, kind, config) for every uploader, local first."""
        result: list[tuple[str, BackendKind, LocalUploaderConfig | S3UploaderConfig]] = [
            (name, BackendKind.LOCAL, cfg) for name, cfg in self.uploaders.local.items()
        ]
        result.extend(
            (name, BackendKind.AWS_S3, cfg) for name, cfg in self.uploaders.aws_s3.items()
        )
        return result


def parse_uploaders_config(payload: dict[str, Any] | None, source: str | None = None) -> UploadersConfig:
    """Validate a raw mapping into UploadersConfig.

    Raises:
        ConfigurationError: payload does not match the expected shape.
    """
    try:
        return UploadersConfig.model_validate(payload or {})
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid uploaders configuration: {exc}", source) from exc


def load_uploaders_config(path: str | Path) -> UploadersConfig:
    """Load and validate the uploaders YAML file.

    Raises:
        ConfigurationError: file missing, unreadable YAML, or invalid shape.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigurationError(
            f"Uploaders configuration not found: {config_path}", str(config_path)
        )
    try:
        with config_path.open("r", encoding="utf-8") as fp:
            payload = yaml.safe_load(fp)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML: {exc}", str(config_path)) from exc
    if payload is not None and not isinstance(payload, dict):
        raise ConfigurationError("Uploaders configuration must be a mapping", str(config_path))
    return parse_uploaders_config(payload, str(config_path))


def _s3_base_url(bucket: str, client: S3ClientConfig) -> str:
    if client.endpoint_url:
        return f"{client.endpoint_url.rstrip('/')}/{bucket}"
    if client.region == "us-east-1":
        return f"https://{bucket}.s3.amazonaws.com"
    return f"https://{bucket}.s3.{client.region}.amazonaws.com"


def resolve_s3_client_config(
    service_id: str, config: UploadersConfig, settings: Settings
) -> S3ClientConfig:
    """Return the client config for service_id; 'default' falls back to S3_* settings.

    Raises:
        ConfigurationError: service_id is neither declared nor 'default'.
    """
    if service_id in config.s3_clients:
        return config.s3_clients[service_id]
    if service_id == "default":
        return S3ClientConfig(
            region=settings.s3_region,
            endpoint_url=settings.s3_endpoint_url,
            access_key=settings.s3_access_key,
            secret_key=settings.s3_secret_key,
        )
    raise ConfigurationError(f"Unknown S3 service_id: {service_id}", "s3_clients")


def resolve_public_path(
    name: str,
    uploader: LocalUploaderConfig | S3UploaderConfig,
    config: UploadersConfig,
    settings: Settings,
) -> str:
    """Return the root path prepended to keys in URLs and listings.

    Explicit public_path wins. Local uploaders point at this service's own
    download route; S3 uploaders point at the bucket (plus directory prefix).
    """
    if uploader.public_path is not None:
        return uploader.public_path
    if isinstance(uploader, LocalUploaderConfig):
        return f"{settings.public_base_url.rstrip('/')}/api/v1/uploaders/{name}/files/"
    client = resolve_s3_client_config(uploader.service_id, config, settings)
    base = _s3_base_url(uploader.bucket_name, client)
    directory = uploader.options.directory.strip("/")
    return f"{base}/{directory}/" if directory else f"{base}/"
