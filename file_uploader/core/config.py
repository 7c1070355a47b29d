"""Process settings for the uploader service.

Read by pydantic-settings from the environment or a .env file. Per-uploader
backends and allowlists live in the YAML file named by UPLOADERS_CONFIG_PATH
(see file_uploader.core.uploaders_config).
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

TOKEN_STRATEGIES = ("uniqid", "cuid")


class Settings(BaseSettings):
    """Environment-driven settings. Every field has a default, so an empty
    environment yields a working local setup.
    """

    # Service
    app_name: str = "file-uploader"
    app_version: str = "1.0.0"
    debug: bool = False

    # Browser clients
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Uploaders
    uploaders_config_path: str = "uploaders.yaml"
    # Prefix for local uploaders' public paths (e.g. https://files.example.com).
    # Empty keeps paths host-relative: /api/v1/uploaders/<name>/files/
    public_base_url: str = ""
    token_strategy: str = "uniqid"
    max_upload_size: int = 100 * 1024 * 1024  # 100MB

    # Default S3 client (service_id "default" when not declared in s3_clients)
    s3_region: str = "us-east-1"
    s3_endpoint_url: str | None = None
    s3_access_key: str | None = None
    s3_secret_key: SecretStr | None = None

    # Middleware
    request_id_header: str = "X-Request-ID"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Validate token strategy and upload limit."""
        if self.token_strategy not in TOKEN_STRATEGIES:
            raise ValueError(
                f"Invalid token_strategy '{self.token_strategy}'. "
                f"Must be one of: {', '.join(repr(s) for s in TOKEN_STRATEGIES)}"
            )
        if self.max_upload_size <= 0:
            raise ValueError("max_upload_size must be a positive number of bytes")
        return self


@lru_cache
def get_settings() -> Settings:
    """Build Settings once and reuse it.

    Tests that change env vars must call get_settings.cache_clear() first.
    """
    return Settings()
