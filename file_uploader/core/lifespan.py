"""Application lifespan: startup and shutdown.

Single place for startup wiring: logging, uploaders configuration and the
registry of UploadService instances. No business logic here.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from fastapi import FastAPI

from file_uploader.application.use_cases.uploads import UploaderRegistry
from file_uploader.core.config import get_settings
from file_uploader.core.uploaders_config import load_uploaders_config
from file_uploader.infrastructure.external.storage import StorageFactory
from file_uploader.shared.telemetry.logging import setup_logging
from file_uploader.shared.utils.generators import create_token_source

logger = logging.getLogger(__name__)


def build_registry() -> UploaderRegistry:
    """Load UPLOADERS_CONFIG_PATH and build the registry.

    A missing file yields an empty registry (every uploader lookup 404s);
    an invalid file raises ConfigurationError and aborts startup.
    """
    settings = get_settings()
    config_path = Path(settings.uploaders_config_path)
    if not config_path.exists():
        logger.warning(
            "Uploaders configuration %s not found; no uploaders configured", config_path
        )
        return UploaderRegistry()
    config = load_uploaders_config(config_path)
    return UploaderRegistry.from_config(
        config,
        settings,
        build_backend=StorageFactory().create_backend,
        token_source=create_token_source(settings.token_strategy),
    )


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, uploaders registry. Backends hold no open
    connections beyond the shared boto3 clients, so shutdown only drops
    the registry.
    """
    setup_logging()

    # ---- Startup ----
    registry = build_registry()
    app.state.uploaders = registry
    logger.info("Uploaders ready: %s", ", ".join(registry.names()) or "none")

    yield

    # ---- Shutdown ----
    app.state.uploaders = None
    logger.info("Uploaders registry released")
