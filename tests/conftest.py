"""Pytest configuration and fixtures for file_uploader.

HTTP tests run against create_app() through httpx's ASGITransport. The
lifespan does not run under ASGITransport, so fixtures place a registry on
app.state themselves.
"""

from collections.abc import Mapping
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from file_uploader.application.dtos.upload import StoredFile
from file_uploader.application.services.name_generator import NameGenerator
from file_uploader.application.use_cases.uploads import UploaderRegistry, UploadService
from file_uploader.core.config import Settings, get_settings
from file_uploader.core.uploaders_config import parse_uploaders_config
from file_uploader.domain.enums import BackendKind
from file_uploader.infrastructure.exceptions import StorageNotFoundError
from file_uploader.infrastructure.external.storage import StorageFactory
from file_uploader.main import create_app
from file_uploader.shared.utils.generators import SequenceTokenSource


class RecordingBackend:
    """In-memory backend that records every write call."""

    kind = BackendKind.LOCAL

    def __init__(self) -> None:
        self.files: dict[str, bytes] = {}
        self.writes: list[tuple[str, str | None]] = []

    async def write(
        self,
        key: str,
        data: bytes,
        content_type: str | None = None,
        metadata: Mapping[str, str] | None = None,
    ) -> StoredFile:
        self.writes.append((key, content_type))
        self.files[key] = data
        return StoredFile(key=key, size=len(data))

    async def read(self, key: str) -> tuple[StoredFile, bytes]:
        if key not in self.files:
            raise StorageNotFoundError(key)
        data = self.files[key]
        return StoredFile(key=key, size=len(data)), data

    async def exists(self, key: str) -> bool:
        return key in self.files

    async def delete(self, key: str) -> bool:
        return self.files.pop(key, None) is not None

    async def list_keys(self) -> list[str]:
        return sorted(self.files)

    async def list_stored_keys(self) -> list[str]:
        return await self.list_keys()


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    """Settings are cached per process; tests that set env vars get a fresh copy."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def recording_backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def token_source() -> SequenceTokenSource:
    """Deterministic tokens: 00000001, 00000002, ..."""
    return SequenceTokenSource()


@pytest.fixture
def upload_service(recording_backend: RecordingBackend, token_source) -> UploadService:
    """Service restricted to PNG and JPEG over the recording backend."""
    return UploadService(
        backend=recording_backend,
        root_path="https://cdn.example.com/images/",
        allowed_types=["image/png", "image/jpeg"],
        name_generator=NameGenerator(token_source),
        name="images",
    )


@pytest.fixture
def uploaders_payload(tmp_path: Path) -> dict:
    """Two local uploaders under tmp_path: 'images' (PNG only) and 'any' (no allowlist)."""
    return {
        "uploaders": {
            "local": {
                "images": {
                    "allowed_types": ["image/png"],
                    "directory": str(tmp_path / "images"),
                    "create": True,
                },
                "any": {
                    "allowed_types": [],
                    "directory": str(tmp_path / "any"),
                    "create": True,
                },
            }
        }
    }


@pytest.fixture
def registry(uploaders_payload: dict, token_source) -> UploaderRegistry:
    config = parse_uploaders_config(uploaders_payload)
    return UploaderRegistry.from_config(
        config,
        Settings(),
        build_backend=StorageFactory().create_backend,
        token_source=token_source,
    )


@pytest.fixture
def app(registry: UploaderRegistry):
    """Fresh FastAPI app with the local test registry installed."""
    application = create_app()
    application.state.uploaders = registry
    return application


@pytest.fixture
async def client(app) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
