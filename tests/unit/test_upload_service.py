"""Tests for UploadService over an in-memory recording backend."""

import io
from pathlib import Path

import pytest

from file_uploader.application.dtos.upload import UploadedSource
from file_uploader.application.services.name_generator import NameGenerator
from file_uploader.application.use_cases.uploads import UploadService
from file_uploader.domain.exceptions import DisallowedTypeError, SourceNotFoundError
from file_uploader.infrastructure.exceptions import StorageNotFoundError
from file_uploader.infrastructure.external.storage.local_storage import LocalStorageBackend
from file_uploader.shared.utils.generators import SequenceTokenSource

# Signature plus IHDR of a 1x1 RGBA image; enough for libmagic to say image/png.
PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"
    b"\x00\x00\x00\x01\x00\x00\x00\x01\x08\x06\x00\x00\x00\x1f\x15\xc4\x89"
)


def _source(name: str, mime: str, data: bytes = b"payload") -> UploadedSource:
    return UploadedSource(stream=io.BytesIO(data), original_name=name, declared_mime_type=mime)


class TestUpload:
    async def test_returns_generated_key_and_writes_bytes(
        self, upload_service: UploadService, recording_backend
    ) -> None:
        key = await upload_service.upload(_source("Отчёт 2024.png", "image/png", b"\x89PNG"))
        assert key == "00000001-otchet-2024.png"
        assert recording_backend.files[key] == b"\x89PNG"

    async def test_declared_type_passed_as_content_type(
        self, upload_service: UploadService, recording_backend
    ) -> None:
        key = await upload_service.upload(_source("photo.jpg", "image/jpeg"))
        assert recording_backend.writes == [(key, "image/jpeg")]

    async def test_disallowed_type_raises_and_writes_nothing(
        self, upload_service: UploadService, recording_backend
    ) -> None:
        with pytest.raises(DisallowedTypeError, match="Files of type text/plain are not allowed."):
            await upload_service.upload(_source("notes.txt", "text/plain"))
        assert recording_backend.writes == []
        assert recording_backend.files == {}

    async def test_empty_allowlist_accepts_any_type(self, recording_backend) -> None:
        service = UploadService(recording_backend, "/files/", allowed_types=[])
        key = await service.upload(_source("binary.bin", "application/x-anything"))
        assert key in recording_backend.files

    async def test_same_name_twice_gives_distinct_keys(
        self, upload_service: UploadService, recording_backend
    ) -> None:
        first = await upload_service.upload(_source("a.png", "image/png"))
        second = await upload_service.upload(_source("a.png", "image/png"))
        assert first != second
        assert len(recording_backend.files) == 2

    async def test_stream_is_rewound_before_reading(
        self, upload_service: UploadService, recording_backend
    ) -> None:
        stream = io.BytesIO(b"whole content")
        stream.read()
        key = await upload_service.upload(
            UploadedSource(stream=stream, original_name="x.png", declared_mime_type="image/png")
        )
        assert recording_backend.files[key] == b"whole content"


class TestUploadFromPath:
    async def test_keeps_basename_and_removes_source(
        self, upload_service: UploadService, recording_backend, tmp_path: Path
    ) -> None:
        source = tmp_path / "Отчёт 2024.png"
        source.write_bytes(PNG_BYTES)
        key = await upload_service.upload_from_path(source)
        # No token and no transliteration for path uploads.
        assert key == "Отчёт 2024.png"
        assert recording_backend.files[key] == PNG_BYTES
        assert recording_backend.writes == [(key, "image/png")]
        assert not source.exists()

    async def test_keep_source_when_requested(
        self, upload_service: UploadService, tmp_path: Path
    ) -> None:
        source = tmp_path / "keep.png"
        source.write_bytes(PNG_BYTES)
        await upload_service.upload_from_path(source, delete_source_after=False)
        assert source.exists()

    async def test_missing_source_raises(self, upload_service: UploadService, tmp_path: Path) -> None:
        with pytest.raises(SourceNotFoundError):
            await upload_service.upload_from_path(tmp_path / "missing.png")

    async def test_directory_is_not_a_source(
        self, upload_service: UploadService, tmp_path: Path
    ) -> None:
        with pytest.raises(SourceNotFoundError):
            await upload_service.upload_from_path(tmp_path)

    async def test_detected_type_checked_against_allowlist(
        self, upload_service: UploadService, recording_backend, tmp_path: Path
    ) -> None:
        source = tmp_path / "notes.txt"
        source.write_text("hello")
        with pytest.raises(DisallowedTypeError):
            await upload_service.upload_from_path(source)
        assert recording_backend.writes == []
        assert source.exists()

    async def test_extension_does_not_decide_the_type(
        self, upload_service: UploadService, recording_backend, tmp_path: Path
    ) -> None:
        source = tmp_path / "script.png"
        source.write_text("#!/bin/sh\necho hello\n")
        with pytest.raises(DisallowedTypeError) as exc_info:
            await upload_service.upload_from_path(source)
        assert exc_info.value.details["mime_type"] != "image/png"
        assert recording_backend.writes == []
        assert source.exists()

    async def test_content_wins_over_unknown_extension(
        self, upload_service: UploadService, recording_backend, tmp_path: Path
    ) -> None:
        source = tmp_path / "photo.dat"
        source.write_bytes(PNG_BYTES)
        key = await upload_service.upload_from_path(source)
        assert recording_backend.writes == [(key, "image/png")]

    async def test_explicit_content_type_overrides_guess(
        self, upload_service: UploadService, recording_backend, tmp_path: Path
    ) -> None:
        source = tmp_path / "scan.dat"
        source.write_bytes(b"x")
        key = await upload_service.upload_from_path(source, content_type="image/png")
        assert recording_backend.writes == [(key, "image/png")]

    async def test_empty_file_typed_by_extension(self, recording_backend, tmp_path: Path) -> None:
        service = UploadService(recording_backend, "/files/")
        (tmp_path / "empty.pdf").write_bytes(b"")
        (tmp_path / "blob.zzz-unknown").write_bytes(b"")
        pdf_key = await service.upload_from_path(tmp_path / "empty.pdf")
        blob_key = await service.upload_from_path(tmp_path / "blob.zzz-unknown")
        assert recording_backend.writes == [
            (pdf_key, "application/pdf"),
            (blob_key, "application/octet-stream"),
        ]


class TestRemoveListAndUrls:
    async def test_remove_existing_and_unknown(
        self, upload_service: UploadService, recording_backend
    ) -> None:
        key = await upload_service.upload(_source("a.png", "image/png"))
        kept = await upload_service.upload(_source("b.png", "image/png"))
        assert await upload_service.remove(key) is True
        listed = await upload_service.list_files()
        assert upload_service.get_url(key) not in listed
        assert listed == [upload_service.get_url(kept)]
        assert await upload_service.remove(key) is False
        assert await upload_service.remove("never-stored") is False

    async def test_removed_files_leave_local_listing(
        self, token_source, tmp_path: Path
    ) -> None:
        backend = LocalStorageBackend(str(tmp_path / "store"), create=True)
        service = UploadService(
            backend=backend,
            root_path="/files/",
            name_generator=NameGenerator(token_source),
        )
        key = await service.upload(_source("a.png", "image/png"))
        await backend.write("2024/05/report.pdf", b"%PDF")
        assert len(await service.list_files()) == 2

        assert await service.remove(key) is True
        assert await service.remove("2024/05/report.pdf") is True

        assert await service.list_files() == []
        assert not (tmp_path / "store" / "2024").exists()

    async def test_list_files_empty(self, upload_service: UploadService) -> None:
        assert await upload_service.list_files() == []

    async def test_list_files_prefixes_root_path(self, upload_service: UploadService) -> None:
        first = await upload_service.upload(_source("a.png", "image/png"))
        second = await upload_service.upload(_source("b.png", "image/png"))
        assert await upload_service.list_files() == [
            "https://cdn.example.com/images/" + first,
            "https://cdn.example.com/images/" + second,
        ]

    def test_get_url_is_verbatim_concatenation(self, upload_service: UploadService) -> None:
        assert upload_service.get_url("a b?.png") == "https://cdn.example.com/images/a b?.png"
        assert upload_service.get_url("") == "https://cdn.example.com/images/"

    async def test_download(self, upload_service: UploadService) -> None:
        key = await upload_service.upload(_source("a.png", "image/png", b"abc"))
        stored, data = await upload_service.download(key)
        assert stored.key == key
        assert stored.size == 3
        assert data == b"abc"

    async def test_download_unknown_raises(self, upload_service: UploadService) -> None:
        with pytest.raises(StorageNotFoundError):
            await upload_service.download("missing.png")


class TestAccessors:
    def test_properties(self, upload_service: UploadService, recording_backend) -> None:
        assert upload_service.backend is recording_backend
        assert upload_service.root_path == "https://cdn.example.com/images/"
        assert upload_service.allowed_types == frozenset({"image/png", "image/jpeg"})
        assert upload_service.name == "images"

    async def test_set_backend_redirects_writes(self, recording_backend) -> None:
        service = UploadService(
            recording_backend, "/files/", name_generator=NameGenerator(SequenceTokenSource())
        )
        replacement = type(recording_backend)()
        assert service.set_backend(replacement) is service
        key = await service.upload(_source("a.txt", "text/plain"))
        assert key in replacement.files
        assert recording_backend.files == {}

    def test_is_allowed(self, upload_service: UploadService) -> None:
        assert upload_service.is_allowed("image/png")
        assert not upload_service.is_allowed("image/gif")
