"""Uploader API: thin routes delegating to the named UploadService.

Domain and storage errors propagate to the handlers in
file_uploader.core.exception_handlers (415, 404, 502 ...).
"""

from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import Response

from file_uploader.api.v1.dependencies import get_upload_service, get_uploader_registry
from file_uploader.application.dtos.upload import UploadedSource
from file_uploader.application.use_cases.uploads import UploaderRegistry, UploadService
from file_uploader.infrastructure.exceptions import StorageNotFoundError
from file_uploader.schemas.upload import (
    FileListResponse,
    FileRemovedResponse,
    FileUrlResponse,
    UploaderSummary,
    UploadResponse,
)
from file_uploader.shared.utils.content_types import DEFAULT_CONTENT_TYPE, guess_content_type

router = APIRouter()


@router.get("", response_model=list[UploaderSummary])
def list_uploaders(
    registry: Annotated[UploaderRegistry, Depends(get_uploader_registry)],
):
    """List configured uploaders with their backend, root path and allowlist."""
    return [
        UploaderSummary(
            name=uploader.name,
            kind=uploader.kind.value,
            root_path=uploader.service.root_path,
            allowed_types=sorted(uploader.service.allowed_types),
        )
        for uploader in registry
    ]


@router.post(
    "/{name}/files",
    response_model=UploadResponse,
    status_code=201,
    responses={415: {"description": "MIME type not in the uploader's allowlist"}},
)
async def upload_file(
    service: Annotated[UploadService, Depends(get_upload_service)],
    file: UploadFile = File(...),
):
    """Store the uploaded file under a generated key."""
    if not file.filename:
        raise HTTPException(status_code=400, detail="Filename required")
    source = UploadedSource(
        stream=file.file,
        original_name=file.filename,
        declared_mime_type=file.content_type or DEFAULT_CONTENT_TYPE,
    )
    key = await service.upload(source)
    return UploadResponse(key=key, url=service.get_url(key))


@router.get("/{name}/files", response_model=FileListResponse)
async def list_files(
    service: Annotated[UploadService, Depends(get_upload_service)],
):
    """List every stored file as root_path + key."""
    return FileListResponse(files=await service.list_files())


@router.get("/{name}/files/{key:path}/url", response_model=FileUrlResponse)
def get_file_url(
    key: str,
    service: Annotated[UploadService, Depends(get_upload_service)],
):
    """Compose the public URL for key (no existence check)."""
    return FileUrlResponse(key=key, url=service.get_url(key))


@router.get(
    "/{name}/files/{key:path}",
    response_class=Response,
    responses={404: {"description": "No file stored under key"}},
)
async def download_file(
    key: str,
    service: Annotated[UploadService, Depends(get_upload_service)],
):
    """Return the stored bytes; media type from the backend, else guessed from key."""
    stored, data = await service.download(key)
    return Response(
        content=data,
        media_type=stored.content_type or guess_content_type(key),
    )


@router.delete(
    "/{name}/files/{key:path}",
    response_model=FileRemovedResponse,
    responses={404: {"description": "No file stored under key"}},
)
async def remove_file(
    key: str,
    service: Annotated[UploadService, Depends(get_upload_service)],
):
    """Delete the file stored under key."""
    if not await service.remove(key):
        raise StorageNotFoundError(key)
    return FileRemovedResponse(key=key, removed=True)
