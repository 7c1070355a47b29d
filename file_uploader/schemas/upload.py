"""Uploader and stored-file API schemas."""

from pydantic import BaseModel, Field


class UploaderSummary(BaseModel):
    """One configured uploader as listed by GET /uploaders."""

    name: str
    kind: str = Field(..., description="Storage backend: local or aws_s3")
    root_path: str = Field(..., description="Public URL prefix prepended to keys")
    allowed_types: list[str] = Field(
        default_factory=list, description="MIME allowlist; empty accepts every type"
    )


class UploadResponse(BaseModel):
    """Response for POST /uploaders/{name}/files."""

    key: str = Field(..., description="Generated storage key")
    url: str = Field(..., description="root_path + key")


class FileUrlResponse(BaseModel):
    """Response for GET /uploaders/{name}/files/{key}/url."""

    key: str
    url: str


class FileListResponse(BaseModel):
    """Response for GET /uploaders/{name}/files."""

    files: list[str] = Field(default_factory=list, description="root_path + key per stored file")


class FileRemovedResponse(BaseModel):
    """Response for DELETE /uploaders/{name}/files/{key}."""

    key: str
    removed: bool
