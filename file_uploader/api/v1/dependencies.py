"""Presentation-layer dependency injection (composition root).

The registry is built once in the lifespan and stored on app.state;
routes depend on get_upload_service, never on storage backends directly.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Path, Request

from file_uploader.application.use_cases.uploads import UploaderRegistry, UploadService


def get_uploader_registry(request: Request) -> UploaderRegistry:
    """Registry built at startup (composition root)."""
    registry = getattr(request.app.state, "uploaders", None)
    if registry is None:
        raise HTTPException(status_code=503, detail="Uploaders are not initialized")
    return registry


def get_upload_service(
    name: Annotated[str, Path(description="Configured uploader name")],
    registry: Annotated[UploaderRegistry, Depends(get_uploader_registry)],
) -> UploadService:
    """UploadService for the uploader in the path. Raises UploaderNotFoundError (404)."""
    return registry.get(name)
