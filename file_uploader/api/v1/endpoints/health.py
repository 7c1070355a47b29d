"""Health check endpoint. Used for liveness probes."""

from fastapi import APIRouter, Request

from file_uploader.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check(request: Request) -> HealthResponse:
    """Return ok and the number of configured uploaders."""
    registry = getattr(request.app.state, "uploaders", None)
    return HealthResponse(uploaders=len(registry) if registry is not None else 0)
