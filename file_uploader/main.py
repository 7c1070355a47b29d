"""ASGI entry point for the file uploader service.

create_app() only assembles the pieces: the uploader registry lifespan,
error mapping, middleware and the v1 router. Tests call create_app() after
adjusting the environment, since settings are read at call time.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from file_uploader.api.v1 import api_router
from file_uploader.core.config import Settings, get_settings
from file_uploader.core.exception_handlers import register_exception_handlers
from file_uploader.core.lifespan import create_lifespan
from file_uploader.middleware import RequestIDMiddleware, RequestSizeLimitMiddleware


def _cors_origins(settings: Settings) -> list[str]:
    return [origin.strip() for origin in settings.allowed_origins.split(",") if origin.strip()]


def create_app() -> FastAPI:
    """Create the FastAPI app with uploader routes under /api/v1."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )
    register_exception_handlers(app)

    # add_middleware prepends, so the size limit runs first and CORS last.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(settings),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)
    app.add_middleware(RequestSizeLimitMiddleware, max_bytes=settings.max_upload_size)

    app.include_router(api_router, prefix="/api/v1")
    return app


app = create_app()
