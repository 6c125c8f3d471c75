"""FastAPI application factory."""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from postgrest.exceptions import APIError

from futureedge_shared.config import settings

from futureedge_api.middleware.logging import LoggingMiddleware
from futureedge_api.responses import error_response
from futureedge_api.routers.admin import admin_router
from futureedge_api.routers.dev_editor import router as dev_router
from futureedge_api.routers.health import router as health_router
from futureedge_api.routers.v1 import v1_router
from futureedge_api.utils.results import ERROR_STATUS, translate_backend_error

logger = structlog.get_logger()


async def backend_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Render PostgREST errors raised by services as the standard envelope."""
    action = "read" if request.method == "GET" else "update"
    kind, message = translate_backend_error(exc, action)
    logger.error(
        "backend_error",
        path=request.url.path,
        code=getattr(exc, "code", None),
        error=str(exc),
    )
    return JSONResponse(status_code=ERROR_STATUS[kind], content=error_response(kind, message))


def create_app() -> FastAPI:
    app = FastAPI(
        title="FutureEdge API",
        description="Summer camp marketplace API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    app.add_exception_handler(APIError, backend_error_handler)

    # Routers
    app.include_router(health_router)
    app.include_router(v1_router)
    app.include_router(admin_router)

    if settings.is_development:
        app.include_router(dev_router)

    logger.info(
        "app_created",
        cors_origins=settings.cors_origins_list,
        dev_endpoints=settings.is_development,
    )
    return app


app = create_app()
