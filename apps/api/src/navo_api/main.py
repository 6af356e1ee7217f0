"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import ApiSettings
from .config import settings as default_settings
from .container import ServiceContainer, build_container
from .logging_config import RequestLogger, configure_logging
from .middleware.rate_limit import RateLimitMiddleware
from .middleware.request_id import (
    REQUEST_ID_HEADER,
    RequestIdMiddleware,
    get_request_id,
)
from .routers import flights, routes, tracking
from .schemas.common import ErrorResponse
from .store import StoreError

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Release provider and store connections on shutdown."""
    yield
    await app.state.container.aclose()


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    request_id = get_request_id(request)
    RequestLogger(logger, request_id).error(
        "UNHANDLED_ERROR",
        path=request.url.path,
        error=type(exc).__name__,
        exc_info=exc,
    )
    body = ErrorResponse(
        code="INTERNAL_ERROR",
        message="Something went wrong",
        request_id=request_id,
    )
    return JSONResponse(
        status_code=500,
        content=body.to_wire(),
        headers={REQUEST_ID_HEADER: request_id},
    )


def create_app(
    settings: ApiSettings | None = None,
    *,
    container: ServiceContainer | None = None,
) -> FastAPI:
    """Build and configure the FastAPI application.

    Passing ``container`` skips logging setup and backend selection; tests
    use it to inject fakes.
    """
    if container is None:
        settings = settings or default_settings
        configure_logging(settings)
        container = build_container(settings)
    settings = container.settings

    app = FastAPI(
        title="Navo API",
        version="0.1.0",
        lifespan=_lifespan,
    )
    app.state.container = container

    # Middleware (order matters: last added = first executed)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER, "Retry-After", "X-RateLimit-Remaining"],
    )
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(RequestIdMiddleware)

    app.add_exception_handler(Exception, _unhandled_error)

    _prefix = "/api"
    app.include_router(flights.router, prefix=_prefix)
    app.include_router(routes.router, prefix=_prefix)
    app.include_router(tracking.router, prefix=_prefix)

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        try:
            store_ok = await container.store.ping()
        except StoreError:
            store_ok = False
        return {
            "status": "ok" if store_ok else "degraded",
            "store": container.store.name,
            "provider": container.provider.source.value,
        }

    return app


app = create_app()
