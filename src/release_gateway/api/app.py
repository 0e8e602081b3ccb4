"""FastAPI application factory."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from release_gateway import __version__
from release_gateway.api.errors import ERR_READ_REQUEST, error_response
from release_gateway.api.resources.releases import ReleaseResource
from release_gateway.controllers.release import ReleaseController
from release_gateway.core.config import GatewayConfig
from release_gateway.integrations.backend.client import ReleaseBackendClient
from release_gateway.integrations.charts.resolver import RepoChartResolver

logger = structlog.get_logger()


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report unreadable or malformed request bodies as 400."""
    return error_response(
        ERR_READ_REQUEST,
        exc,
        path=request.url.path,
        method=request.method,
        errors=exc.errors(),
    )


def create_app(
    config: GatewayConfig | None = None,
    controller: ReleaseController | None = None,
) -> FastAPI:
    """Build the gateway application.

    Args:
        config: Gateway configuration. Defaults are used when omitted.
        controller: Pre-built controller. When omitted one is built from
            ``config`` and its clients are closed on shutdown.

    Returns:
        The configured FastAPI application.
    """
    config = config or GatewayConfig()
    owned: list[ReleaseBackendClient | RepoChartResolver] = []

    if controller is None:
        backend = ReleaseBackendClient(config.backend)
        charts = RepoChartResolver(config.charts)
        owned.extend([backend, charts])
        controller = ReleaseController(backend, charts)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Release gateway started",
            version=__version__,
            backend=config.backend.base_url,
            repositories=[repo.name for repo in config.charts.repositories],
        )
        yield
        for client in owned:
            client.close()
        logger.info("Release gateway stopped")

    app = FastAPI(
        title="Release Gateway",
        description="REST API for chart releases.",
        version=__version__,
        lifespan=lifespan,
    )
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.state.controller = controller

    ReleaseResource(controller).register(app)
    return app
