"""FastAPI application entrypoint."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import Depends, FastAPI

from arcano import __version__
from arcano.config import Settings, get_settings
from arcano.http_handlers import (
    fallback_endpoint,
    interpretation_endpoint,
    spreads_endpoint,
    validate_endpoint,
)
from arcano.logging import configure_logging
from arcano.models import ErrorResponse, InterpretationResponse, Spread, ValidationResult
from arcano.websocket_handlers import validation_websocket_endpoint


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create application resources during startup and clean up on shutdown."""

    async with httpx.AsyncClient() as client:
        app.state.http_client = client
        yield
        del app.state.http_client


def create_app() -> FastAPI:
    """Application factory."""

    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Arcano Oracle",
        version=__version__,
        lifespan=lifespan,
    )

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/version")
    async def version(settings: Settings = Depends(get_settings)) -> dict[str, str]:
        return {"version": __version__, "environment": settings.environment}

    error_responses = {
        code: {"model": ErrorResponse} for code in (404, 422, 502, 503, 504)
    }

    app.add_api_route("/spreads", spreads_endpoint, methods=["GET"], response_model=list[Spread])
    app.add_api_route(
        "/validate", validate_endpoint, methods=["POST"], response_model=ValidationResult
    )
    app.add_api_route(
        "/interpretation",
        interpretation_endpoint,
        methods=["POST"],
        response_model=InterpretationResponse,
        responses=error_responses,
    )
    app.add_api_route(
        "/interpretation/fallback",
        fallback_endpoint,
        methods=["POST"],
        response_model=InterpretationResponse,
        responses=error_responses,
    )
    app.add_api_websocket_route("/ws/validate", validation_websocket_endpoint)

    return app


app = create_app()
