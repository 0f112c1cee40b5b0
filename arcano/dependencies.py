"""Dependency providers for the FastAPI application."""

import httpx
from fastapi import Depends
from starlette.requests import HTTPConnection

from arcano.config import Settings, get_settings
from arcano.services.oracle_service import OracleService


async def get_http_client(connection: HTTPConnection) -> httpx.AsyncClient:
    """Retrieve the shared AsyncClient from application state."""

    return connection.app.state.http_client  # type: ignore[return-value]


async def get_oracle_service(
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> OracleService:
    """Dependency provider for OracleService."""

    return OracleService(client=client, settings=settings)
