"""WebSocket handlers for the application."""

from __future__ import annotations

import asyncio
import logging
from contextlib import suppress
from typing import Annotated

from fastapi import Depends, WebSocket, WebSocketDisconnect, status
from pydantic import ValidationError
from starlette.websockets import WebSocketState

from arcano.config import Settings, get_settings
from arcano.models import ErrorResponse, TextKind, ValidationRequest
from arcano.security.input_validator import validate_text

logger = logging.getLogger(__name__)


async def validation_websocket_endpoint(
    websocket: WebSocket,
    settings: Annotated[Settings, Depends(get_settings)],
) -> None:
    """Live input feedback: one ``ValidationResult`` frame per text frame."""

    await websocket.accept()
    should_close = True
    logger.info(
        "WebSocket connection accepted",
        extra={"client": _client_repr(websocket)},
    )

    try:
        while True:
            try:
                message = await asyncio.wait_for(
                    websocket.receive_text(),
                    timeout=settings.ws_inactivity_timeout,
                )
            except asyncio.TimeoutError:
                logger.info(
                    "WebSocket inactive; closing",
                    extra={"client": _client_repr(websocket)},
                )
                await websocket.close(code=status.WS_1000_NORMAL_CLOSURE)
                should_close = False
                break
            except WebSocketDisconnect:
                logger.info(
                    "WebSocket client disconnected",
                    extra={"client": _client_repr(websocket)},
                )
                should_close = False
                break

            try:
                payload = ValidationRequest.model_validate_json(message)
            except ValidationError:
                await _send_error(
                    websocket,
                    ErrorResponse(error="invalid_payload", detail="Invalid JSON payload."),
                )
                continue

            limit = (
                settings.max_name_length
                if payload.kind is TextKind.NAME
                else settings.max_question_length
            )
            result = validate_text(
                payload.text, payload.kind, limit, settings.special_char_ratio
            )
            await websocket.send_text(result.model_dump_json())
    finally:
        if should_close and websocket.application_state == WebSocketState.CONNECTED:
            with suppress(RuntimeError, WebSocketDisconnect):
                await websocket.close()
        logger.info(
            "WebSocket connection closed",
            extra={"client": _client_repr(websocket)},
        )


async def _send_error(websocket: WebSocket, error: ErrorResponse) -> None:
    """Send a structured error frame."""

    await websocket.send_text(error.model_dump_json())


def _client_repr(websocket: WebSocket) -> str:
    """Render the remote client for logging purposes."""

    client = websocket.client
    if client is None:
        return "unknown"
    return f"{client.host}:{client.port}"
