"""HTTP handlers for readings and input validation."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends
from fastapi.responses import JSONResponse

from arcano.config import Settings, get_settings
from arcano.data.spreads import get_spread, list_spreads
from arcano.dependencies import get_oracle_service
from arcano.exceptions import ConfigurationError, OracleError
from arcano.models import (
    ErrorResponse,
    InterpretationRequest,
    InterpretationResponse,
    Spread,
    TextKind,
    ValidationRequest,
    ValidationResult,
)
from arcano.security.input_validator import validate_text
from arcano.services.fallback import get_fallback_interpretation
from arcano.services.oracle_service import OracleService, ensure_complete_reading

logger = logging.getLogger(__name__)

_UNKNOWN_SPREAD = "Esa tirada no existe en el Libro de los Arcanos."


async def spreads_endpoint() -> list[Spread]:
    return list_spreads()


async def validate_endpoint(
    payload: ValidationRequest,
    settings: Annotated[Settings, Depends(get_settings)],
) -> ValidationResult:
    """Live feedback for the question and name inputs."""

    return validate_text(
        payload.text,
        payload.kind,
        _limit_for(payload.kind, settings),
        settings.special_char_ratio,
    )


async def interpretation_endpoint(
    payload: InterpretationRequest,
    oracle: Annotated[OracleService, Depends(get_oracle_service)],
) -> InterpretationResponse | JSONResponse:
    """Ask the oracle; answer with the template reading when it is not configured."""

    spread = get_spread(payload.spread_id)
    if spread is None:
        return _error_response("unknown_spread", _UNKNOWN_SPREAD, 404)

    try:
        ensure_complete_reading(spread, payload.cards)
    except OracleError as exc:
        return _error_response(exc.code, exc.message, exc.status_code or 422)

    try:
        text = await oracle.get_interpretation(spread, payload.cards, payload.question, payload.name)
    except ConfigurationError:
        logger.warning("Oracle not configured; serving fallback", extra={"spread": spread.id})
        text = get_fallback_interpretation(spread, payload.cards, payload.question, payload.name)
        return InterpretationResponse(interpretation=text, source="fallback")
    except OracleError as exc:
        return _error_response(exc.code, exc.message, exc.status_code or 500)

    return InterpretationResponse(interpretation=text, source="oracle")


async def fallback_endpoint(payload: InterpretationRequest) -> InterpretationResponse | JSONResponse:
    spread = get_spread(payload.spread_id)
    if spread is None:
        return _error_response("unknown_spread", _UNKNOWN_SPREAD, 404)

    try:
        ensure_complete_reading(spread, payload.cards)
    except OracleError as exc:
        return _error_response(exc.code, exc.message, exc.status_code or 422)

    text = get_fallback_interpretation(spread, payload.cards, payload.question, payload.name)
    return InterpretationResponse(interpretation=text, source="fallback")


def _limit_for(kind: TextKind, settings: Settings) -> int:
    if kind is TextKind.NAME:
        return settings.max_name_length
    return settings.max_question_length


def _error_response(error: str, detail: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, detail=detail).model_dump(),
    )
