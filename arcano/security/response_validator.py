"""Post-hoc checks on model output before it reaches the user."""

from __future__ import annotations

import logging
import re

from arcano.exceptions import CompromisedResponseError

logger = logging.getLogger(__name__)

MIN_RESPONSE_LENGTH = 100
RELEVANCE_MIN_LENGTH = 200

TAROT_KEYWORDS = (
    "carta",
    "tarot",
    "destino",
    "futuro",
    "pasado",
    "presente",
    "energía",
    "lectura",
    "arcano",
)

TECHNICAL_PATTERNS = (
    re.compile(
        r"\b(function|código|code|programming|programación|variable|algoritmo|algorithm|"
        r"syntax|sintaxis|compile|compilar)\b",
        re.IGNORECASE,
    ),
    re.compile(r"\b(import|export|class|interface|const|let|var|def|return)\b", re.IGNORECASE),
    re.compile(
        r"\b(javascript|python|java|typescript|react|angular|vue|html|css)\b|\bc\+\+",
        re.IGNORECASE,
    ),
)

PERSONA_BREAK_PATTERNS = (
    re.compile(r"\bas an? (ai|assistant|language model|ingeniero|developer|programmer)\b", re.IGNORECASE),
    re.compile(r"\bi (can't|cannot|can) (explain|help|assist|teach)\b", re.IGNORECASE),
    re.compile(r"\bmy (purpose|role|function) is (to|not)\b", re.IGNORECASE),
    re.compile(r"\bi('m| am) (designed|programmed|trained) to\b", re.IGNORECASE),
)

_TOO_SHORT = "El Oráculo ha guardado silencio. Los Arcanos requieren ser invocados nuevamente."
_TECHNICAL = "El Velo de los Arcanos ha sido perturbado. La lectura debe repetirse con intención renovada."
_OFF_TOPIC = "El mensaje de los Arcanos se ha distorsionado. Intenta nuevamente tu consulta."
_PERSONA_BREAK = "La voz del Oráculo ha sido interrumpida. Los Arcanos deben ser consultados de nuevo."


def validate_response(
    response: str,
    question: str | None = None,
    *,
    min_length: int = MIN_RESPONSE_LENGTH,
    relevance_min_length: int = RELEVANCE_MIN_LENGTH,
) -> bool:
    """Return ``True`` when ``response`` looks like an in-character reading.

    The relevance check only applies when a question was asked, since
    readings without one may legitimately wander.

    Raises:
        CompromisedResponseError: on the first failed check.
    """

    if len(response) < min_length:
        _reject("too_short", _TOO_SHORT, response)

    if any(pattern.search(response) for pattern in TECHNICAL_PATTERNS):
        _reject("technical_content", _TECHNICAL, response)

    if question and len(response) > relevance_min_length:
        lowered = response.lower()
        if not any(keyword in lowered for keyword in TAROT_KEYWORDS):
            _reject("off_topic", _OFF_TOPIC, response)

    if any(pattern.search(response) for pattern in PERSONA_BREAK_PATTERNS):
        _reject("persona_break", _PERSONA_BREAK, response)

    return True


def _reject(reason: str, message: str, response: str) -> None:
    logger.warning(
        "Completion rejected",
        extra={"reason": reason, "response_length": len(response)},
    )
    raise CompromisedResponseError(message, reason=reason)
