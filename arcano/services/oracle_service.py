"""Completion gateway for tarot interpretations.

Pipeline: sanitize input, compose the prompt, call the chat completions
endpoint with a system/user/system sandwich, validate the output.
"""

from __future__ import annotations

import logging
from typing import Sequence

import httpx

from arcano.config import Settings
from arcano.exceptions import (
    ConfigurationError,
    EmptyCompletionError,
    IncompleteReadingError,
    OracleError,
    TransportError,
)
from arcano.models import DrawnCard, Spread
from arcano.prompts import SYSTEM_PROMPT, SYSTEM_REMINDER, compose_prompt, recommended_length
from arcano.security.input_validator import sanitize_name, sanitize_question
from arcano.security.response_validator import validate_response

logger = logging.getLogger(__name__)

_MISSING_KEY = (
    "El hilo del destino está débil. La Llave Eterna (GROQ_API_KEY) debe ser colocada en el "
    "Santuario de las Variables. Consulta el grimorio (.env) para restaurar el flujo."
)
_INCOMPLETE_READING = (
    "La tirada aún no está completa. Revela cada carta en su lugar antes de invocar al Oráculo."
)
_EMPTY_COMPLETION = (
    "El Velo del Oráculo se ha cerrado. Las palabras se han disuelto en la bruma. "
    "Pide a los Arcanos una nueva revelación."
)
_CONNECTION_LOST = (
    "Las energías se han dispersado al buscar la conexión: "
    "El cosmos susurra un secreto inentendible."
)
_CONNECTION_UNSTEADY = (
    "Un velo de incertidumbre ha caído. Verifica que tu conexión con el cosmos (internet) "
    "esté firme y que la Llave Eterna sea la correcta."
)


def ensure_complete_reading(spread: Spread, cards: Sequence[DrawnCard]) -> None:
    """Refuse readings that do not fill every spread position exactly once."""

    position_ids = [card.position_id for card in cards]
    expected = {position.id for position in spread.positions}
    if (
        len(cards) != len(spread.positions)
        or len(set(position_ids)) != len(position_ids)
        or not set(position_ids) <= expected
    ):
        logger.warning(
            "Incomplete reading refused",
            extra={"spread": spread.id, "cards": len(cards), "positions": len(expected)},
        )
        raise IncompleteReadingError(_INCOMPLETE_READING)


class OracleService:
    """Wrapper around an OpenAI-compatible chat completions endpoint (Groq)."""

    def __init__(self, client: httpx.AsyncClient, settings: Settings) -> None:
        self._client = client
        self._settings = settings
        self._api_key = settings.groq_api_key
        self._endpoint = f"{settings.groq_base_url.rstrip('/')}/chat/completions"

    async def get_interpretation(
        self,
        spread: Spread,
        cards: Sequence[DrawnCard],
        question: str | None = None,
        name: str | None = None,
    ) -> str:
        """Return a validated interpretation for a completed reading.

        Domain errors propagate unchanged; anything else is wrapped as a
        ``TransportError`` so the user only ever sees a themed message.
        """

        try:
            return await self._interpret(spread, cards, question, name)
        except OracleError:
            raise
        except Exception as exc:
            logger.exception("Unexpected interpretation failure")
            raise TransportError(_CONNECTION_LOST) from exc

    async def _interpret(
        self,
        spread: Spread,
        cards: Sequence[DrawnCard],
        question: str | None,
        name: str | None,
    ) -> str:
        if not self._api_key:
            raise ConfigurationError(_MISSING_KEY)

        sanitized_question = sanitize_question(
            question, self._settings.max_question_length, self._settings.special_char_ratio
        )
        sanitized_name = sanitize_name(
            name, self._settings.max_name_length, self._settings.special_char_ratio
        )
        ensure_complete_reading(spread, cards)

        prompt = compose_prompt(spread, cards, sanitized_question, sanitized_name)
        length = recommended_length(len(cards))

        interpretation = await self._complete(prompt, length.max_tokens)

        validate_response(
            interpretation,
            sanitized_question,
            min_length=self._settings.min_response_length,
            relevance_min_length=self._settings.relevance_min_length,
        )

        logger.info(
            "Interpretation delivered",
            extra={
                "spread": spread.id,
                "cards": len(cards),
                "max_tokens": length.max_tokens,
                "response_length": len(interpretation),
            },
        )
        return interpretation

    async def _complete(self, prompt: str, max_tokens: int) -> str:
        """Issue one chat completion request and return its text."""

        payload = {
            "model": self._settings.chat_model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
                {"role": "system", "content": SYSTEM_REMINDER},
            ],
            "temperature": self._settings.temperature,
            "max_tokens": max_tokens,
            "top_p": self._settings.top_p,
            "frequency_penalty": self._settings.frequency_penalty,
            "presence_penalty": self._settings.presence_penalty,
        }

        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

        try:
            response = await self._client.post(
                self._endpoint,
                headers=headers,
                json=payload,
                timeout=self._settings.chat_timeout,
            )
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.warning("Chat completion timed out", exc_info=exc)
            raise TransportError(_CONNECTION_UNSTEADY, status_code=504) from exc
        except httpx.HTTPStatusError as exc:
            upstream_status = exc.response.status_code
            logger.error(
                "Chat completion failed",
                extra={
                    "upstream_status": upstream_status,
                    "response_text": exc.response.text,
                },
            )
            message = _CONNECTION_UNSTEADY if upstream_status in (401, 403) else _CONNECTION_LOST
            raise TransportError(message) from exc
        except httpx.HTTPError as exc:
            logger.exception("Unexpected chat HTTP error")
            raise TransportError(_CONNECTION_LOST) from exc

        try:
            data = response.json()
        except ValueError as exc:
            logger.error("Chat response is not JSON", extra={"response_text": response.text})
            raise TransportError(_CONNECTION_LOST) from exc

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            logger.error("Malformed chat response", extra={"raw_response": str(data)})
            content = None

        if not isinstance(content, str) or not content.strip():
            raise EmptyCompletionError(_EMPTY_COMPLETION)

        return content.strip()
