"""Template interpretation used when the completion service is unavailable."""

from __future__ import annotations

import logging
from typing import Sequence

from arcano.exceptions import InputRejectedError
from arcano.models import DrawnCard, Spread
from arcano.prompts import build_greeting, describe_card
from arcano.security.input_validator import sanitize_name

logger = logging.getLogger(__name__)


def get_fallback_interpretation(
    spread: Spread,
    cards: Sequence[DrawnCard],
    question: str | None = None,
    name: str | None = None,
) -> str:
    """Render a deterministic reading without calling the model.

    ``question`` is accepted for signature parity and not rendered. A name
    that fails validation falls back to the generic greeting.
    """

    try:
        greeting = build_greeting(sanitize_name(name))
    except InputRejectedError:
        logger.info("Fallback greeting uses default; name rejected")
        greeting = build_greeting(None)

    card_sentences = " ".join(
        "En la posición del **{}**, se manifiesta {} {}.".format(*describe_card(spread, card))
        for card in cards
    )

    return (
        "***El Oráculo Mayor está en meditación profunda.*** No obstante, los Arcanos Menores "
        f"han ofrecido este breve susurro, {greeting}:\n\n"
        f"Tu lectura del **{spread.name}** revela una encrucijada crucial. {card_sentences}\n\n"
        "Esta combinación de presencias sugiere un **tiempo de introspección sagrada** en el viaje "
        "de tu alma. Las cartas te imploran a buscar las verdades que yacen tanto a plena luz como "
        "bajo la sombra de la Luna.\n\n"
        "Recuerda siempre: **el tarot solo ilumina el mapa, pero el sendero es tuyo.** Las energías "
        "están en juego, mas tu libre albedrío es la fuerza más poderosa del cosmos.\n\n"
        "Para una revelación completa, un Maestro Lector debe ser invocado. Por favor, asegúrate de "
        "que la **Llave Eterna del Oráculo (GROQ_API_KEY)** esté correctamente dispuesta en el "
        "Santuario de las Variables."
    )
