"""Built-in spread catalog."""

from arcano.models import Spread, SpreadPosition


def _spread(spread_id: str, name: str, description: str, *positions: tuple[str, str]) -> Spread:
    return Spread(
        id=spread_id,
        name=name,
        description=description,
        positions=[
            SpreadPosition(id=index, name=position_name, question=question)
            for index, (position_name, question) in enumerate(positions)
        ],
    )


DAILY = _spread(
    "daily",
    "Carta del Día",
    "Una sola carta para guiar tu día con sabiduría y claridad.",
    ("Tu guía de hoy", "¿Qué energía me acompaña hoy?"),
)

THREE_CARD = _spread(
    "three-card",
    "Pasado, Presente, Futuro",
    "Una lectura clásica que revela el flujo del tiempo en tu situación.",
    ("Pasado", "¿Qué influencias del pasado me afectan?"),
    ("Presente", "¿Cuál es mi situación actual?"),
    ("Futuro", "¿Qué me espera si continúo este camino?"),
)

FIVE_CARD = _spread(
    "five-card",
    "Decisión",
    "Explora una decisión importante desde múltiples ángulos.",
    ("La Situación", "¿Cuál es la situación que enfrento?"),
    ("Opción A", "¿Qué sucede si elijo el primer camino?"),
    ("Opción B", "¿Qué sucede si elijo el segundo camino?"),
    ("Lo que necesitas saber", "¿Qué información importante debo considerar?"),
    ("Resultado Potencial", "¿Cuál es el resultado más probable?"),
)

CELTIC_CROSS = _spread(
    "celtic-cross",
    "Cruz Celta",
    "La lectura más completa y profunda, revelando todos los aspectos de tu situación.",
    ("Situación Actual", "¿Cuál es mi situación presente?"),
    ("Desafío", "¿Qué obstáculo o desafío cruza mi camino?"),
    ("Pasado Distante", "¿Qué fundamentos del pasado influyen aquí?"),
    ("Pasado Reciente", "¿Qué acaba de pasar?"),
    ("Mejor Resultado Posible", "¿Cuál es el mejor resultado que puedo lograr?"),
    ("Futuro Próximo", "¿Qué vendrá pronto?"),
    ("Tu Enfoque", "¿Cómo me veo a mí mismo en esta situación?"),
    ("Influencias Externas", "¿Qué fuerzas externas me afectan?"),
    ("Esperanzas y Miedos", "¿Qué espero y qué temo?"),
    ("Resultado", "¿Cuál es el resultado probable?"),
)

ALL_SPREADS = (DAILY, THREE_CARD, FIVE_CARD, CELTIC_CROSS)


def list_spreads() -> list[Spread]:
    return list(ALL_SPREADS)


def get_spread(spread_id: str) -> Spread | None:
    for spread in ALL_SPREADS:
        if spread.id == spread_id:
            return spread
    return None
