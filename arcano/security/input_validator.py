"""User input screening.

Two adapters share one detection routine: ``validate_*`` returns a
``ValidationResult`` for live feedback while ``sanitize_*`` raises
``InputRejectedError`` and gates the completion call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from arcano.exceptions import InputRejectedError
from arcano.models import TextKind, ValidationResult
from arcano.security.rules import (
    INJECTION_RULES,
    MAX_SPECIAL_CHAR_RATIO,
    REPEATED_CHARACTER,
    SPECIAL_CHARACTER,
    RuleCategory,
)

logger = logging.getLogger(__name__)

MAX_QUESTION_LENGTH = 500
MAX_NAME_LENGTH = 50

_DEFAULT_LIMITS = {
    TextKind.QUESTION: MAX_QUESTION_LENGTH,
    TextKind.NAME: MAX_NAME_LENGTH,
}

_SUBJECTS = {
    TextKind.QUESTION: "pregunta",
    TextKind.NAME: "nombre",
}

_LENGTH_HINTS = {
    TextKind.QUESTION: "Tu pregunta es demasiado extensa. Máximo {limit} caracteres.",
    TextKind.NAME: "Tu nombre es demasiado extenso. Máximo {limit} caracteres.",
}

_SPECIAL_CHARACTERS_HINT = "Tu {subject} contiene demasiados símbolos especiales. Usa palabras naturales."
_REPETITION_HINT = "Evita repetir el mismo carácter muchas veces. Escribe con claridad."

# Themed messages raised by the authoritative sanitizer. Injection rules
# share one message per field so the rule list is not echoed back verbatim.
_REJECTIONS = {
    TextKind.QUESTION: {
        RuleCategory.LENGTH: (
            "El Oráculo solo escucha las preguntas concisas (máximo {limit} caracteres). "
            "Concentra tu consulta en su esencia más pura."
        ),
        RuleCategory.SPECIAL_CHARACTERS: (
            "El Hilo del Destino se enreda con símbolos extraños. "
            "Simplifica tu pregunta para que los Arcanos puedan comprenderla."
        ),
        RuleCategory.REPETITION: (
            "El eco de símbolos repetidos confunde al Oráculo. Habla con claridad en tu consulta."
        ),
        None: (
            "Los Arcanos detectan energías discordantes en tu pregunta. "
            "Reformula tu consulta con intención pura y el Oráculo responderá."
        ),
    },
    TextKind.NAME: {
        RuleCategory.LENGTH: (
            "El linaje de tu nombre es demasiado extenso para ser inscrito en el Libro del Destino. "
            "Utiliza un apelativo más conciso (máximo {limit} caracteres)."
        ),
        RuleCategory.SPECIAL_CHARACTERS: (
            "El Hilo del Destino se enreda con los símbolos de tu nombre. "
            "Escríbelo con letras sencillas para que el Oráculo te reconozca."
        ),
        RuleCategory.REPETITION: (
            "El eco de letras repetidas confunde al Oráculo. Pronuncia tu nombre con claridad."
        ),
        None: (
            "Los Arcanos detectan energías discordantes en el nombre que pronuncias. "
            "Reformula con intención pura y el Oráculo te reconocerá."
        ),
    },
}


@dataclass(frozen=True)
class Violation:
    """The first check a piece of text failed."""

    category: RuleCategory
    hint: str


def find_violation(
    text: str,
    kind: TextKind,
    max_length: int,
    max_special_ratio: float = MAX_SPECIAL_CHAR_RATIO,
) -> Violation | None:
    """Run every check against ``text`` and return the first failure.

    Order is length, injection rules (in table order), special-character
    ratio, then repeated characters. ``text`` is expected to be
    whitespace-normalized and non-empty.
    """

    subject = _SUBJECTS[kind]

    if len(text) > max_length:
        return Violation(RuleCategory.LENGTH, _LENGTH_HINTS[kind].format(limit=max_length))

    for rule in INJECTION_RULES:
        if rule.matches(text):
            return Violation(rule.category, rule.message.format(subject=subject))

    special_count = len(SPECIAL_CHARACTER.findall(text))
    if special_count / len(text) > max_special_ratio:
        return Violation(
            RuleCategory.SPECIAL_CHARACTERS,
            _SPECIAL_CHARACTERS_HINT.format(subject=subject),
        )

    if REPEATED_CHARACTER.search(text):
        return Violation(RuleCategory.REPETITION, _REPETITION_HINT)

    return None


def normalize_whitespace(text: str | None) -> str:
    """Trim and collapse whitespace runs (newlines included) to single spaces."""

    return " ".join((text or "").split())


def validate_text(
    text: str | None,
    kind: TextKind,
    max_length: int | None = None,
    max_special_ratio: float = MAX_SPECIAL_CHAR_RATIO,
) -> ValidationResult:
    """Return an advisory verdict; never raises."""

    limit = max_length if max_length is not None else _DEFAULT_LIMITS[kind]
    normalized = normalize_whitespace(text)
    if not normalized:
        return ValidationResult(is_valid=True, remaining_chars=limit)

    remaining = limit - len(normalized)
    violation = find_violation(normalized, kind, limit, max_special_ratio)
    if violation is not None:
        return ValidationResult(is_valid=False, error=violation.hint, remaining_chars=remaining)

    return ValidationResult(is_valid=True, remaining_chars=remaining)


def validate_user_question(
    text: str | None,
    max_length: int = MAX_QUESTION_LENGTH,
    max_special_ratio: float = MAX_SPECIAL_CHAR_RATIO,
) -> ValidationResult:
    return validate_text(text, TextKind.QUESTION, max_length, max_special_ratio)


def validate_user_name(
    text: str | None,
    max_length: int = MAX_NAME_LENGTH,
    max_special_ratio: float = MAX_SPECIAL_CHAR_RATIO,
) -> ValidationResult:
    return validate_text(text, TextKind.NAME, max_length, max_special_ratio)


def sanitize_text(
    text: str | None,
    kind: TextKind,
    max_length: int | None = None,
    max_special_ratio: float = MAX_SPECIAL_CHAR_RATIO,
) -> str | None:
    """Return the whitespace-normalized text, or ``None`` when it is blank.

    The checks run on the normalized string, which is exactly what reaches
    the prompt.

    Raises:
        InputRejectedError: if any check fails.
    """

    if text is None:
        return None

    normalized = normalize_whitespace(text)
    if not normalized:
        return None

    limit = max_length if max_length is not None else _DEFAULT_LIMITS[kind]
    violation = find_violation(normalized, kind, limit, max_special_ratio)
    if violation is not None:
        logger.warning(
            "User input rejected",
            extra={
                "field": kind.value,
                "category": violation.category.value,
                "length": len(normalized),
            },
        )
        raise InputRejectedError(
            _rejection_message(kind, violation.category, limit),
            category=violation.category.value,
            field=kind.value,
            hint=violation.hint,
        )

    return normalized


def sanitize_question(
    text: str | None,
    max_length: int = MAX_QUESTION_LENGTH,
    max_special_ratio: float = MAX_SPECIAL_CHAR_RATIO,
) -> str | None:
    return sanitize_text(text, TextKind.QUESTION, max_length, max_special_ratio)


def sanitize_name(
    text: str | None,
    max_length: int = MAX_NAME_LENGTH,
    max_special_ratio: float = MAX_SPECIAL_CHAR_RATIO,
) -> str | None:
    return sanitize_text(text, TextKind.NAME, max_length, max_special_ratio)


def _rejection_message(kind: TextKind, category: RuleCategory, limit: int) -> str:
    messages = _REJECTIONS[kind]
    template = messages.get(category, messages[None])
    return template.format(limit=limit)
