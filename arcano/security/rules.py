"""Prompt-injection rule table.

Rules are evaluated in order and the first match wins. Messages are shown
to the user as live feedback; ``{subject}`` is filled with the field being
checked ("pregunta" or "nombre").
"""

import re
from dataclasses import dataclass
from enum import Enum


class RuleCategory(str, Enum):
    LENGTH = "length"
    INSTRUCTION_OVERRIDE = "instruction_override"
    ROLE_REASSIGNMENT = "role_reassignment"
    SYSTEM_VOCABULARY = "system_vocabulary"
    PROMPT_DELIMITER = "prompt_delimiter"
    ENCODED_PAYLOAD = "encoded_payload"
    SHELL_SYNTAX = "shell_syntax"
    SECURITY_JARGON = "security_jargon"
    MULTI_INSTRUCTION = "multi_instruction"
    OFF_DOMAIN = "off_domain"
    ROLE_DECLARATION = "role_declaration"
    SPECIAL_CHARACTERS = "special_characters"
    REPETITION = "repetition"


@dataclass(frozen=True)
class InjectionRule:
    category: RuleCategory
    pattern: re.Pattern[str]
    message: str

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


def _rule(category: RuleCategory, pattern: str, message: str) -> InjectionRule:
    return InjectionRule(category, re.compile(pattern, re.IGNORECASE), message)


_ROLE_CHANGE = "Evita instrucciones de cambio de rol. Formula tu {subject} sin pedirle al oráculo que sea otra cosa."

INJECTION_RULES: tuple[InjectionRule, ...] = (
    _rule(
        RuleCategory.INSTRUCTION_OVERRIDE,
        r"\b(ignore|ignora|disregard|forget|olvida)\s+"
        r"(all|todo|todas|todos|previous|previo|previas|anteriores?|your|tu|tus|the|las?|los?)\s+"
        r"((the|las?|los?|tus?|your|previous|anteriores?)\s+)?"
        r"(instructions?|instrucciones?|prompts?|rules?|reglas?|commands?|comandos?)",
        "Tu {subject} contiene palabras que sugieren un intento de modificar el comportamiento del oráculo.",
    ),
    _rule(
        RuleCategory.ROLE_REASSIGNMENT,
        r"\b(you are|eres|you're|ahora eres|now you are|from now|ahora)\s+(a|an|un|una)?\s*"
        r"(teacher|profesor|profesora|developer|desarrollador|engineer|ingeniero|"
        r"assistant|asistente|expert|experto)",
        _ROLE_CHANGE,
    ),
    _rule(
        RuleCategory.ROLE_REASSIGNMENT,
        r"\b(act as|actúa como|actua como|pretend to be|finge ser|simulate|simula|"
        r"behave as|compórtate como)\b",
        _ROLE_CHANGE,
    ),
    _rule(
        RuleCategory.SYSTEM_VOCABULARY,
        r"\b(system|sistema)\s+(mode|modo|prompt|instruction|instrucción)",
        "Tu {subject} contiene referencias técnicas no permitidas.",
    ),
    _rule(
        RuleCategory.SYSTEM_VOCABULARY,
        r"\b(the|your|tu|tus|show|muestra|reveal|revela)\s+"
        r"(prompt|instruction|instrucción|system prompt|rule|regla)",
        "Evita referencias a instrucciones del sistema. Haz tu consulta de tarot directamente.",
    ),
    _rule(
        RuleCategory.PROMPT_DELIMITER,
        r"```|<\|.*?\|>|<\s*/?\s*[a-z_][a-z0-9_]*\s*>",
        "Tu {subject} contiene caracteres o delimitadores no permitidos.",
    ),
    _rule(
        RuleCategory.ENCODED_PAYLOAD,
        r"&#\d+;|%[0-9a-f]{2}|\\u[0-9a-f]{4}|\\x[0-9a-f]{2}",
        "Caracteres codificados no están permitidos. Usa solo texto normal.",
    ),
    _rule(
        RuleCategory.SHELL_SYNTAX,
        r"\$\{.*\}|\$\(.*\)|`.*`",
        "Tu {subject} contiene sintaxis de comando que no está permitida.",
    ),
    _rule(
        RuleCategory.SECURITY_JARGON,
        r"\b(jailbreak|bypass|override|sobrescribe|sobrescribir|hack|hackea|exploit|explotar)\b",
        "Palabras sospechosas detectadas. Reformula tu {subject} de manera natural.",
    ),
    _rule(
        RuleCategory.MULTI_INSTRUCTION,
        r"\b(new task|nueva tarea|additional instruction|instrucción adicional)\b",
        "Evita instrucciones múltiples. Haz una sola consulta sobre el tarot.",
    ),
    _rule(
        RuleCategory.OFF_DOMAIN,
        r"\b(explain|explica|teach|enseña|tutorial|how to code|cómo programar|como programar)\b"
        r".*(code|código|program|programming|programación|python|javascript|java|c\+\+)",
        "Esta consulta parece solicitar información técnica. Enfócate en tu pregunta sobre el tarot.",
    ),
    _rule(
        RuleCategory.ROLE_DECLARATION,
        r"\b(rol|role)\s*:",
        'No uses "rol:" ni "role:" en tu {subject}. Formula tu consulta de tarot directamente.',
    ),
)

# Letters, digits, whitespace, Latin-1/Latin Extended-A letters and plain punctuation.
SPECIAL_CHARACTER = re.compile(r"[^a-zA-Z0-9\s\u00c0-\u017f¿?¡!.,;:]")
MAX_SPECIAL_CHAR_RATIO = 0.2

REPEATED_CHARACTER = re.compile(r"(.)\1{4,}")
