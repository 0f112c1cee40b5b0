"""Oracle error taxonomy.

Every error carries a user-displayable message. Nothing raised from the
pipeline may leak raw exception text or suspect model output to the user.
"""

from dataclasses import dataclass


@dataclass(eq=False)
class OracleError(Exception):
    """Base exception for interpretation pipeline failures."""

    message: str
    code: str = "oracle_error"
    status_code: int | None = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message


@dataclass(eq=False)
class ConfigurationError(OracleError):
    """Raised when the completion credential is missing."""

    code: str = "configuration_error"
    status_code: int | None = 503


@dataclass(eq=False)
class InputRejectedError(OracleError):
    """Raised when a question or name fails validation before any network call."""

    code: str = "input_rejected"
    status_code: int | None = 422
    category: str | None = None
    field: str | None = None
    hint: str | None = None


@dataclass(eq=False)
class IncompleteReadingError(OracleError):
    """Raised when the drawn cards do not fill the spread exactly once."""

    code: str = "incomplete_reading"
    status_code: int | None = 422


@dataclass(eq=False)
class EmptyCompletionError(OracleError):
    """Raised when the completion service answered without usable text."""

    code: str = "empty_completion"
    status_code: int | None = 502


@dataclass(eq=False)
class CompromisedResponseError(OracleError):
    """Raised when the model output fails the response checks."""

    code: str = "compromised_response"
    status_code: int | None = 502
    reason: str | None = None


@dataclass(eq=False)
class TransportError(OracleError):
    """Raised for network or service failures without a domain explanation."""

    code: str = "transport_error"
    status_code: int | None = 502
