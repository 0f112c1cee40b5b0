"""Pydantic models shared across application layers."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TextKind(str, Enum):
    """Which user-supplied field a piece of text belongs to."""

    QUESTION = "question"
    NAME = "name"


class SpreadPosition(BaseModel):
    id: int
    name: str
    question: str = ""


class Spread(BaseModel):
    """A named layout whose positions are filled by drawn cards."""

    id: str
    name: str
    description: str = ""
    positions: list[SpreadPosition]

    def position(self, position_id: int) -> SpreadPosition | None:
        for position in self.positions:
            if position.id == position_id:
                return position
        return None


class DrawnCard(BaseModel):
    """A card placed on one spread position."""

    model_config = ConfigDict(frozen=True)

    card_id: str
    name: str = Field(description="English card name, e.g. 'The Tower'.")
    is_reversed: bool = False
    position_id: int


class ValidationResult(BaseModel):
    """Advisory verdict for live input feedback."""

    is_valid: bool
    error: str | None = None
    remaining_chars: int | None = None


class ValidationRequest(BaseModel):
    kind: TextKind = TextKind.QUESTION
    text: str = ""


class InterpretationRequest(BaseModel):
    """Incoming reading to interpret."""

    spread_id: str
    cards: list[DrawnCard] = Field(min_length=1)
    question: str | None = None
    name: str | None = None

    @field_validator("cards")
    @classmethod
    def _unique_positions(cls, cards: list[DrawnCard]) -> list[DrawnCard]:
        seen = [card.position_id for card in cards]
        if len(seen) != len(set(seen)):
            raise ValueError("Each spread position can hold only one card.")
        return cards


class InterpretationResponse(BaseModel):
    interpretation: str
    source: Literal["oracle", "fallback"]


class ErrorResponse(BaseModel):
    """Error payload returned to HTTP and WebSocket clients."""

    error: str
    detail: str | None = None
