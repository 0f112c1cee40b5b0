"""Shared pytest fixtures."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("GROQ_API_KEY", "test-key")
os.environ.setdefault("ENVIRONMENT", "test")

from arcano.data.spreads import DAILY, THREE_CARD  # noqa: E402
from arcano.main import create_app  # noqa: E402
from arcano.models import DrawnCard  # noqa: E402


@pytest.fixture(autouse=True)
def configure_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure required environment variables are present during tests."""

    monkeypatch.setenv("GROQ_API_KEY", "test-key")
    monkeypatch.setenv("ENVIRONMENT", "test")


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def three_card_spread():
    return THREE_CARD


@pytest.fixture
def three_cards() -> list[DrawnCard]:
    return [
        DrawnCard(card_id="major-16", name="The Tower", is_reversed=False, position_id=0),
        DrawnCard(card_id="cups-2", name="Two of Cups", is_reversed=True, position_id=1),
        DrawnCard(card_id="major-17", name="The Star", is_reversed=False, position_id=2),
    ]


@pytest.fixture
def daily_spread():
    return DAILY


@pytest.fixture
def one_card() -> list[DrawnCard]:
    return [DrawnCard(card_id="major-0", name="The Fool", position_id=0)]
