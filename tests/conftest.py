"""Shared test fixtures for the decklog test suite."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from decklog.config import DecklogConfig
from decklog.deck import Deck
from decklog.models import Added, CardCategory, Changed, Version


@pytest.fixture
def config() -> DecklogConfig:
    """Default configuration (standard rules)."""
    return DecklogConfig()


@pytest.fixture
def deck(config: DecklogConfig) -> Deck:
    """An empty deck with a fixed id."""
    return Deck("Lightning Box", config=config, deck_id="deck-test")


@pytest.fixture
def pikachu_log() -> list[Version]:
    """v1 adds Pikachu x2, v2 raises it to 4, v3 adds Mew x1."""
    ts = datetime(2025, 1, 1, tzinfo=timezone.utc)
    return [
        Version(
            sequence=1,
            message="Add Pikachu",
            difference=(Added("Pikachu", CardCategory.POKEMON, after=2),),
            created_at=ts,
            deck_id="deck-test",
        ),
        Version(
            sequence=2,
            message="More Pikachu",
            difference=(Changed("Pikachu", CardCategory.POKEMON, before=2, after=4),),
            created_at=ts,
            deck_id="deck-test",
        ),
        Version(
            sequence=3,
            message="Add Mew",
            difference=(Added("Mew", CardCategory.POKEMON, after=1),),
            created_at=ts,
            deck_id="deck-test",
        ),
    ]
