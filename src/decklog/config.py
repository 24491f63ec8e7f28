"""Configuration for decklog.

:class:`DecklogConfig` is a plain dataclass capturing the deck-building
limits, the basic-energy exemptions, and the observability and debug
switches used by :class:`~decklog.deck.Deck`.

Two module-level constants define the default basic-energy exemptions:

* :data:`DEFAULT_BASIC_ENERGY_NAMES`: names matched exactly.
* :data:`DEFAULT_BASIC_ENERGY_PATTERNS`: regular expressions matched
  against the full card name.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

# ---------------------------------------------------------------------------
# Basic-energy constants
# ---------------------------------------------------------------------------

DEFAULT_BASIC_ENERGY_NAMES: list[str] = [
    "Basic Grass Energy",
    "Basic Fire Energy",
    "Basic Water Energy",
    "Basic Lightning Energy",
    "Basic Psychic Energy",
    "Basic Fighting Energy",
    "Basic Darkness Energy",
    "Basic Metal Energy",
    "Basic Fairy Energy",
    "Basic Dragon Energy",
    "Basic Colorless Energy",
    "基本草エネルギー",
    "基本炎エネルギー",
    "基本水エネルギー",
    "基本雷エネルギー",
    "基本超エネルギー",
    "基本闘エネルギー",
    "基本悪エネルギー",
    "基本鋼エネルギー",
    "基本フェアリーエネルギー",
    "基本ドラゴンエネルギー",
    "基本無色エネルギー",
]
"""Card names exempt from the per-name copy limit."""

DEFAULT_BASIC_ENERGY_PATTERNS: list[str] = [
    r"^Basic .+ Energy$",
    r"^基本.+エネルギー$",
]
"""Patterns for basic-energy names not listed explicitly (new types)."""


# ---------------------------------------------------------------------------
# Configuration dataclass
# ---------------------------------------------------------------------------

@dataclass
class DecklogConfig:
    """Complete configuration for decklog.

    Every parameter has a default matching the standard deck-building
    rules, so ``DecklogConfig()`` is a usable configuration.

    Parameters
    ----------
    max_deck_size:
        Maximum total number of cards in a deck.
    max_copies:
        Maximum copies of a single card name.  Basic energy is exempt.
    basic_energy_names:
        Card names treated as basic energy.
    basic_energy_patterns:
        Regular expressions; a name fully matching any of them is treated
        as basic energy.  Validated (compiled) at construction time.
    deck_id_prefix:
        Prefix for generated deck identifiers (``"<prefix>-<hex>"``).
    metrics:
        Optional :class:`~decklog.observability.MetricsHook` backend.
    debug_dump_diff:
        Write every committed difference as JSON to *stderr*.
    """

    # ── Rules ───────────────────────────────────────────────────────────
    max_deck_size: int = 60

    max_copies: int = 4

    basic_energy_names: list[str] = field(
        default_factory=lambda: list(DEFAULT_BASIC_ENERGY_NAMES),
    )

    basic_energy_patterns: list[str] = field(
        default_factory=lambda: list(DEFAULT_BASIC_ENERGY_PATTERNS),
    )

    # ── History ─────────────────────────────────────────────────────────
    deck_id_prefix: str = "deck"

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    # ── Debug ───────────────────────────────────────────────────────────
    debug_dump_diff: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.max_deck_size < 1:
            raise ValueError(f"max_deck_size must be >= 1, got {self.max_deck_size}")
        if self.max_copies < 1:
            raise ValueError(f"max_copies must be >= 1, got {self.max_copies}")
        if not self.deck_id_prefix:
            raise ValueError("deck_id_prefix must not be empty")
        for pattern in self.basic_energy_patterns:
            try:
                re.compile(pattern)
            except re.error as exc:
                raise ValueError(
                    f"basic_energy_patterns contains an invalid pattern {pattern!r}: {exc}"
                ) from exc
