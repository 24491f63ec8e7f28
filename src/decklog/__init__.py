"""decklog: version control for card-game deck lists.

A deck's committed history is a log of differences.  Any past version is
rebuilt on demand by replaying that log from the empty deck.

Public re-exports
-----------------

* **Aggregate:** :class:`Deck`
* **Engine:** :func:`compute_difference`, :func:`apply_difference`,
  :func:`invert_difference`, :func:`reconstruct`, and the rest of
  :mod:`decklog.diff`
* **Configuration:** :class:`DecklogConfig`
* **Errors:** Every :class:`DecklogError` subclass and :class:`ErrorCode`
* **Models:** Cards, snapshots, difference entries, versions, results

Usage::

    from decklog import CardCategory, CardEntry, compute_difference, reconstruct

    before = [CardEntry("Pikachu", CardCategory.POKEMON, 2)]
    after = [CardEntry("Pikachu", CardCategory.POKEMON, 4)]
    compute_difference(before, after)
    # [Changed(name='Pikachu', category=<CardCategory.POKEMON: 'pokemon'>,
    #          before=2, after=4, card_id=None)]
"""

from __future__ import annotations

# ── Configuration ───────────────────────────────────────────────────────
from decklog.config import (
    DEFAULT_BASIC_ENERGY_NAMES,
    DEFAULT_BASIC_ENERGY_PATTERNS,
    DecklogConfig,
)

# ── Aggregate ───────────────────────────────────────────────────────────
from decklog.deck import Deck

# ── Engine ──────────────────────────────────────────────────────────────
from decklog.diff import (
    accumulate_difference,
    apply_difference,
    apply_difference_sequence,
    compute_difference,
    has_difference,
    has_version,
    invert_difference,
    iter_snapshots,
    latest_sequence_number,
    reconstruct,
    revert_difference,
)

# ── Errors ──────────────────────────────────────────────────────────────
from decklog.errors import (
    DecklogCommitError,
    DecklogError,
    DecklogParseError,
    DecklogValidationError,
    DecklogVersionNotFoundError,
    ErrorCode,
)

# ── Models ──────────────────────────────────────────────────────────────
from decklog.models import (
    EMPTY_SNAPSHOT,
    Added,
    CardCategory,
    CardEntry,
    Changed,
    DeckListResult,
    DiffEntry,
    DiffType,
    ParseWarning,
    Regulation,
    Removed,
    Snapshot,
    ValidationErrorCode,
    ValidationIssue,
    ValidationResult,
    Version,
)

# ── Public surface ──────────────────────────────────────────────────────

__all__ = [
    # Aggregate
    "Deck",
    # Configuration
    "DecklogConfig",
    "DEFAULT_BASIC_ENERGY_NAMES",
    "DEFAULT_BASIC_ENERGY_PATTERNS",
    # Engine
    "compute_difference",
    "has_difference",
    "apply_difference",
    "apply_difference_sequence",
    "invert_difference",
    "revert_difference",
    "reconstruct",
    "accumulate_difference",
    "iter_snapshots",
    "has_version",
    "latest_sequence_number",
    # Errors
    "DecklogError",
    "ErrorCode",
    "DecklogValidationError",
    "DecklogCommitError",
    "DecklogVersionNotFoundError",
    "DecklogParseError",
    # Models, cards and snapshots
    "CardCategory",
    "CardEntry",
    "Regulation",
    "Snapshot",
    "EMPTY_SNAPSHOT",
    # Models, differences and versions
    "DiffType",
    "DiffEntry",
    "Added",
    "Removed",
    "Changed",
    "Version",
    # Models, results
    "ValidationErrorCode",
    "ValidationIssue",
    "ValidationResult",
    "ParseWarning",
    "DeckListResult",
]
