"""Deck-building rule checks.

The checks never raise; each returns a :class:`~decklog.models.ValidationResult`
listing every broken rule.  Limits and basic-energy exemptions come from
:class:`~decklog.config.DecklogConfig` (standard rules by default).

Rules:

* a deck holds at most ``max_deck_size`` cards (60);
* a deck holds at most ``max_copies`` copies of one card name (4), except
  basic energy, which is unlimited;
* every count is at least 1;
* commit messages and card names must not be blank.
"""

from __future__ import annotations

import re

from decklog.cards import total_count
from decklog.config import DecklogConfig
from decklog.models import (
    Snapshot,
    SnapshotLike,
    ValidationErrorCode,
    ValidationIssue,
    ValidationResult,
)

_DEFAULT_CONFIG = DecklogConfig()


def is_basic_energy(name: str, config: DecklogConfig | None = None) -> bool:
    """Return ``True`` if *name* is a basic energy card.

    Exact names are checked first, then the configured patterns.
    """
    cfg = config or _DEFAULT_CONFIG
    if name in cfg.basic_energy_names:
        return True
    return any(re.fullmatch(pattern, name) for pattern in cfg.basic_energy_patterns)


def validate_deck(cards: SnapshotLike, config: DecklogConfig | None = None) -> ValidationResult:
    """Check a whole deck against the size, copy and count rules."""
    cfg = config or _DEFAULT_CONFIG
    snapshot = Snapshot.of(cards)
    errors: list[ValidationIssue] = []

    total = total_count(snapshot)
    if total > cfg.max_deck_size:
        errors.append(
            ValidationIssue(
                code=ValidationErrorCode.DECK_OVER_LIMIT,
                message=(
                    f"A deck may hold at most {cfg.max_deck_size} cards "
                    f"(currently {total})"
                ),
            )
        )

    for card in snapshot.values():
        if card.count < 1:
            errors.append(
                ValidationIssue(
                    code=ValidationErrorCode.INVALID_COUNT,
                    message=f"Card count must be at least 1: {card.name} ({card.count})",
                    field=card.name,
                )
            )
        elif card.count > cfg.max_copies and not is_basic_energy(card.name, cfg):
            errors.append(
                ValidationIssue(
                    code=ValidationErrorCode.CARD_OVER_LIMIT,
                    message=(
                        f"At most {cfg.max_copies} copies of a card are allowed: "
                        f"{card.name} ({card.count})"
                    ),
                    field=card.name,
                )
            )

    return ValidationResult(errors=errors)


def validate_card_addition(
    cards: SnapshotLike,
    name: str,
    count: int = 1,
    config: DecklogConfig | None = None,
) -> ValidationResult:
    """Check whether adding *count* copies of *name* would break a rule.

    Only the size and copy limits are checked; the rest of the deck is
    assumed to be valid already.
    """
    cfg = config or _DEFAULT_CONFIG
    snapshot = Snapshot.of(cards)
    errors: list[ValidationIssue] = []

    if total_count(snapshot) + count > cfg.max_deck_size:
        errors.append(
            ValidationIssue(
                code=ValidationErrorCode.DECK_OVER_LIMIT,
                message=f"A deck may hold at most {cfg.max_deck_size} cards",
            )
        )

    if not is_basic_energy(name, cfg):
        existing = snapshot.get(name)
        existing_count = existing.count if existing is not None else 0
        if existing_count + count > cfg.max_copies:
            errors.append(
                ValidationIssue(
                    code=ValidationErrorCode.CARD_OVER_LIMIT,
                    message=f"At most {cfg.max_copies} copies of a card are allowed",
                    field=name,
                )
            )

    return ValidationResult(errors=errors)


def validate_commit_message(message: str | None) -> ValidationResult:
    """A commit message is required and must not be whitespace only."""
    if not message or not message.strip():
        return ValidationResult(
            errors=[
                ValidationIssue(
                    code=ValidationErrorCode.MESSAGE_REQUIRED,
                    message="Enter a reason for the change",
                    field="message",
                )
            ]
        )
    return ValidationResult()


def validate_card_name(name: str | None) -> ValidationResult:
    """A card name is required and must not be whitespace only."""
    if not name or not name.strip():
        return ValidationResult(
            errors=[
                ValidationIssue(
                    code=ValidationErrorCode.CARD_NAME_REQUIRED,
                    message="Enter a card name",
                    field="name",
                )
            ]
        )
    return ValidationResult()
