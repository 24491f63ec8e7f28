"""Public data models for decklog.

This module contains the card and snapshot types the diff engine works on,
the three difference-entry variants, the :class:`Version` record stored in
a version log, and the result types returned by validation and deck-list
parsing.  Value types are frozen dataclasses so they can be shared between
snapshots without defensive copying.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Union


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class CardCategory(str, Enum):
    """Category of a card.  Declaration order is the display order."""

    POKEMON = "pokemon"
    TRAINER = "trainer"
    ENERGY = "energy"


class Regulation(str, Enum):
    """Tournament format a deck is built for."""

    STANDARD = "standard"
    EXPANDED = "expanded"
    UNLIMITED = "unlimited"


class DiffType(str, Enum):
    """Tag of a difference entry."""

    ADDED = "added"
    """The card is new; only the resulting count is known."""

    REMOVED = "removed"
    """The card was dropped; only the prior count is known."""

    CHANGED = "changed"
    """The card's count changed; both counts are known and differ."""


class ValidationErrorCode(str, Enum):
    """Codes reported by the deck-building rule checks."""

    DECK_OVER_LIMIT = "DECK_OVER_LIMIT"
    CARD_OVER_LIMIT = "CARD_OVER_LIMIT"
    MESSAGE_REQUIRED = "MESSAGE_REQUIRED"
    CARD_NAME_REQUIRED = "CARD_NAME_REQUIRED"
    INVALID_COUNT = "INVALID_COUNT"


# ---------------------------------------------------------------------------
# Cards and snapshots
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CardEntry:
    """One line of a deck: a card name and how many copies it holds.

    Attributes
    ----------
    name:
        Card name.  Unique within a snapshot; it is the snapshot key.
    category:
        The card's :class:`CardCategory`.
    count:
        Number of copies (>= 1 in a well-formed snapshot).
    card_id:
        Optional identifier in an external card catalogue.
    image_url:
        Optional card image URL from an external card catalogue.
    """

    name: str
    category: CardCategory
    count: int
    card_id: str | None = None
    image_url: str | None = None

    def with_count(self, count: int) -> CardEntry:
        """Return a copy of this entry holding *count* copies."""
        return dataclasses.replace(self, count=count)


class Snapshot(Mapping[str, CardEntry]):
    """Immutable name-keyed collection of :class:`CardEntry` values.

    Iteration yields card names in insertion order.  That order is stable
    (useful for rendering and fixtures) but never significant: two
    snapshots compare equal when they hold the same ``(name, count)``
    pairs, regardless of order, category or catalogue fields.

    Building a snapshot from an iterable that repeats a name keeps the
    last occurrence.  A mapping (including another snapshot) contributes
    its values.
    """

    __slots__ = ("_items",)

    def __init__(self, cards: SnapshotLike | Mapping[str, CardEntry] = ()) -> None:
        if isinstance(cards, Mapping):
            cards = cards.values()
        items: dict[str, CardEntry] = {}
        for card in cards:
            items[card.name] = card
        self._items = items

    @classmethod
    def of(cls, cards: SnapshotLike) -> Snapshot:
        """Coerce *cards* to a snapshot, reusing it when it already is one."""
        if isinstance(cards, Snapshot):
            return cards
        return cls(cards)

    @classmethod
    def _adopt(cls, items: dict[str, CardEntry]) -> Snapshot:
        # Takes ownership of *items*; callers must not keep a reference.
        snapshot = cls.__new__(cls)
        snapshot._items = items
        return snapshot

    def __getitem__(self, name: str) -> CardEntry:
        return self._items[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Snapshot):
            return NotImplemented
        return self.counts() == other.counts()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Snapshot({self.counts()!r})"

    def cards(self) -> list[CardEntry]:
        """Return the entries in iteration order."""
        return list(self._items.values())

    def counts(self) -> dict[str, int]:
        """Return a ``name -> count`` mapping."""
        return {name: card.count for name, card in self._items.items()}

    def to_dict(self) -> dict[str, CardEntry]:
        """Return a mutable copy of the underlying ``name -> entry`` map."""
        return dict(self._items)


SnapshotLike = Union[Snapshot, Iterable[CardEntry]]
"""Anything the engine accepts where a snapshot is expected."""


EMPTY_SNAPSHOT = Snapshot()


# ---------------------------------------------------------------------------
# Difference entries
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Added:
    """A card present only in the newer snapshot.

    Attributes
    ----------
    name:
        Card name.
    category:
        Category of the added card.
    after:
        Resulting count.
    card_id:
        External identifier of the added card, if any.
    """

    name: str
    category: CardCategory
    after: int
    card_id: str | None = None

    @property
    def type(self) -> DiffType:
        return DiffType.ADDED


@dataclass(frozen=True)
class Removed:
    """A card present only in the older snapshot.

    Attributes
    ----------
    name:
        Card name.
    category:
        Category of the removed card.
    before:
        Prior count.
    card_id:
        External identifier of the removed card, if any.
    """

    name: str
    category: CardCategory
    before: int
    card_id: str | None = None

    @property
    def type(self) -> DiffType:
        return DiffType.REMOVED


@dataclass(frozen=True)
class Changed:
    """A card present in both snapshots with different counts.

    Raises
    ------
    ValueError
        If *before* equals *after*; a no-op change is not representable.
    """

    name: str
    category: CardCategory
    before: int
    after: int
    card_id: str | None = None

    def __post_init__(self) -> None:
        if self.before == self.after:
            raise ValueError(
                f"Changed entry for {self.name!r} has identical counts ({self.before})"
            )

    @property
    def type(self) -> DiffType:
        return DiffType.CHANGED


DiffEntry = Union[Added, Removed, Changed]
"""One entry of a difference (tagged union)."""


# ---------------------------------------------------------------------------
# Version log
# ---------------------------------------------------------------------------

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Version:
    """An immutable, sequence-numbered commit in a deck's version log.

    Attributes
    ----------
    sequence:
        1-based version number.  Strictly increasing and contiguous in a
        well-formed log.
    message:
        Commit message, already trimmed.
    difference:
        Entries that turn the previous version's snapshot into this one.
        Stored as a tuple so the record stays immutable.
    created_at:
        Commit time (UTC).
    deck_id:
        Identifier of the deck the version belongs to.
    """

    sequence: int
    message: str
    difference: tuple[DiffEntry, ...] = ()
    created_at: datetime = field(default_factory=_utcnow)
    deck_id: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.difference, tuple):
            object.__setattr__(self, "difference", tuple(self.difference))

    @property
    def id(self) -> str:
        """Display identifier, ``"v<sequence>"``."""
        return f"v{self.sequence}"


# ---------------------------------------------------------------------------
# Validation results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ValidationIssue:
    """A single broken deck-building rule.

    Attributes
    ----------
    code:
        Which rule was broken.
    message:
        Human-readable description.
    field:
        The card name or input field the issue refers to, if any.
    """

    code: ValidationErrorCode
    message: str
    field: str | None = None


@dataclass
class ValidationResult:
    """Outcome of a rule check.  ``is_valid`` is true iff ``errors`` is empty."""

    errors: list[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


# ---------------------------------------------------------------------------
# Deck-list parsing
# ---------------------------------------------------------------------------

@dataclass
class ParseWarning:
    """A non-fatal issue encountered while reading a Markdown deck list.

    Attributes
    ----------
    code:
        A machine-readable warning code (e.g. ``"NO_CATEGORY"``).
    message:
        A human-readable description of the issue.
    context:
        Arbitrary structured data for diagnostics.
    """

    code: str
    message: str
    context: dict = field(default_factory=dict)


@dataclass
class DeckListResult:
    """Output of :func:`decklog.decklist.parse_deck_list`.

    Attributes
    ----------
    name:
        Deck name taken from the first level-1 heading, if any.
    cards:
        The parsed snapshot.
    warnings:
        Lines that were skipped, with the reason.
    """

    name: str | None = None
    cards: Snapshot = field(default_factory=Snapshot)
    warnings: list[ParseWarning] = field(default_factory=list)
