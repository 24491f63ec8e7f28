"""Card-list editing helpers.

Every function takes a snapshot (or any iterable of
:class:`~decklog.models.CardEntry`) and returns a new value; the input is
never modified.  Editing helpers keep the position of existing cards and
append new cards at the end.
"""

from __future__ import annotations

from decklog.models import CardCategory, CardEntry, Snapshot, SnapshotLike


def add_card(
    cards: SnapshotLike,
    name: str,
    category: CardCategory,
    card_id: str | None = None,
    image_url: str | None = None,
) -> Snapshot:
    """Add one copy of *name*.

    If the card is already present its count is incremented and its other
    fields are left untouched; otherwise a new entry with a count of 1 is
    appended.
    """
    items = Snapshot.of(cards).to_dict()
    existing = items.get(name)
    if existing is not None:
        items[name] = existing.with_count(existing.count + 1)
    else:
        items[name] = CardEntry(
            name=name,
            category=category,
            count=1,
            card_id=card_id,
            image_url=image_url,
        )
    return Snapshot._adopt(items)


def remove_card(cards: SnapshotLike, name: str) -> Snapshot:
    """Remove *name* entirely.  Removing an absent card changes nothing."""
    items = Snapshot.of(cards).to_dict()
    items.pop(name, None)
    return Snapshot._adopt(items)


def update_count(cards: SnapshotLike, name: str, count: int) -> Snapshot:
    """Set the count of *name*.

    A *count* of zero or less removes the card.  Updating an absent card
    changes nothing.
    """
    if count <= 0:
        return remove_card(cards, name)

    items = Snapshot.of(cards).to_dict()
    existing = items.get(name)
    if existing is not None:
        items[name] = existing.with_count(count)
    return Snapshot._adopt(items)


def total_count(cards: SnapshotLike) -> int:
    """Return the total number of cards (sum of all counts)."""
    return sum(card.count for card in Snapshot.of(cards).values())


def card_count(cards: SnapshotLike, name: str) -> int:
    """Return the count of *name*, or ``0`` if it is absent."""
    card = Snapshot.of(cards).get(name)
    return card.count if card is not None else 0


def find_card(cards: SnapshotLike, name: str) -> CardEntry | None:
    """Return the entry for *name*, or ``None``."""
    return Snapshot.of(cards).get(name)


def group_by_category(cards: SnapshotLike) -> dict[CardCategory, list[CardEntry]]:
    """Group entries by category.

    The result has a key for every :class:`CardCategory`, in declaration
    order, even when a category holds no card.  Within a group, entries
    keep the snapshot's order.
    """
    groups: dict[CardCategory, list[CardEntry]] = {category: [] for category in CardCategory}
    for card in Snapshot.of(cards).values():
        groups[card.category].append(card)
    return groups


def is_equal(a: SnapshotLike, b: SnapshotLike) -> bool:
    """Return ``True`` if *a* and *b* hold the same ``(name, count)`` pairs."""
    return Snapshot.of(a) == Snapshot.of(b)
