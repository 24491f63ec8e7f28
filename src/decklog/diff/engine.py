"""Diff engine: compute, apply and invert differences between snapshots.

A difference is a list of :data:`~decklog.models.DiffEntry` values with at
most one entry per card name.  :func:`compute_difference` produces the
minimal one between two snapshots; :func:`apply_difference` replays any
difference onto a base snapshot, whether or not it was computed against
that base.

Every function accepts a :class:`~decklog.models.Snapshot` or any iterable
of :class:`~decklog.models.CardEntry`, and every function that produces a
snapshot returns a new one.  Inputs are never mutated.
"""

from __future__ import annotations

from collections.abc import Iterable

from decklog.models import (
    Added,
    CardEntry,
    Changed,
    DiffEntry,
    DiffType,
    Removed,
    Snapshot,
    SnapshotLike,
)


def compute_difference(before: SnapshotLike, after: SnapshotLike) -> list[DiffEntry]:
    """Compute the entries that turn *before* into *after*.

    Emission order is deterministic: one pass over *after* (``Added`` for
    new names, ``Changed`` for names whose count differs), then one pass
    over *before* (``Removed`` for names missing from *after*).  The order
    carries no meaning.

    ``Added`` and ``Changed`` entries take their category and card id from
    the *after* card; ``Removed`` entries from the *before* card.

    Parameters
    ----------
    before:
        The older snapshot (e.g. the last committed state).
    after:
        The newer snapshot (e.g. the working copy).

    Returns
    -------
    list[DiffEntry]
        Empty when the two snapshots are equal.
    """
    before_map = Snapshot.of(before)
    after_map = Snapshot.of(after)
    difference: list[DiffEntry] = []

    # Additions and count changes.
    for name, card in after_map.items():
        prior = before_map.get(name)
        if prior is None:
            difference.append(
                Added(
                    name=name,
                    category=card.category,
                    after=card.count,
                    card_id=card.card_id,
                )
            )
        elif prior.count != card.count:
            difference.append(
                Changed(
                    name=name,
                    category=card.category,
                    before=prior.count,
                    after=card.count,
                    card_id=card.card_id,
                )
            )

    # Removals.
    for name, card in before_map.items():
        if name not in after_map:
            difference.append(
                Removed(
                    name=name,
                    category=card.category,
                    before=card.count,
                    card_id=card.card_id,
                )
            )

    return difference


def has_difference(before: SnapshotLike, after: SnapshotLike) -> bool:
    """Return ``True`` if *before* and *after* hold different cards or counts.

    Agrees with ``bool(compute_difference(before, after))`` for all inputs
    but does not build the entries.  Enumeration order is ignored.
    """
    before_counts = Snapshot.of(before).counts()
    after_map = Snapshot.of(after)

    if len(before_counts) != len(after_map):
        return True

    return any(
        before_counts.get(name) != card.count for name, card in after_map.items()
    )


def apply_difference(base: SnapshotLike, difference: Iterable[DiffEntry]) -> Snapshot:
    """Apply *difference* to *base* and return the resulting snapshot.

    Entry semantics:

    - **Added**: insert the card, or overwrite an existing card of the same
      name, with the resulting count, category and card id.
    - **Removed**: delete the card.  Deleting an absent card is a no-op.
    - **Changed**: overwrite the count of an existing card, keeping its
      other fields.  Against an absent card the entry is inert and is
      dropped; no card is created.

    Parameters
    ----------
    base:
        Snapshot to start from.  Not modified.
    difference:
        Entries to apply, in order.

    Returns
    -------
    Snapshot
        A new snapshot.
    """
    items = Snapshot.of(base).to_dict()

    for entry in difference:
        if entry.type == DiffType.ADDED:
            items[entry.name] = CardEntry(
                name=entry.name,
                category=entry.category,
                count=entry.after,
                card_id=entry.card_id,
            )

        elif entry.type == DiffType.REMOVED:
            items.pop(entry.name, None)

        elif entry.type == DiffType.CHANGED:
            existing = items.get(entry.name)
            if existing is not None:
                items[entry.name] = existing.with_count(entry.after)

    return Snapshot._adopt(items)


def apply_difference_sequence(
    base: SnapshotLike,
    differences: Iterable[Iterable[DiffEntry]],
) -> Snapshot:
    """Fold :func:`apply_difference` left to right over *differences*.

    An empty sequence returns a snapshot equal to *base*.
    """
    result = Snapshot.of(base)
    for difference in differences:
        result = apply_difference(result, difference)
    return result


def _invert_entry(entry: DiffEntry) -> DiffEntry:
    if entry.type == DiffType.ADDED:
        return Removed(
            name=entry.name,
            category=entry.category,
            before=entry.after,
            card_id=entry.card_id,
        )
    if entry.type == DiffType.REMOVED:
        return Added(
            name=entry.name,
            category=entry.category,
            after=entry.before,
            card_id=entry.card_id,
        )
    return Changed(
        name=entry.name,
        category=entry.category,
        before=entry.after,
        after=entry.before,
        card_id=entry.card_id,
    )


def invert_difference(difference: Iterable[DiffEntry]) -> list[DiffEntry]:
    """Return the structural inverse of *difference*, entry by entry.

    ``Added`` and ``Removed`` swap (the count moves to the other side) and
    ``Changed`` swaps its prior and resulting counts.  For a difference
    computed against *base*, applying it and then its inverse yields a
    snapshot equal to *base*.  Inverting a difference that was not derived
    from the snapshot it is later applied to carries no such guarantee.
    """
    return [_invert_entry(entry) for entry in difference]


def revert_difference(current: SnapshotLike, difference: Iterable[DiffEntry]) -> Snapshot:
    """Undo *difference* on *current* by applying its inverse."""
    return apply_difference(current, invert_difference(difference))
