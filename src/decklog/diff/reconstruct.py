"""Rebuild historical snapshots by replaying a version log.

A version log is any iterable of :class:`~decklog.models.Version`.  The
functions here never trust its order: each one sorts a copy by sequence
number before folding.  Duplicate or missing sequence numbers are not
detected; the stable sort keeps the result deterministic for the log as
supplied.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from decklog.models import EMPTY_SNAPSHOT, DiffEntry, Snapshot, Version

from .engine import apply_difference, compute_difference


def _sorted_log(versions: Iterable[Version]) -> list[Version]:
    return sorted(versions, key=lambda version: version.sequence)


def iter_snapshots(versions: Iterable[Version]) -> Iterator[tuple[Version, Snapshot]]:
    """Yield ``(version, snapshot_after_version)`` in ascending sequence order.

    Replays the whole log once, so walking the full history costs one fold
    instead of one fold per version.
    """
    state = EMPTY_SNAPSHOT
    for version in _sorted_log(versions):
        state = apply_difference(state, version.difference)
        yield version, state


def reconstruct(versions: Iterable[Version], target: int) -> Snapshot:
    """Return the snapshot as of sequence number *target*.

    Starts from the empty snapshot and applies, in ascending sequence
    order, the difference of every version whose sequence number is at
    most *target*.  The fold stops at the first version past the target.

    Parameters
    ----------
    versions:
        The version log, in any order.
    target:
        Sequence number to rebuild.  Values below the first sequence
        number (including zero and negatives) give the empty snapshot;
        values past the last one give the latest snapshot.

    Returns
    -------
    Snapshot
    """
    state = EMPTY_SNAPSHOT
    for version in _sorted_log(versions):
        if version.sequence > target:
            break
        state = apply_difference(state, version.difference)
    return state


def accumulate_difference(
    versions: Iterable[Version],
    from_sequence: int,
    to_sequence: int,
) -> list[DiffEntry]:
    """Return the net difference between two points of the log.

    Both endpoints are reconstructed independently and re-diffed, so
    swapping *from_sequence* and *to_sequence* yields the inverse change
    without going through :func:`~decklog.diff.engine.invert_difference`.
    """
    log = list(versions)
    from_state = reconstruct(log, from_sequence)
    to_state = reconstruct(log, to_sequence)
    return compute_difference(from_state, to_state)


def has_version(versions: Iterable[Version], sequence: int) -> bool:
    """Return ``True`` if some version in the log carries *sequence*."""
    return any(version.sequence == sequence for version in versions)


def latest_sequence_number(versions: Iterable[Version]) -> int:
    """Return the highest sequence number in the log, or ``0`` if it is empty."""
    return max((version.sequence for version in versions), default=0)
