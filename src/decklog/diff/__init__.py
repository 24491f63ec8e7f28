"""Diff and reconstruction engine.

Exports
-------
compute_difference
    Minimal entries that turn one snapshot into another.
has_difference
    Order-independent inequality check between two snapshots.
apply_difference / apply_difference_sequence
    Replay one or several differences onto a snapshot.
invert_difference / revert_difference
    Structural inverse of a difference, and undo via that inverse.
reconstruct
    Rebuild the snapshot at any sequence number of a version log.
accumulate_difference
    Net difference between two sequence numbers of a version log.
iter_snapshots
    Walk every snapshot of a version log in one pass.
has_version / latest_sequence_number
    Simple version-log queries.
"""

from .engine import (
    apply_difference,
    apply_difference_sequence,
    compute_difference,
    has_difference,
    invert_difference,
    revert_difference,
)
from .reconstruct import (
    accumulate_difference,
    has_version,
    iter_snapshots,
    latest_sequence_number,
    reconstruct,
)

__all__ = [
    "accumulate_difference",
    "apply_difference",
    "apply_difference_sequence",
    "compute_difference",
    "has_difference",
    "has_version",
    "invert_difference",
    "iter_snapshots",
    "latest_sequence_number",
    "reconstruct",
    "revert_difference",
]
