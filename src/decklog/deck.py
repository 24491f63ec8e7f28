"""Deck aggregate: a working copy, its last commit, and the version log.

:class:`Deck` is the single owner of one deck's version log.  It edits a
working copy with the helpers from :mod:`decklog.cards`, checks it with
:mod:`decklog.validation`, and records each commit as a new
:class:`~decklog.models.Version` holding the difference between the last
committed snapshot and the working copy.  History queries delegate to
:mod:`decklog.diff`.

A ``Deck`` is not thread-safe; concurrent writers must serialize calls to
:meth:`Deck.commit` themselves.

Usage::

    from decklog import CardCategory, Deck

    deck = Deck("Lightning Box")
    deck.add_card("Pikachu", CardCategory.POKEMON)
    deck.add_card("Pikachu", CardCategory.POKEMON)
    deck.commit("Initial list")

    deck.update_count("Pikachu", 4)
    deck.commit("Max out Pikachu")

    deck.snapshot_at(1)        # Snapshot({'Pikachu': 2})
    deck.changes_between(1, 2)  # [Changed(name='Pikachu', ..., before=2, after=4)]
"""

from __future__ import annotations

import dataclasses
import json
import sys
import time
import uuid
from collections import Counter
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

from decklog import cards as card_ops
from decklog.config import DecklogConfig
from decklog.diff import (
    accumulate_difference,
    compute_difference,
    has_difference,
    has_version,
    iter_snapshots,
    latest_sequence_number,
    reconstruct,
)
from decklog.errors import (
    DecklogCommitError,
    DecklogValidationError,
    DecklogVersionNotFoundError,
    ErrorCode,
)
from decklog.models import (
    EMPTY_SNAPSHOT,
    CardCategory,
    DiffEntry,
    Regulation,
    Snapshot,
    SnapshotLike,
    ValidationResult,
    Version,
)
from decklog.observability import NoopMetricsHook, bind, get_logger
from decklog.validation import (
    validate_card_addition,
    validate_card_name,
    validate_commit_message,
    validate_deck,
)

log = get_logger("decklog.deck")


class Deck:
    """A deck under version control.

    Parameters
    ----------
    name:
        Display name of the deck.
    regulation:
        Tournament format the deck is built for.
    memo:
        Optional free-text note.
    initial_cards:
        Cards to start the working copy with.  They are *not* committed;
        the first :meth:`commit` records them as additions.
    config:
        Rule limits, metrics backend and debug switches.
    deck_id:
        Identifier stamped on every version.  Generated when omitted.
    """

    def __init__(
        self,
        name: str,
        regulation: Regulation = Regulation.STANDARD,
        memo: str | None = None,
        initial_cards: SnapshotLike = (),
        config: DecklogConfig | None = None,
        deck_id: str | None = None,
    ) -> None:
        self._config = config or DecklogConfig()
        self._metrics = (
            self._config.metrics if self._config.metrics is not None else NoopMetricsHook()
        )
        self.id: str = deck_id or f"{self._config.deck_id_prefix}-{uuid.uuid4().hex[:12]}"
        self._log = bind(log, deck_id=self.id)
        self.name = name
        self.regulation = regulation
        self.memo = memo
        self.created_at: datetime = datetime.now(timezone.utc)
        self.updated_at: datetime = self.created_at

        self._versions: list[Version] = []
        self._saved: Snapshot = EMPTY_SNAPSHOT
        self._current: Snapshot = Snapshot.of(initial_cards)

    @classmethod
    def from_versions(
        cls,
        name: str,
        versions: Iterable[Version],
        *,
        current: SnapshotLike | None = None,
        **kwargs: Any,
    ) -> Deck:
        """Rebuild a deck from an existing version log.

        The last committed snapshot is reconstructed from *versions*.  The
        working copy is *current* when given, otherwise the last commit.
        Unless ``deck_id`` is passed, the id stamped on the versions is
        reused.
        """
        log_versions = sorted(versions, key=lambda version: version.sequence)
        if "deck_id" not in kwargs and log_versions and log_versions[0].deck_id:
            kwargs["deck_id"] = log_versions[0].deck_id

        deck = cls(name, **kwargs)
        deck._versions = log_versions
        deck._saved = reconstruct(log_versions, latest_sequence_number(log_versions))
        deck._current = Snapshot.of(current) if current is not None else deck._saved
        if log_versions:
            deck.updated_at = log_versions[-1].created_at
        return deck

    def __repr__(self) -> str:
        return (
            f"Deck(id={self.id!r}, name={self.name!r}, "
            f"versions={len(self._versions)}, has_changes={self.has_changes})"
        )

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def current(self) -> Snapshot:
        """The working copy."""
        return self._current

    @property
    def saved(self) -> Snapshot:
        """The snapshot recorded by the latest commit (empty before any)."""
        return self._saved

    @property
    def versions(self) -> tuple[Version, ...]:
        """The version log in ascending sequence order."""
        return tuple(self._versions)

    @property
    def version_count(self) -> int:
        return len(self._versions)

    @property
    def latest_version(self) -> Version | None:
        return self._versions[-1] if self._versions else None

    @property
    def has_changes(self) -> bool:
        """``True`` if the working copy differs from the last commit."""
        return has_difference(self._saved, self._current)

    def pending_difference(self) -> list[DiffEntry]:
        """Entries the next commit would record."""
        return compute_difference(self._saved, self._current)

    def validate(self) -> ValidationResult:
        """Check the working copy against the configured deck rules."""
        return validate_deck(self._current, self._config)

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def add_card(
        self,
        name: str,
        category: CardCategory,
        card_id: str | None = None,
        image_url: str | None = None,
    ) -> Snapshot:
        """Add one copy of *name* to the working copy.

        Raises
        ------
        DecklogValidationError
            If the name is blank, or one more copy would exceed the deck
            size or copy limit.  The working copy is left unchanged.
        """
        result = validate_card_name(name)
        if result.is_valid:
            name = name.strip()
            result = validate_card_addition(self._current, name, 1, self._config)
        if not result.is_valid:
            raise DecklogValidationError(
                message=result.errors[0].message,
                context={"deck_id": self.id, "card": name, "issues": result.errors},
            )

        self._current = card_ops.add_card(
            self._current, name, category, card_id=card_id, image_url=image_url,
        )
        return self._current

    def update_count(self, name: str, count: int) -> Snapshot:
        """Set the count of *name*; zero or less removes the card."""
        self._current = card_ops.update_count(self._current, name, count)
        return self._current

    def remove_card(self, name: str) -> Snapshot:
        """Remove *name* from the working copy."""
        self._current = card_ops.remove_card(self._current, name)
        return self._current

    def discard_changes(self) -> Snapshot:
        """Reset the working copy to the last commit."""
        self._current = self._saved
        return self._current

    # ------------------------------------------------------------------
    # Commit
    # ------------------------------------------------------------------

    def commit(self, message: str) -> Version:
        """Record the working copy as a new version.

        The new version holds the difference between the last committed
        snapshot and the working copy, gets the next sequence number and
        the trimmed *message*, and becomes the new last commit.

        Raises
        ------
        DecklogCommitError
            ``NOTHING_TO_COMMIT`` if the working copy equals the last
            commit; ``MESSAGE_REQUIRED`` if *message* is blank.
        DecklogValidationError
            If the working copy breaks a deck rule.
        """
        next_sequence = latest_sequence_number(self._versions) + 1
        context = {"deck_id": self.id, "next_sequence": next_sequence}

        difference = compute_difference(self._saved, self._current)
        if not difference:
            self._reject("nothing_to_commit", context)
            raise DecklogCommitError(
                code=ErrorCode.NOTHING_TO_COMMIT,
                message="The working copy has no changes to commit",
                context=context,
            )

        if not validate_commit_message(message).is_valid:
            self._reject("message_required", context)
            raise DecklogCommitError(
                code=ErrorCode.MESSAGE_REQUIRED,
                message="A commit message is required",
                context=context,
            )

        deck_check = self.validate()
        if not deck_check.is_valid:
            self._reject("invalid_deck", context)
            raise DecklogValidationError(
                message=deck_check.errors[0].message,
                context={**context, "issues": deck_check.errors},
            )

        version = Version(
            sequence=next_sequence,
            message=message.strip(),
            difference=tuple(difference),
            deck_id=self.id,
        )

        if self._config.debug_dump_diff:
            print(
                f"[decklog] Difference for {version.id}:",
                json.dumps(
                    [{"type": entry.type.value, **dataclasses.asdict(entry)} for entry in difference],
                    indent=2,
                    ensure_ascii=False,
                ),
                file=sys.stderr,
            )

        self._versions.append(version)
        self._saved = self._current
        self.updated_at = version.created_at

        self._metrics.increment("decklog.commits_total", tags={"deck_id": self.id})
        _emit_diff_metrics(self._metrics, difference)
        self._metrics.gauge(
            "decklog.deck_size",
            card_ops.total_count(self._saved),
            tags={"deck_id": self.id},
        )
        self._log.info(
            "version committed",
            extra={
                "extra_fields": {
                    "op": "commit",
                    "sequence": version.sequence,
                    "entries": len(difference),
                }
            },
        )
        return version

    def _reject(self, reason: str, context: dict[str, Any]) -> None:
        self._metrics.increment(
            "decklog.commit_rejected_total",
            tags={"deck_id": self.id, "reason": reason},
        )
        self._log.warning(
            "commit rejected",
            extra={"extra_fields": {"op": "commit", "reason": reason, **context}},
        )

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def get_version(self, sequence: int) -> Version:
        """Return the version with *sequence*.

        Raises
        ------
        DecklogVersionNotFoundError
            If no version carries *sequence*.
        """
        for version in self._versions:
            if version.sequence == sequence:
                return version
        raise self._not_found(sequence)

    def snapshot_at(self, sequence: int) -> Snapshot:
        """Reconstruct the deck as of *sequence*.

        Follows :func:`~decklog.diff.reconstruct`: sequence numbers below 1
        give the empty deck and numbers past the latest give the last
        commit.
        """
        t0 = time.monotonic()
        snapshot = reconstruct(self._versions, sequence)
        self._metrics.timing(
            "decklog.reconstruct_duration_ms",
            (time.monotonic() - t0) * 1000,
            tags={"op": "snapshot_at"},
        )
        return snapshot

    def changes_between(self, from_sequence: int, to_sequence: int) -> list[DiffEntry]:
        """Net difference between two versions (either direction)."""
        t0 = time.monotonic()
        difference = accumulate_difference(self._versions, from_sequence, to_sequence)
        self._metrics.timing(
            "decklog.reconstruct_duration_ms",
            (time.monotonic() - t0) * 1000,
            tags={"op": "changes_between"},
        )
        return difference

    def checkout(self, sequence: int) -> Snapshot:
        """Replace the working copy with the deck as of *sequence*.

        The version log is not touched; committing afterwards records the
        rollback as a new version.

        Raises
        ------
        DecklogVersionNotFoundError
            If no version carries *sequence*.
        """
        if not has_version(self._versions, sequence):
            raise self._not_found(sequence)

        self._current = self.snapshot_at(sequence)
        self._log.info(
            "working copy checked out",
            extra={
                "extra_fields": {
                    "op": "checkout",
                    "sequence": sequence,
                }
            },
        )
        return self._current

    def history(self) -> list[tuple[Version, Snapshot]]:
        """Every version paired with the snapshot it produced, oldest first."""
        return list(iter_snapshots(self._versions))

    def verify_history(self) -> bool:
        """Return ``True`` if replaying the whole log reproduces the last commit."""
        latest = latest_sequence_number(self._versions)
        return reconstruct(self._versions, latest) == self._saved

    def _not_found(self, sequence: int) -> DecklogVersionNotFoundError:
        return DecklogVersionNotFoundError(
            message=f"Deck {self.id} has no version {sequence}",
            context={
                "deck_id": self.id,
                "sequence": sequence,
                "latest": latest_sequence_number(self._versions),
            },
        )


def _emit_diff_metrics(metrics: Any, difference: list[DiffEntry]) -> None:
    """Emit ``diff_entries_total`` counters grouped by entry type."""
    type_counts: Counter[str] = Counter(entry.type.value for entry in difference)
    for type_value, count in type_counts.items():
        metrics.increment(
            "decklog.diff_entries_total", count, tags={"type": type_value},
        )
