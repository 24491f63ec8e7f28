"""Metrics hook protocol and no-op default implementation.

:class:`~decklog.deck.Deck` reports counters, timings and gauges through a
:class:`MetricsHook`.  Without a configured backend a
:class:`NoopMetricsHook` is used, so call sites never need ``None`` checks.

Emitted metric names:

* ``decklog.commits_total``             -- counter
* ``decklog.commit_rejected_total``     -- counter, tagged ``reason``
* ``decklog.diff_entries_total``        -- counter, tagged ``type``
* ``decklog.reconstruct_duration_ms``   -- timing, tagged ``op``
* ``decklog.deck_size``                 -- gauge, total cards after commit
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Protocol that any metrics backend must satisfy.

    *tags* is an optional ``str -> str`` mapping that implementations may
    translate into labels, tags or name suffixes.
    """

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Increment a counter by *value*."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a duration in milliseconds."""
        ...

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Set a gauge to an absolute value."""
        ...


class NoopMetricsHook:
    """Metrics backend that discards every data point."""

    __slots__ = ()

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass
