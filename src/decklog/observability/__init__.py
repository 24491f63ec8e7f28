"""JSON log records and the metrics hook a :class:`~decklog.deck.Deck` reports to."""

from __future__ import annotations

from .logger import BoundLogger, StructuredFormatter, bind, get_logger
from .metrics import MetricsHook, NoopMetricsHook

__all__ = [
    "BoundLogger",
    "MetricsHook",
    "NoopMetricsHook",
    "StructuredFormatter",
    "bind",
    "get_logger",
]
