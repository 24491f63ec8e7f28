"""Structured JSON logger for decklog.

Each record is written as one JSON object per line, so commit and checkout
events can be grepped or shipped to a log pipeline without extra parsing.

Typical output::

    {"ts": "2026-03-01T12:00:00.123456+00:00", "level": "INFO",
     "logger": "decklog.deck", "message": "version committed",
     "deck_id": "deck-1a2b", "op": "commit", "sequence": 3, "entries": 2}

Usage::

    from decklog.observability import bind, get_logger

    log = bind(get_logger("decklog.deck"), deck_id=deck.id)
    log.info("version committed", extra={"extra_fields": {"sequence": 3}})
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import MutableMapping
from datetime import datetime, timezone
from typing import Any

_RESERVED_KEYS = frozenset({"ts", "level", "logger", "message"})


class StructuredFormatter(logging.Formatter):
    """Format log records as single-line JSON objects.

    Guaranteed keys are ``ts`` (the record's creation time, ISO-8601 UTC),
    ``level``, ``logger`` and ``message``.  Fields passed as
    ``extra={"extra_fields": {...}}`` are merged into the top-level object
    but never replace a guaranteed key.  ``exception`` and ``stack_info``
    appear when the record carries them.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra_fields: dict[str, Any] | None = getattr(record, "extra_fields", None)
        if extra_fields:
            for key, value in extra_fields.items():
                if key not in _RESERVED_KEYS:
                    log_entry[key] = value

        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)

        if record.stack_info:
            log_entry["stack_info"] = self.formatStack(record.stack_info)

        return json.dumps(log_entry, default=str, ensure_ascii=False)


class BoundLogger(logging.LoggerAdapter):
    """Logger adapter that stamps fixed fields on every record.

    Bound fields come first; per-call ``extra_fields`` override them.
    """

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any],
    ) -> tuple[Any, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra["extra_fields"] = {**self.extra, **(extra.get("extra_fields") or {})}
        kwargs["extra"] = extra
        return msg, kwargs


def bind(logger: logging.Logger, **fields: Any) -> BoundLogger:
    """Return *logger* wrapped so every record carries *fields*."""
    return BoundLogger(logger, fields)


# Handlers are attached once per logger name.
_configured_loggers: set[str] = set()


def get_logger(
    name: str = "decklog",
    *,
    level: int | str = logging.DEBUG,
    stream: Any | None = None,
) -> logging.Logger:
    """Get or create a structured JSON logger.

    *level* (an ``int`` or a case-insensitive level name) and *stream*
    (default ``sys.stderr``) only apply the first time a given *name* is
    configured; later calls return the same logger unchanged.  Records do
    not propagate to the root logger.
    """
    logger = logging.getLogger(name)
    if name in _configured_loggers:
        return logger

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logger.setLevel(level)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(StructuredFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    _configured_loggers.add(name)
    return logger
