"""Render snapshots, differences and version history as Markdown.

The deck-list layout written by :func:`render_deck_list` is the one read
back by :func:`~decklog.decklist.parser.parse_deck_list`::

    # Lightning Box

    ## Pokémon (3)
    - 2 Pikachu
    - 1 Mew

    ## Energy (10)
    - 10 Basic Lightning Energy

    Total: 13

Usage::

    from decklog.decklist import render_deck_list, render_difference

    print(render_deck_list(deck.current, name=deck.name))
    print(render_difference(deck.pending_difference()))
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from decklog.cards import group_by_category, total_count
from decklog.diff import iter_snapshots
from decklog.models import CardCategory, DiffEntry, DiffType, SnapshotLike, Version

CATEGORY_LABELS: dict[CardCategory, str] = {
    CardCategory.POKEMON: "Pokémon",
    CardCategory.TRAINER: "Trainer",
    CardCategory.ENERGY: "Energy",
}
"""Section heading used for each category."""

_ESCAPE_RE = re.compile(r'([\\`*_{}\[\]()#+\-.!|<>])')

_DIFF_MARKERS: dict[DiffType, str] = {
    DiffType.ADDED: "+",
    DiffType.REMOVED: "-",
    DiffType.CHANGED: "~",
}


def markdown_escape(text: str) -> str:
    """Backslash-escape characters with a Markdown meaning."""
    return _ESCAPE_RE.sub(r'\\\1', text)


def render_deck_list(cards: SnapshotLike, name: str | None = None) -> str:
    """Render a snapshot as a Markdown deck list.

    Cards are grouped under one level-2 heading per non-empty category,
    in category order, followed by a ``Total:`` line.  An empty snapshot
    renders as ``_No cards_``.
    """
    parts: list[str] = []
    if name:
        parts.append(f"# {markdown_escape(name)}")

    groups = group_by_category(cards)
    if not any(groups.values()):
        parts.append("_No cards_")
        return "\n\n".join(parts) + "\n"

    for category, entries in groups.items():
        if not entries:
            continue
        subtotal = sum(card.count for card in entries)
        lines = [f"## {CATEGORY_LABELS[category]} ({subtotal})"]
        lines.extend(f"- {card.count} {markdown_escape(card.name)}" for card in entries)
        parts.append("\n".join(lines))

    parts.append(f"Total: {total_count(cards)}")
    return "\n\n".join(parts) + "\n"


def _code_span(text: str) -> str:
    if "`" in text:
        return f"`` {text} ``"
    return f"`{text}`"


def render_diff_entry(entry: DiffEntry) -> str:
    """Render one entry as plain text.

    ``+ 2 Pikachu`` (added), ``- 1 Mew`` (removed) or ``~ Pikachu 2 → 4``
    (changed).
    """
    marker = _DIFF_MARKERS[entry.type]
    if entry.type == DiffType.ADDED:
        return f"{marker} {entry.after} {entry.name}"
    if entry.type == DiffType.REMOVED:
        return f"{marker} {entry.before} {entry.name}"
    return f"{marker} {entry.name} {entry.before} → {entry.after}"


def render_difference(difference: Iterable[DiffEntry]) -> str:
    """Render a difference as a bullet list, or ``_No changes_`` if empty.

    Each entry sits in a code span so its ``+``/``-`` marker is not read as
    a nested list.
    """
    lines = [f"- {_code_span(render_diff_entry(entry))}" for entry in difference]
    if not lines:
        return "_No changes_\n"
    return "\n".join(lines) + "\n"


def render_history(
    versions: Iterable[Version],
    *,
    include_snapshots: bool = False,
    newest_first: bool = True,
) -> str:
    """Render a version log as Markdown.

    Each version becomes a level-2 section with its number, UTC timestamp,
    message and difference.  With *include_snapshots*, the full deck as of
    that version is appended under a level-3 heading.  The log is
    replayed once regardless of its input order.
    """
    sections: list[str] = []
    for version, snapshot in iter_snapshots(versions):
        timestamp = version.created_at.strftime("%Y-%m-%d %H:%M:%S %Z").strip()
        section = [
            f"## Version {version.sequence}",
            f"_{timestamp}_",
            markdown_escape(version.message),
            "### Changes",
            render_difference(version.difference).rstrip("\n"),
        ]
        if include_snapshots:
            section.append("### Deck")
            section.append(render_deck_list(snapshot).rstrip("\n"))
        sections.append("\n\n".join(section))

    if not sections:
        return "_No history_\n"
    if newest_first:
        sections.reverse()
    return "\n\n".join(sections) + "\n"
