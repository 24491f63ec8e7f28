"""Markdown deck lists: export, import and history rendering.

Exports
-------
render_deck_list
    Snapshot to a Markdown deck list grouped by category.
render_difference / render_diff_entry
    Difference entries as Markdown / plain text.
render_history
    A whole version log as Markdown.
parse_deck_list / DeckListParser
    Markdown deck list back to a snapshot (via mistune).
"""

from .parser import DeckListParser, parse_deck_list
from .renderer import (
    CATEGORY_LABELS,
    markdown_escape,
    render_deck_list,
    render_diff_entry,
    render_difference,
    render_history,
)

__all__ = [
    "CATEGORY_LABELS",
    "DeckListParser",
    "markdown_escape",
    "parse_deck_list",
    "render_deck_list",
    "render_diff_entry",
    "render_difference",
    "render_history",
]
