"""Parse a Markdown deck list into a snapshot.

Mistune parses the document into an AST; the parser then walks the
top-level tokens:

* the first level-1 heading names the deck;
* a level-2 heading selects the category of the list items that follow
  (``Pokémon``, ``Trainer``/``Trainers``, ``Energy``, the category values,
  and the Japanese section names are recognised, case-insensitively, with
  an optional trailing ``(N)`` subtotal);
* each top-level list item reads ``<count> <name>``, optionally
  ``<count>x <name>`` (the ``x`` directly after the count).

Anything else (paragraphs such as ``Total: 60``, nested lists, other
headings) is ignored.  Items that cannot be used are skipped and reported
as :class:`~decklog.models.ParseWarning` entries.  A name listed twice
accumulates its counts.
"""

from __future__ import annotations

import re

import mistune

from decklog.errors import DecklogParseError
from decklog.models import CardCategory, CardEntry, DeckListResult, ParseWarning, Snapshot

from .renderer import CATEGORY_LABELS

_CATEGORY_ALIASES: dict[str, CardCategory] = {
    **{label.casefold(): category for category, label in CATEGORY_LABELS.items()},
    **{category.value: category for category in CardCategory},
    "pokémon": CardCategory.POKEMON,
    "trainers": CardCategory.TRAINER,
    "energies": CardCategory.ENERGY,
    "ポケモン": CardCategory.POKEMON,
    "トレーナーズ": CardCategory.TRAINER,
    "エネルギー": CardCategory.ENERGY,
}

_SUBTOTAL_RE = re.compile(r"\s*\(\s*\d+\s*\)\s*$")

_ITEM_RE = re.compile(r"^(?P<count>\d+)(?:[x×]\s+|\s+)(?P<name>\S.*?)\s*$")


def _inline_text(children: list[dict]) -> str:
    """Concatenate the text of an inline token list, unescaped."""
    parts: list[str] = []
    for child in children:
        child_type = child.get("type", "")
        if child_type in ("softbreak", "linebreak"):
            parts.append(" ")
        elif "raw" in child:
            parts.append(child["raw"])
        elif child.get("children"):
            parts.append(_inline_text(child["children"]))
    return "".join(parts)


class DeckListParser:
    """Markdown deck-list reader built on mistune's AST renderer."""

    def __init__(self) -> None:
        self._markdown = mistune.create_markdown(renderer="ast")

    def parse(self, markdown: str) -> DeckListResult:
        """Parse *markdown* and return the deck name, cards and warnings."""
        tokens = self._markdown(markdown)
        if isinstance(tokens, str):
            return DeckListResult()

        name: str | None = None
        category: CardCategory | None = None
        section: str | None = None
        items: dict[str, CardEntry] = {}
        warnings: list[ParseWarning] = []

        for token in tokens:
            token_type = token.get("type")

            if token_type == "heading":
                level = token.get("attrs", {}).get("level")
                text = _inline_text(token.get("children", [])).strip()
                if level == 1 and name is None:
                    name = text
                elif level == 2:
                    section = text
                    category = _match_category(text)
                    if category is None:
                        warnings.append(
                            ParseWarning(
                                code="UNKNOWN_CATEGORY",
                                message=f"Unrecognised section heading: {text!r}",
                                context={"heading": text},
                            )
                        )

            elif token_type == "list":
                for item in token.get("children", []):
                    self._read_item(item, category, section, items, warnings)

        return DeckListResult(name=name, cards=Snapshot(items.values()), warnings=warnings)

    def _read_item(
        self,
        item: dict,
        category: CardCategory | None,
        section: str | None,
        items: dict[str, CardEntry],
        warnings: list[ParseWarning],
    ) -> None:
        text = ""
        for child in item.get("children", []):
            # Only the item's own text line; nested lists are ignored.
            if child.get("type") in ("block_text", "paragraph"):
                text = _inline_text(child.get("children", [])).strip()
                break

        if category is None:
            warnings.append(
                ParseWarning(
                    code="NO_CATEGORY",
                    message=f"List item outside a known category section: {text!r}",
                    context={"line": text, "section": section},
                )
            )
            return

        match = _ITEM_RE.match(text)
        if match is None:
            warnings.append(
                ParseWarning(
                    code="MALFORMED_ITEM",
                    message=f"Expected '<count> <name>': {text!r}",
                    context={"line": text},
                )
            )
            return

        count = int(match.group("count"))
        card_name = match.group("name")
        if count < 1:
            warnings.append(
                ParseWarning(
                    code="INVALID_COUNT",
                    message=f"Count must be at least 1: {text!r}",
                    context={"line": text, "count": count},
                )
            )
            return

        existing = items.get(card_name)
        if existing is not None:
            items[card_name] = existing.with_count(existing.count + count)
        else:
            items[card_name] = CardEntry(name=card_name, category=category, count=count)


def _match_category(heading: str) -> CardCategory | None:
    key = _SUBTOTAL_RE.sub("", heading).strip().rstrip(":").strip().casefold()
    return _CATEGORY_ALIASES.get(key)


def parse_deck_list(markdown: str, *, strict: bool = False) -> DeckListResult:
    """Parse a Markdown deck list.

    Parameters
    ----------
    markdown:
        The deck list text.
    strict:
        Raise instead of returning an empty result when no card could be
        read.

    Raises
    ------
    DecklogParseError
        With *strict*, if the document yields no card.  ``context`` carries
        the collected warnings.
    """
    result = DeckListParser().parse(markdown)
    if strict and not result.cards:
        raise DecklogParseError(
            message="The deck list contains no readable card",
            context={"warnings": result.warnings},
        )
    return result
