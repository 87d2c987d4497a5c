"""
Deck list parser.

Turns a pasted deck list into ParsedCardEntry objects. Two export dialects
are understood:

Line dialect (one card per line, Arena export):
    Commander
    1 Niv-Mizzet, Parun (GRN) 192

    Deck
    3 Mountain (M21) 275
    2 Swamp

Dense dialect (everything on one line, no line breaks):
    4 Forest 3 Island 1 Sol Ring

The line dialect is tried first. A parse never mixes the two.

Lines that cannot be read are dropped silently; a bad line is never an error.
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace

from deckweights.models.card import ParsedCardEntry

logger = logging.getLogger(__name__)

# Line breaks in any combination of \r and \n
_LINE_SPLIT_PATTERN = re.compile(r"[\r\n]+")

# "Lightning Bolt (2X2) 133" -> "Lightning Bolt"
# First parenthesized group onward, to end of line
_EXTRA_INFO_PATTERN = re.compile(r"\s*\(.*?\).*$")

# Pattern: "4 Lightning Bolt"
# Groups: (quantity, card_name)
_LINE_ENTRY_PATTERN = re.compile(r"^(\d+)\s+(.+)$")

# Dense dialect token: optional quantity, then a run of non-digits
_DENSE_TOKEN_PATTERN = re.compile(r"(\d* ?[^0-9]+)")

# A further "<qty> <name>" token inside a line entry's name: " 3 Island"
_EMBEDDED_ENTRY_PATTERN = re.compile(r"\s\d+\s+[^\d\s]")

# Leftover section header some exports glue onto the commander line
_DECK_WORD_PATTERN = re.compile(r"\bDeck\b")

COMMANDER_HEADER = "Commander"

# Headers that only mark section boundaries
SECTION_HEADERS: tuple[str, ...] = ("Deck", "Sideboard")


def remove_extra_info(line: str) -> str:
    """
    Strip set/collector annotations from a line.

    Removes the first parenthesized group and everything after it.
    Applying it twice gives the same result as applying it once.
    """
    return _EXTRA_INFO_PATTERN.sub("", line).strip()


def split_lines(text: str) -> list[str]:
    """Split raw input into stripped, non-empty lines."""
    return [line.strip() for line in _LINE_SPLIT_PATTERN.split(text) if line.strip()]


class _EntryCollector:
    """
    Accumulates entries for one parse and owns the commander flag.

    The flag covers exactly one line (or dense token) after "Commander",
    whether or not that line yields an entry. Only one entry may be the
    commander. When a second commander shows up, the earlier one is kept
    as an ordinary entry.
    """

    def __init__(self) -> None:
        self.entries: list[ParsedCardEntry] = []
        self.expect_commander = False
        self._commander_index: int | None = None

    def arm_commander(self) -> None:
        self.expect_commander = True

    def skip(self) -> None:
        """Consume a line that produced no entry."""
        self.expect_commander = False

    def add(self, name: str, quantity: int) -> None:
        if not self.expect_commander:
            self.entries.append(ParsedCardEntry(name=name, quantity=quantity))
            return

        name = _DECK_WORD_PATTERN.sub("", name).strip()
        self.expect_commander = False
        if not name:
            return

        if self._commander_index is not None:
            previous = self.entries[self._commander_index]
            logger.debug("Multiple commanders; %s replaced by %s", previous.name, name)
            self.entries[self._commander_index] = replace(previous, is_commander=False)

        self._commander_index = len(self.entries)
        self.entries.append(ParsedCardEntry(name=name, quantity=1, is_commander=True))


class DeckListParser:
    """
    Parser for pasted deck lists.

    Usage:
        parser = DeckListParser()
        entries = parser.parse(raw_text)
    """

    def parse(self, raw_input: str) -> list[ParsedCardEntry]:
        """
        Parse a deck list in whichever dialect it is written in.

        Args:
            raw_input: Raw deck list text

        Returns:
            Entries in input order. Empty list for empty/whitespace input.
        """
        lines = split_lines(raw_input or "")
        if not lines:
            return []

        entries = self.parse_lines(lines)
        # A single line whose name carries more "<qty> <name>" tokens is dense
        if not entries or (
            len(lines) == 1 and _EMBEDDED_ENTRY_PATTERN.search(entries[0].name)
        ):
            dense = self.parse_dense(lines)
            logger.debug("Parsed %d entries with the dense dialect", len(dense))
            return dense

        logger.debug("Parsed %d entries from %d lines", len(entries), len(lines))
        return entries

    def parse_lines(self, lines: list[str]) -> list[ParsedCardEntry]:
        """
        Line dialect: one "<quantity> <name>" per line.

        Section headers are skipped, "Commander" arms the commander flag,
        anything else that does not start with a quantity is dropped.
        """
        collector = _EntryCollector()
        dropped = 0

        for raw_line in lines:
            line = remove_extra_info(raw_line)
            if not line or line.startswith(SECTION_HEADERS):
                collector.skip()
                continue

            if line.startswith(COMMANDER_HEADER):
                collector.arm_commander()
                continue

            match = _LINE_ENTRY_PATTERN.match(line)
            if match is None:
                collector.skip()
                dropped += 1
                continue

            quantity = int(match.group(1))
            name = match.group(2).strip()
            if quantity < 1 or not name:
                collector.skip()
                dropped += 1
                continue

            collector.add(name, quantity)

        if dropped:
            logger.debug("Dropped %d unrecognized lines", dropped)

        return collector.entries

    def parse_dense(self, lines: list[str]) -> list[ParsedCardEntry]:
        """
        Dense dialect: scan "<quantity> <name>" tokens inside each line.

        A token without a leading quantity counts as one copy.
        """
        collector = _EntryCollector()

        for raw_line in lines:
            line = remove_extra_info(raw_line)
            for match in _DENSE_TOKEN_PATTERN.finditer(line):
                token = match.group(1).strip()
                if not token:
                    continue

                if token.startswith(COMMANDER_HEADER):
                    collector.arm_commander()
                    continue

                if token in SECTION_HEADERS:
                    collector.skip()
                    continue

                quantity = 1
                parts = token.split(" ", 1)
                if len(parts) == 2 and parts[0].isdecimal():
                    quantity = int(parts[0])
                    token = parts[1].strip()

                if quantity < 1 or not token:
                    collector.skip()
                    continue

                collector.add(token, quantity)

        return collector.entries


def parse_deck_list(raw_input: str) -> list[ParsedCardEntry]:
    """
    Parse a pasted deck list.

    This is a convenience function that creates a parser and parses.
    """
    parser = DeckListParser()
    return parser.parse(raw_input)
