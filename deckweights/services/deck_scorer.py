"""
Deck weight scoring.

Combines parsed deck entries with the reference tables:

- The commander is weighed against the commander table, once.
- Every other entry is weighed against the main deck table, times quantity.
- Unknown cards weigh 0 and are still listed.

The breakdown is ordered by descending total weight; ties keep input order.
"""

import logging

from deckweights.config import (
    COMMANDER_TABLE,
    FORMAT_WEIGHT_COLUMNS,
    MAIN_DECK_TABLE,
)
from deckweights.models.card import ParsedCardEntry
from deckweights.models.score import DeckScore, ScoredCard
from deckweights.models.weights import FormatVariant
from deckweights.services.deck_parser import DeckListParser
from deckweights.services.weight_cache import WeightTableCache

logger = logging.getLogger(__name__)


async def score_deck(
    entries: list[ParsedCardEntry],
    cache: WeightTableCache,
    variant: FormatVariant = FormatVariant.HISTORIC,
    main_table: str = MAIN_DECK_TABLE,
    commander_table: str = COMMANDER_TABLE,
) -> DeckScore:
    """
    Score parsed entries against the weight tables.

    Args:
        entries: Output of the deck parser (at most one commander)
        cache: Weight table cache
        variant: Format variant selecting the weight columns
        main_table: Table id for main deck weights
        commander_table: Table id for commander weights

    Returns:
        DeckScore. Empty entries give DeckScore(0, []) without loading tables.

    Raises:
        DataSourceError: If a required table cannot be loaded
    """
    if not entries:
        return DeckScore()

    main_column, commander_column = FORMAT_WEIGHT_COLUMNS[variant]

    commander = next((e for e in reversed(entries) if e.is_commander), None)

    # Both tables are independent reads; load them together
    if commander is not None:
        await cache.warm(main_table, commander_table)
    else:
        await cache.warm(main_table)

    scored: list[ScoredCard] = []
    for entry in entries:
        if entry is commander:
            record = cache.get(commander_table, entry.name)
            unit = record.weight(commander_column) if record else 0
            # Commander counts once regardless of the listed quantity
            scored.append(
                ScoredCard(quantity=1, name=entry.name, total_weight=unit, unit_weight=unit)
            )
            continue

        record = cache.get(main_table, entry.name)
        unit = record.weight(main_column) if record else 0
        scored.append(
            ScoredCard(
                quantity=entry.quantity,
                name=entry.name,
                total_weight=unit * entry.quantity,
                unit_weight=unit,
            )
        )

    # sorted() is stable, so equal weights keep input order
    scored = sorted(scored, key=lambda card: card.total_weight, reverse=True)
    total = sum(card.total_weight for card in scored)

    logger.debug("Scored %d entries (%s): total weight %d", len(scored), variant.value, total)
    return DeckScore(total_weight=total, cards=scored)


class DeckScorer:
    """
    Entry point for scoring pasted deck lists.

    Usage:
        scorer = DeckScorer(cache)
        result = await scorer.parse_and_score(raw_text, FormatVariant.HISTORIC)
    """

    def __init__(
        self,
        cache: WeightTableCache,
        parser: DeckListParser | None = None,
        main_table: str = MAIN_DECK_TABLE,
        commander_table: str = COMMANDER_TABLE,
    ) -> None:
        self.cache = cache
        self.parser = parser or DeckListParser()
        self.main_table = main_table
        self.commander_table = commander_table

    async def parse_and_score(
        self,
        raw_deck_text: str,
        variant: FormatVariant = FormatVariant.HISTORIC,
    ) -> DeckScore:
        """Parse a deck list and score it."""
        entries = self.parser.parse(raw_deck_text)
        return await score_deck(
            entries,
            self.cache,
            variant,
            main_table=self.main_table,
            commander_table=self.commander_table,
        )

    async def list_known_card_names(self) -> list[str]:
        """All card names in the main deck table, sorted (for autocomplete)."""
        return await self.cache.all_names(self.main_table)
