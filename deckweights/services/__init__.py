"""
DeckWeights services.

Deck list parsing, weight table caching and deck scoring.
"""

from deckweights.services.deck_parser import (
    DeckListParser,
    parse_deck_list,
    remove_extra_info,
    split_lines,
)
from deckweights.services.deck_scorer import DeckScorer, score_deck
from deckweights.services.weight_cache import WeightTableCache

__all__ = [
    "DeckListParser",
    "DeckScorer",
    "WeightTableCache",
    "parse_deck_list",
    "remove_extra_info",
    "score_deck",
    "split_lines",
]
