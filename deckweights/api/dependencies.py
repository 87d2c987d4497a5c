from typing import Annotated, cast

from fastapi import Depends, Request

from deckweights.services.deck_scorer import DeckScorer
from deckweights.services.weight_cache import WeightTableCache


def get_weight_cache(request: Request) -> WeightTableCache:
    """Weight table cache created by the application lifespan."""
    return cast(WeightTableCache, request.app.state.weight_cache)


def get_deck_scorer(
    cache: Annotated[WeightTableCache, Depends(get_weight_cache)],
) -> DeckScorer:
    """Deck scorer bound to the application's weight table cache."""
    return DeckScorer(cache)
