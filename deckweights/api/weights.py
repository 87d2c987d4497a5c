"""
Weight API endpoints.

Scores pasted deck lists and exposes the known card names for autocomplete.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from deckweights.api.dependencies import get_deck_scorer, get_weight_cache
from deckweights.models.weights import FormatVariant
from deckweights.services.deck_scorer import DeckScorer
from deckweights.services.weight_cache import WeightTableCache

router = APIRouter(prefix="/weights", tags=["weights"])


class ScoreRequest(BaseModel):
    """Request model for scoring a deck list."""

    deck_list: str = Field(..., max_length=100_000, description="Pasted deck list")
    format: FormatVariant = FormatVariant.HISTORIC


class ScoredCardResponse(BaseModel):
    """One card of the breakdown."""

    quantity: int
    name: str
    total_weight: int
    unit_weight: int


class DeckScoreResponse(BaseModel):
    """Response model for a scored deck."""

    format: FormatVariant
    total_weight: int
    cards: list[ScoredCardResponse] = Field(default_factory=list)


class CardNamesResponse(BaseModel):
    """Response model for the known card names."""

    names: list[str]
    count: int


class ReloadResponse(BaseModel):
    """Response model for a table reload."""

    tables: dict[str, int]


@router.post("/score", response_model=DeckScoreResponse)
async def score_deck_list(
    request: ScoreRequest,
    scorer: Annotated[DeckScorer, Depends(get_deck_scorer)],
) -> DeckScoreResponse:
    """
    Score a pasted deck list.

    Cards are ordered by total weight (descending). Unknown cards
    are listed with weight 0; unreadable lines are ignored.
    """
    result = await scorer.parse_and_score(request.deck_list, request.format)

    return DeckScoreResponse(
        format=request.format,
        total_weight=result.total_weight,
        cards=[
            ScoredCardResponse(
                quantity=card.quantity,
                name=card.name,
                total_weight=card.total_weight,
                unit_weight=card.unit_weight,
            )
            for card in result.cards
        ],
    )


@router.get("/cards", response_model=CardNamesResponse)
async def list_card_names(
    scorer: Annotated[DeckScorer, Depends(get_deck_scorer)],
) -> CardNamesResponse:
    """Every card name known to the main deck table, sorted."""
    names = await scorer.list_known_card_names()
    return CardNamesResponse(names=names, count=len(names))


@router.post("/reload", response_model=ReloadResponse)
async def reload_tables(
    cache: Annotated[WeightTableCache, Depends(get_weight_cache)],
) -> ReloadResponse:
    """
    Reload every configured weight table from the source.

    The previous copy of a table keeps serving until its reload completes.
    """
    tables: dict[str, int] = {}
    for table_id in cache.table_ids:
        await cache.load(table_id)
        tables[table_id] = cache.record_count(table_id)

    return ReloadResponse(tables=tables)
