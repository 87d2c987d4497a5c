"""
Health check endpoints.

Provides liveness and readiness probes with weight table state checks.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from deckweights.api.dependencies import get_weight_cache
from deckweights.models.weights import TableState
from deckweights.services.weight_cache import WeightTableCache

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    tables: dict[str, TableState] | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running.
    Does not check dependencies.
    """
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(
    response: Response,
    cache: Annotated[WeightTableCache, Depends(get_weight_cache)],
) -> HealthResponse:
    """
    Readiness probe.

    Returns ready once every weight table is loaded. Returns 503 while any
    table is unloaded, loading or failed. Does not trigger a load.
    """
    tables = {table_id: cache.state(table_id) for table_id in cache.table_ids}

    if all(state == TableState.READY for state in tables.values()):
        return HealthResponse(status="ready", tables=tables)

    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return HealthResponse(status="not ready", tables=tables)
