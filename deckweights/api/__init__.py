from deckweights.api.health import router as health_router
from deckweights.api.weights import router as weights_router

__all__ = [
    "health_router",
    "weights_router",
]
