from deckweights.sources.weight_source import (
    DirectoryWeightSource,
    HttpWeightSource,
    WeightTableSource,
    create_weight_source,
)

__all__ = [
    "DirectoryWeightSource",
    "HttpWeightSource",
    "WeightTableSource",
    "create_weight_source",
]
