from deckweights.models.card import ParsedCardEntry
from deckweights.models.failure import (
    DataSourceError,
    FailureDetail,
    FailureKind,
    KnownError,
    UnknownTableError,
)
from deckweights.models.score import DeckScore, ScoredCard
from deckweights.models.weights import FormatVariant, TableSpec, TableState, WeightRecord

__all__ = [
    "DataSourceError",
    "DeckScore",
    "FailureDetail",
    "FailureKind",
    "FormatVariant",
    "KnownError",
    "ParsedCardEntry",
    "ScoredCard",
    "TableSpec",
    "TableState",
    "UnknownTableError",
    "WeightRecord",
]
