from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


class FormatVariant(str, Enum):
    """Ruleset selecting which weight columns of a table apply."""

    HISTORIC = "historic"
    STANDARD = "standard"


class TableState(str, Enum):
    """Lifecycle of one reference table inside the cache."""

    UNLOADED = "unloaded"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class TableSpec:
    """
    Configuration for one reference table.

    Attributes:
        table_id: Logical id used by callers ("main", "commander")
        resource: Path of the CSV resource relative to the data source
        weight_columns: Integer columns that must be present in the header
        name_column: Column holding the card name
    """

    table_id: str
    resource: str
    weight_columns: tuple[str, ...]
    name_column: str = "name"


@dataclass(frozen=True, slots=True)
class WeightRecord:
    """
    Weights assigned to a single card by a reference table.

    Attributes:
        name: Card name exactly as it appears in the table
        weights: Column name (lowercase) -> integer weight
    """

    name: str
    weights: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Read-only view so a loaded table cannot be mutated by callers
        object.__setattr__(self, "weights", MappingProxyType(dict(self.weights)))

    def weight(self, column: str) -> int:
        """Weight for a column, 0 if the table does not carry it."""
        return self.weights.get(column.lower(), 0)
