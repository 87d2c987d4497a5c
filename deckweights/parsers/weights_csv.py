"""
Parser for reference weight tables.

Expected layout (column order is free, header names are case-insensitive):
    id,name,expansion,color_identity,weight_hb_99,weight_hb_cmd,weight_sb_99,weight_sb_cmd
    1,Sol Ring,CMR,,5,0,5,0

Only the name column and the configured weight columns are read.
Any malformed row fails the whole table.
"""

import csv
from io import StringIO

from deckweights.models.failure import DataSourceError
from deckweights.models.weights import TableSpec, WeightRecord


def normalize_card_name(name: str) -> str:
    """Key used for case-insensitive card name lookups."""
    return name.strip().lower()


def parse_weight_table(text: str, spec: TableSpec) -> dict[str, WeightRecord]:
    """
    Parse CSV text into a weight table.

    Args:
        text: Raw CSV content of the resource
        spec: Table configuration (required columns)

    Returns:
        Dict mapping normalized card names to WeightRecord.
        The first row for a given name wins; later duplicates are ignored.

    Raises:
        DataSourceError: If a required column is missing, a row has no name,
            or a weight is not an integer
    """
    reader = csv.DictReader(StringIO(text))

    if not reader.fieldnames:
        raise DataSourceError(spec.table_id, "resource is empty")

    # Map lowercase header -> header as written
    columns = {col.strip().lower(): col for col in reader.fieldnames if col}

    required = [spec.name_column.lower(), *(c.lower() for c in spec.weight_columns)]
    missing = [col for col in required if col not in columns]
    if missing:
        raise DataSourceError(spec.table_id, f"missing required columns: {', '.join(missing)}")

    name_col = columns[spec.name_column.lower()]
    weight_cols = {c.lower(): columns[c.lower()] for c in spec.weight_columns}

    table: dict[str, WeightRecord] = {}

    # Header is line 1
    for line_num, row in enumerate(reader, 2):
        name = (row.get(name_col) or "").strip()
        if not name:
            raise DataSourceError(spec.table_id, f"line {line_num}: missing card name")

        weights: dict[str, int] = {}
        for key, col in weight_cols.items():
            raw = (row.get(col) or "").strip()
            try:
                weights[key] = int(raw)
            except ValueError:
                raise DataSourceError(
                    spec.table_id,
                    f"line {line_num}: {col} is not an integer: {raw!r}",
                ) from None

        key = normalize_card_name(name)
        if key not in table:
            table[key] = WeightRecord(name=name, weights=weights)

    return table
