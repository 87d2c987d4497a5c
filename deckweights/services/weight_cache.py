"""
Weight table cache.

Holds every configured reference table in memory, loading each one on
first use. Each table moves through:

    unloaded -> loading -> ready
                        -> failed -> loading (next use retries)

A load in progress is shared: concurrent callers await the same task,
so the source is hit at most once per table per load.

Usage:
    cache = WeightTableCache(source, settings.table_specs())
    record = await cache.lookup("main", "Sol Ring")
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from deckweights.models.failure import DataSourceError, UnknownTableError
from deckweights.models.weights import TableSpec, TableState, WeightRecord
from deckweights.parsers.weights_csv import normalize_card_name, parse_weight_table
from deckweights.sources.weight_source import WeightTableSource

logger = logging.getLogger(__name__)


@dataclass
class _LoadedTable:
    """An immutable snapshot of one table, swapped in whole."""

    records: Mapping[str, WeightRecord]
    names: tuple[str, ...]


@dataclass
class _TableSlot:
    spec: TableSpec
    table: _LoadedTable | None = None
    pending: asyncio.Task[_LoadedTable] | None = None
    error: DataSourceError | None = None

    @property
    def state(self) -> TableState:
        if self.pending is not None:
            return TableState.LOADING
        if self.table is not None:
            return TableState.READY
        if self.error is not None:
            return TableState.FAILED
        return TableState.UNLOADED


class WeightTableCache:
    """In-memory, lazily loaded reference tables keyed by table id."""

    def __init__(self, source: WeightTableSource, specs: Iterable[TableSpec]) -> None:
        self._source = source
        self._slots: dict[str, _TableSlot] = {spec.table_id: _TableSlot(spec) for spec in specs}

    @property
    def table_ids(self) -> list[str]:
        """Configured table ids in configuration order."""
        return list(self._slots)

    def state(self, table_id: str) -> TableState:
        """Current lifecycle state of a table."""
        return self._slot(table_id).state

    def record_count(self, table_id: str) -> int:
        """Number of cards in a loaded table, 0 if not loaded."""
        table = self._slot(table_id).table
        return len(table.records) if table else 0

    async def load(self, table_id: str) -> None:
        """
        Fetch and parse a table, replacing any previous copy.

        If a load for this table is already running, waits for it
        instead of starting another.

        Raises:
            DataSourceError: If the fetch fails or the resource is malformed
            UnknownTableError: If the table id is not configured
        """
        slot = self._slot(table_id)
        if slot.pending is None:
            slot.pending = asyncio.create_task(self._load_table(slot))

        # Shielded so a cancelled caller does not cancel the shared load
        await asyncio.shield(slot.pending)

    async def warm(self, *table_ids: str) -> None:
        """Load every given table that is not ready yet, concurrently."""
        needed = [t for t in table_ids if self._slot(t).table is None]
        if needed:
            await asyncio.gather(*(self.load(t) for t in needed))

    async def lookup(self, table_id: str, card_name: str) -> WeightRecord | None:
        """
        Case-insensitive exact-match lookup, loading the table on first use.

        Returns:
            WeightRecord, or None if the card is not in the table
        """
        await self.warm(table_id)
        return self.get(table_id, card_name)

    def get(self, table_id: str, card_name: str) -> WeightRecord | None:
        """
        Lookup against an already loaded table.

        Raises:
            DataSourceError: If the table has not been loaded
        """
        table = self._slot(table_id).table
        if table is None:
            raise DataSourceError(table_id, "table not loaded")
        return table.records.get(normalize_card_name(card_name))

    async def all_names(self, table_id: str) -> list[str]:
        """
        Every card name in the table, ascending.

        Raises:
            DataSourceError: If the table is dropped again before it is read
        """
        await self.warm(table_id)
        table = self._slot(table_id).table
        if table is None:
            raise DataSourceError(table_id, "table not loaded")
        return list(table.names)

    def invalidate(self, table_id: str) -> None:
        """Drop the loaded table so the next use reloads it."""
        slot = self._slot(table_id)
        slot.table = None
        slot.error = None
        logger.info("Invalidated weight table %s", table_id)

    def _slot(self, table_id: str) -> _TableSlot:
        slot = self._slots.get(table_id)
        if slot is None:
            raise UnknownTableError(table_id)
        return slot

    async def _load_table(self, slot: _TableSlot) -> _LoadedTable:
        spec = slot.spec
        logger.info("Loading weight table %s from %s", spec.table_id, spec.resource)

        try:
            text = await self._source.fetch_table(spec.resource)
            records = parse_weight_table(text, spec)
        except DataSourceError as e:
            error = DataSourceError(spec.table_id, e.reason)
            self._fail(slot, error)
            raise error from e
        except Exception as e:
            error = DataSourceError(spec.table_id, f"{type(e).__name__}: {e}")
            self._fail(slot, error)
            raise error from e
        finally:
            slot.pending = None

        table = _LoadedTable(
            records=records,
            names=tuple(sorted(record.name for record in records.values())),
        )
        slot.table = table
        slot.error = None

        logger.info("Loaded %d weights for table %s", len(records), spec.table_id)
        return table

    @staticmethod
    def _fail(slot: _TableSlot, error: DataSourceError) -> None:
        slot.error = error
        if slot.table is not None:
            logger.warning(
                "Reload of weight table %s failed, keeping previous copy: %s",
                slot.spec.table_id,
                error.reason,
            )
        else:
            logger.error("Failed to load weight table %s: %s", slot.spec.table_id, error.reason)
