import asyncio

import pytest

from deckweights.config import Settings
from deckweights.models.failure import DataSourceError
from deckweights.models.weights import TableSpec
from deckweights.services.weight_cache import WeightTableCache

MAIN_RESOURCE = "csv/WeightsMainDeck.csv"
COMMANDER_RESOURCE = "csv/WeightsCommander.csv"


class FakeWeightSource:
    """In-memory weights source that records every fetch."""

    def __init__(self, tables: dict[str, str]) -> None:
        self.tables = tables
        self.calls: list[str] = []
        self.gate: asyncio.Event | None = None

    async def fetch_table(self, resource: str) -> str:
        self.calls.append(resource)
        if self.gate is not None:
            await self.gate.wait()
        if resource not in self.tables:
            raise DataSourceError(resource, "not found")
        return self.tables[resource]

    async def aclose(self) -> None:
        pass


@pytest.fixture
def main_deck_csv() -> str:
    """Sample main deck weights table."""
    return """id,Name,expansion,color_identity,weight_hb_99,weight_hb_cmd,weight_sb_99,weight_sb_cmd
1,Mountain,M21,R,1,0,2,0
2,Swamp,M21,B,1,0,2,0
3,Sol Ring,CMR,,5,0,0,0
4,Lightning Bolt,STA,R,3,0,1,0
5,"Niv-Mizzet, Parun",GRN,UR,4,9,3,7
6,Forest,M21,G,2,0,1,0
7,Island,M21,U,2,0,1,0
"""


@pytest.fixture
def commander_csv() -> str:
    """Sample commander weights table."""
    return """id,name,expansion,color_identity,weight_hb_99,weight_hb_cmd,weight_sb_99,weight_sb_cmd
1,"Niv-Mizzet, Parun",GRN,UR,4,5,3,6
2,Sheoldred the Apocalypse,DMU,B,0,8,0,4
"""


@pytest.fixture
def table_specs() -> list[TableSpec]:
    """Default table configuration."""
    return Settings().table_specs()


@pytest.fixture
def source(main_deck_csv: str, commander_csv: str) -> FakeWeightSource:
    """Fake source serving both sample tables."""
    return FakeWeightSource({MAIN_RESOURCE: main_deck_csv, COMMANDER_RESOURCE: commander_csv})


@pytest.fixture
def cache(source: FakeWeightSource, table_specs: list[TableSpec]) -> WeightTableCache:
    """Unloaded cache over the fake source."""
    return WeightTableCache(source, table_specs)


@pytest.fixture
def sample_brawl_export() -> str:
    """Sample Arena Historic Brawl export."""
    return """Commander
1 Niv-Mizzet, Parun (GRN) 192

Deck
3 Mountain (M21) 275
2 Swamp (M21) 272
1 Lightning Bolt (STA) 42"""
