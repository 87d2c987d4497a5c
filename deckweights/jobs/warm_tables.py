"""
Load the weight tables once.

Run this job to check that the configured weights source serves every
table and that each one parses.
"""

import asyncio
import logging

from deckweights.config import Settings, settings
from deckweights.services.weight_cache import WeightTableCache
from deckweights.sources.weight_source import create_weight_source

logger = logging.getLogger(__name__)


async def run_warm(app_settings: Settings | None = None) -> dict[str, int]:
    """
    Load every configured table.

    Returns:
        Dict mapping table id to number of cards loaded.

    Raises:
        DataSourceError: If any table cannot be loaded
    """
    app_settings = app_settings or settings
    source = create_weight_source(app_settings)
    cache = WeightTableCache(source, app_settings.table_specs())

    logger.info("Loading weight tables from %s...", app_settings.weights_base_url)

    try:
        await cache.warm(*cache.table_ids)
    except Exception as e:
        logger.error("Failed to load weight tables: %s", e)
        raise
    finally:
        await source.aclose()

    counts = {table_id: cache.record_count(table_id) for table_id in cache.table_ids}
    for table_id, count in counts.items():
        logger.info("Table %s: %d cards", table_id, count)

    return counts


def main() -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_warm())


if __name__ == "__main__":
    main()
