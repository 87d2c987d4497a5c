"""
Weight table data sources.

A source returns the raw text of a reference table. It knows nothing about
CSV layout or caching; transport failures are reported as DataSourceError.
"""

import logging
from pathlib import Path
from typing import Protocol

import httpx

from deckweights.config import Settings
from deckweights.models.failure import DataSourceError

logger = logging.getLogger(__name__)


class WeightTableSource(Protocol):
    """Anything that can fetch the raw text of a reference table."""

    async def fetch_table(self, resource: str) -> str: ...


class HttpWeightSource:
    """
    Fetch reference tables over HTTP.

    Usage:
        source = HttpWeightSource("https://example.com/")
        text = await source.fetch_table("csv/WeightsMainDeck.csv")
        await source.aclose()
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            follow_redirects=True,
        )

    async def fetch_table(self, resource: str) -> str:
        """
        Fetch one table.

        Raises:
            DataSourceError: On transport failure or a non-2xx response
        """
        try:
            response = await self._client.get(resource)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Failed to fetch %s from %s: %s", resource, self.base_url, e)
            raise DataSourceError(resource, f"fetch failed: {e}") from e

        return response.text

    async def aclose(self) -> None:
        """Close the underlying client if this source created it."""
        if self._owns_client:
            await self._client.aclose()


class DirectoryWeightSource:
    """Read reference tables from a local directory."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    async def fetch_table(self, resource: str) -> str:
        """
        Read one table from disk.

        Raises:
            DataSourceError: If the file is missing or unreadable
        """
        path = self.directory / resource
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Failed to read %s: %s", path, e)
            raise DataSourceError(resource, f"cannot read {path}: {e}") from e

    async def aclose(self) -> None:
        """Nothing to release."""


def create_weight_source(settings: Settings) -> HttpWeightSource | DirectoryWeightSource:
    """
    Build the source described by settings.

    http(s) URLs get an HttpWeightSource, anything else is treated
    as a local directory.
    """
    base = settings.weights_base_url
    if base.startswith(("http://", "https://")):
        return HttpWeightSource(base, timeout=settings.fetch_timeout)
    return DirectoryWeightSource(Path(base))
