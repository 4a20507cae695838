"""Abstract base class for source connectors."""

from abc import ABC, abstractmethod
from typing import Optional

import httpx

from philanthropy_scraper.classifier import CauseClassifier
from philanthropy_scraper.models.raw import RawContribution
from philanthropy_scraper.normalizer import ContributionNormalizer, NormalizationBatch, SourceConfig


class BaseConnector(ABC):
    """
    Standard interface for contribution sources.
    Connectors implement search and their SourceConfig; normalization is shared.
    """

    source_id: str = ""

    DEFAULT_HEADERS = {
        "User-Agent": "Mozilla/5.0 (compatible; philanthropy-scraper/0.1)",
    }

    def __init__(self, classifier: CauseClassifier, client: Optional[httpx.AsyncClient] = None):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=30.0,
            follow_redirects=True,
            headers=self.DEFAULT_HEADERS,
        )
        self.normalizer = ContributionNormalizer(self.source_config(), classifier)

    @classmethod
    @abstractmethod
    def source_config(cls) -> SourceConfig:
        """Identifiers and parsing rules for this source."""
        pass

    @abstractmethod
    async def search(self, limit: Optional[int] = None) -> list[RawContribution]:
        """
        Collect raw records, newest first. limit=None means everything available.
        """
        pass

    async def fetch_all(self) -> NormalizationBatch:
        """Collect every record the source offers and normalize them."""
        return await self.normalizer.normalize_many(await self.search())

    async def fetch_recent(self, limit: int = 25) -> NormalizationBatch:
        """Collect the newest `limit` records and normalize them."""
        return await self.normalizer.normalize_many(await self.search(limit=limit))

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "BaseConnector":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
