"""Registry for discovering and instantiating connectors."""

from typing import Optional, Type

import httpx

from philanthropy_scraper.classifier import CauseClassifier
from philanthropy_scraper.connectors.base import BaseConnector
from philanthropy_scraper.connectors.chan_zuckerberg import ChanZuckerbergConnector
from philanthropy_scraper.connectors.gates_foundation import GatesFoundationConnector
from philanthropy_scraper.normalizer import SourceConfig


class ConnectorRegistry:
    """Discovers and provides source connectors."""

    _connectors: dict[str, Type[BaseConnector]] = {
        "gates-foundation": GatesFoundationConnector,
        "chan-zuckerberg": ChanZuckerbergConnector,
    }

    @classmethod
    def _lookup(cls, source_id: str) -> Type[BaseConnector]:
        connector_cls = cls._connectors.get(source_id.lower())
        if not connector_cls:
            raise ValueError(f"Unknown source: {source_id}. Available: {list(cls._connectors.keys())}")
        return connector_cls

    @classmethod
    def get(
        cls,
        source_id: str,
        classifier: CauseClassifier,
        client: Optional[httpx.AsyncClient] = None,
    ) -> BaseConnector:
        """Get a connector instance for the given source."""
        return cls._lookup(source_id)(classifier, client=client)

    @classmethod
    def source_config(cls, source_id: str) -> SourceConfig:
        """SourceConfig of a registered source, without creating a connector."""
        return cls._lookup(source_id).source_config()

    @classmethod
    def available_sources(cls) -> list[str]:
        """Return list of available source identifiers."""
        return list(cls._connectors.keys())
