"""Source connectors that collect raw contribution records."""

from philanthropy_scraper.connectors.base import BaseConnector
from philanthropy_scraper.connectors.registry import ConnectorRegistry

__all__ = ["BaseConnector", "ConnectorRegistry"]
