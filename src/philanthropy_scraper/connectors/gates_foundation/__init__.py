"""Gates Foundation grants database connector."""

from .connector import GatesFoundationConnector

__all__ = ["GatesFoundationConnector"]
