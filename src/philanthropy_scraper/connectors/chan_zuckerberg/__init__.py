"""Chan Zuckerberg Initiative grants connector."""

from .connector import ChanZuckerbergConnector

__all__ = ["ChanZuckerbergConnector"]
