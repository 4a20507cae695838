"""Collect philanthropic contribution records and normalize them to one schema."""

__version__ = "0.1.0"
