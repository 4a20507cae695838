"""Data models for raw and normalized contributions."""

from philanthropy_scraper.models.contribution import Cause, NormalizedContribution
from philanthropy_scraper.models.raw import RawContribution

__all__ = ["Cause", "NormalizedContribution", "RawContribution"]
