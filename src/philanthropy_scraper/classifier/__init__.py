"""Cause classification from free text."""

from .classifier import CauseClassifier
from .lexicon import SYNONYM_LEXICON
from .source import DEFAULT_CAUSES_URL, CauseSource, HttpCauseSource, StaticCauseSource

__all__ = [
    "DEFAULT_CAUSES_URL",
    "SYNONYM_LEXICON",
    "CauseClassifier",
    "CauseSource",
    "HttpCauseSource",
    "StaticCauseSource",
]
