"""Lexicon-driven cause classification with a single-flight reference cache."""

import asyncio
import logging
from typing import Mapping, Optional, Sequence

from philanthropy_scraper.models.contribution import Cause

from .lexicon import SYNONYM_LEXICON
from .source import CauseSource

logger = logging.getLogger(__name__)


def infer_causes(text: str, lexicon: Mapping[str, Sequence[str]]) -> set[str]:
    """
    Return the lowercased canonical cause names whose trigger keywords occur in text.
    Empty triggers never match.
    """
    text = text.lower()
    inferred: set[str] = set()
    for cause_name, triggers in lexicon.items():
        name = cause_name.strip().lower()
        if not name:
            continue
        for trigger in triggers:
            trigger = trigger.strip().lower()
            if trigger and trigger in text:
                inferred.add(name)
                break
    return inferred


def match_causes(text: str, causes: Sequence[Cause], inferred: set[str]) -> list[str]:
    """
    Match known causes by name against the text and the inferred cause names.
    Keeps reference-list order and drops case-insensitive duplicates.
    """
    text = text.lower()
    matched: list[str] = []
    seen: set[str] = set()
    for cause in causes:
        name = cause.name.strip().lower()
        if not name or name in seen:
            continue
        if name in text or any(name in inferred_name for inferred_name in inferred):
            seen.add(name)
            matched.append(cause.name)
    return matched


class CauseClassifier:
    """
    Tags free text with known cause names.

    The reference list is loaded on first use and kept for the lifetime of the
    instance. Concurrent first callers share one in-flight load. A failed load
    is not remembered, so the next call fetches again.
    """

    def __init__(
        self,
        source: CauseSource,
        lexicon: Optional[Mapping[str, Sequence[str]]] = None,
    ):
        self._source = source
        self._lexicon = SYNONYM_LEXICON if lexicon is None else lexicon
        self._causes: Optional[list[Cause]] = None
        self._inflight: Optional[asyncio.Task] = None
        self._generation = 0

    @property
    def is_loaded(self) -> bool:
        return self._causes is not None

    async def _load(self, generation: int) -> list[Cause]:
        try:
            causes = list(await self._source.fetch())
            # A reset while loading discards this result
            if generation == self._generation:
                self._causes = causes
            return causes
        finally:
            if generation == self._generation:
                self._inflight = None

    async def causes(self) -> list[Cause]:
        """Return the cached reference list, fetching it once if needed."""
        if self._causes is not None:
            return self._causes
        if self._inflight is None:
            self._inflight = asyncio.ensure_future(self._load(self._generation))
        return await asyncio.shield(self._inflight)

    def reset(self) -> None:
        """Forget the cached reference list, including any load still in flight."""
        self._generation += 1
        self._causes = None
        self._inflight = None

    async def classify(self, text: str) -> list[str]:
        """Return the names of known causes that the text is about."""
        causes = await self.causes()
        text = (text or "").lower()
        if not text.strip():
            return []
        inferred = infer_causes(text, self._lexicon)
        matched = match_causes(text, causes, inferred)
        logger.debug("Classified %d chars -> %s (inferred %s)", len(text), matched, sorted(inferred))
        return matched
