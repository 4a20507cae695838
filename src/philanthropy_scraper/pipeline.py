"""Pipeline entry points: collect from a source, or normalize records already collected."""

import asyncio
import logging
from typing import Any, Iterable, Optional

import httpx

from philanthropy_scraper.classifier import CauseClassifier, HttpCauseSource
from philanthropy_scraper.config import Settings
from philanthropy_scraper.connectors.registry import ConnectorRegistry
from philanthropy_scraper.models.raw import RawContribution
from philanthropy_scraper.normalizer import ContributionNormalizer, NormalizationBatch, SourceConfig

logger = logging.getLogger(__name__)


def build_classifier(settings: Optional[Settings] = None) -> CauseClassifier:
    """Classifier backed by the HTTP cause list described by settings."""
    settings = settings or Settings.from_env()
    return CauseClassifier(
        HttpCauseSource(
            settings.causes_url,
            timeout=settings.http_timeout,
            attempts=settings.fetch_attempts,
        )
    )


async def run_source(
    source_id: str,
    *,
    recent: bool = True,
    limit: Optional[int] = None,
    classifier: Optional[CauseClassifier] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> NormalizationBatch:
    """
    Collect and normalize contributions from one registered source.
    recent=True fetches the newest records (limit overrides the source default);
    recent=False fetches everything.
    """
    classifier = classifier or build_classifier()
    async with ConnectorRegistry.get(source_id, classifier, client=client) as connector:
        logger.info("Running %s (%s)", source_id, "recent" if recent else "all")
        if not recent:
            return await connector.fetch_all()
        if limit is not None:
            return await connector.fetch_recent(limit=limit)
        return await connector.fetch_recent()


async def normalize_records(
    records: Iterable[Any],
    config: SourceConfig,
    classifier: Optional[CauseClassifier] = None,
) -> NormalizationBatch:
    """Normalize raw dicts (or RawContribution objects) supplied by an external producer."""
    raws: list[RawContribution] = []
    for r in records:
        if isinstance(r, RawContribution):
            raws.append(r)
        elif isinstance(r, dict):
            raws.append(RawContribution.model_validate(r))
        else:
            # Kept in place so failures report the right index
            logger.warning("Raw record is not an object: %r", r)
            raws.append(RawContribution())
    normalizer = ContributionNormalizer(config, classifier or build_classifier())
    return await normalizer.normalize_many(raws)


def scrape(source_id: str, **kwargs: Any) -> NormalizationBatch:
    """Blocking wrapper around run_source for scripts and schedulers."""
    return asyncio.run(run_source(source_id, **kwargs))
