"""Shared normalization of raw source records into contributions."""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from philanthropy_scraper.classifier import CauseClassifier
from philanthropy_scraper.errors import (
    ContributionValidationError,
    MalformedRecordError,
    RecordError,
)
from philanthropy_scraper.models.contribution import NormalizedContribution
from philanthropy_scraper.models.raw import RawContribution
from philanthropy_scraper.text import flatten_search_text, format_description, parse_amount
from philanthropy_scraper.validation import MAX_IMAGE_LENGTH, validate_contribution

logger = logging.getLogger(__name__)

DEFAULT_IMPACT_SCORE = 3

Amount = Union[int, float]


def identity_url(url: str) -> str:
    return url


def prefix_resolver(base_url: str) -> Callable[[str], str]:
    """Resolver for sources that store paths relative to base_url."""
    base = base_url.rstrip("/")

    def resolve(url: str) -> str:
        if "://" in url:
            return url
        return f"{base}/{url.lstrip('/')}"

    return resolve


def default_parse_amount(value: Any) -> Amount:
    """Numbers pass through; display strings are cleaned with parse_amount."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return parse_amount(value)


def default_parse_date(value: Any) -> str:
    """Strings pass through; datetimes become ISO-8601 (naive ones taken as UTC)."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()
    return str(value)


@dataclass(frozen=True)
class SourceConfig:
    """Per-source settings for the shared normalizer."""

    source_id: str
    fund_id: str
    billionaire_id: str
    resolve_url: Callable[[str], str] = field(default=identity_url)
    parse_amount: Callable[[Any], Amount] = field(default=default_parse_amount)
    parse_date: Callable[[Any], str] = field(default=default_parse_date)


class RecordFailure(BaseModel):
    """One raw record that could not be normalized."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    index: int
    title: Optional[str] = None
    error: str
    exception: Optional[Exception] = Field(default=None, exclude=True)


class NormalizationBatch(BaseModel):
    """Result of normalizing many records: successes and per-record failures."""

    records: list[NormalizedContribution] = Field(default_factory=list)
    errors: list[RecordFailure] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def _coerce_topics(topics: Any) -> list[str]:
    if topics is None:
        return []
    if isinstance(topics, str):
        return [topics]
    if isinstance(topics, (list, tuple)) and all(isinstance(t, str) for t in topics):
        return list(topics)
    logger.warning("Ignoring topics of unexpected shape: %r", topics)
    return []


def _coerce_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


class ContributionNormalizer:
    """
    Turns RawContribution records into NormalizedContribution records for one source.
    """

    def __init__(self, config: SourceConfig, classifier: CauseClassifier):
        self.config = config
        self.classifier = classifier

    def _title(self, raw: RawContribution) -> str:
        title = _coerce_text(raw.title)
        if not title.strip():
            raise MalformedRecordError("Record has no title")
        return title

    def _amount(self, raw: RawContribution) -> Amount:
        if raw.amount is None or raw.amount == "":
            raise MalformedRecordError("Record has no amount")
        try:
            return self.config.parse_amount(raw.amount)
        except (TypeError, ValueError) as e:
            raise MalformedRecordError(f"Unparseable amount {raw.amount!r}: {e}") from e

    def _date(self, raw: RawContribution) -> str:
        if raw.date is None or raw.date == "":
            raise MalformedRecordError("Record has no date")
        try:
            return self.config.parse_date(raw.date)
        except (TypeError, ValueError) as e:
            raise MalformedRecordError(f"Unparseable date {raw.date!r}: {e}") from e

    def _source_urls(self, raw: RawContribution) -> list[str]:
        url = _coerce_text(raw.url).strip()
        return [self.config.resolve_url(url)] if url else []

    def _image(self, raw: RawContribution) -> Optional[str]:
        image = _coerce_text(raw.thumbnail_url).strip()
        if not image:
            return None
        if len(image) >= MAX_IMAGE_LENGTH:
            logger.warning("Dropping image URL of %d chars", len(image))
            return None
        return image

    async def normalize(self, raw: RawContribution) -> NormalizedContribution:
        """
        Normalize one record. Raises MalformedRecordError when a required field
        is missing or unusable and ContributionValidationError when the result
        breaks the output contract.
        """
        title = self._title(raw)
        amount = self._amount(raw)
        date = self._date(raw)
        raw_description = _coerce_text(raw.description)
        topics = _coerce_topics(raw.topics)

        search_text = flatten_search_text(title, raw_description, topics)
        causes = await self.classifier.classify(search_text)

        try:
            contribution = NormalizedContribution(
                type="donation",
                title=title,
                billionaire=self.config.billionaire_id,
                date_of_investment=date,
                amount=amount,
                amount_is_estimate=False,
                currency="USD",
                related_causes=causes,
                impact_score=DEFAULT_IMPACT_SCORE,
                source_urls=self._source_urls(raw),
                organizationWebsite=None,
                description=format_description(raw_description),
                image=self._image(raw),
                philanthropic_foundation=self.config.fund_id,
            )
        except ValidationError as e:
            raise ContributionValidationError(
                [f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors()]
            ) from e
        validate_contribution(contribution)
        logger.debug("Record normalized: %s", contribution.title)
        return contribution

    async def _normalize_indexed(
        self, index: int, raw: RawContribution
    ) -> Union[NormalizedContribution, RecordFailure]:
        try:
            return await self.normalize(raw)
        except RecordError as e:
            title = _coerce_text(raw.title).strip() or None
            logger.warning("Skipping %s record %d (%s): %s", self.config.source_id, index, title, e)
            return RecordFailure(index=index, title=title, error=str(e), exception=e)

    async def normalize_many(self, raws: Iterable[RawContribution]) -> NormalizationBatch:
        """
        Normalize records concurrently. Output keeps input order; bad records
        are reported in `errors` instead of failing the batch.
        """
        results = await asyncio.gather(
            *(self._normalize_indexed(i, raw) for i, raw in enumerate(raws))
        )
        batch = NormalizationBatch()
        for result in results:
            if isinstance(result, RecordFailure):
                batch.errors.append(result)
            else:
                batch.records.append(result)
        logger.info(
            "Normalized %d %s records (%d failed)",
            len(batch.records),
            self.config.source_id,
            len(batch.errors),
        )
        return batch
