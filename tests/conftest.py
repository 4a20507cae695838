"""Pytest fixtures for philanthropy-scraper tests."""

import asyncio
from typing import Any

import pytest

from philanthropy_scraper.classifier import CauseClassifier, StaticCauseSource
from philanthropy_scraper.errors import ReferenceFetchError
from philanthropy_scraper.models.contribution import Cause
from philanthropy_scraper.models.raw import RawContribution
from philanthropy_scraper.normalizer import ContributionNormalizer, SourceConfig, prefix_resolver

FUND_ID = "3b7ac2c2-760f-4cc6-a71a-887fe10a052f"
BILLIONAIRE_ID = "31bfe210-0592-480a-9fc8-67c54e7c9c05"

KNOWN_CAUSES = [
    "Health",
    "Science",
    "Education",
    "Technology",
    "Food",
    "Public Services",
    "COVID-19",
]


class CountingCauseSource:
    """Cause source that counts fetches and can fail a number of times first."""

    def __init__(self, names: list[str], *, delay: float = 0.01, failures: int = 0):
        self.names = names
        self.delay = delay
        self.failures = failures
        self.calls = 0

    async def fetch(self) -> list[Cause]:
        self.calls += 1
        await asyncio.sleep(self.delay)
        if self.failures > 0:
            self.failures -= 1
            raise ReferenceFetchError("cause endpoint unavailable")
        return [Cause(name=n) for n in self.names]


@pytest.fixture
def counting_source() -> type[CountingCauseSource]:
    """Factory for cause sources that record how often they are fetched."""
    return CountingCauseSource


@pytest.fixture
def known_causes() -> list[str]:
    return list(KNOWN_CAUSES)


@pytest.fixture
def classifier(known_causes: list[str]) -> CauseClassifier:
    """Classifier over a fixed in-memory cause list."""
    return CauseClassifier(StaticCauseSource(known_causes))


@pytest.fixture
def source_config() -> SourceConfig:
    """Config for a source with relative URLs and numeric amounts."""
    return SourceConfig(
        source_id="test-foundation",
        fund_id=FUND_ID,
        billionaire_id=BILLIONAIRE_ID,
        resolve_url=prefix_resolver("https://www.gatesfoundation.org"),
    )


@pytest.fixture
def normalizer(source_config: SourceConfig, classifier: CauseClassifier) -> ContributionNormalizer:
    return ContributionNormalizer(source_config, classifier)


@pytest.fixture
def sample_gates_item() -> dict[str, Any]:
    """One result item as returned by the Gates Foundation search API."""
    return {
        "amount": 7517993,
        "categories": ["Global Health"],
        "date": "2020-05-18T00:00:00-05:00",
        "description": (
            "to establish local molecular, genetic, and genomic laboratory and analytic "
            "capacity to support malaria surveillance in Tanzania."
        ),
        "grantee": "National Institute for Medical Research",
        "iconUrl": "",
        "influencerTopics": [""],
        "languageCode": "en",
        "mediaType": "Grant",
        "regions": [""],
        "thumbnailUrl": "",
        "title": "National Institute for Medical Research",
        "topics": ["Malaria"],
        "url": "/How-We-Work/Quick-Links/Grants-Database/Grants/2020/05/INV-002202",
        "year": "2020",
    }


@pytest.fixture
def raw_contribution(sample_gates_item: dict[str, Any]) -> RawContribution:
    return RawContribution.model_validate(sample_gates_item)


@pytest.fixture
def sample_czi_html() -> str:
    """Grants table as rendered on the Chan Zuckerberg Initiative grants page."""
    return """
<html><body>
<table class="grants">
  <tr><th>Grantee</th><th>Description</th><th>Amount / Years</th><th>Focus</th></tr>
  <tr class="grant-row">
    <td class="list-0"><span class="td-searchable">Bay Area Community Health</span></td>
    <td class="list-1"><span class="td-searchable">to expand vaccine access &amp; outreach in clinics</span></td>
    <td class="list-2">
      <span class="td-searchable">$1,500,000</span>
      <span class="td-searchable">2018 - 2020</span>
    </td>
    <td class="list-3"><span class="td-searchable">Community</span></td>
  </tr>
  <tr class="grant-row">
    <td class="list-0"><span class="td-searchable">Open Science Institute</span></td>
    <td class="list-1"><span class="td-searchable">support for <em>genetic</em> imaging tools</span></td>
    <td class="list-2">
      <span class="td-searchable">$250,000</span>
      <span class="td-searchable">2019</span>
    </td>
    <td class="list-3">
      <span class="td-searchable">Science</span>
      <span class="td-searchable">Imaging</span>
    </td>
  </tr>
  <tr class="grant-row">
    <td class="list-0"><span class="td-searchable">Learning Partners</span></td>
    <td class="list-1"><span class="td-searchable">teacher training program</span></td>
    <td class="list-2">
      <span class="td-searchable">$80,000</span>
      <span class="td-searchable">2017 - 2018</span>
    </td>
    <td class="list-3"><span class="td-searchable">Education</span></td>
  </tr>
</table>
</body></html>
"""
