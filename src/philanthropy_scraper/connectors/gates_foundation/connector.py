"""Gates Foundation connector using the grants database search API.

The grants database page is backed by a JSON endpoint that takes a POSTed
query (facets, sort order, page number) and returns 12 grants per page.
Paths in results are relative to the site root.
"""

import logging
import math
from typing import Optional

import httpx

from philanthropy_scraper.connectors.base import BaseConnector
from philanthropy_scraper.models.raw import RawContribution
from philanthropy_scraper.normalizer import NormalizationBatch, SourceConfig, prefix_resolver

from .constants import BASE_URL, BILLIONAIRE_ID, FUND_ID, MAX_PAGES, RECENT_PAGES, RESULTS_PER_PAGE, SEARCH_URL
from .parsers import build_search_query, raw_from_search_item, results_from_payload

logger = logging.getLogger(__name__)


class GatesFoundationConnector(BaseConnector):
    """Connector for gatesfoundation.org committed grants."""

    source_id = "gates-foundation"

    @classmethod
    def source_config(cls) -> SourceConfig:
        return SourceConfig(
            source_id=cls.source_id,
            fund_id=FUND_ID,
            billionaire_id=BILLIONAIRE_ID,
            resolve_url=prefix_resolver(BASE_URL),
        )

    async def fetch_page(self, page: int) -> list[RawContribution]:
        """POST the search query for one page and return its raw records."""
        resp = await self._client.post(SEARCH_URL, json=build_search_query(page))
        resp.raise_for_status()
        items = results_from_payload(resp.json())
        logger.debug("Page %d returned %d grants", page, len(items))
        return [raw_from_search_item(item) for item in items]

    async def search(self, limit: Optional[int] = None) -> list[RawContribution]:
        """
        Walk result pages until `limit` records are collected, a page comes
        back empty or fails, or MAX_PAGES is reached. Pages collected before
        a failure are kept.
        """
        max_pages = MAX_PAGES if limit is None else min(MAX_PAGES, math.ceil(limit / RESULTS_PER_PAGE))
        all_raw: list[RawContribution] = []
        for page in range(1, max_pages + 1):
            try:
                raw_list = await self.fetch_page(page)
            except (httpx.HTTPError, ValueError) as e:
                logger.warning("Search failed for %s (page=%d): %s", self.source_id, page, e)
                break
            if not raw_list:
                break
            all_raw.extend(raw_list)
        if limit is not None:
            all_raw = all_raw[:limit]
        logger.info("Collected %d raw grants from %s", len(all_raw), self.source_id)
        return all_raw

    async def fetch_recent(self, limit: int = RECENT_PAGES * RESULTS_PER_PAGE) -> NormalizationBatch:
        """Newest grants; defaults to the first five pages."""
        return await super().fetch_recent(limit=limit)
