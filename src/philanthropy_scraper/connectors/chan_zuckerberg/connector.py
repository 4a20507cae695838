"""Chan Zuckerberg Initiative connector.

All grants are listed in one table on the grants page, so the page is fetched
once and rows are read in order. Amounts are display strings ("$1,500,000")
and dates are year ranges ("2018 - 2020").
"""

import logging
from typing import Optional

import httpx

from philanthropy_scraper.connectors.base import BaseConnector
from philanthropy_scraper.models.raw import RawContribution
from philanthropy_scraper.normalizer import NormalizationBatch, SourceConfig
from philanthropy_scraper.text import parse_amount, year_range_to_date

from .constants import BILLIONAIRE_ID, FUND_ID, GRANTS_URL, RECENT_ROWS
from .parsers import parse_grants_table

logger = logging.getLogger(__name__)


class ChanZuckerbergConnector(BaseConnector):
    """Connector for chanzuckerberg.com grants."""

    source_id = "chan-zuckerberg"

    @classmethod
    def source_config(cls) -> SourceConfig:
        return SourceConfig(
            source_id=cls.source_id,
            fund_id=FUND_ID,
            billionaire_id=BILLIONAIRE_ID,
            parse_amount=parse_amount,
            parse_date=year_range_to_date,
        )

    async def _fetch_page(self) -> str:
        resp = await self._client.get(GRANTS_URL, headers={"Accept": "text/html"})
        resp.raise_for_status()
        return resp.text

    async def search(self, limit: Optional[int] = None) -> list[RawContribution]:
        """Fetch the grants page and parse the first `limit` rows (all if None)."""
        try:
            page_html = await self._fetch_page()
        except httpx.HTTPError as e:
            logger.warning("Fetching %s failed: %s", GRANTS_URL, e)
            return []
        raw_list = parse_grants_table(page_html, GRANTS_URL, limit=limit)
        if not raw_list:
            logger.warning("No grant rows found on %s; the page layout may have changed", GRANTS_URL)
        logger.info("Collected %d raw grants from %s", len(raw_list), self.source_id)
        return raw_list

    async def fetch_recent(self, limit: int = RECENT_ROWS) -> NormalizationBatch:
        return await super().fetch_recent(limit=limit)
