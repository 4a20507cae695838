"""Sources for the cause reference list."""

import logging
from typing import Any, Iterable, Optional, Protocol

import httpx
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from philanthropy_scraper.errors import ReferenceFetchError
from philanthropy_scraper.models.contribution import Cause

logger = logging.getLogger(__name__)

DEFAULT_CAUSES_URL = "https://api.silobase.com/data/billionaireboard/causes"


class CauseSource(Protocol):
    """Anything that can produce the cause reference list."""

    async def fetch(self) -> list[Cause]:
        ...


class StaticCauseSource:
    """Fixed in-memory cause list (offline runs and tests)."""

    def __init__(self, names: Iterable[str]):
        self._causes = [Cause(name=n) for n in names]

    async def fetch(self) -> list[Cause]:
        return list(self._causes)


def parse_causes_envelope(payload: Any) -> list[Cause]:
    """
    Parse the `{"data": [{"name": ...}, ...]}` envelope.
    An empty data list is valid and means no causes exist.
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("data"), list):
        raise ReferenceFetchError("Cause list response has no 'data' list")
    causes: list[Cause] = []
    for i, item in enumerate(payload["data"]):
        if not isinstance(item, dict) or not isinstance(item.get("name"), str):
            raise ReferenceFetchError(f"Cause entry {i} has no string 'name'")
        causes.append(Cause(name=item["name"]))
    return causes


class HttpCauseSource:
    """
    Fetches the cause list over HTTP.
    Transport failures and error statuses are retried with exponential backoff;
    a malformed body fails at once.
    """

    DEFAULT_HEADERS = {
        "User-Agent": "philanthropy-scraper/0.1",
        "Accept": "application/json",
    }

    def __init__(
        self,
        url: str = DEFAULT_CAUSES_URL,
        *,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
        attempts: int = 3,
        backoff: float = 1.0,
        max_backoff: float = 30.0,
    ):
        self.url = url
        self._client = client
        self._timeout = timeout
        self._attempts = max(1, attempts)
        self._backoff = backoff
        self._max_backoff = max_backoff

    async def _get_json(self, client: httpx.AsyncClient) -> Any:
        resp = await client.get(self.url)
        resp.raise_for_status()
        return resp.json()

    async def _fetch_payload(self, client: httpx.AsyncClient) -> Any:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._attempts),
            wait=wait_exponential(multiplier=self._backoff, max=self._max_backoff),
            retry=retry_if_exception_type((httpx.TransportError, httpx.HTTPStatusError)),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    return await self._get_json(client)
        except httpx.HTTPStatusError as e:
            raise ReferenceFetchError(
                f"Cause list fetch failed after {self._attempts} attempt(s): "
                f"HTTP {e.response.status_code}"
            ) from e
        except httpx.TransportError as e:
            raise ReferenceFetchError(
                f"Cause list fetch failed after {self._attempts} attempt(s): {e!r}"
            ) from e
        except httpx.RequestError as e:
            raise ReferenceFetchError(f"Cause list fetch failed: {e!r}") from e
        except ValueError as e:
            raise ReferenceFetchError(f"Cause list response is not JSON: {e}") from e

    async def fetch(self) -> list[Cause]:
        """Fetch and parse the cause list; raises ReferenceFetchError on failure."""
        logger.info("Fetching cause list from %s", self.url)
        if self._client is not None:
            payload = await self._fetch_payload(self._client)
        else:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
                headers=self.DEFAULT_HEADERS,
            ) as client:
                payload = await self._fetch_payload(client)
        causes = parse_causes_envelope(payload)
        logger.info("Loaded %d causes", len(causes))
        return causes
