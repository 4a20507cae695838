"""Parsers for Gates Foundation search API responses."""

from typing import Any

from philanthropy_scraper.models.raw import RawContribution

from .constants import FACETS, GRANT_QUERY, RESULTS_PER_PAGE


def build_search_query(page: int) -> dict[str, Any]:
    """Request body for one page of grants, newest first."""
    return {
        "facetsToRender": FACETS,
        "fieldQueries": GRANT_QUERY,
        "freeTextQuery": "",
        "page": page or 1,
        "resultsPerPage": str(RESULTS_PER_PAGE),
        "sortBy": "gfodate",
        "sortDirection": "desc",
    }


def _clean_topics(topics: Any) -> Any:
    """Drop the empty strings the API uses as list placeholders."""
    if isinstance(topics, list):
        return [t for t in topics if isinstance(t, str) and t.strip()]
    return topics


def raw_from_search_item(item: dict[str, Any]) -> RawContribution:
    """
    Map one search result to a RawContribution.

    Example item:
        {"amount": 7517993, "date": "2020-05-18T00:00:00-05:00",
         "description": "to establish local molecular ... in Tanzania.",
         "title": "National Institute for Medical Research",
         "topics": ["Malaria"], "thumbnailUrl": "",
         "url": "/How-We-Work/Quick-Links/Grants-Database/Grants/2020/05/INV-002202"}
    """
    return RawContribution(
        title=item.get("title"),
        description=item.get("description"),
        amount=item.get("amount"),
        date=item.get("date"),
        topics=_clean_topics(item.get("topics")),
        url=item.get("url"),
        thumbnailUrl=item.get("thumbnailUrl") or None,
        grantee=item.get("grantee"),
        categories=_clean_topics(item.get("categories")),
    )


def results_from_payload(payload: Any) -> list[dict[str, Any]]:
    """Extract the result list from a search response body."""
    if not isinstance(payload, dict):
        raise ValueError("Search response is not a JSON object")
    results = payload.get("results")
    if results is None:
        return []
    if not isinstance(results, list):
        raise ValueError("Search response 'results' is not a list")
    return [r for r in results if isinstance(r, dict)]
