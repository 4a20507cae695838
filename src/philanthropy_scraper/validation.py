"""Structural checks for normalized contributions before they are handed downstream."""

import re
from typing import Any, Mapping, Union

from philanthropy_scraper.errors import ContributionValidationError
from philanthropy_scraper.models.contribution import NormalizedContribution

ISO_8601_WITH_OFFSET = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?[+-]\d{2}:\d{2}")
ID_LENGTH = 36
MIN_TITLE_LENGTH = 5
MAX_IMAGE_LENGTH = 500


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def find_contribution_problems(
    contribution: Union[NormalizedContribution, Mapping[str, Any]],
) -> list[str]:
    """Return every contract violation found; an empty list means the record is valid."""
    if isinstance(contribution, NormalizedContribution):
        c: Mapping[str, Any] = contribution.model_dump()
    else:
        c = contribution
    problems: list[str] = []

    if c.get("type") != "donation":
        problems.append(f"type must be 'donation', got {c.get('type')!r}")

    title = c.get("title")
    if not isinstance(title, str) or len(title) < MIN_TITLE_LENGTH:
        problems.append(f"title must be a string of at least {MIN_TITLE_LENGTH} chars")

    billionaire = c.get("billionaire")
    if not isinstance(billionaire, str) or len(billionaire) != ID_LENGTH:
        problems.append(f"billionaire must be a {ID_LENGTH}-char id")

    date = c.get("date_of_investment")
    if not isinstance(date, str) or not ISO_8601_WITH_OFFSET.search(date):
        problems.append(f"date_of_investment is not ISO-8601 with offset: {date!r}")

    amount = c.get("amount")
    if not _is_number(amount) or amount <= 1:
        problems.append(f"amount must be a number greater than 1, got {amount!r}")

    if not isinstance(c.get("amount_is_estimate"), bool):
        problems.append("amount_is_estimate must be a boolean")

    for cause in c.get("related_causes") or []:
        if not isinstance(cause, str):
            problems.append(f"related cause is not a string: {cause!r}")

    score = c.get("impact_score")
    if not isinstance(score, int) or isinstance(score, bool) or not 0 <= score <= 5:
        problems.append(f"impact_score must be an integer in [0, 5], got {score!r}")

    urls = c.get("source_urls")
    if not urls:
        problems.append("source_urls must not be empty")
    else:
        for url in urls:
            if not isinstance(url, str) or "http" not in url or "://" not in url:
                problems.append(f"source url is not absolute: {url!r}")

    description = c.get("description")
    if description and not isinstance(description, str):
        problems.append("description must be a string")

    image = c.get("image")
    if image:
        if not isinstance(image, str):
            problems.append("image must be a string")
        elif len(image) >= MAX_IMAGE_LENGTH:
            problems.append(f"image must be shorter than {MAX_IMAGE_LENGTH} chars")

    foundation = c.get("philanthropic_foundation")
    if foundation and (not isinstance(foundation, str) or len(foundation) != ID_LENGTH):
        problems.append(f"philanthropic_foundation must be a {ID_LENGTH}-char id")

    return problems


def validate_contribution(
    contribution: Union[NormalizedContribution, Mapping[str, Any]],
) -> None:
    """Raise ContributionValidationError if the contribution breaks the contract."""
    problems = find_contribution_problems(contribution)
    if problems:
        raise ContributionValidationError(problems)
