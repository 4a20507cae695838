"""Text utilities shared by the normalizer and source connectors."""

import re
from typing import Any, Iterable

# Start of text, or start of a new sentence after terminal punctuation
_SENTENCE_START = re.compile(r"(^\s*|[.!?]\s+)([a-z])")
_AMOUNT_NOISE = re.compile(r"[$,\s]")
_YEAR = re.compile(r"\d{4}")

# Fixed time used when a source only publishes a year or a year range
YEAR_END_TIME = "12-31T22:28:08+00:00"


def format_description(text: Any) -> str:
    """
    Capitalize each sentence and make sure the text ends with a period.
    None or blank input gives an empty string rather than a lone ".".
    """
    if text is None:
        return ""
    text = str(text).strip()
    if not text:
        return ""
    text = _SENTENCE_START.sub(lambda m: m.group(1) + m.group(2).upper(), text)
    if not text.endswith("."):
        text += "."
    return text


def parse_amount(display: Any) -> int:
    """Parse a display amount such as "$1,234,567" into whole currency units."""
    if isinstance(display, bool):
        raise ValueError(f"Not an amount: {display!r}")
    if isinstance(display, int):
        return display
    if isinstance(display, float):
        return int(display)
    cleaned = _AMOUNT_NOISE.sub("", str(display or ""))
    if not cleaned:
        raise ValueError(f"Not an amount: {display!r}")
    return int(cleaned)


def year_range_to_date(value: str) -> str:
    """
    Turn a coarse year or year range ("2018 - 2020") into an ISO-8601 timestamp.
    Lossy on purpose: the first year is kept and the time is fixed at year end.
    """
    m = _YEAR.search(value or "")
    if not m:
        raise ValueError(f"No year found in {value!r}")
    return f"{m.group(0)}-{YEAR_END_TIME}"


def _flatten(parts: Iterable[Any]) -> Iterable[str]:
    for part in parts:
        if part is None:
            continue
        if isinstance(part, (list, tuple)):
            yield from _flatten(part)
        else:
            yield str(part)


def flatten_search_text(*parts: Any) -> str:
    """Join scalars and (nested) sequences into one space-separated string."""
    return " ".join(_flatten(parts))
