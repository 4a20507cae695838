"""Runtime settings from the environment and per-source configuration files."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

try:
    import yaml
except ModuleNotFoundError as e:
    raise ModuleNotFoundError(
        "PyYAML is required for source config loading. Run: pip install -e ."
    ) from e

from philanthropy_scraper.classifier import DEFAULT_CAUSES_URL
from philanthropy_scraper.normalizer import SourceConfig, prefix_resolver
from philanthropy_scraper.text import parse_amount, year_range_to_date

ENV_PREFIX = "PHILANTHROPY_SCRAPER_"


@dataclass(frozen=True)
class Settings:
    """Settings for outbound HTTP calls."""

    causes_url: str = DEFAULT_CAUSES_URL
    http_timeout: float = 30.0
    fetch_attempts: int = 3

    @classmethod
    def from_env(cls) -> "Settings":
        """Read PHILANTHROPY_SCRAPER_* variables; unset ones keep defaults."""
        env = os.environ
        return cls(
            causes_url=env.get(f"{ENV_PREFIX}CAUSES_URL") or DEFAULT_CAUSES_URL,
            http_timeout=float(env.get(f"{ENV_PREFIX}HTTP_TIMEOUT") or 30.0),
            fetch_attempts=int(env.get(f"{ENV_PREFIX}FETCH_ATTEMPTS") or 3),
        )


_AMOUNT_FORMATS = ("numeric", "display")
_DATE_FORMATS = ("iso", "year_range")


def source_config_from_dict(data: dict) -> SourceConfig:
    """
    Build a SourceConfig from plain data.
    Keys: source_id, fund_id, billionaire_id, base_url, amount_format, date_format.
    """
    missing = [k for k in ("source_id", "fund_id", "billionaire_id") if not data.get(k)]
    if missing:
        raise ValueError(f"Source config is missing: {', '.join(missing)}")

    amount_format = data.get("amount_format", "numeric")
    date_format = data.get("date_format", "iso")
    if amount_format not in _AMOUNT_FORMATS:
        raise ValueError(f"Unknown amount_format: {amount_format}. Use one of {list(_AMOUNT_FORMATS)}")
    if date_format not in _DATE_FORMATS:
        raise ValueError(f"Unknown date_format: {date_format}. Use one of {list(_DATE_FORMATS)}")

    kwargs: dict = {}
    base_url: Optional[str] = data.get("base_url")
    if base_url:
        kwargs["resolve_url"] = prefix_resolver(base_url)
    if amount_format == "display":
        kwargs["parse_amount"] = parse_amount
    if date_format == "year_range":
        kwargs["parse_date"] = year_range_to_date

    return SourceConfig(
        source_id=str(data["source_id"]),
        fund_id=str(data["fund_id"]),
        billionaire_id=str(data["billionaire_id"]),
        **kwargs,
    )


def load_source_config(path: str | Path) -> SourceConfig:
    """Load a SourceConfig from a YAML file."""
    data = yaml.safe_load(Path(path).read_text()) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Source config {path} must be a mapping")
    return source_config_from_dict(data)
