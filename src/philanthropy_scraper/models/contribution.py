"""Cause and normalized contribution models."""

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Cause(BaseModel):
    """Named philanthropic category from the shared reference list."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str


class NormalizedContribution(BaseModel):
    """Canonical donation record produced for every source."""

    type: Literal["donation"] = "donation"
    title: str
    billionaire: str = Field(..., description="36-character billionaire identifier")
    date_of_investment: str = Field(..., description="ISO-8601 datetime with UTC offset")
    amount: Union[int, float]
    amount_is_estimate: bool = False
    currency: str = "USD"
    related_causes: list[str] = Field(default_factory=list)
    impact_score: int = Field(default=3, ge=0, le=5)
    source_urls: list[str] = Field(default_factory=list)

    organizationWebsite: Optional[str] = None
    description: str = ""
    image: Optional[str] = None
    philanthropic_foundation: str = Field(..., description="36-character foundation identifier")
