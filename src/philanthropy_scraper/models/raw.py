"""Raw contribution representation before normalization."""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class RawContribution(BaseModel):
    """
    Loosely typed record from a source connector.
    Nothing is enforced here; the normalizer decides what is usable.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    title: Any = None
    description: Any = None
    amount: Any = None
    date: Any = None
    topics: Any = Field(default=None, validation_alias=AliasChoices("topics", "topic"))
    url: Any = None
    thumbnail_url: Any = Field(
        default=None,
        validation_alias=AliasChoices("thumbnailUrl", "thumbnail_url"),
    )
