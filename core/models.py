"""
Pydantic models shared across the hacker-stories core.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Story(BaseModel):
    """A single search hit from the Hacker News index.

    Field names follow Python conventions; the wire names used by the search
    API (``objectID``, ``num_comments``) are accepted as aliases.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(alias="objectID")
    url: str = ""
    title: str = ""
    author: str = ""
    comment_count: int = Field(default=0, ge=0, alias="num_comments")
    points: int = 0

    @field_validator("url", "title", "author", mode="before")
    @classmethod
    def _null_to_empty(cls, value: object) -> object:
        # The index returns null for the url/title of comment-type hits.
        return "" if value is None else value

    @field_validator("comment_count", "points", mode="before")
    @classmethod
    def _null_to_zero(cls, value: object) -> object:
        return 0 if value is None else value


class SearchPayload(BaseModel):
    """Body of a successful search response; only ``hits`` is read."""

    model_config = ConfigDict(extra="ignore")

    hits: list[Story]


class ResultStatus(str, Enum):
    """Explicit state of the results state machine."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


class ResultState(BaseModel):
    """Authoritative snapshot of the result list and its fetch status."""

    model_config = ConfigDict(frozen=True)

    items: tuple[Story, ...] = ()
    is_loading: bool = False
    is_error: bool = False
    status: ResultStatus = ResultStatus.IDLE
