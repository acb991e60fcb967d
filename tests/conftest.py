"""Shared fixtures: test settings, hits payloads and a fake search endpoint."""

from __future__ import annotations

import json

import httpx
import pytest

from config.settings import Settings
from core.models import Story

ENDPOINT = "https://hn.test/api/v1/search"


def make_hit(object_id: str, title: str, **overrides) -> dict:
    """Return one search hit in the wire format used by the index."""
    hit = {
        "objectID": object_id,
        "url": f"https://example.com/{object_id}",
        "title": title,
        "author": "pg",
        "num_comments": 10,
        "points": 42,
    }
    hit.update(overrides)
    return hit


def story(object_id: str, title: str, **overrides) -> Story:
    return Story.model_validate(make_hit(object_id, title, **overrides))


class FakeIndex:
    """``httpx.MockTransport`` handler serving canned hits per query term.

    Terms listed in ``failing`` answer 500. Every request is recorded in
    ``requests``.
    """

    def __init__(self, hits_by_term: dict[str, list[dict]] | None = None) -> None:
        self.hits_by_term = hits_by_term or {}
        self.failing: set[str] = set()
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        term = request.url.params.get("query", "")
        if term in self.failing:
            return httpx.Response(500, text="upstream error")
        body = {"hits": self.hits_by_term.get(term, []), "nbHits": 0, "page": 0}
        return httpx.Response(200, content=json.dumps(body).encode())

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def queried_terms(self) -> list[str]:
        return [r.url.params.get("query", "") for r in self.requests]


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at a fake endpoint and a per-test preference DB."""
    return Settings(
        search_endpoint=ENDPOINT,
        db_path=tmp_path / "preferences.db",
        default_term="React",
        preference_key="search",
        request_timeout=None,
        max_retries=0,
    )


@pytest.fixture
def react_hits() -> list[dict]:
    return [
        make_hit("a1", "React 18 released"),
        make_hit("b2", "Why we moved off React", num_comments=3, points=7),
    ]


@pytest.fixture
def index(react_hits) -> FakeIndex:
    return FakeIndex({"React": react_hits})
