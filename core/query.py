"""Query target construction.

A ``QueryTarget`` is the concrete request derived from a submitted search
term. Targets are only built on submission, never on keystroke, and a target
built from an empty term must never be fetched.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from core.exceptions import EmptySearchTermError


@dataclass(frozen=True)
class QueryTarget:
    """Endpoint plus the term it was built for."""

    endpoint: str
    term: str

    @property
    def is_submittable(self) -> bool:
        return bool(self.term)

    @property
    def url(self) -> str:
        """Full request URL: ``<endpoint>?query=<term>`` with the term encoded."""
        return str(httpx.URL(self.endpoint, params={"query": self.term}))


def require_submittable(target: QueryTarget) -> QueryTarget:
    """Return *target* unchanged, or raise ``EmptySearchTermError``."""
    if not target.is_submittable:
        raise EmptySearchTermError()
    return target


class SearchQueryBuilder:
    """Builds ``QueryTarget`` objects for a fixed search endpoint.

    ``build`` is pure: the same term always yields an equal target.
    """

    def __init__(self, endpoint: str) -> None:
        self.endpoint = endpoint

    def build(self, term: str) -> QueryTarget:
        return QueryTarget(endpoint=self.endpoint, term=term)
