"""Fetch orchestration for story searches.

Responsibilities:
- Refuse to fetch a target built from an empty term
- Emit ``FetchInit`` before the request goes out
- GET the target URL and decode the hits into ``Story`` records
- Translate every transport or decode problem into ``FetchFailure``
- Drop outcomes of requests that have since been superseded

Each request is tagged with a generation number. Only the outcome of the most
recently issued generation is dispatched; older outcomes are discarded when
they arrive. In-flight requests are never cancelled.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import TYPE_CHECKING, Optional

import httpx

from core.models import SearchPayload
from core.query import QueryTarget, require_submittable
from core.reducer import FetchFailure, FetchInit, FetchSuccess, ResultEvent

if TYPE_CHECKING:
    from config.settings import Settings

logger = logging.getLogger(__name__)

Dispatch = Callable[[ResultEvent], object]


class FetchOrchestrator:
    """Runs searches and reports their lifecycle to a dispatch callable.

    Args:
        dispatch: Receives ``FetchInit`` / ``FetchSuccess`` / ``FetchFailure``.
        settings: Supplies the request timeout and retry count.
        transport: Optional httpx transport; replaces the network in tests.
    """

    def __init__(
        self,
        dispatch: Dispatch,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._dispatch = dispatch
        self.settings = settings
        self._transport = transport
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def generation(self) -> int:
        """Number of the most recently issued request (0 before the first)."""
        return self._generation

    def _client(self) -> httpx.AsyncClient:
        transport = self._transport
        if transport is None and self.settings.max_retries:
            transport = httpx.AsyncHTTPTransport(retries=self.settings.max_retries)
        return httpx.AsyncClient(
            transport=transport,
            timeout=httpx.Timeout(self.settings.request_timeout),
            follow_redirects=True,
        )

    async def fetch(self, target: QueryTarget) -> bool:
        """Fetch *target* and dispatch its outcome unless it has gone stale.

        Returns:
            ``True`` if the outcome was dispatched, ``False`` if a newer request
            was issued while this one was in flight.

        Raises:
            EmptySearchTermError: If *target* was built from an empty term.
                Nothing is dispatched in that case.
        """
        require_submittable(target)
        with self._lock:
            self._generation += 1
            generation = self._generation
            self._dispatch(FetchInit())
        logger.info("Search #%d issued for term=%r", generation, target.term)

        outcome: ResultEvent
        try:
            async with self._client() as client:
                response = await client.get(target.url)
                response.raise_for_status()
                payload = SearchPayload.model_validate(response.json())
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            logger.warning("Search #%d for term=%r failed: %s", generation, target.term, exc)
            outcome = FetchFailure()
        else:
            logger.info(
                "Search #%d for term=%r returned %d stories",
                generation, target.term, len(payload.hits),
            )
            outcome = FetchSuccess(payload=tuple(payload.hits))

        # Check and dispatch together so no newer INIT can slip in between.
        with self._lock:
            if generation != self._generation:
                logger.debug(
                    "Discarding stale outcome of search #%d (latest is #%d)",
                    generation, self._generation,
                )
                return False
            self._dispatch(outcome)
        return True
