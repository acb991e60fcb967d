"""Search session: the composition root for one user of the story search.

Flow
────
1. SearchSession(settings, preferences)
     → live term read once from the preference store (default "React")
     → initial QueryTarget built from it
2. await start()
     → first fetch for the startup target (skipped when the term is empty)
3. on_search_term_changed(text)
     → live term + preference updated, visible list re-derived, no fetch
4. await on_search_submitted()
     → new target from the live term, one fetch for it
5. on_item_dismissed(story_id)
     → RemoveStory dispatched
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, Optional

from core.fetcher import FetchOrchestrator
from core.filtering import visible
from core.models import ResultState, Story
from core.preferences import PreferenceStore
from core.query import QueryTarget, SearchQueryBuilder, require_submittable
from core.reducer import RemoveStory, ResultsStore

if TYPE_CHECKING:
    import httpx

    from config.settings import Settings

logger = logging.getLogger(__name__)


class SearchSession:
    """Holds the live search term, the current target and the result state."""

    def __init__(
        self,
        settings: Settings,
        preferences: PreferenceStore,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        self.preferences = preferences
        self.store = ResultsStore()
        self.builder = SearchQueryBuilder(settings.search_endpoint)
        self.orchestrator = FetchOrchestrator(
            self.store.dispatch, settings, transport=transport
        )

        # An empty stored term falls back to the default at startup only.
        self._search_term = (
            preferences.get(settings.preference_key, settings.default_term)
            or settings.default_term
        )
        self._target = self.builder.build(self._search_term)
        self.started = False
        self._start_lock = threading.Lock()

    # ── Read side ──────────────────────────────────────────────────────────

    @property
    def search_term(self) -> str:
        return self._search_term

    @property
    def target(self) -> QueryTarget:
        return self._target

    @property
    def state(self) -> ResultState:
        return self.store.state

    @property
    def visible_stories(self) -> list[Story]:
        return visible(self.store.state.items, self._search_term)

    def snapshot(self) -> dict[str, Any]:
        """Everything the presentation layer renders, as plain data."""
        state = self.store.state
        return {
            "items": [s.model_dump() for s in visible(state.items, self._search_term)],
            "is_loading": state.is_loading,
            "is_error": state.is_error,
            "search_term": self._search_term,
        }

    # ── Events from the presentation layer ─────────────────────────────────

    async def start(self) -> bool:
        """Run the initial fetch for the startup target.

        Runs at most once per session. Returns ``False`` without fetching when
        the session has already started or the startup term is empty.
        """
        with self._start_lock:
            if self.started:
                return False
            self.started = True
        if not self._target.is_submittable:
            logger.info("Startup search term is empty; skipping initial fetch")
            return False
        return await self.orchestrator.fetch(self._target)

    def on_search_term_changed(self, text: str) -> None:
        self._search_term = text
        self.preferences.set(self.settings.preference_key, text)

    async def on_search_submitted(self) -> bool:
        """Replace the current target with one for the live term and fetch it.

        Raises:
            EmptySearchTermError: If the live term is empty; nothing changes.
        """
        target = require_submittable(self.builder.build(self._search_term))
        self._target = target
        self.started = True
        return await self.orchestrator.fetch(target)

    def on_item_dismissed(self, story_id: str) -> None:
        self.store.dispatch(RemoveStory(story_id=story_id))

    def close(self) -> None:
        self.preferences.close()
