"""Results state machine.

The result state only changes through four events:

    FetchInit           any state       → loading  (items unchanged)
    FetchSuccess(hits)  loading         → loaded   (items := hits)
    FetchFailure        loading         → failed   (items unchanged)
    RemoveStory(id)     any state       → same     (items minus id)

A SUCCESS or FAILURE that arrives outside ``loading`` is ignored. Anything
that is not one of the four events raises ``UnknownEventError``.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Union

from core.exceptions import UnknownEventError
from core.models import ResultState, ResultStatus, Story

logger = logging.getLogger(__name__)


# ── Events ─────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class FetchInit:
    """A request is about to be issued."""


@dataclass(frozen=True)
class FetchSuccess:
    """The request completed; *payload* replaces the stored items."""

    payload: Sequence[Story] = field(default_factory=tuple)


@dataclass(frozen=True)
class FetchFailure:
    """The request failed for any reason."""


@dataclass(frozen=True)
class RemoveStory:
    """The user dismissed the story with id *story_id*."""

    story_id: str


ResultEvent = Union[FetchInit, FetchSuccess, FetchFailure, RemoveStory]


# ── Transition function ────────────────────────────────────────────────────────


def reduce(state: ResultState, event: ResultEvent) -> ResultState:
    """Apply *event* to *state* and return the resulting state.

    Raises:
        UnknownEventError: If *event* is not a ``ResultEvent``.
    """
    if isinstance(event, FetchInit):
        return state.model_copy(
            update={
                "is_loading": True,
                "is_error": False,
                "status": ResultStatus.LOADING,
            }
        )

    if isinstance(event, FetchSuccess):
        if state.status is not ResultStatus.LOADING:
            logger.warning("Ignoring fetch success in state %s", state.status.value)
            return state
        return state.model_copy(
            update={
                "items": tuple(event.payload),
                "is_loading": False,
                "is_error": False,
                "status": ResultStatus.LOADED,
            }
        )

    if isinstance(event, FetchFailure):
        if state.status is not ResultStatus.LOADING:
            logger.warning("Ignoring fetch failure in state %s", state.status.value)
            return state
        return state.model_copy(
            update={
                "is_loading": False,
                "is_error": True,
                "status": ResultStatus.FAILED,
            }
        )

    if isinstance(event, RemoveStory):
        remaining = tuple(s for s in state.items if s.id != event.story_id)
        return state.model_copy(update={"items": remaining})

    raise UnknownEventError(event)


# ── Store ──────────────────────────────────────────────────────────────────────


class ResultsStore:
    """Owns the current ``ResultState``; the only place it is replaced.

    ``dispatch`` serialises transitions so that events are applied one at a
    time and in the order they are dispatched.
    """

    def __init__(self, initial: ResultState | None = None) -> None:
        self._state = initial if initial is not None else ResultState()
        self._lock = threading.Lock()

    @property
    def state(self) -> ResultState:
        return self._state

    def dispatch(self, event: ResultEvent) -> ResultState:
        with self._lock:
            self._state = reduce(self._state, event)
            return self._state
