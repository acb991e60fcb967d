"""Tests for core/reducer.py — result-state transitions."""

from __future__ import annotations

import pytest

from conftest import story
from core.exceptions import UnknownEventError
from core.models import ResultState, ResultStatus
from core.reducer import (
    FetchFailure,
    FetchInit,
    FetchSuccess,
    RemoveStory,
    ResultsStore,
    reduce,
)


@pytest.fixture
def stories():
    return (story("abc123", "React 18"), story("def456", "Redux toolkit"), story("ghi789", "Vue 3"))


@pytest.fixture
def loaded(stories) -> ResultState:
    return ResultState(items=stories, status=ResultStatus.LOADED)


# ── INIT ───────────────────────────────────────────────────────────────────────


class TestFetchInit:
    def test_from_idle(self):
        state = reduce(ResultState(), FetchInit())
        assert state.is_loading is True
        assert state.is_error is False
        assert state.status is ResultStatus.LOADING

    def test_from_failed_clears_error(self, stories):
        failed = ResultState(items=stories, is_error=True, status=ResultStatus.FAILED)
        state = reduce(failed, FetchInit())
        assert (state.is_loading, state.is_error) == (True, False)

    def test_keeps_items(self, loaded):
        assert reduce(loaded, FetchInit()).items == loaded.items

    def test_does_not_mutate_input(self, loaded):
        reduce(loaded, FetchInit())
        assert loaded.is_loading is False


# ── SUCCESS / FAILURE ──────────────────────────────────────────────────────────


class TestFetchSuccess:
    def test_replaces_items_exactly(self, loaded):
        payload = [story("x", "New"), story("x", "New"), story("y", "Other")]
        state = reduce(reduce(loaded, FetchInit()), FetchSuccess(payload=payload))

        assert state.items == tuple(payload)  # order and duplicates kept
        assert (state.is_loading, state.is_error) == (False, False)
        assert state.status is ResultStatus.LOADED

    def test_empty_payload_clears_items(self, loaded):
        state = reduce(reduce(loaded, FetchInit()), FetchSuccess(payload=[]))
        assert state.items == ()

    def test_ignored_when_not_loading(self, loaded):
        assert reduce(loaded, FetchSuccess(payload=[story("z", "Late")])) is loaded


class TestFetchFailure:
    def test_sets_error_and_keeps_items(self, loaded):
        state = reduce(reduce(loaded, FetchInit()), FetchFailure())
        assert (state.is_loading, state.is_error) == (False, True)
        assert state.items == loaded.items
        assert state.status is ResultStatus.FAILED

    def test_ignored_when_not_loading(self):
        idle = ResultState()
        assert reduce(idle, FetchFailure()) is idle


# ── REMOVE ─────────────────────────────────────────────────────────────────────


class TestRemoveStory:
    def test_removes_matching_id(self, loaded):
        state = reduce(loaded, RemoveStory(story_id="abc123"))
        assert [s.id for s in state.items] == ["def456", "ghi789"]

    def test_keeps_flags(self, stories):
        loading = ResultState(items=stories, is_loading=True, status=ResultStatus.LOADING)
        state = reduce(loading, RemoveStory(story_id="def456"))
        assert (state.is_loading, state.is_error, state.status) == (
            True, False, ResultStatus.LOADING,
        )

    def test_missing_id_is_noop(self, loaded):
        state = reduce(loaded, RemoveStory(story_id="nope"))
        assert state.items == loaded.items

    def test_removed_ids_never_return(self, loaded):
        state = loaded
        for story_id in ["ghi789", "abc123", "ghi789"]:
            state = reduce(state, RemoveStory(story_id=story_id))
            assert story_id not in {s.id for s in state.items}
        assert [s.id for s in state.items] == ["def456"]

    def test_works_on_empty_state(self):
        assert reduce(ResultState(), RemoveStory(story_id="x")).items == ()


# ── Unknown events ─────────────────────────────────────────────────────────────


class TestUnknownEvent:
    @pytest.mark.parametrize("event", ["STORIES_FETCH_INIT", None, {"type": "INIT"}, object()])
    def test_raises(self, event):
        with pytest.raises(UnknownEventError):
            reduce(ResultState(), event)

    def test_is_a_type_error(self):
        with pytest.raises(TypeError):
            reduce(ResultState(), 42)


# ── Store ──────────────────────────────────────────────────────────────────────


class TestResultsStore:
    def test_starts_idle(self):
        state = ResultsStore().state
        assert state.items == ()
        assert (state.is_loading, state.is_error) == (False, False)
        assert state.status is ResultStatus.IDLE

    def test_applies_events_in_order(self, stories):
        store = ResultsStore()
        store.dispatch(FetchInit())
        store.dispatch(FetchSuccess(payload=stories))
        store.dispatch(RemoveStory(story_id="abc123"))

        assert [s.id for s in store.state.items] == ["def456", "ghi789"]
        assert store.state.status is ResultStatus.LOADED

    def test_unknown_event_leaves_state(self):
        store = ResultsStore()
        with pytest.raises(UnknownEventError):
            store.dispatch("bogus")
        assert store.state == ResultState()
