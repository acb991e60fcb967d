"""Exception hierarchy for the hacker-stories core."""

from __future__ import annotations


class HackerStoriesError(Exception):
    """Base class for every error raised by the core package."""


class EmptySearchTermError(HackerStoriesError, ValueError):
    """A search was submitted (or a fetch requested) with an empty term."""

    def __init__(self) -> None:
        super().__init__("Search term must not be empty.")


class UnknownEventError(HackerStoriesError, TypeError):
    """The reducer received something outside its closed event set.

    This is a defect in the calling code, never a runtime condition, so it is
    raised rather than absorbed.
    """

    def __init__(self, event: object) -> None:
        self.event = event
        super().__init__(f"Unrecognised result-state event: {event!r}")
