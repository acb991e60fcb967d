"""Client-side title filter over the loaded stories."""

from __future__ import annotations

from collections.abc import Iterable

from core.models import Story


def visible(items: Iterable[Story], term: str) -> list[Story]:
    """Return the stories whose title contains *term*, ignoring case.

    Order is preserved and *items* is never modified. An empty term matches
    every story.

    Examples:
        >>> [s.title for s in visible([Story(id="1", title="React 18")], "react")]
        ['React 18']
    """
    needle = term.casefold()
    return [story for story in items if needle in story.title.casefold()]
