"""Pagination controller driving the page-turn state machine."""

import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TypeVar

from hair_diary.domain.pagination import (
    Effect,
    Event,
    NextPage,
    PageState,
    PreviousPage,
    Reload,
    ReloadPosition,
    Tick,
    Timing,
    step,
    visible_window,
)

T = TypeVar("T")


@dataclass
class PaginationController:
    """Holds the page state and feeds it events stamped with a monotonic clock."""

    timing: Timing = field(default_factory=Timing)
    clock: Callable[[], float] = time.monotonic
    state: PageState = field(default_factory=PageState)

    def next(self) -> tuple[Effect, ...]:
        """Start a forward turn unless one is running or this is the last page."""
        return self._dispatch(NextPage())

    def previous(self) -> tuple[Effect, ...]:
        """Start a backward turn unless one is running or this is the first page."""
        return self._dispatch(PreviousPage())

    def tick(self) -> tuple[Effect, ...]:
        """Let pending transition phases complete."""
        return self._dispatch(Tick())

    def reload(
        self, count: int, position: ReloadPosition = ReloadPosition.KEEP
    ) -> tuple[Effect, ...]:
        """Recompute the page count for ``count`` entries and clamp the page."""
        return self._dispatch(Reload(count=count, position=position))

    def current(self) -> PageState:
        """Return the state after applying elapsed time."""
        self.tick()
        return self.state

    def window(self, entries: Sequence[T]) -> tuple[T | None, T | None]:
        """Return the two entries on the current spread."""
        return visible_window(entries, self.current().current_page)

    def _dispatch(self, event: Event) -> tuple[Effect, ...]:
        self.state, effects = step(self.state, event, self.clock(), self.timing)
        return effects
