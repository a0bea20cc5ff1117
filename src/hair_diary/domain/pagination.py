"""Page-turn state machine for the two-page logbook spread.

The machine is a pure function of ``(state, event, now)``. Time only enters
through ``now``, a reading of a monotonic clock in seconds, so the caller
decides where the clock comes from.

States are ``Idle`` (no transition) and ``Transitioning(direction)``. A turn
goes through two timed phases: after ``flip_delay`` the page index moves by
one, and after a further ``settle_delay`` the machine is idle again.
Navigation events that arrive during a turn are dropped.
"""

from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import TypeVar

ENTRIES_PER_PAGE = 2

T = TypeVar("T")


class Direction(StrEnum):
    """Direction of a page turn."""

    FORWARD = "forward"
    BACKWARD = "backward"


class Effect(StrEnum):
    """Observable outcomes of a state change."""

    TRANSITION_STARTED = "transition_started"
    PAGE_CHANGED = "page_changed"
    TRANSITION_FINISHED = "transition_finished"
    IGNORED = "ignored"


class ReloadPosition(StrEnum):
    """Where to land after the collection is re-read."""

    KEEP = "keep"
    FIRST = "first"
    LAST = "last"


@dataclass(frozen=True)
class Timing:
    """Delays of the two turn phases, in seconds."""

    flip_delay: float = 0.3
    settle_delay: float = 0.3


@dataclass(frozen=True)
class Transition:
    """An in-flight page turn."""

    direction: Direction
    started_at: float
    page_turned: bool = False


@dataclass(frozen=True)
class PageState:
    """Current page index, page count and optional transition."""

    current_page: int = 0
    total_pages: int = 1
    transition: Transition | None = None

    @property
    def is_idle(self) -> bool:
        """Whether no page turn is in flight."""
        return self.transition is None

    @property
    def can_go_next(self) -> bool:
        """Whether a later page exists."""
        return self.current_page < self.total_pages - 1

    @property
    def can_go_previous(self) -> bool:
        """Whether an earlier page exists."""
        return self.current_page > 0


@dataclass(frozen=True)
class NextPage:
    """Request to turn forward."""


@dataclass(frozen=True)
class PreviousPage:
    """Request to turn backward."""


@dataclass(frozen=True)
class Tick:
    """Let time pass without any user input."""


@dataclass(frozen=True)
class Reload:
    """The collection was re-read and now holds ``count`` entries."""

    count: int
    position: ReloadPosition = ReloadPosition.KEEP


Event = NextPage | PreviousPage | Tick | Reload


def total_pages(count: int, per_page: int = ENTRIES_PER_PAGE) -> int:
    """Return the number of spreads needed for ``count`` entries."""
    return max(1, -(-count // per_page))


def clamp_page(page: int, pages: int) -> int:
    """Clamp a page index into ``[0, pages - 1]``."""
    return min(max(page, 0), pages - 1)


def visible_window(
    entries: Sequence[T], current_page: int
) -> tuple[T | None, T | None]:
    """Return the left and right entries shown on a spread."""
    start = current_page * ENTRIES_PER_PAGE
    window: list[T | None] = list(entries[start : start + ENTRIES_PER_PAGE])
    window.extend([None] * (ENTRIES_PER_PAGE - len(window)))
    return window[0], window[1]


def step(
    state: PageState, event: Event, now: float, timing: Timing = Timing()
) -> tuple[PageState, tuple[Effect, ...]]:
    """Apply ``event`` at time ``now`` and return the new state and effects."""
    state, effects = _advance_clock(state, now, timing)

    if isinstance(event, Tick):
        return state, effects

    if isinstance(event, Reload):
        return _reload(state, event, effects)

    if not state.is_idle:
        return state, (*effects, Effect.IGNORED)

    if isinstance(event, NextPage):
        if not state.can_go_next:
            return state, (*effects, Effect.IGNORED)
        direction = Direction.FORWARD
    else:
        if not state.can_go_previous:
            return state, (*effects, Effect.IGNORED)
        direction = Direction.BACKWARD

    started = replace(state, transition=Transition(direction, started_at=now))
    return started, (*effects, Effect.TRANSITION_STARTED)


def _advance_clock(
    state: PageState, now: float, timing: Timing
) -> tuple[PageState, tuple[Effect, ...]]:
    transition = state.transition
    if transition is None:
        return state, ()

    effects: list[Effect] = []
    elapsed = now - transition.started_at
    if not transition.page_turned and elapsed >= timing.flip_delay:
        delta = 1 if transition.direction is Direction.FORWARD else -1
        page = clamp_page(state.current_page + delta, state.total_pages)
        if page != state.current_page:
            effects.append(Effect.PAGE_CHANGED)
        transition = replace(transition, page_turned=True)
        state = replace(state, current_page=page, transition=transition)
    if transition.page_turned and elapsed >= timing.flip_delay + timing.settle_delay:
        state = replace(state, transition=None)
        effects.append(Effect.TRANSITION_FINISHED)
    return state, tuple(effects)


def _reload(
    state: PageState, event: Reload, effects: tuple[Effect, ...]
) -> tuple[PageState, tuple[Effect, ...]]:
    pages = total_pages(event.count)
    if event.position is ReloadPosition.LAST:
        page = pages - 1
    elif event.position is ReloadPosition.FIRST:
        page = 0
    else:
        page = clamp_page(state.current_page, pages)

    reloaded = replace(state, current_page=page, total_pages=pages)
    transition = state.transition
    if (
        event.position is not ReloadPosition.KEEP
        and transition is not None
        and not transition.page_turned
    ):
        # A landing page replaces the pending flip; the turn only settles.
        reloaded = replace(reloaded, transition=replace(transition, page_turned=True))
    if page != state.current_page:
        effects = (*effects, Effect.PAGE_CHANGED)
    return reloaded, effects
