"""Deck controller — ordered goal cards with timed remove and a single undo slot.

A deck is either idle or holds one PendingRemoval (undo window open).
A swipe starts two timers from the same instant:

- exit: after `swipe_duration` the card leaves the visible sequence;
- expiry: after `undo_duration` the undo offer is withdrawn.

Both are keyed by a removal generation, so a callback that belongs to a
superseded or undone removal finds nothing to do. Per-card animation state
lives in the rendering layer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from functools import partial
from typing import Callable, Iterable, Mapping

from goalstack.deck.deadlines import (
    DEFAULT_AT_TIME,
    USER_END_OF_DAY,
    format_countdown,
    label_for_kind,
    next_deadline,
)
from goalstack.deck.models import DeckRow, Goal
from goalstack.deck.scheduler import Handle, PeriodicTicker, Scheduler

logger = logging.getLogger(__name__)

SWIPE_DURATION = timedelta(milliseconds=450)
UNDO_DURATION = timedelta(milliseconds=3000)


@dataclass(frozen=True, slots=True)
class PendingRemoval:
    goal: Goal
    expires_at: datetime
    generation: int


class DeckController:
    def __init__(
        self,
        goals: Iterable[Goal],
        *,
        scheduler: Scheduler,
        clock: Callable[[], datetime] = datetime.now,
        ticker: PeriodicTicker | None = None,
        end_of_day: str = USER_END_OF_DAY,
        default_at_time: str = DEFAULT_AT_TIME,
        swipe_duration: timedelta = SWIPE_DURATION,
        undo_duration: timedelta = UNDO_DURATION,
        colors: Mapping[str, str] | None = None,
    ) -> None:
        self._scheduler = scheduler
        self._clock = clock
        self._end_of_day = end_of_day
        self._default_at_time = default_at_time
        self._swipe_duration = swipe_duration
        self._undo_duration = undo_duration
        self._colors = dict(colors or {})

        self._cards: list[Goal] = []
        self._pending: PendingRemoval | None = None
        self._expiry: Handle | None = None
        self._exits: dict[int, tuple[str, Handle]] = {}  # generation -> (goal id, timer)
        self._generation = 0
        self._closed = False
        self._sorted_at: datetime | None = None

        self.initialize(goals, clock())
        self._unsubscribe = ticker.subscribe(self.refresh) if ticker is not None else None

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def cards(self) -> tuple[Goal, ...]:
        return tuple(self._cards)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def undo_available(self) -> bool:
        return self._pending is not None

    @property
    def pending_title(self) -> str | None:
        return self._pending.goal.title if self._pending else None

    @property
    def undo_expires_at(self) -> datetime | None:
        return self._pending.expires_at if self._pending else None

    @property
    def sorted_at(self) -> datetime | None:
        """Instant the current order was computed for."""
        return self._sorted_at

    @property
    def exits_in_flight(self) -> int:
        return len(self._exits)

    def deadline_for(self, goal: Goal, now: datetime) -> datetime:
        return next_deadline(
            goal, now, end_of_day=self._end_of_day, default_at_time=self._default_at_time
        )

    def current_view(self, now: datetime | None = None) -> list[DeckRow]:
        """Deck order projected with fresh deadlines and countdowns."""
        now = now or self._clock()
        rows: list[DeckRow] = []
        for goal in self._cards:
            deadline = self.deadline_for(goal, now)
            countdown = format_countdown(deadline, now)
            rows.append(
                DeckRow(
                    goal=goal,
                    label=label_for_kind(goal, default_at_time=self._default_at_time),
                    countdown_text=countdown.text,
                    overdue=countdown.overdue,
                    deadline=deadline,
                    color=self._colors.get(goal.category, self._colors.get("default")),
                )
            )
        return rows

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def initialize(self, goals: Iterable[Goal], now: datetime) -> tuple[Goal, ...]:
        """Reset the deck to `goals`, sorted by deadline (first seen wins ties)."""
        if self._closed:
            return self.cards
        self._cancel_timers()
        self._pending = None
        seen: set[str] = set()
        cards: list[Goal] = []
        for goal in goals:
            if goal.id in seen:
                logger.warning("Duplicate goal id %r dropped from deck", goal.id)
                continue
            seen.add(goal.id)
            cards.append(goal)
        self._cards = cards
        self._sort(now)
        return self.cards

    def refresh(self, now: datetime | None = None) -> None:
        if self._closed:
            return
        self._sort(now or self._clock())

    def request_remove(self, goal_id: str, now: datetime | None = None) -> bool:
        """Start the two-phase removal of `goal_id`. Unknown ids are ignored."""
        if self._closed:
            return False
        goal = self._find(goal_id)
        if goal is None:
            logger.debug("Remove ignored, %r not in deck", goal_id)
            return False

        now = now or self._clock()
        self._generation += 1
        generation = self._generation

        if self._expiry is not None:
            self._expiry.cancel()
        self._pending = PendingRemoval(goal, now + self._undo_duration, generation)
        self._expiry = self._scheduler.call_later(
            self._undo_duration.total_seconds(), partial(self._expire_undo, generation)
        )
        self._exits[generation] = (
            goal.id,
            self._scheduler.call_later(
                self._swipe_duration.total_seconds(), partial(self._complete_exit, generation)
            ),
        )
        logger.debug("Removal %d started for %r", generation, goal.id)
        return True

    def undo(self, now: datetime | None = None) -> bool:
        """Reinstate the pending goal, if any. Re-enters by sort order."""
        if self._closed or self._pending is None:
            return False

        goal = self._pending.goal
        if self._expiry is not None:
            self._expiry.cancel()
            self._expiry = None
        self._pending = None

        for generation, (goal_id, handle) in list(self._exits.items()):
            if goal_id == goal.id:
                handle.cancel()
                del self._exits[generation]

        if self._find(goal.id) is None:
            self._cards.append(goal)
        self._sort(now or self._clock())
        logger.debug("Undo reinstated %r", goal.id)
        return True

    def close(self) -> None:
        """Tear down: cancel every timer and detach from the ticker."""
        if self._closed:
            return
        self._closed = True
        self._cancel_timers()
        self._pending = None
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        logger.debug("Deck closed")

    # ------------------------------------------------------------------
    # Timer callbacks
    # ------------------------------------------------------------------

    def _complete_exit(self, generation: int) -> None:
        entry = self._exits.pop(generation, None)
        if entry is None or self._closed:
            return
        goal_id = entry[0]
        remaining = [g for g in self._cards if g.id != goal_id]
        if len(remaining) == len(self._cards):
            logger.debug("Exit %d: %r already gone", generation, goal_id)
            return
        self._cards = remaining
        self._sort(self._clock())

    def _expire_undo(self, generation: int) -> None:
        if self._pending is None or self._pending.generation != generation:
            return
        logger.debug("Undo window for %r expired", self._pending.goal.id)
        self._pending = None
        self._expiry = None

    # ------------------------------------------------------------------

    def _find(self, goal_id: str) -> Goal | None:
        return next((g for g in self._cards if g.id == goal_id), None)

    def _sort(self, now: datetime) -> None:
        self._sorted_at = now
        self._cards.sort(key=lambda g: self.deadline_for(g, now))

    def _cancel_timers(self) -> None:
        if self._expiry is not None:
            self._expiry.cancel()
            self._expiry = None
        for _, handle in self._exits.values():
            handle.cancel()
        self._exits.clear()
