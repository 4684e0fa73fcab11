"""Shared fixtures for the test suite."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable

import pytest
from httpx import ASGITransport, AsyncClient

from goalstack.config import Settings
from goalstack.deck.board import CheckinBoard
from goalstack.deck.catalog import DEFAULT_CATALOG
from goalstack.deck.models import Goal
from goalstack.deck.router import get_board
from goalstack.main import app

# Wednesday; the week ends Saturday 2026-02-21, the month on the 28th.
NOW = datetime(2026, 2, 18, 12, 0)


# ---------------------------------------------------------------------------
# Fake clock + scheduler (no real timers needed)
# ---------------------------------------------------------------------------

class FakeClock:
    """Callable wall clock that only moves when told to."""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class ManualHandle:
    def __init__(self, due: datetime, seq: int, callback: Callable[[], None]):
        self.due = due
        self.seq = seq
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Stand-in for AsyncioScheduler; timers fire only inside advance()."""

    def __init__(self, clock: FakeClock):
        self.clock = clock
        self._queue: list[ManualHandle] = []
        self._seq = 0

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(self.clock.now + timedelta(seconds=delay), self._seq, callback)
        self._seq += 1
        self._queue.append(handle)
        return handle

    @property
    def pending(self) -> list[ManualHandle]:
        return [h for h in self._queue if not h.cancelled]

    def advance(self, seconds: float = 0.0, *, ms: int | None = None) -> None:
        """Move the clock forward, firing due timers in (due, scheduled) order."""
        step = timedelta(milliseconds=ms) if ms is not None else timedelta(seconds=seconds)
        target = self.clock.now + step
        while True:
            due = [h for h in self._queue if not h.cancelled and h.due <= target]
            if not due:
                break
            handle = min(due, key=lambda h: (h.due, h.seq))
            self._queue.remove(handle)
            self.clock.now = handle.due
            handle.callback()
        self._queue = [h for h in self._queue if not h.cancelled]
        self.clock.now = target


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def scheduler(clock) -> ManualScheduler:
    return ManualScheduler(clock)


@pytest.fixture()
def board(clock, scheduler):
    b = CheckinBoard(DEFAULT_CATALOG, scheduler=scheduler, clock=clock, settings=Settings())
    yield b
    b.close()


@pytest.fixture()
def override_board(board):
    """Override the FastAPI dependency so no lifespan/event-loop timers are needed."""
    app.dependency_overrides[get_board] = lambda: board
    yield board
    app.dependency_overrides.clear()


@pytest.fixture()
async def client(override_board):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def make_goal(
    goal_id: str,
    kind: str = "DAILY_EOD",
    at: str | None = None,
    category: str = "Hobbies",
    title: str | None = None,
) -> Goal:
    """Helper to build a Goal with sensible defaults."""
    return Goal(
        id=goal_id,
        title=title or f"Goal {goal_id}",
        category=category,
        deadline_kind=kind,
        deadline_time=at,
    )
