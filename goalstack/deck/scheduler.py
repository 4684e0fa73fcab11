"""Cancellable delayed calls and the periodic refresh tick.

Everything runs on one event loop thread; callbacks for a deck are
serialized in the order their timers fire.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Callable, Protocol

logger = logging.getLogger(__name__)

REFRESH_INTERVAL = 60.0  # seconds


class Handle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> Handle: ...


class AsyncioScheduler:
    """Delegates to the running loop's call_later (returns asyncio.TimerHandle)."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return asyncio.get_running_loop().call_later(delay, callback)


class PeriodicTicker:
    """Fixed-interval tick source with explicit start/stop.

    Each tick samples `clock` once and hands that instant to every
    subscriber, in subscription order.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        interval: float = REFRESH_INTERVAL,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._scheduler = scheduler
        self._interval = interval
        self._clock = clock
        self._subscribers: dict[int, Callable[[datetime], None]] = {}
        self._next_token = 0
        self._handle: Handle | None = None

    @property
    def running(self) -> bool:
        return self._handle is not None

    def subscribe(self, callback: Callable[[datetime], None]) -> Callable[[], None]:
        """Register `callback`; returns a function that unregisters it."""
        token = self._next_token
        self._next_token += 1
        self._subscribers[token] = callback

        def _unsubscribe() -> None:
            self._subscribers.pop(token, None)

        return _unsubscribe

    def start(self) -> None:
        if self._handle is None:
            logger.debug("Ticker started (every %.1fs)", self._interval)
            self._arm()

    def stop(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
            logger.debug("Ticker stopped")

    def _arm(self) -> None:
        self._handle = self._scheduler.call_later(self._interval, self._tick)

    def _tick(self) -> None:
        self._arm()  # before dispatch: a raising subscriber must not end the tick
        now = self._clock()
        for callback in list(self._subscribers.values()):
            callback(now)
