"""Check-in board — one deck per catalog category, in category order."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta
from typing import Callable

from goalstack.config import Settings
from goalstack.deck.catalog import GoalCatalog
from goalstack.deck.controller import DeckController
from goalstack.deck.models import DeckView, SwipeDirection
from goalstack.deck.scheduler import PeriodicTicker, Scheduler

logger = logging.getLogger(__name__)


def slugify(name: str) -> str:
    """Lowercase with "-" between words: "Career & Skills" -> "career-skills"."""
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


class CheckinBoard:
    def __init__(
        self,
        catalog: GoalCatalog,
        *,
        scheduler: Scheduler,
        clock: Callable[[], datetime] = datetime.now,
        ticker: PeriodicTicker | None = None,
        settings: Settings | None = None,
    ) -> None:
        settings = settings or Settings()
        self._catalog = catalog
        self._clock = clock
        self._ticker = ticker
        self._titles: dict[str, str] = {}
        self._decks: dict[str, DeckController] = {}

        for category in catalog.categories:
            deck_id = slugify(category)
            self._titles[deck_id] = category
            self._decks[deck_id] = DeckController(
                catalog.goals_for(category),
                scheduler=scheduler,
                clock=clock,
                ticker=ticker,
                end_of_day=settings.end_of_day,
                default_at_time=settings.default_at_time,
                swipe_duration=timedelta(milliseconds=settings.swipe_duration_ms),
                undo_duration=timedelta(milliseconds=settings.undo_duration_ms),
                colors=catalog.colors,
            )

    @property
    def catalog(self) -> GoalCatalog:
        return self._catalog

    @property
    def deck_ids(self) -> list[str]:
        return list(self._decks)

    def deck(self, deck_id: str) -> DeckController | None:
        return self._decks.get(deck_id)

    def view(self, deck_id: str, now: datetime | None = None) -> DeckView | None:
        deck = self._decks.get(deck_id)
        if deck is None:
            return None
        now = now or self._clock()
        rows = deck.current_view(now)
        title = self._titles[deck_id]
        return DeckView(
            id=deck_id,
            title=title,
            color=self._catalog.color_for(title),
            rows=rows,
            undo_available=deck.undo_available,
            undo_title=deck.pending_title,
            undo_expires_at=deck.undo_expires_at,
            all_done=not rows,
        )

    def views(self, now: datetime | None = None) -> list[DeckView]:
        now = now or self._clock()
        return [self.view(deck_id, now) for deck_id in self._decks]

    def swipe(
        self,
        deck_id: str,
        card_id: str,
        direction: SwipeDirection = SwipeDirection.right,
        now: datetime | None = None,
    ) -> DeckView | None:
        """Either direction dismisses the card."""
        deck = self._decks.get(deck_id)
        if deck is None:
            return None
        now = now or self._clock()
        logger.debug("Swipe %s on %s/%s", direction.value, deck_id, card_id)
        deck.request_remove(card_id, now)
        return self.view(deck_id, now)

    def undo(self, deck_id: str, now: datetime | None = None) -> DeckView | None:
        deck = self._decks.get(deck_id)
        if deck is None:
            return None
        now = now or self._clock()
        deck.undo(now)
        return self.view(deck_id, now)

    def start(self) -> None:
        if self._ticker is not None:
            self._ticker.start()

    def close(self) -> None:
        if self._ticker is not None:
            self._ticker.stop()
        for deck in self._decks.values():
            deck.close()
        logger.info("Check-in board closed (%d decks)", len(self._decks))
