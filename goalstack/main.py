import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from goalstack.config import settings
from goalstack.deck.board import CheckinBoard
from goalstack.deck.catalog import DEFAULT_CATALOG
from goalstack.deck.router import router as checkin_router
from goalstack.deck.scheduler import AsyncioScheduler, PeriodicTicker

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    scheduler = AsyncioScheduler()
    ticker = PeriodicTicker(scheduler, settings.refresh_interval_s)
    board = CheckinBoard(DEFAULT_CATALOG, scheduler=scheduler, ticker=ticker, settings=settings)
    board.start()
    app.state.board = board
    try:
        yield
    finally:
        board.close()


app = FastAPI(title="goalstack", version="0.1.0", lifespan=lifespan)
app.include_router(checkin_router)


@app.get("/")
async def root() -> dict:
    return {
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "checkin": {
            "board": "/checkin",
            "deck": "/checkin/{deck_id}",
            "swipe": "/checkin/{deck_id}/cards/{card_id}/swipe",
            "undo": "/checkin/{deck_id}/undo",
            "catalog": "/catalog",
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
