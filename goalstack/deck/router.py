"""Check-in HTTP router — deck views, swipes, undo."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request

from goalstack.deck.board import CheckinBoard, slugify
from goalstack.deck.models import DeckView, SwipeDirection, SwipeRequest

router = APIRouter(tags=["checkin"])


def get_board(request: Request) -> CheckinBoard:
    return request.app.state.board


def _require(view: DeckView | None, deck_id: str) -> DeckView:
    if view is None:
        raise HTTPException(status_code=404, detail=f"Unknown deck: {deck_id}")
    return view


# ---------------------------------------------------------------------------
# /checkin
# ---------------------------------------------------------------------------


@router.get("/checkin", response_model=list[DeckView])
async def checkin(
    board: CheckinBoard = Depends(get_board),
) -> list[DeckView]:
    return board.views()


@router.get("/checkin/{deck_id}", response_model=DeckView)
async def checkin_deck(
    deck_id: str,
    board: CheckinBoard = Depends(get_board),
) -> DeckView:
    return _require(board.view(deck_id), deck_id)


@router.post("/checkin/{deck_id}/cards/{card_id}/swipe", response_model=DeckView)
async def swipe_card(
    deck_id: str,
    card_id: str,
    body: SwipeRequest | None = None,
    board: CheckinBoard = Depends(get_board),
) -> DeckView:
    """Dismiss a card. Unknown card ids leave the deck untouched."""
    direction = body.direction if body is not None else SwipeDirection.right
    return _require(board.swipe(deck_id, card_id, direction), deck_id)


@router.post("/checkin/{deck_id}/undo", response_model=DeckView)
async def undo_swipe(
    deck_id: str,
    board: CheckinBoard = Depends(get_board),
) -> DeckView:
    return _require(board.undo(deck_id), deck_id)


# ---------------------------------------------------------------------------
# /catalog
# ---------------------------------------------------------------------------


@router.get("/catalog")
async def catalog(
    board: CheckinBoard = Depends(get_board),
) -> list[dict]:
    cat = board.catalog
    return [
        {
            "id": slugify(category),
            "title": category,
            "color": cat.color_for(category),
            "goals": [g.model_dump() for g in cat.goals_for(category)],
        }
        for category in cat.categories
    ]
