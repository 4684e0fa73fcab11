"""Endpoint tests — FastAPI app via httpx."""

from __future__ import annotations

import pytest


class TestCheckinEndpoints:
    @pytest.mark.asyncio
    async def test_board(self, client):
        resp = await client.get("/checkin")
        assert resp.status_code == 200
        data = resp.json()
        assert [d["id"] for d in data] == [
            "career-skills",
            "hobbies",
            "health-fitness",
            "relationships-social",
        ]

    @pytest.mark.asyncio
    async def test_deck(self, client):
        resp = await client.get("/checkin/health-fitness")
        assert resp.status_code == 200
        body = resp.json()
        assert body["title"] == "Health & Fitness"
        assert body["rows"][0]["goal"]["id"] == "fit-4"
        assert body["rows"][0]["countdown_text"] == "in 9h 30m"
        assert body["rows"][0]["overdue"] is False

    @pytest.mark.asyncio
    async def test_unknown_deck_404(self, client):
        resp = await client.get("/checkin/nope")
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_swipe_and_undo(self, client, scheduler):
        resp = await client.post(
            "/checkin/hobbies/cards/hobby-1/swipe", json={"direction": "left"}
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["undo_available"] is True
        assert body["undo_title"] == "Practice drums"

        scheduler.advance(ms=450)
        body = (await client.get("/checkin/hobbies")).json()
        assert [r["goal"]["id"] for r in body["rows"]] == ["hobby-3", "hobby-2"]

        resp = await client.post("/checkin/hobbies/undo")
        assert resp.status_code == 200
        body = resp.json()
        # ties re-enter after their equals
        assert [r["goal"]["id"] for r in body["rows"]] == ["hobby-3", "hobby-1", "hobby-2"]
        assert body["undo_available"] is False

    @pytest.mark.asyncio
    async def test_swipe_without_body(self, client):
        resp = await client.post("/checkin/hobbies/cards/hobby-2/swipe")
        assert resp.status_code == 200
        assert resp.json()["undo_title"] == "Edit photo"

    @pytest.mark.asyncio
    async def test_swipe_unknown_card_is_noop(self, client):
        resp = await client.post("/checkin/hobbies/cards/nope/swipe", json={"direction": "right"})
        assert resp.status_code == 200
        assert resp.json()["undo_available"] is False

    @pytest.mark.asyncio
    async def test_swipe_bad_direction_422(self, client):
        resp = await client.post("/checkin/hobbies/cards/hobby-1/swipe", json={"direction": "up"})
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_undo_unknown_deck_404(self, client):
        resp = await client.post("/checkin/nope/undo")
        assert resp.status_code == 404


class TestCatalogEndpoint:
    @pytest.mark.asyncio
    async def test_catalog(self, client):
        resp = await client.get("/catalog")
        assert resp.status_code == 200
        data = resp.json()
        assert len(data) == 4
        assert data[0]["color"] == "#4DA3FF"
        assert sum(len(c["goals"]) for c in data) == 11


class TestHealthEndpoint:
    @pytest.mark.asyncio
    async def test_health(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    @pytest.mark.asyncio
    async def test_root(self, client):
        resp = await client.get("/")
        assert resp.json()["checkin"]["board"] == "/checkin"
