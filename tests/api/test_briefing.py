"""Tests for weather and NOTAM API endpoints."""

from __future__ import annotations


class TestWeatherEndpoints:
    async def test_refresh_then_get(self, client):
        resp = await client.post("/api/weather/refresh", json={"airports": ["kord"]})
        assert resp.status_code == 200
        [report] = resp.json()
        assert report["airport"] == "KORD"
        assert report["conditions"] == "VFR"

        resp = await client.get("/api/weather/KORD")
        assert resp.status_code == 200
        body = resp.json()
        assert body["stale"] is False
        assert body["raw_metar"].startswith("METAR KORD")

    async def test_not_cached(self, client):
        assert (await client.get("/api/weather/KGYY")).status_code == 404

    async def test_refresh_requires_airports(self, client):
        resp = await client.post("/api/weather/refresh", json={"airports": []})
        assert resp.status_code == 422

    async def test_stale_airports(self, client):
        await client.post("/api/weather/refresh", json={"airports": ["KORD"]})
        resp = await client.get("/api/weather/stale", params=[("airports", "KORD"), ("airports", "KGYY")])
        assert resp.status_code == 200
        assert resp.json() == {"stale": ["KGYY"]}


class TestNotamEndpoints:
    async def test_refresh_then_get(self, client):
        resp = await client.post("/api/notams/refresh", json={"airports": ["KORD"]})
        assert resp.status_code == 200
        assert [n["number"] for n in resp.json()] == ["A1234/25"]

        resp = await client.get("/api/notams/kord")
        body = resp.json()
        assert body["airport"] == "KORD"
        assert body["stale"] is False
        assert body["notams"][0]["raw"] == "RWY 10L/28R CLSD"

    async def test_active_filter(self, client):
        await client.post("/api/notams/refresh", json={"airports": ["KORD"]})
        resp = await client.get("/api/notams/KORD", params={"active_at": "2025-07-01T00:00:00Z"})
        assert resp.json()["notams"] == []

    async def test_nothing_cached(self, client):
        body = (await client.get("/api/notams/KMDW")).json()
        assert body == {"airport": "KMDW", "stale": True, "notams": []}
