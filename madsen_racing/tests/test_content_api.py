"""Tests for the Content API endpoints.

Uses a minimal FastAPI app with only the content router, and overrides the
ContentService dependency with one backed by the in-memory fake.
"""

from __future__ import annotations

import asyncio
import time

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from madsen_racing.routers.content_api import router as content_router
from madsen_racing.services.content import ContentService, get_content_service
from madsen_racing.tests.conftest import (
    FakeContentful,
    days_from_today,
    make_entry,
    make_media_item,
    make_page_content,
    make_race,
    make_sponsor,
    make_sponsor_package,
    make_video,
)


def _app_for(svc: ContentService) -> FastAPI:
    app = FastAPI()
    app.include_router(content_router)
    app.dependency_overrides[get_content_service] = lambda: svc
    return app


@pytest.fixture
def cms():
    return FakeContentful([
        make_race(title="Næste løb", date=days_from_today(4)),
        make_race(title="Senere løb", date=days_from_today(40)),
        make_race(title="Afsluttet", date="2025-06-01", season="2025", result=2),
        make_sponsor(name="Dansk Olie"),
        make_sponsor(name="Inaktiv", active=False),
        make_sponsor_package(name="Guld", tier="gold", price=25000, displayOrder=3),
        make_sponsor_package(name="Bronze", tier="bronze", displayOrder=1),
        make_page_content(primaryButtonText="BLIV SPONSOR", primaryButtonUrl="/sponsorer"),
        make_entry("pageSection", key="forside-hero", page="forside", heading="Velkommen"),
        make_entry("driverStats", season="2025", totalRaces=6, wins=1, podiums=3, fastestLaps=2),
        make_entry("siteConfig", siteName="Madsen Racing", currentSeason="2026"),
        make_entry("driverProfile", name="Anton Madsen", number=22),
        make_media_item(title="Regn i Padborg", tags=["regn"], featured=True),
        make_video(title="Highlights", featured=True),
    ])


@pytest.fixture
def client(cms):
    with TestClient(_app_for(ContentService(client_factory=lambda preview: cms))) as c:
        yield c


@pytest.fixture
def offline_client():
    with TestClient(_app_for(ContentService(client_factory=lambda preview: None))) as c:
        yield c


class TestRaces:
    def test_upcoming(self, client):
        data = client.get("/api/v1/content/races/upcoming").json()
        assert data["count"] == 2
        assert [r["title"] for r in data["results"]] == ["Næste løb", "Senere løb"]

    def test_next(self, client):
        assert client.get("/api/v1/content/races/next").json()["title"] == "Næste løb"

    def test_results(self, client):
        data = client.get("/api/v1/content/results", params={"season": "2025"}).json()
        assert [r["result"] for r in data["results"]] == [2]

    def test_stats(self, client):
        assert client.get("/api/v1/content/stats/2025").json()["podiums"] == 3

    def test_stats_missing_season_404(self, client):
        assert client.get("/api/v1/content/stats/2030").status_code == 404

    def test_limit_validated(self, client):
        assert client.get("/api/v1/content/races/upcoming", params={"limit": 0}).status_code == 422


class TestSponsorsAndPages:
    def test_sponsors_active_only(self, client):
        data = client.get("/api/v1/content/sponsors").json()
        assert [s["name"] for s in data["results"]] == ["Dansk Olie"]
        assert data["results"][0]["logo"]["url"].startswith("https://")

    def test_packages_in_order(self, client):
        data = client.get("/api/v1/content/sponsor-packages").json()
        assert [p["name"] for p in data["results"]] == ["Bronze", "Guld"]

    def test_package_by_tier(self, client):
        assert client.get("/api/v1/content/sponsor-packages/gold").json()["price"] == 25000
        assert client.get("/api/v1/content/sponsor-packages/silver").status_code == 404
        assert client.get("/api/v1/content/sponsor-packages/platinum").status_code == 422

    def test_page_with_button(self, client):
        page = client.get("/api/v1/content/pages/forside").json()
        assert page["primary_button"] == {"text": "BLIV SPONSOR", "href": "/sponsorer", "new_tab": False}
        assert page["hero_image"] is None

    def test_missing_page_404(self, client):
        assert client.get("/api/v1/content/pages/findes-ikke").status_code == 404

    def test_sections(self, client):
        data = client.get("/api/v1/content/sections", params={"page": "forside"}).json()
        assert data["results"][0]["heading"] == "Velkommen"
        assert client.get("/api/v1/content/sections/forside-hero").status_code == 200

    def test_singletons(self, client):
        assert client.get("/api/v1/content/site-config").json()["site_name"] == "Madsen Racing"
        assert client.get("/api/v1/content/driver-profile").json()["number"] == 22


class TestMedia:
    def test_media_by_tag(self, client):
        data = client.get("/api/v1/content/media", params={"tag": ["regn", "sol"]}).json()
        assert [m["title"] for m in data["results"]] == ["Regn i Padborg"]

    def test_media_search(self, client):
        data = client.get("/api/v1/content/media", params={"q": "padborg"}).json()
        assert data["count"] == 1

    def test_featured(self, client):
        assert client.get("/api/v1/content/media/featured").json()["count"] == 1
        assert client.get("/api/v1/content/videos/featured").json()["count"] == 1

    def test_press_photos_empty(self, client):
        assert client.get("/api/v1/content/press-photos").json() == {"count": 0, "results": []}


class TestUnconfigured:
    @pytest.mark.parametrize("path", [
        "/api/v1/content/races",
        "/api/v1/content/races/upcoming",
        "/api/v1/content/results",
        "/api/v1/content/sponsors",
        "/api/v1/content/sponsor-packages",
        "/api/v1/content/media",
        "/api/v1/content/videos",
        "/api/v1/content/press-photos",
    ])
    def test_lists_are_empty(self, offline_client, path):
        resp = offline_client.get(path)
        assert resp.status_code == 200
        assert resp.json() == {"count": 0, "results": []}

    @pytest.mark.parametrize("path", [
        "/api/v1/content/races/next",
        "/api/v1/content/pages/forside",
        "/api/v1/content/site-config",
        "/api/v1/content/driver-profile",
    ])
    def test_singles_are_404(self, offline_client, path):
        assert offline_client.get(path).status_code == 404


class TestPreview:
    def test_preview_flag_selects_client(self):
        published = FakeContentful([make_sponsor(name="Live")])
        draft = FakeContentful([make_sponsor(name="Kladde")])
        svc = ContentService(client_factory=lambda preview: draft if preview else published)
        with TestClient(_app_for(svc)) as c:
            assert c.get("/api/v1/content/sponsors").json()["results"][0]["name"] == "Live"
            live = c.get("/api/v1/content/sponsors", params={"preview": "true"}).json()
            assert live["results"][0]["name"] == "Kladde"


class SlowContentful(FakeContentful):
    """Fake whose queries block like a real HTTP round trip."""

    delay = 0.5

    def entries(self, query=None):
        time.sleep(self.delay)
        return super().entries(query)


class TestConcurrency:
    def test_slow_queries_do_not_block_each_other(self):
        cms = SlowContentful([make_race(title="DM 1", date="2026-04-12")])
        app = _app_for(ContentService(client_factory=lambda preview: cms))

        async def fetch_four():
            transport = httpx.ASGITransport(app=app)
            async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
                return await asyncio.gather(
                    *(c.get("/api/v1/content/races", params={"season": "2026"}) for _ in range(4))
                )

        started = time.monotonic()
        responses = asyncio.run(fetch_four())
        elapsed = time.monotonic() - started

        assert [r.json()["count"] for r in responses] == [1, 1, 1, 1]
        # Four serialized queries would take 2s
        assert elapsed < 4 * SlowContentful.delay * 0.75
