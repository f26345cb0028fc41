"""Content API: read-only JSON endpoints over the Contentful content layer.

The static build (and editors checking drafts with ``?preview=true``) read
races, sponsors, pages and media from here instead of talking to Contentful
directly. Empty lists and 404s are the only failure signal, matching the
content service's degrade-to-empty contract.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from madsen_racing.models import PACKAGE_TIERS, PAGE_IDS
from madsen_racing.services.content import (
    DEFAULT_SEASON,
    ContentService,
    get_content_service,
)

router = APIRouter(prefix="/api/v1/content", tags=["Content"])

PREVIEW_HELP = "Read draft content via the Preview API"


def _listing(records: list) -> dict:
    return {"count": len(records), "results": [r.to_dict() for r in records]}


def _single(record, detail: str) -> dict:
    if record is None:
        raise HTTPException(status_code=404, detail=detail)
    return record.to_dict()


# ---------------------------------------------------------------------------
# Races
# ---------------------------------------------------------------------------

@router.get("/races", summary="Race calendar for a season")
def list_races(
    season: str = Query(DEFAULT_SEASON, description="Season year, e.g. '2026'"),
    preview: bool = Query(False, description=PREVIEW_HELP),
    svc: ContentService = Depends(get_content_service),
):
    return _listing(svc.get_races(season, preview=preview))


@router.get("/races/upcoming", summary="Races from today onwards")
def list_upcoming_races(
    limit: int = Query(5, ge=1, le=50),
    preview: bool = Query(False, description=PREVIEW_HELP),
    svc: ContentService = Depends(get_content_service),
):
    return _listing(svc.get_upcoming_races(limit, preview=preview))


@router.get("/races/next", summary="The next race")
def next_race(
    preview: bool = Query(False, description=PREVIEW_HELP),
    svc: ContentService = Depends(get_content_service),
):
    return _single(svc.get_next_race(preview=preview), "No upcoming race")


@router.get("/results", summary="Completed races, most recent first")
def list_results(
    season: Optional[str] = Query(None),
    preview: bool = Query(False, description=PREVIEW_HELP),
    svc: ContentService = Depends(get_content_service),
):
    return _listing(svc.get_results(season, preview=preview))


@router.get("/stats/{season}", summary="Driver statistics for a season")
def driver_stats(
    season: str,
    preview: bool = Query(False, description=PREVIEW_HELP),
    svc: ContentService = Depends(get_content_service),
):
    return _single(svc.get_driver_stats(season, preview=preview), f"No stats for season '{season}'")


# ---------------------------------------------------------------------------
# Sponsors
# ---------------------------------------------------------------------------

@router.get("/sponsors", summary="Active sponsors")
def list_sponsors(
    tier: Optional[str] = Query(None, description="'guld', 'sølv' or 'bronze'"),
    preview: bool = Query(False, description=PREVIEW_HELP),
    svc: ContentService = Depends(get_content_service),
):
    return _listing(svc.get_sponsors(tier, preview=preview))


@router.get("/sponsor-packages", summary="Active sponsor packages in display order")
def list_sponsor_packages(
    preview: bool = Query(False, description=PREVIEW_HELP),
    svc: ContentService = Depends(get_content_service),
):
    return _listing(svc.get_sponsor_packages(preview=preview))


@router.get("/sponsor-packages/{tier}", summary="Sponsor package for a tier")
def sponsor_package(
    tier: str,
    preview: bool = Query(False, description=PREVIEW_HELP),
    svc: ContentService = Depends(get_content_service),
):
    if tier not in PACKAGE_TIERS:
        raise HTTPException(status_code=422, detail=f"Unknown tier '{tier}'")
    return _single(svc.get_sponsor_package_by_tier(tier, preview=preview), f"No package for tier '{tier}'")


# ---------------------------------------------------------------------------
# Pages
# ---------------------------------------------------------------------------

@router.get("/pages/{slug}", summary="Page content by slug")
def page_content(
    slug: str,
    preview: bool = Query(False, description=PREVIEW_HELP),
    svc: ContentService = Depends(get_content_service),
):
    return _single(svc.get_page_content(slug, preview=preview), f"Page '{slug}' not found")


@router.get("/sections", summary="Page sections for a page")
def list_page_sections(
    page: str = Query(..., description=f"One of: {', '.join(PAGE_IDS)}"),
    preview: bool = Query(False, description=PREVIEW_HELP),
    svc: ContentService = Depends(get_content_service),
):
    return _listing(svc.get_page_sections(page, preview=preview))


@router.get("/sections/{key}", summary="Page section by key")
def page_section(
    key: str,
    preview: bool = Query(False, description=PREVIEW_HELP),
    svc: ContentService = Depends(get_content_service),
):
    return _single(svc.get_page_section(key, preview=preview), f"Section '{key}' not found")


@router.get("/site-config", summary="Site configuration")
def site_config(
    preview: bool = Query(False, description=PREVIEW_HELP),
    svc: ContentService = Depends(get_content_service),
):
    return _single(svc.get_site_config(preview=preview), "Site config not found")


@router.get("/driver-profile", summary="Driver profile")
def driver_profile(
    preview: bool = Query(False, description=PREVIEW_HELP),
    svc: ContentService = Depends(get_content_service),
):
    return _single(svc.get_driver_profile(preview=preview), "Driver profile not found")


# ---------------------------------------------------------------------------
# Media
# ---------------------------------------------------------------------------

@router.get("/media", summary="Media library")
def list_media(
    category: Optional[str] = Query(None),
    season: Optional[str] = Query(None),
    tag: Optional[list[str]] = Query(None, description="Any of these tags, repeatable"),
    q: Optional[str] = Query(None, description="Free-text search"),
    preview: bool = Query(False, description=PREVIEW_HELP),
    svc: ContentService = Depends(get_content_service),
):
    if q:
        return _listing(svc.search_media_items(q, preview=preview))
    if tag:
        return _listing(svc.get_media_items_by_tags(tag, preview=preview))
    return _listing(svc.get_media_items(category, season, preview=preview))


@router.get("/media/featured", summary="Featured media items")
def list_featured_media(
    limit: int = Query(6, ge=1, le=50),
    preview: bool = Query(False, description=PREVIEW_HELP),
    svc: ContentService = Depends(get_content_service),
):
    return _listing(svc.get_featured_media_items(limit, preview=preview))


@router.get("/videos", summary="Videos, newest first")
def list_videos(
    category: Optional[str] = Query(None),
    season: Optional[str] = Query(None),
    preview: bool = Query(False, description=PREVIEW_HELP),
    svc: ContentService = Depends(get_content_service),
):
    return _listing(svc.get_videos(category, season, preview=preview))


@router.get("/videos/featured", summary="Featured videos")
def list_featured_videos(
    limit: int = Query(4, ge=1, le=50),
    preview: bool = Query(False, description=PREVIEW_HELP),
    svc: ContentService = Depends(get_content_service),
):
    return _listing(svc.get_featured_videos(limit, preview=preview))


@router.get("/press-photos", summary="Press photos for download")
def list_press_photos(
    category: Optional[str] = Query(None),
    preview: bool = Query(False, description=PREVIEW_HELP),
    svc: ContentService = Depends(get_content_service),
):
    return _listing(svc.get_press_photos(category, preview=preview))
