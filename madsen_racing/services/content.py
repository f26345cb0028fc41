"""Content service: typed Contentful queries with a degrade-to-empty contract.

Every query resolves a client first. No client (missing credentials) or any
error while querying is logged as a warning and turned into an empty list or
None, so a broken CMS integration renders as a missing section instead of a
failed build.
"""

from __future__ import annotations

import functools
import inspect
import logging
from datetime import date
from typing import Any, Callable, Optional

from madsen_racing.contentful_client import build_query, fetch_entries, get_client
from madsen_racing.models import (
    DriverProfile,
    DriverStats,
    MediaItem,
    PageContent,
    PageSection,
    PressPhoto,
    Race,
    SiteConfig,
    Sponsor,
    SponsorPackage,
    Video,
)

logger = logging.getLogger(__name__)

ClientFactory = Callable[[bool], Any]

DEFAULT_SEASON = "2026"
DEFAULT_STATS_SEASON = "2025"


def _describe_call(args: tuple, kwargs: dict) -> str:
    parts = [repr(a) for a in args]
    parts += [f"{k}={v!r}" for k, v in kwargs.items()]
    return ", ".join(parts)


def cms_query(empty: Callable[[], Any]):
    """Wrap a ContentService query method in the fallback contract.

    The wrapped method receives the resolved client as its first argument
    after ``self``. Callers pass ``preview`` as a keyword. Arguments that do
    not fit the method raise TypeError instead of falling back.
    """
    def decorator(func):
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(self, *args, preview: bool = False, **kwargs):
            signature.bind(self, None, *args, **kwargs)
            client = self.client(preview)
            if client is None:
                logger.warning(
                    "Contentful client not configured (preview=%s) - %s(%s) returning %r",
                    preview, func.__name__, _describe_call(args, kwargs), empty(),
                )
                return empty()
            try:
                return func(self, client, *args, **kwargs)
            except Exception as e:
                logger.warning(
                    "Contentful query %s(%s) failed (preview=%s): %s",
                    func.__name__, _describe_call(args, kwargs), preview, e,
                )
                return empty()
        return wrapper
    return decorator


def _parse_all(model, entries: list) -> list:
    """Build records, skipping (and logging) entries that fail to parse."""
    records = []
    for entry in entries:
        try:
            records.append(model.from_entry(entry))
        except Exception as e:
            logger.warning("Skipping malformed %s entry: %s", model.__name__, e)
    return records


def _first(model, entries: list):
    records = _parse_all(model, entries[:1])
    return records[0] if records else None


class ContentService:
    """Read-only queries against the site's Contentful space."""

    def __init__(self, client_factory: ClientFactory | None = None) -> None:
        self._client_factory = client_factory or get_client

    def client(self, preview: bool = False):
        try:
            return self._client_factory(preview)
        except Exception as e:
            logger.warning("Failed to create Contentful client (preview=%s): %s", preview, e)
            return None

    def configured(self, preview: bool = False) -> bool:
        return self.client(preview) is not None

    # -- Races ---------------------------------------------------------------

    @cms_query(list)
    def get_races(self, client, season: str = DEFAULT_SEASON) -> list[Race]:
        """All races in a season, calendar order."""
        query = build_query("race", {"season": season}, order="date")
        return _parse_all(Race, fetch_entries(client, query))

    @cms_query(list)
    def get_upcoming_races(self, client, limit: int = 5) -> list[Race]:
        """Races dated today or later, soonest first."""
        today = date.today().isoformat()
        query = build_query("race", {"date[gte]": today}, order="date", limit=limit)
        return _parse_all(Race, fetch_entries(client, query))

    def get_next_race(self, preview: bool = False) -> Optional[Race]:
        races = self.get_upcoming_races(1, preview=preview)
        return races[0] if races else None

    @cms_query(list)
    def get_results(self, client, season: str | None = None) -> list[Race]:
        """Completed races (a result is set), most recent first."""
        filters = {"result[exists]": True, "season": season}
        query = build_query("race", filters, order="-date")
        return _parse_all(Race, fetch_entries(client, query))

    # -- Sponsors --------------------------------------------------------------

    @cms_query(list)
    def get_sponsors(self, client, tier: str | None = None) -> list[Sponsor]:
        """Active sponsors by name, optionally one tier (guld/sølv/bronze)."""
        query = build_query("sponsor", {"active": True, "tier": tier}, order="name")
        return _parse_all(Sponsor, fetch_entries(client, query))

    @cms_query(list)
    def get_sponsor_packages(self, client) -> list[SponsorPackage]:
        query = build_query("sponsorPackage", {"active": True}, order="displayOrder")
        return _parse_all(SponsorPackage, fetch_entries(client, query))

    @cms_query(lambda: None)
    def get_sponsor_package_by_tier(self, client, tier: str) -> Optional[SponsorPackage]:
        query = build_query("sponsorPackage", {"active": True, "tier": tier}, limit=1)
        return _first(SponsorPackage, fetch_entries(client, query))

    # -- Pages -----------------------------------------------------------------

    @cms_query(lambda: None)
    def get_page_content(self, client, slug: str) -> Optional[PageContent]:
        query = build_query("pageContent", {"slug": slug}, limit=1)
        return _first(PageContent, fetch_entries(client, query))

    @cms_query(list)
    def get_page_sections(self, client, page: str | None = None) -> list[PageSection]:
        """Sections of one page, or every section when page is None."""
        query = build_query("pageSection", {"page": page})
        return _parse_all(PageSection, fetch_entries(client, query))

    @cms_query(lambda: None)
    def get_page_section(self, client, key: str) -> Optional[PageSection]:
        query = build_query("pageSection", {"key": key}, limit=1)
        return _first(PageSection, fetch_entries(client, query))

    def get_page_section_map(self, page: str, preview: bool = False) -> dict[str, PageSection]:
        """Sections of a page keyed by section key, for template lookups."""
        return {s.key: s for s in self.get_page_sections(page, preview=preview)}

    # -- Driver ----------------------------------------------------------------

    @cms_query(lambda: None)
    def get_driver_stats(self, client, season: str = DEFAULT_STATS_SEASON) -> Optional[DriverStats]:
        query = build_query("driverStats", {"season": season}, limit=1)
        return _first(DriverStats, fetch_entries(client, query))

    @cms_query(lambda: None)
    def get_driver_profile(self, client) -> Optional[DriverProfile]:
        """The driver profile singleton."""
        query = build_query("driverProfile", limit=1)
        return _first(DriverProfile, fetch_entries(client, query))

    def get_season_summary(self, season: str, preview: bool = False) -> dict:
        """Stats plus completed races for a season page."""
        results = self.get_results(season, preview=preview)
        return {
            "season": season,
            "stats": self.get_driver_stats(season, preview=preview),
            "results": results,
            "podiums": [r for r in results if r.is_podium],
        }

    # -- Media -----------------------------------------------------------------

    @cms_query(list)
    def get_media_items(self, client, category: str | None = None,
                        season: str | None = None) -> list[MediaItem]:
        query = build_query("mediaItem", {"category": category, "season": season}, order="-date")
        return _parse_all(MediaItem, fetch_entries(client, query))

    @cms_query(list)
    def get_featured_media_items(self, client, limit: int = 6) -> list[MediaItem]:
        query = build_query("mediaItem", {"featured": True}, order="-date", limit=limit)
        return _parse_all(MediaItem, fetch_entries(client, query))

    @cms_query(list)
    def get_media_items_by_tags(self, client, tags: list[str]) -> list[MediaItem]:
        """Media items carrying any of the tags."""
        if not tags:
            return []
        query = build_query("mediaItem", {"tags[in]": list(tags)}, order="-date")
        return _parse_all(MediaItem, fetch_entries(client, query))

    @cms_query(list)
    def search_media_items(self, client, text: str) -> list[MediaItem]:
        """Full-text search over media items (title, description, ...)."""
        query = build_query("mediaItem", order="-date", query=text)
        return _parse_all(MediaItem, fetch_entries(client, query))

    @cms_query(list)
    def get_videos(self, client, category: str | None = None,
                   season: str | None = None) -> list[Video]:
        query = build_query("video", {"category": category, "season": season}, order="-uploadDate")
        return _parse_all(Video, fetch_entries(client, query))

    @cms_query(list)
    def get_featured_videos(self, client, limit: int = 4) -> list[Video]:
        query = build_query("video", {"featured": True}, order="-uploadDate", limit=limit)
        return _parse_all(Video, fetch_entries(client, query))

    @cms_query(list)
    def get_press_photos(self, client, category: str | None = None) -> list[PressPhoto]:
        query = build_query("pressPhoto", {"category": category}, order="-date")
        return _parse_all(PressPhoto, fetch_entries(client, query))

    # -- Site ------------------------------------------------------------------

    @cms_query(lambda: None)
    def get_site_config(self, client) -> Optional[SiteConfig]:
        """The site configuration singleton."""
        query = build_query("siteConfig", limit=1)
        return _first(SiteConfig, fetch_entries(client, query))


# Module-level default service
_service: ContentService | None = None


def get_content_service() -> ContentService:
    """FastAPI dependency: returns the process-wide ContentService."""
    global _service
    if _service is None:
        _service = ContentService()
    return _service


# Function-style API for build scripts and templates


def get_races(season: str = DEFAULT_SEASON, preview: bool = False) -> list[Race]:
    return get_content_service().get_races(season, preview=preview)


def get_upcoming_races(limit: int = 5, preview: bool = False) -> list[Race]:
    return get_content_service().get_upcoming_races(limit, preview=preview)


def get_next_race(preview: bool = False) -> Optional[Race]:
    return get_content_service().get_next_race(preview=preview)


def get_results(season: str | None = None, preview: bool = False) -> list[Race]:
    return get_content_service().get_results(season, preview=preview)


def get_sponsors(tier: str | None = None, preview: bool = False) -> list[Sponsor]:
    return get_content_service().get_sponsors(tier, preview=preview)


def get_page_content(slug: str, preview: bool = False) -> Optional[PageContent]:
    return get_content_service().get_page_content(slug, preview=preview)


def get_driver_stats(season: str = DEFAULT_STATS_SEASON, preview: bool = False) -> Optional[DriverStats]:
    return get_content_service().get_driver_stats(season, preview=preview)


def get_media_items(category: str | None = None, season: str | None = None,
                    preview: bool = False) -> list[MediaItem]:
    return get_content_service().get_media_items(category, season, preview=preview)


def get_featured_media_items(limit: int = 6, preview: bool = False) -> list[MediaItem]:
    return get_content_service().get_featured_media_items(limit, preview=preview)


def get_media_items_by_tags(tags: list[str], preview: bool = False) -> list[MediaItem]:
    return get_content_service().get_media_items_by_tags(tags, preview=preview)


def search_media_items(text: str, preview: bool = False) -> list[MediaItem]:
    return get_content_service().search_media_items(text, preview=preview)


def get_videos(category: str | None = None, season: str | None = None,
               preview: bool = False) -> list[Video]:
    return get_content_service().get_videos(category, season, preview=preview)


def get_featured_videos(limit: int = 4, preview: bool = False) -> list[Video]:
    return get_content_service().get_featured_videos(limit, preview=preview)


def get_press_photos(category: str | None = None, preview: bool = False) -> list[PressPhoto]:
    return get_content_service().get_press_photos(category, preview=preview)


def get_sponsor_packages(preview: bool = False) -> list[SponsorPackage]:
    return get_content_service().get_sponsor_packages(preview=preview)


def get_sponsor_package_by_tier(tier: str, preview: bool = False) -> Optional[SponsorPackage]:
    return get_content_service().get_sponsor_package_by_tier(tier, preview=preview)


def get_page_sections(page: str | None = None, preview: bool = False) -> list[PageSection]:
    return get_content_service().get_page_sections(page, preview=preview)


def get_page_section(key: str, preview: bool = False) -> Optional[PageSection]:
    return get_content_service().get_page_section(key, preview=preview)


def get_site_config(preview: bool = False) -> Optional[SiteConfig]:
    return get_content_service().get_site_config(preview=preview)


def get_driver_profile(preview: bool = False) -> Optional[DriverProfile]:
    return get_content_service().get_driver_profile(preview=preview)
