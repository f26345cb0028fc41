#!/usr/bin/env python3
"""
Snapshot every content category into one JSON file for the static build.

The renderer reads build/content.json instead of querying Contentful page by
page. Sections that fail to load come out empty (same contract as the
content service), so a partial snapshot is still written.

Usage:
    python scripts/export_content.py
    python scripts/export_content.py --out /tmp/content.json --preview
"""

import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from madsen_racing.config import EXPORT_DIR, LOG_LEVEL
from madsen_racing.models import PAGE_IDS
from madsen_racing.services.content import DEFAULT_SEASON, ContentService, get_content_service

logger = logging.getLogger(__name__)


def _dump(record):
    return record.to_dict() if record is not None else None


def build_snapshot(svc: ContentService, preview: bool = False) -> dict:
    """Collect all content categories into a JSON-ready dict."""
    site = svc.get_site_config(preview=preview)
    current = site.current_season if site and site.current_season else DEFAULT_SEASON
    previous = site.previous_season if site and site.previous_season else str(int(current) - 1)

    pages = {}
    for slug in PAGE_IDS:
        page = svc.get_page_content(slug, preview=preview)
        if page is not None:
            pages[slug] = page.to_dict()

    sections = {
        page: {key: s.to_dict() for key, s in svc.get_page_section_map(page, preview=preview).items()}
        for page in PAGE_IDS
    }

    return {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "preview": preview,
        "site_config": _dump(site),
        "driver_profile": _dump(svc.get_driver_profile(preview=preview)),
        "seasons": {"current": current, "previous": previous},
        "calendar": [r.to_dict() for r in svc.get_races(current, preview=preview)],
        "next_race": _dump(svc.get_next_race(preview=preview)),
        "results": [r.to_dict() for r in svc.get_results(preview=preview)],
        "stats": {
            season: _dump(svc.get_driver_stats(season, preview=preview))
            for season in (current, previous)
        },
        "sponsors": [s.to_dict() for s in svc.get_sponsors(preview=preview)],
        "sponsor_packages": [p.to_dict() for p in svc.get_sponsor_packages(preview=preview)],
        "pages": pages,
        "sections": sections,
        "media": [m.to_dict() for m in svc.get_media_items(preview=preview)],
        "videos": [v.to_dict() for v in svc.get_videos(preview=preview)],
        "press_photos": [p.to_dict() for p in svc.get_press_photos(preview=preview)],
    }


def main():
    parser = argparse.ArgumentParser(description="Export Contentful content to JSON for the static build.")
    parser.add_argument("--out", type=Path, default=EXPORT_DIR / "content.json", help="Output file")
    parser.add_argument("--preview", action="store_true", help="Export draft content via the Preview API")
    args = parser.parse_args()

    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    svc = get_content_service()
    if not svc.configured(preview=args.preview):
        logger.warning("Contentful not configured, writing an empty snapshot")

    snapshot = build_snapshot(svc, preview=args.preview)

    args.out.parent.mkdir(parents=True, exist_ok=True)
    args.out.write_text(json.dumps(snapshot, indent=2, ensure_ascii=False))

    print(f"Wrote {args.out}")
    print(f"  {len(snapshot['calendar'])} races ({snapshot['seasons']['current']}), "
          f"{len(snapshot['results'])} results, {len(snapshot['sponsors'])} sponsors, "
          f"{len(snapshot['pages'])} pages, {len(snapshot['media'])} media items, "
          f"{len(snapshot['videos'])} videos")
    return 0


if __name__ == "__main__":
    sys.exit(main())
