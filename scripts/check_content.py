#!/usr/bin/env python3
"""
Audit the Contentful space the site is built from.

Checks:
1. Singletons exist (siteConfig, driverProfile)
2. Every page id has a pageContent entry, slugs are lowercase-hyphen
3. SEO descriptions are at most 160 characters
4. Active sponsors have a resolvable logo and a known tier
5. Videos carry a valid 11-char YouTube id (stored or parseable from the URL)
6. Page section keys match ^[a-z0-9-_]+$ and belong to a known page
7. Driver stats exist for the current and previous season

Read-only: nothing in the space is changed. Exits 1 on any failure,
2 when Contentful credentials are missing.

Usage:
    python scripts/check_content.py
    python scripts/check_content.py --preview --verbose
"""

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from madsen_racing.config import LOG_LEVEL
from madsen_racing.models import PAGE_IDS, SPONSOR_TIERS
from madsen_racing.services.content import ContentService, get_content_service

# Pages that are rendered from a pageContent entry ("global" only holds sections)
CONTENT_PAGES = [p for p in PAGE_IDS if p != "global"]


def check_singletons(svc: ContentService, preview: bool = False) -> list[str]:
    errors = []
    if svc.get_site_config(preview=preview) is None:
        errors.append("siteConfig: no entry found")
    if svc.get_driver_profile(preview=preview) is None:
        errors.append("driverProfile: no entry found")
    return errors


def check_pages(svc: ContentService, preview: bool = False) -> list[str]:
    errors = []
    for slug in CONTENT_PAGES:
        page = svc.get_page_content(slug, preview=preview)
        if page is None:
            errors.append(f"pageContent '{slug}': missing")
            continue
        if not page.slug_valid:
            errors.append(f"pageContent '{slug}': slug does not match ^[a-z0-9-]+$")
        if not page.seo_description_valid:
            errors.append(f"pageContent '{slug}': seoDescription is {len(page.seo_description)} chars (max 160)")
        for button in (page.primary_button, page.secondary_button):
            if button is not None and not button.href:
                errors.append(f"pageContent '{slug}': button '{button.text}' has no URL or page")
    return errors


def check_sponsors(svc: ContentService, preview: bool = False) -> list[str]:
    errors = []
    for sponsor in svc.get_sponsors(preview=preview):
        if not sponsor.logo.present:
            errors.append(f"sponsor '{sponsor.name}': logo missing or unpublished")
        if sponsor.tier not in SPONSOR_TIERS:
            errors.append(f"sponsor '{sponsor.name}': unknown tier '{sponsor.tier}'")
    return errors


def check_videos(svc: ContentService, preview: bool = False) -> list[str]:
    errors = []
    for video in svc.get_videos(preview=preview):
        if video.video_id is None:
            errors.append(f"video '{video.title}': no valid YouTube id ({video.youtube_url or 'no URL'})")
        elif video.youtube_video_id and video.youtube_video_id != video.video_id:
            errors.append(f"video '{video.title}': stored id '{video.youtube_video_id}' is malformed")
    return errors


def check_sections(svc: ContentService, preview: bool = False) -> list[str]:
    errors = []
    seen = set()
    for section in svc.get_page_sections(preview=preview):
        if not section.key_valid:
            errors.append(f"pageSection '{section.key}': key does not match ^[a-z0-9-_]+$")
        if section.page not in PAGE_IDS:
            errors.append(f"pageSection '{section.key}': unknown page '{section.page}'")
        if section.key in seen:
            errors.append(f"pageSection '{section.key}': duplicate key")
        seen.add(section.key)
    return errors


def check_stats(svc: ContentService, preview: bool = False) -> list[str]:
    site = svc.get_site_config(preview=preview)
    if site is None:
        return []
    errors = []
    for season in (site.current_season, site.previous_season):
        if season and svc.get_driver_stats(season, preview=preview) is None:
            errors.append(f"driverStats: no entry for season {season}")
    return errors


CHECKS = [
    ("SINGLETONS", check_singletons),
    ("PAGES", check_pages),
    ("SPONSORS", check_sponsors),
    ("VIDEOS", check_videos),
    ("SECTIONS", check_sections),
    ("STATS", check_stats),
]


def run_checks(svc: ContentService, preview: bool = False, verbose: bool = False) -> list[str]:
    all_errors = []
    for name, check in CHECKS:
        errors = check(svc, preview=preview)
        if verbose:
            status = "FAIL" if errors else "PASS"
            print(f"  [{status}] {name}" + (f": {len(errors)} problem(s)" if errors else ""))
        all_errors.extend(errors)
    return all_errors


def main():
    parser = argparse.ArgumentParser(description="Audit Contentful content for madsenracing.dk.")
    parser.add_argument("--preview", action="store_true", help="Audit draft content via the Preview API")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show per-check status")
    args = parser.parse_args()

    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    svc = get_content_service()
    if not svc.configured(preview=args.preview):
        mode = "preview" if args.preview else "delivery"
        print(f"ERROR: Contentful {mode} credentials are not set", file=sys.stderr)
        return 2

    errors = run_checks(svc, preview=args.preview, verbose=args.verbose)
    if errors:
        print(f"\nContent check FAILED ({len(errors)} problems):\n")
        for e in errors:
            print(f"  {e}")
        return 1

    print("Content check passed: 0 problems.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
