"""Shared fixtures for content layer tests.

Provides:
- FakeContentful: in-memory stand-in for contentful.Client.entries()
- fake_cms / service: a ContentService wired to the fake
- sample data factories for races, sponsors, media, etc.
"""

import os
import uuid
from datetime import date, timedelta

import pytest

# Keep real credentials out of tests
os.environ["CONTENTFUL_SPACE_ID"] = ""
os.environ["CONTENTFUL_ACCESS_TOKEN"] = ""
os.environ["CONTENTFUL_PREVIEW_TOKEN"] = ""
os.environ["CONTENTFUL_LOCALE"] = ""

from madsen_racing.services.content import ContentService


# ---------------------------------------------------------------------------
# In-memory fake Contentful
# ---------------------------------------------------------------------------

def _as_param(value):
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _sort_key(name):
    def key(entry):
        value = entry["fields"].get(name)
        return (value is None, value if value is not None else "")
    return key


class FakeContentful:
    """Interprets Delivery API query dicts against a list of entry dicts.

    Supports content_type, fields.<id> exact match, [gte], [exists], [in],
    full-text ``query``, ``order`` (comma list, '-' for descending) and
    ``limit``.
    """

    def __init__(self, entries=None):
        self.entries_store = list(entries or [])
        self.queries = []
        self.fail_with = None

    def add(self, *entries):
        self.entries_store.extend(entries)

    def _match(self, entry, query):
        fields = entry.get("fields", {})
        ctype = entry["sys"]["contentType"]["sys"]["id"]
        if query.get("content_type") and ctype != query["content_type"]:
            return False

        for key, val in query.items():
            if not key.startswith("fields."):
                continue
            name = key[len("fields."):]
            op = None
            if "[" in name:
                name, op = name[:-1].split("[")
            row_val = fields.get(name)

            if op == "gte":
                if row_val is None or str(row_val) < str(val):
                    return False
            elif op == "exists":
                if (row_val is not None) != (val == "true"):
                    return False
            elif op == "in":
                wanted = set(str(val).split(","))
                have = row_val if isinstance(row_val, list) else [row_val]
                if not wanted.intersection(_as_param(v) for v in have):
                    return False
            elif isinstance(row_val, list):
                if str(val) not in row_val:
                    return False
            elif row_val is None or _as_param(row_val) != str(val):
                return False

        text = query.get("query")
        if text:
            haystack = " ".join(v for v in fields.values() if isinstance(v, str)).lower()
            if str(text).lower() not in haystack:
                return False
        return True

    def entries(self, query=None):
        query = dict(query or {})
        self.queries.append(query)
        if self.fail_with is not None:
            raise self.fail_with

        rows = [e for e in self.entries_store if self._match(e, query)]

        order = query.get("order")
        if order:
            for spec in reversed(order.split(",")):
                desc = spec.startswith("-")
                name = spec.lstrip("-")[len("fields."):]
                rows.sort(key=_sort_key(name), reverse=desc)

        limit = query.get("limit")
        if limit:
            rows = rows[:int(limit)]
        return rows


@pytest.fixture
def fake_cms():
    return FakeContentful()


@pytest.fixture
def service(fake_cms):
    """ContentService whose client factory hands out the fake (both modes)."""
    return ContentService(client_factory=lambda preview: fake_cms)


@pytest.fixture
def unconfigured_service():
    calls = []

    def factory(preview):
        calls.append(preview)
        return None

    svc = ContentService(client_factory=factory)
    svc.factory_calls = calls
    return svc


# ---------------------------------------------------------------------------
# Data factories
# ---------------------------------------------------------------------------

def make_entry(content_type, **fields):
    return {
        "sys": {
            "id": fields.pop("entry_id", None) or uuid.uuid4().hex[:22],
            "type": "Entry",
            "revision": fields.pop("revision", 1),
            "createdAt": "2026-01-05T10:00:00.000Z",
            "updatedAt": "2026-01-06T10:00:00.000Z",
            "contentType": {"sys": {"type": "Link", "linkType": "ContentType", "id": content_type}},
        },
        "fields": fields,
    }


def make_asset(url="//images.ctfassets.net/space/abc/photo.jpg", title="Photo", width=1600, height=900):
    return {
        "sys": {"id": uuid.uuid4().hex[:22], "type": "Asset"},
        "fields": {
            "title": title,
            "file": {
                "url": url,
                "fileName": url.rsplit("/", 1)[-1],
                "contentType": "image/jpeg",
                "details": {"size": 204800, "image": {"width": width, "height": height}},
            },
        },
    }


def days_from_today(n):
    return (date.today() + timedelta(days=n)).isoformat()


def make_race(**overrides):
    defaults = {
        "title": "DM Runde 1",
        "date": days_from_today(10),
        "track": "Padborg Park",
        "location": "Padborg",
        "country": "Danmark",
        "championship": "DM",
        "season": "2026",
    }
    defaults.update(overrides)
    return make_entry("race", **defaults)


def make_sponsor(**overrides):
    defaults = {
        "name": "Dansk Olie",
        "logo": make_asset("//images.ctfassets.net/space/logo/dansk-olie.png", title="Logo"),
        "website": "https://danskolie.dk",
        "tier": "guld",
        "active": True,
    }
    defaults.update(overrides)
    return make_entry("sponsor", **defaults)


def make_media_item(**overrides):
    defaults = {
        "title": "Start i Padborg",
        "file": make_asset(),
        "type": "image",
        "category": "racing-action",
        "tags": ["padborg"],
        "date": "2025-06-01",
        "featured": False,
        "season": "2025",
    }
    defaults.update(overrides)
    return make_entry("mediaItem", **defaults)


def make_video(**overrides):
    defaults = {
        "title": "Sejr i Vojens",
        "thumbnail": make_asset(),
        "youtubeUrl": "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        "youtubeVideoId": "dQw4w9WgXcQ",
        "duration": 185,
        "category": "race-highlights",
        "uploadDate": "2025-08-10",
        "season": "2025",
        "featured": False,
    }
    defaults.update(overrides)
    return make_entry("video", **defaults)


def make_sponsor_package(**overrides):
    defaults = {
        "name": "Bronze",
        "tier": "bronze",
        "price": 5000,
        "features": ["Logo på hjemmesiden"],
        "displayOrder": 1,
        "active": True,
    }
    defaults.update(overrides)
    return make_entry("sponsorPackage", **defaults)


def make_page_content(**overrides):
    defaults = {
        "slug": "forside",
        "title": "Forside",
        "heroHeadline": "ANTON MADSEN",
        "content": {"nodeType": "document", "data": {}, "content": []},
        "seoDescription": "Dansk kartkører",
    }
    defaults.update(overrides)
    return make_entry("pageContent", **defaults)
