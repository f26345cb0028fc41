"""Typed records for the Contentful content types the site reads.

Each record is built from a Contentful entry (SDK object or raw JSON) by
``from_entry``. Field ids are the camelCase ids used in the content model;
attributes are their snake_case counterparts.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Optional

from madsen_racing.contentful_client import entry_fields, entry_sys

# ---------------------------------------------------------------------------
# Closed enumerations (mirror the content model validations)
# ---------------------------------------------------------------------------

SEASONS = ("2024", "2025", "2026", "2027", "2028")

# Sponsor tiers are stored with their Danish labels
SPONSOR_TIERS = {"guld": "gold", "sølv": "silver", "bronze": "bronze"}
SPONSOR_TIER_LABELS = {"guld": "Guld", "sølv": "Sølv", "bronze": "Bronze"}
SPONSOR_TIER_ORDER = ("guld", "sølv", "bronze")

PACKAGE_TIERS = ("bronze", "silver", "gold")

MEDIA_TYPES = ("image", "video")
MEDIA_CATEGORIES = ("racing-action", "behind-scenes", "professional", "interviews")
VIDEO_CATEGORIES = ("race-highlights", "interviews", "technical", "team-content")
FILE_FORMATS = ("jpg", "png", "tiff", "raw")

PAGE_IDS = ("forside", "om-anton", "kalender", "resultater", "galleri", "sponsorer", "global")
FRONT_PAGE_SLUG = "forside"

SLUG_RE = re.compile(r"^[a-z0-9-]+$")
SECTION_KEY_RE = re.compile(r"^[a-z0-9-_]+$")
SEO_DESCRIPTION_MAX = 160


# ---------------------------------------------------------------------------
# Assets
# ---------------------------------------------------------------------------

def absolute_url(url: str) -> str:
    """Contentful serves protocol-relative URLs; make them explicit https."""
    return f"https:{url}" if url.startswith("//") else url


@dataclass(frozen=True)
class Asset:
    """A resolved media asset. ``NO_ASSET`` is the absent variant."""
    url: str = ""
    title: str = ""
    description: str = ""
    content_type: str = ""
    file_name: str = ""
    width: int | None = None
    height: int | None = None
    size: int | None = None

    @property
    def present(self) -> bool:
        return bool(self.url)

    def __bool__(self) -> bool:
        return self.present

    @classmethod
    def from_value(cls, value: Any) -> "Asset":
        """Parse anything that might be an asset. Never raises."""
        if isinstance(value, Asset):
            return value
        raw = getattr(value, "raw", None)
        if isinstance(raw, dict):
            value = raw
        if not isinstance(value, dict):
            return NO_ASSET

        asset_fields = value.get("fields")
        if not isinstance(asset_fields, dict):
            # Unresolved link or some other non-asset shape
            return NO_ASSET
        file_info = asset_fields.get("file")
        if not isinstance(file_info, dict):
            return NO_ASSET
        url = file_info.get("url")
        if not isinstance(url, str) or not url:
            return NO_ASSET

        details = file_info.get("details")
        details = details if isinstance(details, dict) else {}
        image = details.get("image")
        image = image if isinstance(image, dict) else {}
        return cls(
            url=absolute_url(url),
            title=_str(asset_fields.get("title")),
            description=_str(asset_fields.get("description")),
            content_type=_str(file_info.get("contentType")),
            file_name=_str(file_info.get("fileName")),
            width=_int_or_none(image.get("width")),
            height=_int_or_none(image.get("height")),
            size=_int_or_none(details.get("size")),
        )


NO_ASSET = Asset()


# ---------------------------------------------------------------------------
# Field coercion
# ---------------------------------------------------------------------------

def _str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _int_or_none(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _bool(value: Any) -> bool:
    return value is True


def _str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, str)]


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

@dataclass
class CMSEntry:
    """Common Contentful metadata carried by every record."""
    id: str = ""
    content_type: str = ""
    revision: int = 0
    created_at: str = ""
    updated_at: str = ""
    raw: dict = field(default_factory=dict, repr=False, compare=False)

    @staticmethod
    def _meta(entry: Any) -> dict:
        sys = entry_sys(entry)
        ctype = sys.get("contentType")
        ctype_id = ""
        if isinstance(ctype, dict):
            ctype_id = _str((ctype.get("sys") or {}).get("id"))
        raw = entry if isinstance(entry, dict) else (getattr(entry, "raw", None) or {})
        return {
            "id": _str(sys.get("id")),
            "content_type": ctype_id,
            "revision": _int(sys.get("revision")),
            "created_at": _str(sys.get("createdAt")),
            "updated_at": _str(sys.get("updatedAt")),
            "raw": raw,
        }

    def to_dict(self) -> dict:
        """JSON-ready dict without the raw entry."""
        out = {}
        for f in fields(self):
            if f.name == "raw":
                continue
            value = getattr(self, f.name)
            if isinstance(value, Asset):
                value = asdict(value) if value.present else None
            elif isinstance(value, Button):
                value = value.to_dict()
            out[f.name] = value
        return out


@dataclass
class Race(CMSEntry):
    title: str = ""
    date: str = ""
    track: str = ""
    location: str = ""
    country: str = ""
    championship: str = ""
    season: str = ""
    result: Optional[int] = None
    qualifying: Optional[int] = None
    points: Optional[int] = None
    fastest_lap: bool = False
    notes: str = ""
    facebook_event: str = ""

    @property
    def is_completed(self) -> bool:
        return self.result is not None

    @property
    def is_podium(self) -> bool:
        return self.result is not None and 1 <= self.result <= 3

    @classmethod
    def from_entry(cls, entry: Any) -> "Race":
        f = entry_fields(entry)
        return cls(
            **cls._meta(entry),
            title=_str(f.get("title")),
            date=_str(f.get("date")),
            track=_str(f.get("track")),
            location=_str(f.get("location")),
            country=_str(f.get("country")),
            championship=_str(f.get("championship")),
            season=_str(f.get("season")),
            result=_int_or_none(f.get("result")),
            qualifying=_int_or_none(f.get("qualifying")),
            points=_int_or_none(f.get("points")),
            fastest_lap=_bool(f.get("fastestLap")),
            notes=_str(f.get("notes")),
            facebook_event=_str(f.get("facebookEvent")),
        )


@dataclass
class Sponsor(CMSEntry):
    name: str = ""
    logo: Asset = NO_ASSET
    website: str = ""
    description: str = ""
    tier: str = ""
    active: bool = False

    @property
    def tier_label(self) -> str:
        return SPONSOR_TIER_LABELS.get(self.tier, self.tier.capitalize())

    @property
    def tier_rank(self) -> int:
        """0 for guld, up to len(tiers) for unknown tiers (sorted last)."""
        try:
            return SPONSOR_TIER_ORDER.index(self.tier)
        except ValueError:
            return len(SPONSOR_TIER_ORDER)

    @classmethod
    def from_entry(cls, entry: Any) -> "Sponsor":
        f = entry_fields(entry)
        return cls(
            **cls._meta(entry),
            name=_str(f.get("name")),
            logo=Asset.from_value(f.get("logo")),
            website=_str(f.get("website")),
            description=_str(f.get("description")),
            tier=_str(f.get("tier")),
            active=_bool(f.get("active")),
        )


@dataclass(frozen=True)
class Button:
    """Call-to-action: an internal page reference wins over an external URL."""
    text: str
    url: str = ""
    new_tab: bool = False
    page_slug: str = ""

    @property
    def href(self) -> str:
        if self.page_slug:
            return "/" if self.page_slug == FRONT_PAGE_SLUG else f"/{self.page_slug}"
        return self.url

    def to_dict(self) -> dict:
        return {"text": self.text, "href": self.href, "new_tab": self.new_tab}

    @classmethod
    def from_fields(cls, f: dict, prefix: str) -> Optional["Button"]:
        text = _str(f.get(f"{prefix}ButtonText"))
        if not text:
            return None
        url = _str(f.get(f"{prefix}ButtonUrl")) or _str(f.get(f"{prefix}ButtonExternalUrl"))
        page = f.get(f"{prefix}ButtonPage")
        page_slug = ""
        if isinstance(page, dict):
            page_slug = _str((page.get("fields") or {}).get("slug"))
        return cls(
            text=text,
            url=url,
            new_tab=_bool(f.get(f"{prefix}ButtonNewTab")),
            page_slug=page_slug,
        )


@dataclass
class PageContent(CMSEntry):
    slug: str = ""
    title: str = ""
    hero_image: Asset = NO_ASSET
    hero_headline: str = ""
    hero_subtitle: str = ""
    primary_button: Optional[Button] = None
    secondary_button: Optional[Button] = None
    content: dict = field(default_factory=dict)
    seo_description: str = ""

    @property
    def seo_description_valid(self) -> bool:
        return len(self.seo_description) <= SEO_DESCRIPTION_MAX

    @property
    def slug_valid(self) -> bool:
        return bool(SLUG_RE.match(self.slug))

    @classmethod
    def from_entry(cls, entry: Any) -> "PageContent":
        f = entry_fields(entry)
        content = f.get("content")
        return cls(
            **cls._meta(entry),
            slug=_str(f.get("slug")),
            title=_str(f.get("title")),
            hero_image=Asset.from_value(f.get("heroImage")),
            hero_headline=_str(f.get("heroHeadline")),
            hero_subtitle=_str(f.get("heroSubtitle")),
            primary_button=Button.from_fields(f, "primary"),
            secondary_button=Button.from_fields(f, "secondary"),
            content=content if isinstance(content, dict) else {},
            seo_description=_str(f.get("seoDescription")),
        )


@dataclass
class DriverStats(CMSEntry):
    season: str = ""
    total_races: int = 0
    wins: int = 0
    podiums: int = 0
    fastest_laps: int = 0
    championship_position: Optional[int] = None
    points: Optional[int] = None

    @property
    def win_rate(self) -> float:
        if not self.total_races:
            return 0.0
        return round(self.wins / self.total_races * 100, 1)

    @classmethod
    def from_entry(cls, entry: Any) -> "DriverStats":
        f = entry_fields(entry)
        return cls(
            **cls._meta(entry),
            season=_str(f.get("season")),
            total_races=_int(f.get("totalRaces")),
            wins=_int(f.get("wins")),
            podiums=_int(f.get("podiums")),
            fastest_laps=_int(f.get("fastestLaps")),
            championship_position=_int_or_none(f.get("championshipPosition")),
            points=_int_or_none(f.get("points")),
        )


@dataclass
class MediaItem(CMSEntry):
    title: str = ""
    description: str = ""
    file: Asset = NO_ASSET
    type: str = "image"
    category: str = ""
    tags: list[str] = field(default_factory=list)
    date: str = ""
    featured: bool = False
    season: str = ""
    photographer: str = ""
    location: str = ""
    # EXIF metadata, filled in when the image was imported
    camera_model: str = ""
    iso: Optional[int] = None
    aperture: str = ""
    shutter_speed: str = ""
    focal_length: str = ""
    gps_coordinates: str = ""
    date_taken: str = ""

    @property
    def is_video(self) -> bool:
        return self.type == "video"

    @classmethod
    def from_entry(cls, entry: Any) -> "MediaItem":
        f = entry_fields(entry)
        return cls(
            **cls._meta(entry),
            title=_str(f.get("title")),
            description=_str(f.get("description")),
            file=Asset.from_value(f.get("file")),
            type=_str(f.get("type")) or "image",
            category=_str(f.get("category")),
            tags=_str_list(f.get("tags")),
            date=_str(f.get("date")),
            featured=_bool(f.get("featured")),
            season=_str(f.get("season")),
            photographer=_str(f.get("photographer")),
            location=_str(f.get("location")),
            camera_model=_str(f.get("cameraModel")),
            iso=_int_or_none(f.get("iso")),
            aperture=_str(f.get("aperture")),
            shutter_speed=_str(f.get("shutterSpeed")),
            focal_length=_str(f.get("focalLength")),
            gps_coordinates=_str(f.get("gpsCoordinates")),
            date_taken=_str(f.get("dateTaken")),
        )


@dataclass
class Video(CMSEntry):
    title: str = ""
    description: Any = None  # rich text document or plain text
    thumbnail: Asset = NO_ASSET
    youtube_url: str = ""
    youtube_video_id: str = ""
    duration: Optional[int] = None
    category: str = ""
    upload_date: str = ""
    season: str = ""
    tags: list[str] = field(default_factory=list)
    featured: bool = False

    @property
    def video_id(self) -> str | None:
        """Stored id when it looks valid, otherwise parsed from the URL."""
        from madsen_racing.services.formatting import VIDEO_ID_RE, extract_youtube_video_id

        if VIDEO_ID_RE.match(self.youtube_video_id):
            return self.youtube_video_id
        if self.youtube_url:
            return extract_youtube_video_id(self.youtube_url)
        return None

    @classmethod
    def from_entry(cls, entry: Any) -> "Video":
        f = entry_fields(entry)
        description = f.get("description")
        return cls(
            **cls._meta(entry),
            title=_str(f.get("title")),
            description=description if isinstance(description, (str, dict)) else None,
            thumbnail=Asset.from_value(f.get("thumbnail")),
            youtube_url=_str(f.get("youtubeUrl")),
            youtube_video_id=_str(f.get("youtubeVideoId")),
            duration=_int_or_none(f.get("duration")),
            category=_str(f.get("category")),
            upload_date=_str(f.get("uploadDate")),
            season=_str(f.get("season")),
            tags=_str_list(f.get("tags")),
            featured=_bool(f.get("featured")),
        )


@dataclass
class PressPhoto(CMSEntry):
    title: str = ""
    description: str = ""
    photo: Asset = NO_ASSET
    credit: str = ""
    download_url: str = ""
    category: str = ""
    date: str = ""
    resolution: str = ""
    file_format: str = ""
    file_size: int = 0

    @classmethod
    def from_entry(cls, entry: Any) -> "PressPhoto":
        f = entry_fields(entry)
        return cls(
            **cls._meta(entry),
            title=_str(f.get("title")),
            description=_str(f.get("description")),
            photo=Asset.from_value(f.get("photo")),
            credit=_str(f.get("credit")),
            download_url=_str(f.get("downloadUrl")),
            category=_str(f.get("category")),
            date=_str(f.get("date")),
            resolution=_str(f.get("resolution")),
            file_format=_str(f.get("fileFormat")),
            file_size=_int(f.get("fileSize")),
        )


@dataclass
class SponsorPackage(CMSEntry):
    name: str = ""
    tier: str = ""
    price: int = 0
    price_label: str = ""
    features: list[str] = field(default_factory=list)
    display_order: int = 0
    active: bool = False

    @property
    def display_price(self) -> str:
        """Price label when set, otherwise e.g. '15.000 kr'."""
        if self.price_label:
            return self.price_label
        return f"{self.price:,} kr".replace(",", ".")

    @classmethod
    def from_entry(cls, entry: Any) -> "SponsorPackage":
        f = entry_fields(entry)
        return cls(
            **cls._meta(entry),
            name=_str(f.get("name")),
            tier=_str(f.get("tier")),
            price=_int(f.get("price")),
            price_label=_str(f.get("priceLabel")),
            features=_str_list(f.get("features")),
            display_order=_int(f.get("displayOrder")),
            active=_bool(f.get("active")),
        )


@dataclass
class PageSection(CMSEntry):
    key: str = ""
    page: str = ""
    heading: str = ""
    description: str = ""
    button_text: str = ""
    button_url: str = ""

    @property
    def key_valid(self) -> bool:
        return bool(SECTION_KEY_RE.match(self.key))

    @classmethod
    def from_entry(cls, entry: Any) -> "PageSection":
        f = entry_fields(entry)
        return cls(
            **cls._meta(entry),
            key=_str(f.get("key")),
            page=_str(f.get("page")),
            heading=_str(f.get("heading")),
            description=_str(f.get("description")),
            button_text=_str(f.get("buttonText")),
            button_url=_str(f.get("buttonUrl")),
        )


@dataclass
class SiteConfig(CMSEntry):
    site_name: str = ""
    tagline: str = ""
    contact_email: str = ""
    manager_name: str = ""
    current_season: str = ""
    previous_season: str = ""
    social_instagram: str = ""
    social_facebook: str = ""
    navigation_items: list[str] = field(default_factory=list)
    footer_text: str = ""

    @classmethod
    def from_entry(cls, entry: Any) -> "SiteConfig":
        f = entry_fields(entry)
        return cls(
            **cls._meta(entry),
            site_name=_str(f.get("siteName")),
            tagline=_str(f.get("tagline")),
            contact_email=_str(f.get("contactEmail")),
            manager_name=_str(f.get("managerName")),
            current_season=_str(f.get("currentSeason")),
            previous_season=_str(f.get("previousSeason")),
            social_instagram=_str(f.get("socialInstagram")),
            social_facebook=_str(f.get("socialFacebook")),
            navigation_items=_str_list(f.get("navigationItems")),
            footer_text=_str(f.get("footerText")),
        )


@dataclass
class DriverProfile(CMSEntry):
    name: str = ""
    age: int = 0
    city: str = ""
    team: str = ""
    kart_class: str = ""  # "class" in the content model
    kart_brand: str = ""
    number: int = 0
    start_year: int = 0
    dream_quote: str = ""
    dream_description: str = ""
    bio_headline: str = ""
    bio_subtitle: str = ""
    portrait_image: Asset = NO_ASSET

    def years_racing(self, year: int) -> int:
        if not self.start_year:
            return 0
        return max(year - self.start_year, 0)

    @classmethod
    def from_entry(cls, entry: Any) -> "DriverProfile":
        f = entry_fields(entry)
        return cls(
            **cls._meta(entry),
            name=_str(f.get("name")),
            age=_int(f.get("age")),
            city=_str(f.get("city")),
            team=_str(f.get("team")),
            kart_class=_str(f.get("class")),
            kart_brand=_str(f.get("kartBrand")),
            number=_int(f.get("number")),
            start_year=_int(f.get("startYear")),
            dream_quote=_str(f.get("dreamQuote")),
            dream_description=_str(f.get("dreamDescription")),
            bio_headline=_str(f.get("bioHeadline")),
            bio_subtitle=_str(f.get("bioSubtitle")),
            portrait_image=Asset.from_value(f.get("portraitImage")),
        )
