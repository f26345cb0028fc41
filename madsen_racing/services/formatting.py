"""Formatting helpers for templates: dates (da-DK), images, YouTube, GPS."""

from __future__ import annotations

import math
import re
from datetime import date, datetime, timezone
from typing import Any, Optional

from madsen_racing.models import Asset

# Short month names as rendered by the da-DK locale
DANISH_MONTHS_SHORT = [
    "jan.", "feb.", "mar.", "apr.", "maj", "jun.",
    "jul.", "aug.", "sep.", "okt.", "nov.", "dec.",
]

VIDEO_ID_RE = re.compile(r"^[A-Za-z0-9_-]{11}$")

# watch?v=, youtu.be/, /v/, /u/<x>/, embed/; the id is the 7th group
YOUTUBE_URL_RE = re.compile(
    r"^.*((youtu\.be/)|(v/)|(/u/\w/)|(embed/)|(watch\?))\??v?=?([^#&?]*).*"
)

THUMBNAIL_QUALITIES = {
    "default": "default",
    "medium": "mqdefault",
    "high": "hqdefault",
    "maxres": "maxresdefault",
}

# Embeds use youtube-nocookie.com for GDPR/privacy compliance
YOUTUBE_EMBED_BASE = "https://www.youtube-nocookie.com/embed/"


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

def _parse_date(date_string: str) -> date:
    """'2026-03-15' or '2026-03-15T10:00:00Z' → date."""
    return date.fromisoformat(date_string[:10])


def _parse_datetime(date_string: str) -> datetime:
    return datetime.fromisoformat(date_string.replace("Z", "+00:00"))


def format_date(date_string: str) -> str:
    """Danish short date: '2026-03-15' → '15. mar. 2026'."""
    d = _parse_date(date_string)
    return f"{d.day}. {DANISH_MONTHS_SHORT[d.month - 1]} {d.year}"


def format_date_range(start_date: str, end_date: str | None = None) -> str:
    """Format a multi-day event.

    No end date → same as format_date. Same month → '15-16 mar.'.
    Otherwise both full dates joined with ' - '.
    """
    if not end_date:
        return format_date(start_date)

    start = _parse_date(start_date)
    end = _parse_date(end_date)

    if (start.year, start.month) == (end.year, end.month):
        return f"{start.day}-{end.day} {DANISH_MONTHS_SHORT[start.month - 1]}"

    return f"{format_date(start_date)} - {format_date(end_date)}"


def days_until(date_string: str, now: datetime | None = None) -> int:
    """Whole days until a date, rounded up. Negative once the date has passed.

    Plain dates compare against the local clock. A naive ``now`` against a
    zoned date is taken as UTC; an aware ``now`` against a plain date is
    converted to local time.
    """
    target = _parse_datetime(date_string)
    if now is None:
        now = datetime.now(timezone.utc) if target.tzinfo else datetime.now()
    elif target.tzinfo and now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    elif target.tzinfo is None and now.tzinfo:
        now = now.astimezone().replace(tzinfo=None)
    diff = (target - now).total_seconds()
    return math.ceil(diff / 86400)


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------

def get_image_url(asset: Any, width: int | None = None, quality: int = 80) -> str:
    """Absolute https URL for an asset, '' when there is no usable asset.

    With a width, Contentful image API params are appended
    (``?w=<width>&q=<quality>&fm=webp``). Never raises.
    """
    resolved = Asset.from_value(asset)
    if not resolved.present:
        return ""

    url = resolved.url
    if width:
        sep = "&" if "?" in url else "?"
        url += f"{sep}w={width}&q={quality}&fm=webp"
    return url


def has_image(asset: Any) -> bool:
    """Distinct 'no image' signal for templates that want a placeholder."""
    return Asset.from_value(asset).present


# ---------------------------------------------------------------------------
# YouTube
# ---------------------------------------------------------------------------

def extract_youtube_video_id(url: str) -> Optional[str]:
    """Extract the 11-char video id from the common YouTube URL shapes."""
    if not isinstance(url, str):
        return None
    match = YOUTUBE_URL_RE.match(url)
    if not match:
        return None
    video_id = match.group(7)
    return video_id if len(video_id) == 11 else None


def get_youtube_thumbnail_url(video_id: str, quality: str = "high") -> str:
    """img.youtube.com thumbnail for one of default/medium/high/maxres."""
    if quality not in THUMBNAIL_QUALITIES:
        raise ValueError(
            f"Unknown thumbnail quality '{quality}' "
            f"(expected one of {', '.join(THUMBNAIL_QUALITIES)})"
        )
    return f"https://img.youtube.com/vi/{video_id}/{THUMBNAIL_QUALITIES[quality]}.jpg"


def get_youtube_embed_url(video_id: str) -> str:
    return f"{YOUTUBE_EMBED_BASE}{video_id}?rel=0"


def format_duration(seconds: int | None) -> str:
    """Video length: 95 → '1:35', 3725 → '1:02:05', None → ''."""
    if seconds is None or seconds < 0:
        return ""
    hours, rest = divmod(int(seconds), 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


# ---------------------------------------------------------------------------
# GPS (EXIF-derived media metadata)
# ---------------------------------------------------------------------------

def parse_gps_coordinates(text: str) -> tuple[float, float] | None:
    """'55.676100, 12.568300' → (55.6761, 12.5683). None if unparseable."""
    if not isinstance(text, str) or "," not in text:
        return None
    lat_s, _, lon_s = text.partition(",")
    try:
        lat, lon = float(lat_s.strip()), float(lon_s.strip())
    except ValueError:
        return None
    if not (-90 <= lat <= 90 and -180 <= lon <= 180):
        return None
    return lat, lon
