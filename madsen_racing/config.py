"""Madsen Racing configuration: loaded from environment variables."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent / ".env")

# Root of the site repo
REPO_ROOT = Path(__file__).resolve().parent.parent

# Build output for content snapshots
EXPORT_DIR = REPO_ROOT / "build"

# Contentful (Content Delivery / Preview API)
CONTENTFUL_SPACE_ID = os.environ.get("CONTENTFUL_SPACE_ID", "")
CONTENTFUL_ACCESS_TOKEN = os.environ.get("CONTENTFUL_ACCESS_TOKEN", "")
CONTENTFUL_PREVIEW_TOKEN = os.environ.get("CONTENTFUL_PREVIEW_TOKEN", "")
CONTENTFUL_ENVIRONMENT = os.environ.get("CONTENTFUL_ENVIRONMENT", "master")
CONTENTFUL_DELIVERY_HOST = os.environ.get("CONTENTFUL_DELIVERY_HOST", "cdn.contentful.com")
CONTENTFUL_PREVIEW_HOST = os.environ.get("CONTENTFUL_PREVIEW_HOST", "preview.contentful.com")
CONTENTFUL_TIMEOUT_S = int(os.environ.get("CONTENTFUL_TIMEOUT_S", "10"))

# Empty means "whatever the space default locale is" (da-DK for this site)
CONTENTFUL_LOCALE = os.environ.get("CONTENTFUL_LOCALE", "")

# Public site
SITE_URL = os.environ.get("SITE_URL", "https://madsenracing.dk")

# Server
HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", "8000"))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


def contentful_configured(preview: bool = False) -> bool:
    """True when the credentials for the requested API mode are present."""
    if not CONTENTFUL_SPACE_ID or not CONTENTFUL_ACCESS_TOKEN:
        return False
    if preview and not CONTENTFUL_PREVIEW_TOKEN:
        return False
    return True
