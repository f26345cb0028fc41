#!/usr/bin/env python3
"""Madsen Racing: Content API.

Launch: python3 run_content_api.py
Serves at http://0.0.0.0:8000 (or PORT env var)
"""

import logging

import uvicorn

from madsen_racing.config import HOST, LOG_LEVEL, PORT, contentful_configured


def main():
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print("=" * 60)
    print("  Madsen Racing: Content API")
    print("=" * 60)

    if not contentful_configured():
        print("\n  WARNING: Contentful not configured. Set environment variables:")
        print("    CONTENTFUL_SPACE_ID, CONTENTFUL_ACCESS_TOKEN")
        print("    (optional) CONTENTFUL_PREVIEW_TOKEN for ?preview=true")
        print("  Continuing anyway, content endpoints will return empty results.\n")
    elif not contentful_configured(preview=True):
        print("\n  Preview token not set, ?preview=true will return empty results.\n")

    print(f"  Serving at http://{HOST}:{PORT}  (docs: /api/v1/docs)")
    print("=" * 60 + "\n")

    from madsen_racing.app import create_app

    uvicorn.run(create_app(), host=HOST, port=PORT)


if __name__ == "__main__":
    main()
