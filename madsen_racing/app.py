"""FastAPI application factory."""

import logging

from fastapi import FastAPI

from madsen_racing import config
from madsen_racing.routers import content_api

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Madsen Racing Content API",
        description=(
            "Read-only access to the madsenracing.dk Contentful space: race "
            "calendar, results, sponsors, pages, media and videos."
        ),
        version="1.0.0",
        docs_url="/api/v1/docs",
        redoc_url="/api/v1/redoc",
        openapi_url="/api/v1/openapi.json",
    )

    @app.get("/health", include_in_schema=False)
    async def health():
        return {
            "status": "ok",
            "contentful": config.contentful_configured(),
            "preview": config.contentful_configured(preview=True),
        }

    app.include_router(content_api.router)

    if not config.contentful_configured():
        logger.warning("Contentful is not configured; every content endpoint will return empty results")

    return app
