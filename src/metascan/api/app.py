"""metascan — FastAPI application factory."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI

from metascan.api.v1.score import router as score_router
from metascan.config import get_settings
from metascan.logging_setup import configure_logging

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_json)

    app = FastAPI(title="metascan", version=settings.version, debug=settings.debug)
    app.include_router(score_router, prefix="/v1")

    @app.get("/health")
    async def health() -> dict[str, Any]:
        return {"status": "ok", "version": settings.version, "env": settings.env}

    logger.info("metascan API ready (env=%s)", settings.env)
    return app
