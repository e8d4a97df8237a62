from __future__ import annotations

import logging
import os
import platform
from typing import Any, Dict

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import get_settings
from .routers import projections, stats


async def health() -> Dict[str, Any]:
    return {
        "status": "ok",
        "version": __version__,
        "runtime": {"python": platform.python_version()},
    }


def create_app() -> FastAPI:
    settings = get_settings()
    logging.getLogger("handicap_analytics").setLevel(settings.log_level.upper())

    app = FastAPI(title="handicap-analytics", version=__version__)

    allow = os.getenv("CORS_ALLOW_ORIGINS", "http://localhost,http://127.0.0.1").split(",")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in allow if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(projections.router)
    app.include_router(stats.router)
    app.add_api_route(
        "/health",
        health,
        methods=["GET"],
        response_model=None,
        tags=["health"],
    )
    return app


app = create_app()

__all__ = ["app", "create_app"]
