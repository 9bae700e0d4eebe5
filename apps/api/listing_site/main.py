"""FastAPI application serving the real-estate listing pages."""
from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .routers import listings as listings_router
from .routers import pages as pages_router

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Listing Site", version="0.1.0")

if settings.cors_allow_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(pages_router.router)
app.include_router(listings_router.router, prefix="/api", tags=["listings"])


@app.get("/api/health", tags=["meta"])
async def health() -> dict[str, str]:
    """Liveness check; does not touch the catalog."""

    return {"status": "ok"}


logger.info("Listing site configured for %s", settings.app_env)
