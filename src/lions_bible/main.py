# src/lions_bible/main.py
"""Main entry point for the Lions Bible application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from lions_bible.api.errors import register_exception_handlers
from lions_bible.api.v1 import (
    flags_router,
    interpretations_router,
    replies_router,
    system_router,
    users_router,
    verses_router,
    votes_router,
)
from lions_bible.core.settings import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Lions Bible API",
    description="Community Bible study: interpretations, replies and moderation",
    version=settings.app_version,
    debug=settings.debug,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

register_exception_handlers(app)

# Include API routers
app.include_router(verses_router, prefix="/api/v1")
app.include_router(interpretations_router, prefix="/api/v1")
app.include_router(replies_router, prefix="/api/v1")
app.include_router(votes_router, prefix="/api/v1")
app.include_router(flags_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")
app.include_router(system_router, prefix="/api/v1")


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Community Bible study: interpretations, replies and moderation",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn

    logger.info("Starting %s %s", settings.app_name, settings.app_version)
    uvicorn.run(app, host="0.0.0.0", port=8000)
