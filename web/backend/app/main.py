"""FastAPI application for the Northwest Community core API.

Provides REST API endpoints wrapping the nwcommunity package for:
- Member sign-up / sign-in with per-client rate limiting
- Admin review of flagged content and the moderation audit trail
- Community text policy checks, rich-text sanitizing and city lists
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from nwcommunity import __version__
from nwcommunity.config import get_settings
from nwcommunity.log import configure_logging
from web.backend.app.routers import admin, auth, content

configure_logging(get_settings().log_level)

app = FastAPI(
    title="Northwest Community API",
    description=(
        "Admin authorization, moderation flagging, rate limiting and content "
        "transforms for the Northwest Community platform."
    ),
    version=__version__,
)

# ---------------------------------------------------------------------------
# CORS middleware (admin app runs on its own origin)
# ---------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3001", "http://127.0.0.1:3001"],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "x-admin-code"],
    max_age=86400,
)

# ---------------------------------------------------------------------------
# Include routers
# ---------------------------------------------------------------------------
app.include_router(auth.router)
app.include_router(admin.router)
app.include_router(content.router)


# ---------------------------------------------------------------------------
# Root and health-check endpoints
# ---------------------------------------------------------------------------


@app.get("/", tags=["meta"])
async def root():
    """Return basic API information."""
    return {
        "name": "Northwest Community API",
        "version": __version__,
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


@app.get("/health", tags=["meta"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
