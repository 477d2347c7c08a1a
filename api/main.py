"""
OMDb Field App API - FastAPI application.

Provides endpoints for:
- The app configuration screen (OMDb API key)
- The OMDb field editor on movie entries (fetch, edit, clear)
"""
from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routers import config, entries

logger = logging.getLogger(__name__)


def get_cors_origins() -> list[str]:
    """
    Get CORS allowed origins from environment.
    Set CORS_ALLOW_ORIGINS as comma-separated list of origins.
    """
    origins_str = os.getenv("CORS_ALLOW_ORIGINS", "")
    if not origins_str:
        return []
    return [origin.strip() for origin in origins_str.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    logger.info("Starting up OMDb Field App API...")
    yield
    logger.info("Shutting down OMDb Field App API...")


app = FastAPI(
    title="OMDb Field App API",
    description="Fetches OMDb metadata into content entries",
    version="0.1.0",
    lifespan=lifespan,
)

# If no origins configured, allows all origins but disables credentials
cors_origins = get_cors_origins()
allow_credentials = len(cors_origins) > 0

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins if cors_origins else ["*"],
    allow_credentials=allow_credentials,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(config.router, prefix="/api/v1")
app.include_router(entries.router, prefix="/api/v1")


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "omdb-field-app"}


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "healthy"}
