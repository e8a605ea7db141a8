"""Market Report Backend - FastAPI Application."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .core.database import Database
from .routers import admin, ai_analysis, health, report, sample
from .services.cache import TTLCache

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler owning the database handle."""
    logger.info("Market Report Backend starting...")

    database = Database(settings.database_url, echo=settings.debug)
    app.state.database = database

    if settings.init_schema_on_startup:
        await database.init_schema()

    yield

    # Shutdown: release pooled connections
    await database.dispose()
    logger.info("Market Report Backend stopped")


app = FastAPI(
    title="Market Report",
    description="Market data reporting API: series charts, tables, yield curve and AI analysis",
    version="0.1.0",
    lifespan=lifespan,
)

# Treasury history shared across requests; the series pipeline never reads it
app.state.curve_cache = TTLCache(ttl_seconds=settings.curve_cache_ttl_seconds)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(admin.router)
app.include_router(ai_analysis.router)
app.include_router(health.router)
app.include_router(report.router)
app.include_router(sample.router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}
