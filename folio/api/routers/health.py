"""Health check router.

Handles health check endpoints for service monitoring.
"""

import logging
import os

from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy import text

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

VERSION = "0.1.0"


# =============================================================================
# Lazy imports to avoid circular dependencies
# =============================================================================


def _get_db_manager() -> "DBManager | None":
    """Get DB manager."""
    from folio.api.main import db_manager

    return db_manager


DBManager = object


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    environment: str


class DetailedHealthResponse(HealthResponse):
    """Health check response including dependencies."""

    database: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(
        status="healthy",
        version=VERSION,
        environment=os.getenv("ENVIRONMENT", "development"),
    )


@router.get("/health/detailed", response_model=DetailedHealthResponse)
async def detailed_health_check() -> DetailedHealthResponse:
    """Health check that also pings the database."""
    database = "unavailable"
    manager = _get_db_manager()
    if manager is not None:
        try:
            async with manager.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            database = "healthy"
        except Exception as e:
            logger.warning(f"Database health check failed: {e}")
            database = f"unhealthy: {type(e).__name__}"

    return DetailedHealthResponse(
        status="healthy" if database == "healthy" else "degraded",
        version=VERSION,
        environment=os.getenv("ENVIRONMENT", "development"),
        database=database,
    )
