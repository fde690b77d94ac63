"""Health check endpoints."""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app import __version__
from app.config import settings
from app.database import get_db
from src.revision_diff import __version__ as engine_version

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    engine_version: str
    environment: str


class HealthDetailResponse(HealthResponse):
    """Detailed health check response with database status."""

    database: str


def _base_health(status: str) -> dict[str, str]:
    return {
        "status": status,
        "version": __version__,
        "engine_version": engine_version,
        "environment": settings.app_env,
    }


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(**_base_health("ok"))


@router.get("/health/ready", response_model=HealthDetailResponse)
async def readiness_check(db: AsyncSession = Depends(get_db)) -> HealthDetailResponse:
    """Readiness check including access to the revision tables."""
    try:
        await db.execute(text("SELECT 1 FROM revision LIMIT 1"))
        db_status = "connected"
    except (SQLAlchemyError, OSError):
        logger.exception("Readiness check failed")
        db_status = "disconnected"

    return HealthDetailResponse(
        **_base_health("ok" if db_status == "connected" else "degraded"),
        database=db_status,
    )
