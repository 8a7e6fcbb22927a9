# src/quillpost/api/v1/endpoints/system.py
"""Service information and health endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from quillpost.api.v1.dependencies import SessionDep
from quillpost.core.settings import settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["system"])


@router.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


@router.get("/health")
def health_check(db: SessionDep) -> dict[str, str]:
    """Report whether the service and its database are reachable."""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Health check could not reach the database")
        return {"status": "degraded", "database": "unavailable"}
    return {"status": "ok", "database": "ok"}
