"""Health check routes"""

from fastapi import APIRouter, Depends
import logging

from sqlalchemy import text

from api.dependencies import get_database
from app.config import settings
from domain.models import Database

router = APIRouter(tags=["Health"])
logger = logging.getLogger("nutridesk.api.health")


@router.get("/health-check")
def health_check():
    """Basic health check endpoint"""
    return {"status": "ok", "service": settings.app_name, "version": settings.app_version}


@router.get("/health-check/db")
def database_health(database: Database = Depends(get_database)):
    """Round-trip a trivial query against the store."""
    try:
        with database.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"database": "ok"}
    except Exception as e:
        logger.exception("Database health check failed")
        return {"database": "unavailable", "error": str(e)}
