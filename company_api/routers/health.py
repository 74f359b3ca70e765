# company_api/routers/health.py
"""
Health Check Endpoints

Liveness (``/health``) and a database readiness check (``/health/ready``).
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from sqlalchemy import text
import logging
from datetime import datetime, timezone
from typing import Any, Dict

from company_api.dependencies import get_db
from company_api.config import settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
@router.get("/")
async def health_check() -> Dict[str, bool]:
    """Process is up. Does not touch the database."""
    return {"ok": True}


@router.get("/ready")
def readiness_check(db: Session = Depends(get_db)) -> Dict[str, Any]:
    """
    Readiness check.

    Returns 200 when the database answers, 503 otherwise.
    """
    timestamp = datetime.now(timezone.utc).isoformat()
    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Readiness check failed: {e}")
        return JSONResponse(
            status_code=503,
            content={
                "ok": False,
                "status": "not_ready",
                "error": str(e) if settings.DEBUG else "Database unavailable",
                "timestamp": timestamp
            }
        )

    return {
        "ok": True,
        "status": "ready",
        "environment": settings.ENVIRONMENT,
        "version": settings.APP_VERSION,
        "timestamp": timestamp
    }
