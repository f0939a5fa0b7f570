"""Health check and monitoring endpoints."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from datetime import datetime

from adfluence.database import get_db
from adfluence.services.logging_service import app_metrics
from adfluence.config import settings

router = APIRouter()


@router.get("/health")
def health_check():
    """
    Basic health check endpoint.

    Returns 200 if application is running.
    Used by load balancers for liveness probes.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "environment": settings.ENVIRONMENT,
        "metrics": app_metrics.get_metrics(),
        "error_rate": app_metrics.get_error_rate()
    }


@router.get("/health/ready")
def readiness_check(db: Session = Depends(get_db)):
    """
    Readiness probe.

    Verifies the store answers a trivial query.
    """
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "checks": {"database": False},
                "timestamp": datetime.utcnow().isoformat()
            }
        )

    return {
        "status": "ready",
        "checks": {"database": True},
        "timestamp": datetime.utcnow().isoformat()
    }
