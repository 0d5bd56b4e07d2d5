"""
Health check endpoint
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import text
from datetime import datetime, timezone

from candle_shop import __version__
from candle_shop.database import get_db
from candle_shop.config import settings
from candle_shop.services.payments import PaymentGateways, get_payment_gateways

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check(
    db: Session = Depends(get_db),
    gateways: PaymentGateways = Depends(get_payment_gateways)
):
    """
    Health check endpoint
    
    Reports database connectivity and which payment gateways are active.
    """
    try:
        db.execute(text("SELECT 1"))
        db_status = "healthy"
    except Exception as e:
        db_status = f"unhealthy: {str(e)}"
    
    return {
        "service": settings.SERVICE_NAME,
        "status": "healthy" if db_status == "healthy" else "unhealthy",
        "database": db_status,
        "payments": gateways.mode,
        "email_service": settings.EMAIL_SERVICE,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@router.get("/")
def root():
    """Root endpoint"""
    return {
        "service": settings.SERVICE_NAME,
        "version": __version__,
        "docs": "/docs"
    }
