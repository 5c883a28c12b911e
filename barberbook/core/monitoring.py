"""Health checks"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy import func, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from barberbook.config.database import get_db
from barberbook.config.settings import get_settings
from barberbook.models.pending_message import PendingMessage
from barberbook.services.business.settings_service import SettingsService

logger = logging.getLogger(__name__)

health_router = APIRouter()


@health_router.get("/")
async def health_check():
    """Liveness only"""
    return {"status": "healthy", "service": "barberbook-api"}


@health_router.get("/detailed")
async def detailed_health_check(db: Session = Depends(get_db)):
    """
    Database reachability plus the booking configuration in effect and the
    number of customer messages still waiting to be sent.
    """
    checks = {
        "database": "unknown",
        "booking": None,
        "unsent_messages": None,
        "overall": "unknown",
    }

    try:
        db.execute(text("SELECT 1"))
        checks["database"] = "healthy"

        config = SettingsService.get_configuration(db)
        checks["booking"] = {
            "work_hours": f"{config.work_start_time:%H:%M}-{config.work_end_time:%H:%M}",
            "slot_interval_minutes": config.slot_interval_minutes,
            "conflict_mode": get_settings().SLOT_CONFLICT_MODE,
        }
        checks["unsent_messages"] = db.query(func.count(PendingMessage.id)).filter(
            PendingMessage.sent == False
        ).scalar()
    except SQLAlchemyError as e:
        logger.error(f"Health check failed: {e}")
        db.rollback()
        checks["database"] = f"unhealthy: {e.__class__.__name__}"

    checks["overall"] = "healthy" if checks["database"] == "healthy" else "degraded"
    return checks
