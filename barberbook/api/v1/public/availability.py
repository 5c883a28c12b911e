# ============================================================================
# FILE: barberbook/api/v1/public/availability.py
# Bookable dates and slots for a service
# ============================================================================
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from barberbook.api.dependencies import get_store
from barberbook.config.settings import get_settings
from barberbook.core.exceptions import NotFoundError
from barberbook.models.service import Service
from barberbook.schemas.booking import CalendarResponse, SlotListResponse
from barberbook.services.appointment.appointment_store import AppointmentStore
from barberbook.services.availability.availability_service import AvailabilityService

router = APIRouter(prefix="/availability", tags=["Public"])


def _active_service(store: AppointmentStore, service_id: str) -> Service:
    service = store.get_service(service_id)
    if not service or not service.active:
        raise NotFoundError("Service not found")
    return service


@router.get("/slots", response_model=SlotListResponse)
async def get_available_slots(
        service_id: str = Query(..., description="Service to book"),
        target_date: date = Query(..., alias="date", description="Date to check (YYYY-MM-DD)"),
        store: AppointmentStore = Depends(get_store)
):
    """
    Bookable start times for a service on one date.
    Closed dates and dates in the past return an empty list.
    """
    service = _active_service(store, service_id)

    slots = AvailabilityService.get_available_slots(
        store,
        service.duration_minutes,
        target_date,
        mode=get_settings().SLOT_CONFLICT_MODE
    )

    return {
        "service_id": str(service.id),
        "date": target_date.isoformat(),
        "total": len(slots),
        "slots": [slot.to_dict() for slot in slots]
    }


@router.get("/dates", response_model=CalendarResponse)
async def get_available_dates(
        service_id: str = Query(..., description="Service to book"),
        start: Optional[date] = Query(None, description="First date (defaults to today)"),
        days: int = Query(31, ge=1, le=92, description="Number of days to return"),
        store: AppointmentStore = Depends(get_store)
):
    """
    Open/closed status for each day in a range, for rendering a booking calendar.
    """
    settings = get_settings()
    service = _active_service(store, service_id)
    days = min(days, settings.BOOKING_WINDOW_DAYS)

    calendar = AvailabilityService.get_date_calendar(
        store,
        service.duration_minutes,
        start or date.today(),
        days,
        mode=settings.SLOT_CONFLICT_MODE
    )

    return {"service_id": str(service.id), "days": calendar}
