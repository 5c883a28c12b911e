# ============================================================================
# FILE: barberbook/api/v1/public/bookings.py
# Customer booking submission
# ============================================================================
import logging

from fastapi import APIRouter, Depends, status

from barberbook.api.dependencies import get_store
from barberbook.config.settings import get_settings
from barberbook.schemas.booking import BookingRequest, BookingConfirmation
from barberbook.services.appointment.appointment_store import AppointmentStore
from barberbook.services.appointment.booking_service import BookingService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/bookings", tags=["Public"])


@router.post("", response_model=BookingConfirmation, status_code=status.HTTP_201_CREATED)
async def create_booking(
        booking: BookingRequest,
        store: AppointmentStore = Depends(get_store)
):
    """
    Book a slot. The appointment starts as pending until the barber confirms it.

    - 422: a field is missing or invalid
    - 409: the slot was taken in the meantime; refresh the slot list
    - 503: storage failure; retry the submission
    """
    service = store.get_service(booking.service_id)

    result = BookingService.submit_booking(
        store,
        service,
        booking.appointment_date,
        booking.appointment_time,
        booking.customer_name,
        booking.customer_contact,
        mode=get_settings().SLOT_CONFLICT_MODE
    )

    return result.to_dict()
