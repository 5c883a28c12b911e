# ============================================================================
# barberbook/services/appointment/booking_service.py
# Customer booking submission: validate, re-check the slot, then insert
# ============================================================================
"""
Booking submission.

Each attempt moves through Validating -> ConflictCheck -> Inserting ->
Committed, or ends in Conflict with nothing stored. The conflict check and
the insert are two separate store calls and are not atomic; the unique index
on active (date, time) pairs catches the remaining race at insert time.
"""
import logging
from dataclasses import dataclass
from datetime import date, time
from typing import Optional, Dict, Any, Union

from barberbook.core.exceptions import BookingValidationError, SlotConflictError
from barberbook.models.appointment import Appointment
from barberbook.models.service import Service
from barberbook.services.appointment.appointment_store import AppointmentStore
from barberbook.services.availability.availability_service import AvailabilityService, MODE_EXACT
from barberbook.utils.text_processing import (
    MIN_CONTACT_DIGITS,
    format_date_long,
    is_valid_contact,
    parse_date,
    parse_time,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BookingResult:
    """The committed appointment plus the context the customer booked with"""
    appointment: Appointment
    service: Service
    appointment_date: date
    appointment_time: time
    customer_name: str
    customer_contact: str

    @property
    def appointment_id(self):
        return self.appointment.id

    def to_dict(self) -> Dict[str, Any]:
        return {
            "appointment_id": str(self.appointment.id),
            "status": self.appointment.status,
            "service": {
                "id": str(self.service.id),
                "name": self.service.name,
                "duration_minutes": self.appointment.duration_minutes,
                "price": float(self.appointment.service_price),
            },
            "date": self.appointment_date.isoformat(),
            "date_display": format_date_long(self.appointment_date),
            "time": self.appointment_time.strftime("%H:%M"),
            "customer_name": self.customer_name,
            "customer_contact": self.customer_contact,
        }


class BookingService:
    """Coordinates a single booking submission against the appointment store"""

    @staticmethod
    def validate_submission(
            service: Optional[Service],
            appointment_date: Union[date, str, None],
            appointment_time: Union[time, str, None],
            customer_name: Optional[str],
            customer_contact: Optional[str]
    ) -> Dict[str, Any]:
        """
        Check the submitted fields without touching the store.

        Returns:
            dict with the parsed date, time and trimmed customer fields

        Raises:
            BookingValidationError: On the first missing or malformed field
        """
        if service is None:
            raise BookingValidationError("Please select a service")
        if not service.active:
            raise BookingValidationError("This service is not available for booking")
        if not appointment_date:
            raise BookingValidationError("Please select a date")
        if not appointment_time:
            raise BookingValidationError("Please select a time")

        name = (customer_name or "").strip()
        contact = (customer_contact or "").strip()
        if not name:
            raise BookingValidationError("Please fill in your name")
        if not contact:
            raise BookingValidationError("Please fill in your WhatsApp number")
        if not is_valid_contact(contact):
            raise BookingValidationError(
                f"Please enter a valid WhatsApp number (at least {MIN_CONTACT_DIGITS} digits)"
            )

        try:
            parsed_date = parse_date(appointment_date)
            parsed_time = parse_time(appointment_time)
        except ValueError:
            raise BookingValidationError("Date must be YYYY-MM-DD and time must be HH:MM")

        return {
            "appointment_date": parsed_date,
            "appointment_time": parsed_time,
            "customer_name": name,
            "customer_contact": contact,
        }

    @staticmethod
    def submit_booking(
            store: AppointmentStore,
            service: Optional[Service],
            appointment_date: Union[date, str, None],
            appointment_time: Union[time, str, None],
            customer_name: Optional[str],
            customer_contact: Optional[str],
            mode: str = MODE_EXACT,
            today: Optional[date] = None
    ) -> BookingResult:
        """
        Submit a booking.

        Args:
            store: Appointment store for the current session
            service: The selected service
            appointment_date: Date as date or YYYY-MM-DD
            appointment_time: Time as time or HH:MM
            customer_name: Customer name (non-empty)
            customer_contact: WhatsApp number, at least 10 digits once non-digits are removed
            mode: Slot conflict mode ("exact" or "overlap")
            today: Override for the current date

        Returns:
            BookingResult for the new pending appointment

        Raises:
            BookingValidationError: Missing/invalid fields, closed date or off-grid time
            SlotConflictError: The slot is already taken; refresh the slot list
            StoreUnavailableError: The store failed; retry the whole submission
        """
        # Validating
        fields = BookingService.validate_submission(
            service, appointment_date, appointment_time, customer_name, customer_contact
        )
        slot_date = fields["appointment_date"]
        slot_time = fields["appointment_time"]

        # ConflictCheck: the slot must still be on the grid for an open date
        config = store.get_business_configuration()
        if AvailabilityService.is_date_unavailable(
                slot_date, config.weekday_off, config.specific_days_off, today
        ):
            raise BookingValidationError("The shop is closed on the selected date")

        grid = AvailabilityService.generate_time_slots(
            config.work_start_time,
            config.work_end_time,
            config.slot_interval_minutes,
            service.duration_minutes
        )
        if slot_time not in grid:
            raise BookingValidationError("The selected time is not a bookable slot")

        existing = store.find_conflicting_appointment(
            slot_date, slot_time, service.duration_minutes, mode
        )
        if existing is not None:
            logger.info(
                f"Booking conflict on {slot_date} {slot_time:%H:%M}: "
                f"slot held by appointment {existing.id} ({existing.status})"
            )
            raise SlotConflictError()

        # Inserting: price and duration are frozen from the service as it is now
        appointment = store.insert_appointment({
            "service_id": service.id,
            "customer_name": fields["customer_name"],
            "customer_contact": fields["customer_contact"],
            "appointment_date": slot_date,
            "appointment_time": slot_time,
            "service_price": service.price,
            "duration_minutes": service.duration_minutes,
        })

        logger.info(
            f"Booked appointment {appointment.id}: {service.name} on "
            f"{slot_date} {slot_time:%H:%M} for {fields['customer_name']}"
        )

        return BookingResult(
            appointment=appointment,
            service=service,
            appointment_date=slot_date,
            appointment_time=slot_time,
            customer_name=fields["customer_name"],
            customer_contact=fields["customer_contact"],
        )
