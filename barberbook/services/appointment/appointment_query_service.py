# ============================================================================
# barberbook/services/appointment/appointment_query_service.py
# Operator-side appointment queries and status transitions
# ============================================================================
from sqlalchemy.orm import Session
from datetime import datetime, date, timezone
from typing import Optional, Dict, Any, Union
from uuid import UUID
import logging

from barberbook.core.exceptions import BookingValidationError, NotFoundError
from barberbook.models.appointment import (
    Appointment,
    ALL_STATUSES,
    STATUS_CANCELLED,
    STATUS_CONFIRMED,
    STATUS_PENDING,
)
from barberbook.services.message.message_service import MessageService

logger = logging.getLogger(__name__)

# Allowed operator transitions
TRANSITIONS = {
    STATUS_PENDING: {STATUS_CONFIRMED, STATUS_CANCELLED},
    STATUS_CONFIRMED: {STATUS_CANCELLED},
    STATUS_CANCELLED: set(),
}


class AppointmentQueryService:
    """Service layer for the operator dashboard."""

    @staticmethod
    def list_appointments(
            db: Session,
            status: Optional[str] = None,
            start_date: Optional[date] = None,
            end_date: Optional[date] = None,
            updated_since: Optional[datetime] = None
    ) -> Dict[str, Any]:
        """
        List appointments ordered by date and time.

        The response carries a ``synced_at`` cursor; passing it back as
        ``updated_since`` returns only appointments created or changed after
        the previous call.
        """
        if status and status not in ALL_STATUSES:
            raise BookingValidationError(f"Unknown status '{status}'")

        synced_at = datetime.now(timezone.utc)
        query = db.query(Appointment)

        if status:
            query = query.filter(Appointment.status == status)
        if start_date:
            query = query.filter(Appointment.appointment_date >= start_date)
        if end_date:
            query = query.filter(Appointment.appointment_date <= end_date)
        if updated_since:
            query = query.filter(Appointment.updated_at > updated_since)

        appointments = query.order_by(
            Appointment.appointment_date.asc(),
            Appointment.appointment_time.asc()
        ).all()

        return {
            "total_appointments": len(appointments),
            "synced_at": synced_at.isoformat(),
            "filters": {
                "status": status,
                "start_date": start_date.isoformat() if start_date else None,
                "end_date": end_date.isoformat() if end_date else None,
                "updated_since": updated_since.isoformat() if updated_since else None,
            },
            "appointments": [appt.to_dict() for appt in appointments]
        }

    @staticmethod
    def get_appointment(db: Session, appointment_id: Union[str, UUID]) -> Appointment:
        if isinstance(appointment_id, str):
            try:
                appointment_id = UUID(appointment_id)
            except ValueError:
                raise NotFoundError("Appointment not found")

        appointment = db.query(Appointment).filter(Appointment.id == appointment_id).first()
        if not appointment:
            raise NotFoundError("Appointment not found")
        return appointment

    @staticmethod
    def get_appointment_stats(db: Session) -> Dict[str, Any]:
        """Counts by status plus the number of upcoming active bookings."""
        by_status = {status: 0 for status in ALL_STATUSES}
        upcoming = 0
        today = date.today()

        for appt in db.query(Appointment).all():
            by_status[appt.status] = by_status.get(appt.status, 0) + 1
            if appt.status != STATUS_CANCELLED and appt.appointment_date >= today:
                upcoming += 1

        return {
            "total_appointments": sum(by_status.values()),
            "by_status": by_status,
            "upcoming_active": upcoming,
        }

    @staticmethod
    def update_status(
            db: Session,
            appointment_id: Union[str, UUID],
            new_status: str,
            business_name: str
    ) -> Dict[str, Any]:
        """
        Confirm or cancel an appointment and queue the customer notification.

        Returns:
            dict with the updated appointment and the queued message
        """
        appointment = AppointmentQueryService.get_appointment(db, appointment_id)

        if new_status not in (STATUS_CONFIRMED, STATUS_CANCELLED):
            raise BookingValidationError("Status can only be changed to confirmed or cancelled")
        if new_status not in TRANSITIONS[appointment.status]:
            raise BookingValidationError(
                f"Cannot change appointment from {appointment.status} to {new_status}"
            )

        appointment.status = new_status
        message = MessageService.queue_for_appointment(db, appointment, business_name)

        db.commit()
        db.refresh(appointment)
        db.refresh(message)

        logger.info(f"Appointment {appointment.id} {new_status}; queued {message.kind} message {message.id}")

        return {
            "appointment": appointment.to_dict(),
            "message": MessageService.serialize(message),
        }
