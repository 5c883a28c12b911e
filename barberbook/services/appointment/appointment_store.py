# ============================================================================
# barberbook/services/appointment/appointment_store.py
# Persistence operations the booking flow depends on
# ============================================================================
import logging
from contextlib import contextmanager
from datetime import date, time
from typing import List, Optional, Dict, Any, Union
from uuid import UUID, uuid4

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from barberbook.core.exceptions import SlotConflictError, StoreUnavailableError
from barberbook.models.appointment import Appointment, ACTIVE_STATUSES, STATUS_PENDING
from barberbook.models.service import Service
from barberbook.services.availability.availability_service import AvailabilityService, MODE_EXACT, MODE_OVERLAP
from barberbook.services.business.settings_service import BusinessConfiguration, SettingsService

logger = logging.getLogger(__name__)


class AppointmentStore:
    """
    Store operations used by availability and booking.

    Every operation is individually atomic. Database faults are rolled back
    and re-raised as StoreUnavailableError so callers never see a
    half-written booking.
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _guard(self, operation: str):
        try:
            yield
        except (SlotConflictError, StoreUnavailableError):
            raise
        except SQLAlchemyError as e:
            logger.error(f"Store operation '{operation}' failed: {e}", exc_info=True)
            self.db.rollback()
            raise StoreUnavailableError() from e

    def list_active_services(self) -> List[Service]:
        """Active services ordered by price ascending"""
        with self._guard("list_active_services"):
            return self.db.query(Service).filter(
                Service.active == True
            ).order_by(Service.price.asc(), Service.name.asc()).all()

    def get_service(self, service_id: Union[str, UUID]) -> Optional[Service]:
        if isinstance(service_id, str):
            try:
                service_id = UUID(service_id)
            except ValueError:
                return None

        with self._guard("get_service"):
            return self.db.query(Service).filter(Service.id == service_id).first()

    def get_business_configuration(self) -> BusinessConfiguration:
        with self._guard("get_business_configuration"):
            return SettingsService.get_configuration(self.db)

    def list_appointments(self, from_date: date) -> List[Appointment]:
        """All appointments dated on or after from_date, any status"""
        with self._guard("list_appointments"):
            return self.db.query(Appointment).filter(
                Appointment.appointment_date >= from_date
            ).order_by(
                Appointment.appointment_date.asc(),
                Appointment.appointment_time.asc()
            ).all()

    def find_conflicting_appointment(
            self,
            appointment_date: date,
            appointment_time: time,
            duration_minutes: Optional[int] = None,
            mode: str = MODE_EXACT
    ) -> Optional[Appointment]:
        """First pending/confirmed appointment that blocks the given slot, if any"""
        with self._guard("find_conflicting_appointment"):
            query = self.db.query(Appointment).filter(
                Appointment.appointment_date == appointment_date,
                Appointment.status.in_(ACTIVE_STATUSES)
            )

            if mode != MODE_OVERLAP:
                return query.filter(Appointment.appointment_time == appointment_time).first()

            for appointment in query.all():
                if not AvailabilityService.is_time_slot_available(
                        appointment_date, appointment_time, [appointment], duration_minutes, mode
                ):
                    return appointment

            return None

    def insert_appointment(self, record: Dict[str, Any]) -> Appointment:
        """
        Persist a new appointment with status pending.

        Raises:
            SlotConflictError: The unique index on active (date, time) rejected the row
            StoreUnavailableError: Any other database failure
        """
        with self._guard("insert_appointment"):
            appointment = Appointment(
                id=uuid4(),
                status=STATUS_PENDING,
                **record
            )
            self.db.add(appointment)

            try:
                self.db.commit()
            except IntegrityError as e:
                self.db.rollback()
                logger.warning(
                    f"Unique slot index rejected booking for "
                    f"{record.get('appointment_date')} {record.get('appointment_time')}: {e.orig}"
                )
                raise SlotConflictError() from e

            self.db.refresh(appointment)
            return appointment
