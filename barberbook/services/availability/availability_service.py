# ===== barberbook/services/availability/availability_service.py =====
"""
Availability Service

Turns the business configuration, a service duration and the existing
appointments into the list of bookable slots for a date:

1. Time grid: candidate start times inside working hours
2. Date eligibility: weekday closures, one-off closures, past dates
3. Slot eligibility: candidates already taken by a non-cancelled appointment

Everything except get_available_slots / get_date_calendar is a pure function
of its arguments.
"""
from dataclasses import dataclass
from datetime import date, time, timedelta
from typing import Iterable, List, Dict, Optional, Any, Collection, Union
import logging

from barberbook.models.appointment import STATUS_CANCELLED
from barberbook.services.business.settings_service import BusinessConfiguration
from barberbook.utils.text_processing import parse_date, parse_time

logger = logging.getLogger(__name__)

MODE_EXACT = "exact"
MODE_OVERLAP = "overlap"

REASON_PAST = "past"
REASON_WEEKDAY_OFF = "weekday_off"
REASON_DAY_OFF = "day_off"
REASON_FULLY_BOOKED = "fully_booked"


@dataclass(frozen=True)
class Slot:
    """A bookable window. Derived on every query, never stored."""
    date: date
    time: time
    duration_minutes: int

    @property
    def end_time(self) -> time:
        return _from_minutes(_to_minutes(self.time) + self.duration_minutes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "time": self.time.strftime("%H:%M"),
            "end_time": self.end_time.strftime("%H:%M"),
            "duration_minutes": self.duration_minutes,
        }


def _to_minutes(value: time) -> int:
    return value.hour * 60 + value.minute


def _from_minutes(minutes: int) -> time:
    # Slots never wrap past midnight; clamp the end of a 24:00 window
    if minutes >= 24 * 60:
        return time(23, 59)
    return time(minutes // 60, minutes % 60)


def weekday_sunday_first(value: date) -> int:
    """Weekday number with 0=Sunday .. 6=Saturday"""
    return value.isoweekday() % 7


class AvailabilityService:
    """Slot generation and availability rules"""

    # ------------------------------------------------------------------
    # Time grid
    # ------------------------------------------------------------------

    @staticmethod
    def generate_time_slots(
            work_start: time,
            work_end: time,
            interval_minutes: int,
            service_duration: int
    ) -> List[time]:
        """
        Candidate start times for a service within working hours.

        Starts at work_start and steps by interval_minutes, keeping every t
        with t + service_duration <= work_end. A window that is empty or too
        short for the service yields no slots.
        """
        if interval_minutes <= 0:
            raise ValueError("interval_minutes must be positive")
        if service_duration <= 0:
            raise ValueError("service_duration must be positive")

        start = _to_minutes(work_start)
        end = _to_minutes(work_end)

        slots = []
        current = start
        while current + service_duration <= end:
            slots.append(_from_minutes(current))
            current += interval_minutes

        return slots

    # ------------------------------------------------------------------
    # Date eligibility
    # ------------------------------------------------------------------

    @staticmethod
    def date_closure_reason(
            target_date: date,
            weekdays_off: Collection[int],
            specific_days_off: Iterable[Union[date, str]],
            today: Optional[date] = None
    ) -> Optional[str]:
        """Why a date is closed for booking, or None when it is open"""
        if weekday_sunday_first(target_date) in weekdays_off:
            return REASON_WEEKDAY_OFF

        if target_date in {parse_date(d) for d in specific_days_off}:
            return REASON_DAY_OFF

        if target_date < (today or date.today()):
            return REASON_PAST

        return None

    @staticmethod
    def is_date_unavailable(
            target_date: date,
            weekdays_off: Collection[int],
            specific_days_off: Iterable[Union[date, str]],
            today: Optional[date] = None
    ) -> bool:
        """
        A date is wholly closed when its weekday is off, it is a specific
        day off, or it lies before today.
        """
        return AvailabilityService.date_closure_reason(
            target_date, weekdays_off, specific_days_off, today
        ) is not None

    # ------------------------------------------------------------------
    # Slot eligibility
    # ------------------------------------------------------------------

    @staticmethod
    def is_time_slot_available(
            target_date: date,
            slot_time: time,
            appointments: Iterable[Any],
            duration_minutes: Optional[int] = None,
            mode: str = MODE_EXACT
    ) -> bool:
        """
        Check a candidate against existing appointments.

        In exact mode a slot is taken only by a non-cancelled appointment on
        the same date at the same start time; durations are ignored. In
        overlap mode any non-cancelled appointment whose window intersects
        [slot_time, slot_time + duration_minutes) blocks the slot.
        """
        if mode == MODE_OVERLAP and not duration_minutes:
            raise ValueError("duration_minutes is required in overlap mode")

        slot_start = _to_minutes(slot_time)
        slot_end = slot_start + (duration_minutes or 0)

        for appointment in appointments:
            if appointment.status == STATUS_CANCELLED:
                continue
            if parse_date(appointment.appointment_date) != target_date:
                continue

            appt_start = _to_minutes(parse_time(appointment.appointment_time))

            if mode == MODE_OVERLAP:
                appt_end = appt_start + (appointment.duration_minutes or 0)
                if slot_start < appt_end and appt_start < slot_end:
                    return False
            elif appt_start == slot_start:
                return False

        return True

    @staticmethod
    def filter_available_slots(
            target_date: date,
            candidates: Iterable[time],
            appointments: Iterable[Any],
            duration_minutes: Optional[int] = None,
            mode: str = MODE_EXACT
    ) -> List[time]:
        """Drop candidates already taken on target_date"""
        appointments = list(appointments)
        return [
            candidate for candidate in candidates
            if AvailabilityService.is_time_slot_available(
                target_date, candidate, appointments, duration_minutes, mode
            )
        ]

    @staticmethod
    def get_day_slots(
            config: BusinessConfiguration,
            service_duration: int,
            target_date: date,
            appointments: Iterable[Any],
            today: Optional[date] = None,
            mode: str = MODE_EXACT
    ) -> List[Slot]:
        """Bookable slots for one date: closed dates first, then the filtered grid"""
        if AvailabilityService.is_date_unavailable(
                target_date, config.weekday_off, config.specific_days_off, today
        ):
            return []

        candidates = AvailabilityService.generate_time_slots(
            config.work_start_time,
            config.work_end_time,
            config.slot_interval_minutes,
            service_duration
        )
        available = AvailabilityService.filter_available_slots(
            target_date, candidates, appointments, service_duration, mode
        )

        return [Slot(target_date, t, service_duration) for t in available]

    # ------------------------------------------------------------------
    # Store-backed queries
    # ------------------------------------------------------------------

    @staticmethod
    def get_available_slots(
            store,
            service_duration: int,
            target_date: date,
            today: Optional[date] = None,
            mode: str = MODE_EXACT
    ) -> List[Slot]:
        """Load configuration and upcoming appointments, then compute the day's slots"""
        today = today or date.today()
        config = store.get_business_configuration()
        appointments = store.list_appointments(from_date=today)

        slots = AvailabilityService.get_day_slots(
            config, service_duration, target_date, appointments, today, mode
        )

        if not slots:
            logger.info(f"No bookable slots on {target_date} for a {service_duration} minute service")

        return slots

    @staticmethod
    def get_date_calendar(
            store,
            service_duration: int,
            start_date: date,
            days: int,
            today: Optional[date] = None,
            mode: str = MODE_EXACT
    ) -> List[Dict[str, Any]]:
        """
        Open/closed status for a run of consecutive dates.

        Returns:
            list[dict]: [
                {"date": "2025-06-10", "available": True, "reason": None, "slots_count": 12},
                {"date": "2025-06-15", "available": False, "reason": "weekday_off", "slots_count": 0},
                ...
            ]
        """
        today = today or date.today()
        config = store.get_business_configuration()
        appointments = store.list_appointments(from_date=today)

        calendar = []
        current_date = start_date
        for _ in range(days):
            reason = AvailabilityService.date_closure_reason(
                current_date, config.weekday_off, config.specific_days_off, today
            )
            slots_count = 0
            if reason is None:
                slots_count = len(AvailabilityService.get_day_slots(
                    config, service_duration, current_date, appointments, today, mode
                ))
                if slots_count == 0:
                    reason = REASON_FULLY_BOOKED

            calendar.append({
                "date": current_date.isoformat(),
                "weekday": weekday_sunday_first(current_date),
                "available": reason is None,
                "reason": reason,
                "slots_count": slots_count,
            })
            current_date += timedelta(days=1)

        return calendar
