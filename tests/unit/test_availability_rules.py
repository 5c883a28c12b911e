"""Tests for date and slot eligibility."""
from datetime import date, time, timedelta

import pytest

from barberbook.services.availability.availability_service import (
    AvailabilityService,
    MODE_OVERLAP,
    REASON_DAY_OFF,
    REASON_FULLY_BOOKED,
    REASON_PAST,
    REASON_WEEKDAY_OFF,
    Slot,
    weekday_sunday_first,
)
from barberbook.services.business.settings_service import BusinessConfiguration

TODAY = date(2025, 6, 1)          # Sunday
TUESDAY = date(2025, 6, 10)
SUNDAY = date(2025, 6, 15)


class FakeStore:
    """In-memory stand-in for the appointment store."""

    def __init__(self, config=None, appointments=None):
        self.config = config or BusinessConfiguration()
        self.appointments = appointments or []
        self.loaded_from = None

    def get_business_configuration(self):
        return self.config

    def list_appointments(self, from_date):
        self.loaded_from = from_date
        return [a for a in self.appointments if a.appointment_date >= from_date]


# ----------------------------------------------------------------------
# Date eligibility
# ----------------------------------------------------------------------

def test_weekday_numbering_starts_on_sunday():
    assert weekday_sunday_first(SUNDAY) == 0
    assert weekday_sunday_first(TUESDAY) == 2
    assert weekday_sunday_first(date(2025, 6, 14)) == 6


def test_weekday_off_closes_future_date():
    """A weekly closure applies even with no specific days off."""
    assert AvailabilityService.is_date_unavailable(SUNDAY, {0}, [], today=TODAY)
    assert AvailabilityService.date_closure_reason(SUNDAY, {0}, [], today=TODAY) == REASON_WEEKDAY_OFF


def test_open_weekday_is_available():
    assert not AvailabilityService.is_date_unavailable(TUESDAY, {0}, [], today=TODAY)


@pytest.mark.parametrize("day_off", [TUESDAY, "2025-06-10"])
def test_specific_day_off_accepts_dates_and_strings(day_off):
    assert AvailabilityService.date_closure_reason(TUESDAY, set(), [day_off], today=TODAY) == REASON_DAY_OFF


@pytest.mark.parametrize("days_back", [1, 2, 30, 365])
def test_every_past_date_is_unavailable(days_back):
    today = date(2025, 6, 11)
    past = today - timedelta(days=days_back)

    assert AvailabilityService.is_date_unavailable(past, set(), [], today=today)


def test_today_itself_is_bookable():
    assert AvailabilityService.date_closure_reason(TUESDAY, set(), [], today=TUESDAY) is None


def test_past_reason_reported_for_open_weekday():
    assert AvailabilityService.date_closure_reason(TUESDAY, {0}, [], today=date(2025, 6, 20)) == REASON_PAST


# ----------------------------------------------------------------------
# Slot eligibility
# ----------------------------------------------------------------------

def test_pending_appointment_blocks_only_its_own_start(make_appointment):
    """A pending 14:00 booking hides 14:00 but leaves 13:30 and 14:30 open."""
    appointments = [make_appointment(TUESDAY, time(14, 0), "pending")]

    slots = AvailabilityService.get_day_slots(
        BusinessConfiguration(), 30, TUESDAY, appointments, today=TODAY
    )
    times = [slot.time for slot in slots]

    assert time(14, 0) not in times
    assert time(13, 30) in times
    assert time(14, 30) in times
    assert len(times) == 17


@pytest.mark.parametrize("status", ["pending", "confirmed"])
def test_active_statuses_block(make_appointment, status):
    appointments = [make_appointment(TUESDAY, time(10, 0), status)]

    assert not AvailabilityService.is_time_slot_available(TUESDAY, time(10, 0), appointments)


def test_cancelled_appointments_never_block(make_appointment):
    appointments = [
        make_appointment(TUESDAY, time(10, 0), "cancelled", duration_minutes=120),
        make_appointment(TUESDAY, time(10, 0), "cancelled"),
    ]

    assert AvailabilityService.is_time_slot_available(TUESDAY, time(10, 0), appointments)
    assert AvailabilityService.is_time_slot_available(
        TUESDAY, time(10, 30), appointments, 30, mode=MODE_OVERLAP
    )


def test_appointment_on_another_date_does_not_block(make_appointment):
    appointments = [make_appointment(TUESDAY + timedelta(days=1), time(10, 0))]

    assert AvailabilityService.is_time_slot_available(TUESDAY, time(10, 0), appointments)


def test_string_dates_and_times_are_compared_by_value(make_appointment):
    appointments = [make_appointment("2025-06-10", "10:00:00")]

    assert not AvailabilityService.is_time_slot_available(TUESDAY, time(10, 0), appointments)


def test_filter_is_idempotent(make_appointment):
    candidates = AvailabilityService.generate_time_slots(time(9, 0), time(18, 0), 30, 30)
    appointments = [
        make_appointment(TUESDAY, time(9, 0)),
        make_appointment(TUESDAY, time(12, 30), "confirmed"),
        make_appointment(TUESDAY, time(15, 0), "cancelled"),
    ]

    once = AvailabilityService.filter_available_slots(TUESDAY, candidates, appointments)
    twice = AvailabilityService.filter_available_slots(TUESDAY, once, appointments)

    assert once == twice
    assert time(9, 0) not in once
    assert time(12, 30) not in once
    assert time(15, 0) in once


def test_exact_mode_ignores_long_appointment_overlap(make_appointment):
    appointments = [make_appointment(TUESDAY, time(14, 0), duration_minutes=60)]

    assert AvailabilityService.is_time_slot_available(TUESDAY, time(14, 30), appointments, 30)


def test_overlap_mode_blocks_intersecting_windows(make_appointment):
    """A 60 min booking at 14:00 blocks 13:30-15:00 starts for a 60 min service."""
    appointments = [make_appointment(TUESDAY, time(14, 0), duration_minutes=60)]

    def available(t):
        return AvailabilityService.is_time_slot_available(
            TUESDAY, t, appointments, 60, mode=MODE_OVERLAP
        )

    assert available(time(13, 0))
    assert not available(time(13, 30))
    assert not available(time(14, 0))
    assert not available(time(14, 30))
    assert available(time(15, 0))


def test_overlap_mode_requires_a_duration(make_appointment):
    with pytest.raises(ValueError):
        AvailabilityService.is_time_slot_available(TUESDAY, time(9, 0), [], mode=MODE_OVERLAP)


# ----------------------------------------------------------------------
# Combined pipeline
# ----------------------------------------------------------------------

def test_closed_date_yields_no_slots():
    config = BusinessConfiguration(specific_days_off=frozenset({TUESDAY}))

    assert AvailabilityService.get_day_slots(config, 30, TUESDAY, [], today=TODAY) == []
    assert AvailabilityService.get_day_slots(config, 30, SUNDAY, [], today=TODAY) == []


def test_slots_carry_date_and_end_time():
    config = BusinessConfiguration(work_start_time=time(9, 0), work_end_time=time(10, 0))

    slots = AvailabilityService.get_day_slots(config, 45, TUESDAY, [], today=TODAY)

    assert slots == [Slot(TUESDAY, time(9, 0), 45)]
    assert slots[0].to_dict() == {
        "date": "2025-06-10",
        "time": "09:00",
        "end_time": "09:45",
        "duration_minutes": 45,
    }


def test_available_slots_load_appointments_from_today(make_appointment):
    store = FakeStore(appointments=[make_appointment(TUESDAY, time(9, 0))])

    slots = AvailabilityService.get_available_slots(store, 30, TUESDAY, today=TODAY)

    assert store.loaded_from == TODAY
    assert slots[0].time == time(9, 30)


def test_calendar_reports_reason_per_day(make_appointment):
    config = BusinessConfiguration(
        work_start_time=time(9, 0),
        work_end_time=time(10, 0),
        specific_days_off=frozenset({date(2025, 6, 12)}),
    )
    booked = [
        make_appointment(date(2025, 6, 13), time(9, 0)),
        make_appointment(date(2025, 6, 13), time(9, 30)),
    ]
    store = FakeStore(config, booked)

    calendar = AvailabilityService.get_date_calendar(
        store, 30, date(2025, 6, 8), 8, today=date(2025, 6, 10)
    )
    by_date = {day["date"]: day for day in calendar}

    assert len(calendar) == 8
    assert by_date["2025-06-08"]["reason"] == REASON_WEEKDAY_OFF
    assert by_date["2025-06-09"]["reason"] == REASON_PAST
    assert by_date["2025-06-10"] == {
        "date": "2025-06-10", "weekday": 2, "available": True, "reason": None, "slots_count": 2,
    }
    assert by_date["2025-06-12"]["reason"] == REASON_DAY_OFF
    assert by_date["2025-06-13"]["reason"] == REASON_FULLY_BOOKED
    assert by_date["2025-06-13"]["available"] is False
    assert by_date["2025-06-15"]["reason"] == REASON_WEEKDAY_OFF
