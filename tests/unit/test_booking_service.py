"""Tests for booking submission."""
from datetime import date, time
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import Mock

import pytest

from barberbook.core.exceptions import BookingValidationError, SlotConflictError, StoreUnavailableError
from barberbook.services.appointment.appointment_store import AppointmentStore
from barberbook.services.appointment.booking_service import BookingService
from barberbook.services.availability.availability_service import MODE_OVERLAP
from barberbook.services.business.settings_service import BusinessConfiguration, SettingsService
from barberbook.services.catalog.catalog_service import CatalogService

TODAY = date(2025, 6, 1)
TUESDAY = date(2025, 6, 10)


@pytest.fixture
def store(db):
    return AppointmentStore(db)


def _submit(store, service, appointment_date=TUESDAY, appointment_time="14:00",
            customer_name="Carlos Silva", customer_contact="(11) 98765-4321", **kwargs):
    kwargs.setdefault("today", TODAY)
    return BookingService.submit_booking(
        store, service, appointment_date, appointment_time, customer_name, customer_contact, **kwargs
    )


# ----------------------------------------------------------------------
# Validation
# ----------------------------------------------------------------------

@pytest.mark.parametrize("field,value,message", [
    ("appointment_date", "", "select a date"),
    ("appointment_time", None, "select a time"),
    ("customer_name", "   ", "your name"),
    ("customer_contact", "", "WhatsApp number"),
    ("customer_contact", "(11) 9876-543", "at least 10 digits"),
    ("appointment_date", "10/06/2025", "YYYY-MM-DD"),
    ("appointment_time", "2pm", "HH:MM"),
])
def test_invalid_fields_are_rejected(haircut, field, value, message):
    fields = {
        "appointment_date": "2025-06-10",
        "appointment_time": "14:00",
        "customer_name": "Carlos",
        "customer_contact": "11987654321",
    }
    fields[field] = value

    with pytest.raises(BookingValidationError) as exc_info:
        BookingService.validate_submission(haircut, **fields)

    assert message in exc_info.value.message


def test_missing_service_is_rejected():
    with pytest.raises(BookingValidationError):
        BookingService.validate_submission(None, "2025-06-10", "14:00", "Carlos", "11987654321")


def test_inactive_service_is_rejected():
    retired = SimpleNamespace(active=False)

    with pytest.raises(BookingValidationError):
        BookingService.validate_submission(retired, "2025-06-10", "14:00", "Carlos", "11987654321")


def test_validation_trims_and_parses(haircut):
    fields = BookingService.validate_submission(
        haircut, "2025-06-10", "14:00", "  Carlos Silva ", " (11) 98765-4321 "
    )

    assert fields == {
        "appointment_date": TUESDAY,
        "appointment_time": time(14, 0),
        "customer_name": "Carlos Silva",
        "customer_contact": "(11) 98765-4321",
    }


def test_validation_failure_never_touches_the_store(haircut):
    store = Mock()

    with pytest.raises(BookingValidationError):
        _submit(store, haircut, customer_name="")

    assert store.mock_calls == []


# ----------------------------------------------------------------------
# Submission
# ----------------------------------------------------------------------

def test_successful_booking_is_pending(store, haircut):
    result = _submit(store, haircut)

    assert result.appointment.status == "pending"
    assert result.appointment_id == result.appointment.id
    assert result.appointment_date == TUESDAY
    assert result.appointment_time == time(14, 0)

    payload = result.to_dict()
    assert payload["service"] == {
        "id": str(haircut.id), "name": "Haircut", "duration_minutes": 30, "price": 45.0,
    }
    assert payload["date"] == "2025-06-10"
    assert payload["time"] == "14:00"
    assert payload["customer_name"] == "Carlos Silva"


def test_second_booking_for_same_slot_conflicts(store, haircut):
    _submit(store, haircut)

    with pytest.raises(SlotConflictError) as exc_info:
        _submit(store, haircut, customer_name="Pedro", customer_contact="21912345678")

    assert "refresh" in exc_info.value.message
    assert len(store.list_appointments(from_date=TUESDAY)) == 1


def test_cancelled_booking_frees_the_slot(store, db, haircut):
    first = _submit(store, haircut)
    first.appointment.status = "cancelled"
    db.commit()

    second = _submit(store, haircut, customer_name="Pedro")

    assert second.appointment.status == "pending"


def test_race_lost_at_insert_is_a_conflict(session_factory, haircut):
    """Two submissions pass the pre-check together; the unique index lets only the first commit."""
    first_store = AppointmentStore(session_factory())
    second_store = AppointmentStore(session_factory())
    competitor = {}

    class RacingStore(AppointmentStore):
        def find_conflicting_appointment(self, *args, **kwargs):
            existing = super().find_conflicting_appointment(*args, **kwargs)
            if not competitor:
                competitor["result"] = _submit(first_store, haircut, customer_name="First")
            return existing

    racing_store = RacingStore(session_factory())

    with pytest.raises(SlotConflictError):
        _submit(racing_store, haircut, customer_name="Second")

    remaining = second_store.list_appointments(from_date=TUESDAY)
    assert [a.customer_name for a in remaining] == ["First"]
    assert competitor["result"].appointment.id == remaining[0].id


def test_price_is_frozen_at_submission(store, db, haircut):
    result = _submit(store, haircut)

    CatalogService.update_service(db, haircut.id, {"price": 60})
    db.expire_all()

    booked = store.list_appointments(from_date=TUESDAY)[0]
    assert booked.id == result.appointment.id
    assert booked.service_price == Decimal("45.00")
    assert booked.service.price == Decimal("60.00")


def test_closed_dates_are_rejected(store, db, haircut):
    with pytest.raises(BookingValidationError):
        _submit(store, haircut, appointment_date=date(2025, 6, 15))  # Sunday

    with pytest.raises(BookingValidationError):
        _submit(store, haircut, appointment_date=date(2025, 5, 30))  # before today

    SettingsService.add_day_off(db, TUESDAY)
    with pytest.raises(BookingValidationError):
        _submit(store, haircut)


@pytest.mark.parametrize("off_grid", ["14:10", "08:30", "18:00"])
def test_times_off_the_grid_are_rejected(store, haircut, off_grid):
    with pytest.raises(BookingValidationError):
        _submit(store, haircut, appointment_time=off_grid)


def test_overlap_mode_rejects_intersecting_booking(store, make_service):
    long_service = make_service(name="Full treatment", price="120.00", duration_minutes=60)
    _submit(store, long_service, appointment_time="14:00")

    haircut = make_service()
    _submit(store, haircut, appointment_time="14:30")  # exact mode allows it

    with pytest.raises(SlotConflictError):
        _submit(store, long_service, appointment_time="13:30", mode=MODE_OVERLAP)


def test_store_failure_propagates():
    store = Mock()
    store.get_business_configuration.return_value = BusinessConfiguration()
    store.find_conflicting_appointment.return_value = None
    store.insert_appointment.side_effect = StoreUnavailableError()
    service = SimpleNamespace(id="svc", name="Haircut", active=True, price=Decimal("45"), duration_minutes=30)

    with pytest.raises(StoreUnavailableError):
        _submit(store, service)


def test_insert_is_never_issued_before_the_conflict_check():
    calls = []
    store = Mock()
    store.get_business_configuration.return_value = BusinessConfiguration()
    store.find_conflicting_appointment.side_effect = lambda *a, **k: calls.append("check")
    store.insert_appointment.side_effect = lambda record: calls.append("insert") or SimpleNamespace(
        id="appt-1", status="pending", service_price=record["service_price"],
        duration_minutes=record["duration_minutes"],
    )
    service = SimpleNamespace(id="svc", name="Haircut", active=True, price=Decimal("45"), duration_minutes=30)

    result = _submit(store, service)

    assert calls == ["check", "insert"]
    assert result.to_dict()["appointment_id"] == "appt-1"
