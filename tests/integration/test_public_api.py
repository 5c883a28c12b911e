"""Test the public booking endpoints."""
from datetime import date, timedelta


def test_root_and_health(client):
    assert client.get("/").json()["status"] == "running"
    assert client.get("/health/").json()["status"] == "healthy"
    detailed = client.get("/health/detailed").json()
    assert detailed["database"] == "healthy"
    assert detailed["overall"] == "healthy"
    assert detailed["booking"]["work_hours"] == "09:00-18:00"
    assert detailed["unsent_messages"] == 0


def test_correlation_id_is_echoed(client):
    response = client.get("/health/", headers={"X-Correlation-ID": "req-123"})

    assert response.headers["X-Correlation-ID"] == "req-123"


def test_services_are_listed_cheapest_first(client, make_service):
    make_service(name="Haircut + Beard", price="70.00", duration_minutes=60)
    make_service(name="Beard", price="30.00")
    make_service(name="Retired", price="10.00", active=False)

    response = client.get("/api/v1/services")

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert [s["name"] for s in data["services"]] == ["Beard", "Haircut + Beard"]
    assert data["services"][1]["formatted_duration"] == "1h"
    assert data["services"][0]["formatted_price"] == "R$ 30.00"


def test_inactive_service_is_not_found(client, make_service):
    retired = make_service(name="Retired", active=False)

    assert client.get(f"/api/v1/services/{retired.id}").status_code == 404
    assert client.get("/api/v1/services/not-a-uuid").status_code == 404


def test_slots_for_an_open_day(client, haircut, open_day):
    response = client.get(
        "/api/v1/availability/slots",
        params={"service_id": str(haircut.id), "date": open_day.isoformat()}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 18
    assert data["slots"][0] == {
        "date": open_day.isoformat(), "time": "09:00", "end_time": "09:30", "duration_minutes": 30,
    }
    assert data["slots"][-1]["time"] == "17:30"


def test_slots_for_a_closed_day_are_empty(client, haircut, sunday):
    response = client.get(
        "/api/v1/availability/slots",
        params={"service_id": str(haircut.id), "date": sunday.isoformat()}
    )

    assert response.status_code == 200
    assert response.json()["slots"] == []


def test_slots_for_unknown_service(client):
    response = client.get(
        "/api/v1/availability/slots",
        params={"service_id": "00000000-0000-0000-0000-000000000000", "date": "2030-01-08"}
    )

    assert response.status_code == 404
    assert response.json()["error"] == "NotFoundError"


def test_booked_slot_disappears_from_availability(client, booking_payload):
    assert client.post("/api/v1/bookings", json=booking_payload).status_code == 201

    response = client.get(
        "/api/v1/availability/slots",
        params={"service_id": booking_payload["service_id"], "date": booking_payload["appointment_date"]}
    )
    times = [slot["time"] for slot in response.json()["slots"]]

    assert "14:00" not in times
    assert "13:30" in times
    assert "14:30" in times


def test_calendar_marks_closed_days(client, haircut, sunday):
    start = sunday - timedelta(days=3)
    response = client.get(
        "/api/v1/availability/dates",
        params={"service_id": str(haircut.id), "start": start.isoformat(), "days": 7}
    )

    assert response.status_code == 200
    days = {day["date"]: day for day in response.json()["days"]}
    assert len(days) == 7
    assert days[sunday.isoformat()]["available"] is False
    assert days[sunday.isoformat()]["reason"] == "weekday_off"
    assert days[sunday.isoformat()]["weekday"] == 0


def test_calendar_is_capped_to_booking_window(client, haircut):
    response = client.get(
        "/api/v1/availability/dates",
        params={"service_id": str(haircut.id), "days": 92}
    )

    assert response.status_code == 200
    assert len(response.json()["days"]) == 60


def test_calendar_marks_past_days(client, haircut):
    past = date.today() - timedelta(days=2)
    if past.isoweekday() == 7:
        past -= timedelta(days=1)

    response = client.get(
        "/api/v1/availability/dates",
        params={"service_id": str(haircut.id), "start": past.isoformat(), "days": 1}
    )

    assert response.json()["days"][0]["reason"] == "past"


def test_booking_is_created(client, booking_payload):
    response = client.post("/api/v1/bookings", json=booking_payload)

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "pending"
    assert data["time"] == "14:00"
    assert data["date"] == booking_payload["appointment_date"]
    assert data["service"]["price"] == 45.0
    assert data["customer_contact"] == "(11) 98765-4321"


def test_double_booking_returns_conflict(client, booking_payload):
    assert client.post("/api/v1/bookings", json=booking_payload).status_code == 201

    second = dict(booking_payload, customer_name="Pedro", customer_contact="21912345678")
    response = client.post("/api/v1/bookings", json=second)

    assert response.status_code == 409
    assert response.json()["error"] == "SlotConflictError"
    assert "refresh" in response.json()["detail"]


def test_invalid_booking_returns_422(client, booking_payload):
    response = client.post("/api/v1/bookings", json=dict(booking_payload, customer_contact="12345"))

    assert response.status_code == 422
    assert response.json()["error"] == "BookingValidationError"


def test_booking_for_unknown_service_returns_422(client, booking_payload):
    payload = dict(booking_payload, service_id="00000000-0000-0000-0000-000000000000")

    assert client.post("/api/v1/bookings", json=payload).status_code == 422


def test_booking_on_closed_day_returns_422(client, booking_payload, sunday):
    payload = dict(booking_payload, appointment_date=sunday.isoformat())

    assert client.post("/api/v1/bookings", json=payload).status_code == 422


def test_login_with_wrong_password(client):
    assert client.post("/api/v1/auth/login", json={"password": "nope"}).status_code == 401
