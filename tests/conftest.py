"""Shared test fixtures."""
from datetime import date, timedelta
from decimal import Decimal
from types import SimpleNamespace
import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from barberbook.config.database import get_db
from barberbook.config.settings import get_settings
from barberbook.main import create_app
from barberbook.models import Base, Service
from barberbook.services.business.settings_service import SettingsService


def next_open_date(min_days_ahead: int = 2) -> date:
    """First date at least min_days_ahead out that is not a Sunday"""
    day = date.today() + timedelta(days=min_days_ahead)
    while day.isoweekday() == 7:
        day += timedelta(days=1)
    return day


def next_sunday(min_days_ahead: int = 1) -> date:
    day = date.today() + timedelta(days=min_days_ahead)
    while day.isoweekday() != 7:
        day += timedelta(days=1)
    return day


@pytest.fixture
def engine(tmp_path):
    """File-backed SQLite so separate sessions behave like separate clients."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'barberbook_test.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    # Default settings row (09:00-18:00, 30 min, Sundays off)
    SettingsService.get_settings_row(session)
    yield session
    session.close()


@pytest.fixture
def make_service(db):
    """Create a service row."""
    def _create(name="Haircut", price="45.00", duration_minutes=30, active=True):
        service = Service(
            id=uuid.uuid4(),
            name=name,
            price=Decimal(price),
            duration_minutes=duration_minutes,
            active=active,
        )
        db.add(service)
        db.commit()
        db.refresh(service)
        return service
    return _create


@pytest.fixture
def haircut(make_service):
    return make_service()


@pytest.fixture
def make_appointment():
    """Plain stand-in for an appointment row, for the pure availability rules."""
    def _create(appointment_date, appointment_time, status="pending", duration_minutes=30):
        return SimpleNamespace(
            appointment_date=appointment_date,
            appointment_time=appointment_time,
            status=status,
            duration_minutes=duration_minutes,
        )
    return _create


@pytest.fixture
def open_day():
    return next_open_date()


@pytest.fixture
def sunday():
    return next_sunday()


@pytest.fixture
def client(session_factory, db):
    """FastAPI test client bound to the test database."""
    app = create_app(use_lifespan=False)

    def _get_test_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_test_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(client):
    response = client.post(
        "/api/v1/auth/login",
        json={"password": get_settings().DEFAULT_ADMIN_PASSWORD}
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def booking_payload(haircut, open_day):
    """Valid booking body for the next open day at 14:00."""
    return {
        "service_id": str(haircut.id),
        "appointment_date": open_day.isoformat(),
        "appointment_time": "14:00",
        "customer_name": "Carlos Silva",
        "customer_contact": "(11) 98765-4321",
    }
