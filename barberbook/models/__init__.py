# barberbook/models/__init__.py
from .base import Base
from .service import Service
from .business_settings import BusinessSettings
from .appointment import Appointment
from .pending_message import PendingMessage
from .admin_session import AdminSession

__all__ = [
    "Base",
    "Service",
    "BusinessSettings",
    "Appointment",
    "PendingMessage",
    "AdminSession",
]
