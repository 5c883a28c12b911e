# barberbook/models/appointment.py
from sqlalchemy import Column, String, Integer, Numeric, Date, Time, DateTime, ForeignKey, Index, Uuid, text
from sqlalchemy.orm import relationship
import uuid
from barberbook.models.base import Base, utcnow

STATUS_PENDING = "pending"
STATUS_CONFIRMED = "confirmed"
STATUS_CANCELLED = "cancelled"

ACTIVE_STATUSES = (STATUS_PENDING, STATUS_CONFIRMED)
ALL_STATUSES = (STATUS_PENDING, STATUS_CONFIRMED, STATUS_CANCELLED)


class Appointment(Base):
    __tablename__ = "appointments"
    __table_args__ = (
        # At most one pending/confirmed appointment per slot
        Index(
            "uq_appointments_active_slot",
            "appointment_date",
            "appointment_time",
            unique=True,
            sqlite_where=text("status != 'cancelled'"),
            postgresql_where=text("status != 'cancelled'"),
        ),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # References
    service_id = Column(Uuid(as_uuid=True), ForeignKey("services.id"), nullable=False)

    # Customer info
    customer_name = Column(String(200), nullable=False)
    customer_contact = Column(String(30), nullable=False)  # WhatsApp number

    # Appointment details
    appointment_date = Column(Date, nullable=False, index=True)
    appointment_time = Column(Time, nullable=False)

    # Frozen at submission time
    service_price = Column(Numeric(10, 2), nullable=False)
    duration_minutes = Column(Integer, nullable=False)

    # Status tracking
    status = Column(String(20), default=STATUS_PENDING, nullable=False)  # pending, confirmed, cancelled

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, index=True)

    service = relationship("Service", lazy="joined")

    def __repr__(self):
        return f"<Appointment(id={self.id}, {self.appointment_date} {self.appointment_time}, {self.status})>"

    def to_dict(self):
        """Convert to dictionary for API responses"""
        return {
            "id": str(self.id),
            "service_id": str(self.service_id),
            "service_name": self.service.name if self.service else None,
            "customer_name": self.customer_name,
            "customer_contact": self.customer_contact,
            "appointment_date": self.appointment_date.isoformat(),
            "appointment_time": self.appointment_time.strftime("%H:%M"),
            "service_price": float(self.service_price),
            "duration_minutes": self.duration_minutes,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
