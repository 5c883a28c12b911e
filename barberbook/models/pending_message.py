# barberbook/models/pending_message.py
from sqlalchemy import Column, String, DateTime, Text, Boolean, ForeignKey, Uuid
from sqlalchemy.orm import relationship
import uuid
from barberbook.models.base import Base, utcnow

KIND_CONFIRMATION = "confirmation"
KIND_CANCELLATION = "cancellation"


class PendingMessage(Base):
    """Outbound customer notification waiting to be dispatched by the operator"""
    __tablename__ = "pending_messages"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    appointment_id = Column(Uuid(as_uuid=True), ForeignKey("appointments.id"), nullable=False, index=True)
    kind = Column(String(20), nullable=False)  # confirmation, cancellation
    message = Column(Text, nullable=False)
    sent = Column(Boolean, default=False, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    sent_at = Column(DateTime(timezone=True), nullable=True)

    appointment = relationship("Appointment", lazy="joined")
