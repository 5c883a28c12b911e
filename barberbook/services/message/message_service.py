# barberbook/services/message/message_service.py
"""Outbound notification queue. Messages are dispatched by hand through WhatsApp links."""
import logging
import uuid
from typing import Union, List, Optional, Dict
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from barberbook.core.exceptions import NotFoundError
from barberbook.models.appointment import Appointment, STATUS_CANCELLED
from barberbook.models.pending_message import PendingMessage, KIND_CANCELLATION, KIND_CONFIRMATION
from barberbook.services.business.settings_service import SettingsService
from barberbook.utils.text_processing import format_date_long, format_phone_number, generate_whatsapp_link

logger = logging.getLogger(__name__)

CANCELLATION_TEMPLATE = (
    "Hello {customer_name}, your {service} appointment at {business_name} "
    "on {date} at {time} has been cancelled. Reply to this message to book a new time."
)


class _TemplateValues(dict):
    # Unknown placeholders are left in place rather than raising
    def __missing__(self, key):
        return "{" + key + "}"


class MessageService:
    @staticmethod
    def render_message(template: str, appointment: Appointment, business_name: str) -> str:
        """Fill {customer_name}, {service}, {date}, {time} and {business_name}"""
        values = _TemplateValues(
            customer_name=appointment.customer_name,
            service=appointment.service.name if appointment.service else "",
            date=format_date_long(appointment.appointment_date),
            time=appointment.appointment_time.strftime("%H:%M"),
            business_name=business_name,
        )
        return template.format_map(values)

    @staticmethod
    def queue_for_appointment(db: Session, appointment: Appointment, business_name: str) -> PendingMessage:
        """Add the confirmation or cancellation message for an appointment's current status"""
        if appointment.status == STATUS_CANCELLED:
            kind = KIND_CANCELLATION
            template = CANCELLATION_TEMPLATE
        else:
            kind = KIND_CONFIRMATION
            template = SettingsService.get_message_template(db)

        message = PendingMessage(
            id=uuid.uuid4(),
            appointment=appointment,
            kind=kind,
            message=MessageService.render_message(template, appointment, business_name),
            sent=False,
        )
        db.add(message)
        return message

    @staticmethod
    def list_messages(db: Session, sent: Optional[bool] = None) -> List[PendingMessage]:
        """Queued messages, oldest first"""
        stmt = select(PendingMessage)
        if sent is not None:
            stmt = stmt.where(PendingMessage.sent == sent)
        stmt = stmt.order_by(PendingMessage.created_at.asc())
        return list(db.execute(stmt).scalars().unique().all())

    @staticmethod
    def get_message(db: Session, message_id: Union[str, uuid.UUID]) -> PendingMessage:
        if isinstance(message_id, str):
            try:
                message_id = uuid.UUID(message_id)
            except ValueError:
                raise NotFoundError("Message not found")

        message = db.get(PendingMessage, message_id)
        if not message:
            raise NotFoundError("Message not found")
        return message

    @staticmethod
    def mark_sent(db: Session, message_id: Union[str, uuid.UUID]) -> PendingMessage:
        message = MessageService.get_message(db, message_id)
        if not message.sent:
            message.sent = True
            message.sent_at = datetime.now(timezone.utc)
            db.commit()
            db.refresh(message)
            logger.info(f"Message {message.id} marked as sent")
        return message

    @staticmethod
    def delete_message(db: Session, message_id: Union[str, uuid.UUID]) -> None:
        message = MessageService.get_message(db, message_id)
        db.delete(message)
        db.commit()
        logger.info(f"Message {message_id} deleted")

    @staticmethod
    def serialize(message: PendingMessage) -> Dict:
        appointment = message.appointment
        contact = appointment.customer_contact if appointment else ""
        return {
            "id": str(message.id),
            "appointment_id": str(message.appointment_id),
            "kind": message.kind,
            "message": message.message,
            "sent": message.sent,
            "customer_name": appointment.customer_name if appointment else None,
            "customer_contact": format_phone_number(contact),
            "whatsapp_link": generate_whatsapp_link(contact, message.message),
            "created_at": message.created_at.isoformat() if message.created_at else None,
            "sent_at": message.sent_at.isoformat() if message.sent_at else None,
        }
