# ============================================================================
# FILE: barberbook/api/v1/dashboard/messages.py
# Outbound notification queue
# ============================================================================
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from barberbook.api.dependencies import require_admin
from barberbook.config.database import get_db
from barberbook.models.admin_session import AdminSession
from barberbook.services.message.message_service import MessageService

router = APIRouter(prefix="/messages", tags=["dashboard-messages"])


@router.get("")
async def list_messages(
        sent: Optional[bool] = Query(None, description="Filter by dispatch state"),
        session: AdminSession = Depends(require_admin),
        db: Session = Depends(get_db)
):
    """
    Queued customer messages, each with a WhatsApp link the operator opens to send it.
    """
    messages = MessageService.list_messages(db, sent=sent)
    return {
        "total": len(messages),
        "messages": [MessageService.serialize(m) for m in messages]
    }


@router.post("/{message_id}/sent")
async def mark_message_sent(
        message_id: str,
        session: AdminSession = Depends(require_admin),
        db: Session = Depends(get_db)
):
    return MessageService.serialize(MessageService.mark_sent(db, message_id))


@router.delete("/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_message(
        message_id: str,
        session: AdminSession = Depends(require_admin),
        db: Session = Depends(get_db)
):
    MessageService.delete_message(db, message_id)
