# barberbook/services/auth/admin_session_service.py
"""Admin session lifecycle: login opens a session, logout or expiry closes it"""
import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from sqlalchemy.orm import Session

from barberbook.models.admin_session import AdminSession

logger = logging.getLogger(__name__)


class AdminSessionService:

    @staticmethod
    def start_session(db: Session, expires_minutes: int) -> AdminSession:
        session = AdminSession(
            id=uuid.uuid4(),
            expires_at=datetime.now(timezone.utc) + timedelta(minutes=expires_minutes),
        )
        db.add(session)
        db.commit()
        db.refresh(session)
        logger.info(f"Admin session {session.id} started")
        return session

    @staticmethod
    def get_active_session(db: Session, session_id: Union[str, uuid.UUID]) -> Optional[AdminSession]:
        """Return the session if it exists and is neither revoked nor expired"""
        if isinstance(session_id, str):
            try:
                session_id = uuid.UUID(session_id)
            except ValueError:
                return None

        session = db.get(AdminSession, session_id)
        if not session or not session.is_valid():
            return None
        return session

    @staticmethod
    def end_session(db: Session, session: AdminSession) -> None:
        session.revoke()
        db.commit()
        logger.info(f"Admin session {session.id} ended")
