# barberbook/models/admin_session.py
"""Admin session rows backing the signed session tokens"""
from sqlalchemy import Column, DateTime, Uuid
from datetime import datetime, timezone
import uuid

from barberbook.models.base import Base, utcnow


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class AdminSession(Base):
    """
    One row per admin login. A token is honoured only while its session
    is neither revoked (logout) nor expired.
    """
    __tablename__ = "admin_sessions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    revoked_at = Column(DateTime(timezone=True), nullable=True)

    def is_valid(self) -> bool:
        """
        Check if the session is still valid.

        Returns:
            True if session is not revoked and not expired, False otherwise
        """
        if self.revoked_at is not None:
            return False

        if datetime.now(timezone.utc) > _as_utc(self.expires_at):
            return False

        return True

    def revoke(self):
        """Revoke this session."""
        self.revoked_at = datetime.now(timezone.utc)

    def __repr__(self):
        return f"<AdminSession {self.id} expires={self.expires_at}>"
