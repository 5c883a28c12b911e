# barberbook/models/base.py
"""Declarative base shared by all models"""
from datetime import datetime, timezone

from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    """Timezone-aware current time used for created_at/updated_at columns"""
    return datetime.now(timezone.utc)
