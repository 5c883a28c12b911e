# barberbook/services/business/settings_service.py
"""Service for reading and updating the business configuration"""
import logging
from dataclasses import dataclass, field
from datetime import date, time
from typing import FrozenSet, Iterable, Optional, Dict, Any

from passlib.context import CryptContext
from sqlalchemy.orm import Session

from barberbook.config.settings import get_settings
from barberbook.core.exceptions import BookingValidationError
from barberbook.models.business_settings import BusinessSettings, DEFAULT_MESSAGE_TEMPLATE
from barberbook.utils.text_processing import parse_date, parse_time

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ALLOWED_SLOT_INTERVALS = (15, 30, 45, 60)


@dataclass(frozen=True)
class BusinessConfiguration:
    """Read-only snapshot of the working-hours configuration"""
    work_start_time: time = time(9, 0)
    work_end_time: time = time(18, 0)
    slot_interval_minutes: int = 30
    weekday_off: FrozenSet[int] = field(default_factory=lambda: frozenset({0}))
    specific_days_off: FrozenSet[date] = field(default_factory=frozenset)

    @classmethod
    def from_model(cls, row: BusinessSettings) -> "BusinessConfiguration":
        return cls(
            work_start_time=parse_time(row.work_start_time),
            work_end_time=parse_time(row.work_end_time),
            slot_interval_minutes=row.slot_interval_minutes,
            weekday_off=frozenset(int(d) for d in (row.weekday_off or [])),
            specific_days_off=frozenset(parse_date(d) for d in (row.specific_days_off or [])),
        )


class SettingsService:
    """Handles the singleton business settings row"""

    @staticmethod
    def get_settings_row(db: Session) -> BusinessSettings:
        """Return the settings row, creating it with defaults on first access"""
        row = db.query(BusinessSettings).order_by(BusinessSettings.id.asc()).first()
        if row:
            return row

        row = BusinessSettings(
            admin_password_hash=pwd_context.hash(get_settings().DEFAULT_ADMIN_PASSWORD)
        )
        db.add(row)
        db.commit()
        db.refresh(row)
        logger.info("Created default business settings")
        return row

    @staticmethod
    def get_configuration(db: Session) -> BusinessConfiguration:
        return BusinessConfiguration.from_model(SettingsService.get_settings_row(db))

    @staticmethod
    def update_settings(db: Session, changes: Dict[str, Any]) -> BusinessSettings:
        """
        Apply a partial update to the business settings.

        Args:
            db: Database session
            changes: Fields to update. Times as HH:MM, days off as YYYY-MM-DD,
                     weekdays as 0 (Sunday) .. 6 (Saturday). A plain
                     ``admin_password`` is hashed before storing.

        Returns:
            The updated settings row

        Raises:
            BookingValidationError: If the resulting configuration is invalid
        """
        row = SettingsService.get_settings_row(db)

        start = SettingsService._time_or_current(changes, "work_start_time", row.work_start_time)
        end = SettingsService._time_or_current(changes, "work_end_time", row.work_end_time)
        if end <= start:
            raise BookingValidationError("Work end time must be after work start time")

        interval = changes.get("slot_interval_minutes")
        if interval is None:
            interval = row.slot_interval_minutes
        if interval not in ALLOWED_SLOT_INTERVALS:
            raise BookingValidationError(
                f"Slot interval must be one of {', '.join(str(i) for i in ALLOWED_SLOT_INTERVALS)} minutes"
            )

        weekday_off = None
        if changes.get("weekday_off") is not None:
            weekday_off = SettingsService._normalize_weekdays(changes["weekday_off"])

        row.work_start_time = start
        row.work_end_time = end
        row.slot_interval_minutes = interval

        if weekday_off is not None:
            row.weekday_off = weekday_off
        if changes.get("specific_days_off") is not None:
            row.specific_days_off = sorted({parse_date(d).isoformat() for d in changes["specific_days_off"]})
        if "whatsapp_number" in changes:
            row.whatsapp_number = changes["whatsapp_number"]
        if changes.get("whatsapp_message_template"):
            row.whatsapp_message_template = changes["whatsapp_message_template"]
        if changes.get("admin_password"):
            row.admin_password_hash = pwd_context.hash(changes["admin_password"])
            logger.info("Admin password changed")

        db.commit()
        db.refresh(row)
        logger.info("Business settings updated")
        return row

    @staticmethod
    def verify_admin_password(db: Session, password: str) -> bool:
        row = SettingsService.get_settings_row(db)
        if not row.admin_password_hash or not password:
            return False
        return pwd_context.verify(password, row.admin_password_hash)

    @staticmethod
    def _normalize_weekdays(days: Iterable[int]) -> list:
        normalized = sorted({int(d) for d in days})
        if any(d < 0 or d > 6 for d in normalized):
            raise BookingValidationError("Weekdays must be between 0 (Sunday) and 6 (Saturday)")
        return normalized

    @staticmethod
    def add_day_off(db: Session, day: date, reason: Optional[str] = None) -> BusinessSettings:
        """Close the shop on one specific date"""
        row = SettingsService.get_settings_row(db)
        days = set(row.specific_days_off or [])
        days.add(parse_date(day).isoformat())
        row.specific_days_off = sorted(days)
        db.commit()
        db.refresh(row)
        logger.info(f"Added day off {day}" + (f" ({reason})" if reason else ""))
        return row

    @staticmethod
    def remove_day_off(db: Session, day: date) -> BusinessSettings:
        row = SettingsService.get_settings_row(db)
        day_str = parse_date(day).isoformat()
        row.specific_days_off = [d for d in (row.specific_days_off or []) if d != day_str]
        db.commit()
        db.refresh(row)
        return row

    @staticmethod
    def get_message_template(db: Session) -> str:
        """Confirmation template; never creates the settings row"""
        row = db.query(BusinessSettings).order_by(BusinessSettings.id.asc()).first()
        if row and row.whatsapp_message_template:
            return row.whatsapp_message_template
        return DEFAULT_MESSAGE_TEMPLATE

    @staticmethod
    def _time_or_current(changes: Dict[str, Any], key: str, current: time) -> time:
        value = changes.get(key)
        if value is None:
            return parse_time(current)
        try:
            return parse_time(value)
        except ValueError:
            raise BookingValidationError(f"{key} must be a valid HH:MM time")
