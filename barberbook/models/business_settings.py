# barberbook/models/business_settings.py
"""
Business Settings Model - singleton row holding the working-hours configuration
read by the availability rules, plus the notification and admin settings.
"""
from datetime import time
from sqlalchemy import Column, String, Integer, DateTime, JSON, Text, Time
from barberbook.models.base import Base, utcnow

DEFAULT_MESSAGE_TEMPLATE = (
    "Hello {customer_name}, your {service} appointment at {business_name} "
    "is confirmed for {date} at {time}!"
)


class BusinessSettings(Base):
    __tablename__ = "business_settings"

    id = Column(Integer, primary_key=True)

    # Working hours
    work_start_time = Column(Time, nullable=False, default=time(9, 0))
    work_end_time = Column(Time, nullable=False, default=time(18, 0))
    slot_interval_minutes = Column(Integer, nullable=False, default=30)

    # Closures
    weekday_off = Column(JSON, default=lambda: [0])  # 0=Sunday, 6=Saturday
    specific_days_off = Column(JSON, default=list)  # ["YYYY-MM-DD", ...]

    # Notifications
    whatsapp_number = Column(String(20), nullable=True)
    whatsapp_message_template = Column(Text, default=DEFAULT_MESSAGE_TEMPLATE)

    # Admin access
    admin_password_hash = Column(String(255), nullable=True)

    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<BusinessSettings(id={self.id})>"

    def to_dict(self):
        """Convert to dictionary for API responses (never exposes the password hash)"""
        return {
            "work_start_time": self.work_start_time.strftime("%H:%M"),
            "work_end_time": self.work_end_time.strftime("%H:%M"),
            "slot_interval_minutes": self.slot_interval_minutes,
            "weekday_off": sorted(self.weekday_off or []),
            "specific_days_off": sorted(self.specific_days_off or []),
            "whatsapp_number": self.whatsapp_number,
            "whatsapp_message_template": self.whatsapp_message_template,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
