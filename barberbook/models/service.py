# barberbook/models/service.py
"""
Service Model - the catalog of bookable services.
Price and duration here are the live values; appointments freeze their own copy.
"""
from sqlalchemy import Column, String, Numeric, Integer, Boolean, DateTime, Text, Uuid
import uuid
from barberbook.models.base import Base, utcnow


class Service(Base):
    """A bookable service (haircut, beard trim, ...)"""
    __tablename__ = "services"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Core service details
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)

    # Stored as decimal for precision
    price = Column(Numeric(10, 2), nullable=False, default=0)
    duration_minutes = Column(Integer, nullable=False)

    # Only active services are offered to customers
    active = Column(Boolean, default=True, nullable=False, index=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<Service(id={self.id}, name={self.name})>"

    def to_dict(self):
        """Convert to dictionary for API responses"""
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "price": float(self.price) if self.price is not None else None,
            "formatted_price": self.formatted_price,
            "duration_minutes": self.duration_minutes,
            "formatted_duration": self.formatted_duration,
            "active": self.active,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @property
    def formatted_price(self) -> str:
        """Return human-readable price string"""
        return f"R$ {self.price or 0:.2f}"

    @property
    def formatted_duration(self) -> str:
        """Return human-readable duration string"""
        hours = self.duration_minutes // 60
        minutes = self.duration_minutes % 60

        if hours > 0 and minutes > 0:
            return f"{hours}h {minutes}m"
        elif hours > 0:
            return f"{hours}h"
        else:
            return f"{minutes}m"
