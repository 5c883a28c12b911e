"""
Pydantic schemas for the public booking flow
"""
from pydantic import BaseModel, Field
from typing import List, Optional


class BookingRequest(BaseModel):
    """
    Booking submission. Field-level rules (non-empty name, 10+ digit contact)
    are enforced by the booking service so every caller gets the same errors.
    """
    service_id: str
    appointment_date: str = Field(..., description="YYYY-MM-DD")
    appointment_time: str = Field(..., description="HH:MM, 24-hour")
    customer_name: str = ""
    customer_contact: str = Field("", description="WhatsApp number")

    class Config:
        json_schema_extra = {
            "example": {
                "service_id": "550e8400-e29b-41d4-a716-446655440000",
                "appointment_date": "2025-06-10",
                "appointment_time": "14:00",
                "customer_name": "Carlos Silva",
                "customer_contact": "(11) 98765-4321"
            }
        }


class ServiceSummary(BaseModel):
    id: str
    name: str
    duration_minutes: int
    price: float


class BookingConfirmation(BaseModel):
    """Response for a committed booking"""
    appointment_id: str
    status: str
    service: ServiceSummary
    date: str
    date_display: str
    time: str
    customer_name: str
    customer_contact: str


class SlotResponse(BaseModel):
    date: str
    time: str
    end_time: str
    duration_minutes: int


class SlotListResponse(BaseModel):
    service_id: str
    date: str
    total: int
    slots: List[SlotResponse]


class CalendarDay(BaseModel):
    date: str
    weekday: int
    available: bool
    reason: Optional[str] = None
    slots_count: int


class CalendarResponse(BaseModel):
    service_id: str
    days: List[CalendarDay]
