"""
Pydantic schemas for business settings
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List


class SettingsUpdateRequest(BaseModel):
    """
    Schema for updating business settings.
    All fields are optional - only send what you want to update.
    """
    work_start_time: Optional[str] = Field(None, pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    work_end_time: Optional[str] = Field(None, pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    slot_interval_minutes: Optional[int] = None
    weekday_off: Optional[List[int]] = None
    specific_days_off: Optional[List[str]] = None
    whatsapp_number: Optional[str] = Field(None, max_length=20)
    whatsapp_message_template: Optional[str] = None
    admin_password: Optional[str] = Field(None, min_length=6)

    @field_validator("weekday_off")
    @classmethod
    def validate_weekdays(cls, v):
        if v is None:
            return v
        for day in v:
            if day < 0 or day > 6:
                raise ValueError("Weekdays must be between 0 (Sunday) and 6 (Saturday)")
        return v


class SettingsResponse(BaseModel):
    work_start_time: str
    work_end_time: str
    slot_interval_minutes: int
    weekday_off: List[int]
    specific_days_off: List[str]
    whatsapp_number: Optional[str] = None
    whatsapp_message_template: Optional[str] = None
    updated_at: Optional[str] = None


class DayOffRequest(BaseModel):
    date: str = Field(..., description="YYYY-MM-DD")
    reason: Optional[str] = None
