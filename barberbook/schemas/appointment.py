"""
Pydantic schemas for operator appointment management
"""
from pydantic import BaseModel
from typing import Literal


class StatusUpdateRequest(BaseModel):
    status: Literal["confirmed", "cancelled"]


class LoginRequest(BaseModel):
    """Request body for admin login."""
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: str
