"""
Pydantic schemas for the service catalog
"""
from pydantic import BaseModel, Field
from typing import Optional, List


class ServiceCreate(BaseModel):
    """Request model for creating a service"""
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    price: float = Field(..., ge=0)
    duration_minutes: int = Field(..., gt=0, description="Duration in minutes")
    active: bool = True


class ServiceUpdate(BaseModel):
    """Request model for updating a service"""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    duration_minutes: Optional[int] = Field(None, gt=0)
    active: Optional[bool] = None


class ServiceResponse(BaseModel):
    """Response model for service data"""
    id: str
    name: str
    description: Optional[str] = None
    price: float
    formatted_price: str
    duration_minutes: int
    formatted_duration: str
    active: bool
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class ServiceListResponse(BaseModel):
    """Response model for service list"""
    total: int
    services: List[ServiceResponse]
