# ============================================================================
# FILE: barberbook/api/v1/public/catalog.py
# Public service catalog
# ============================================================================
from fastapi import APIRouter, Depends, Path

from barberbook.api.dependencies import get_store
from barberbook.core.exceptions import NotFoundError
from barberbook.schemas.service import ServiceListResponse, ServiceResponse
from barberbook.services.appointment.appointment_store import AppointmentStore

router = APIRouter(prefix="/services", tags=["Public"])


@router.get("", response_model=ServiceListResponse)
async def list_services(store: AppointmentStore = Depends(get_store)):
    """
    Active services, cheapest first.
    """
    services = store.list_active_services()
    return ServiceListResponse(
        total=len(services),
        services=[ServiceResponse(**s.to_dict()) for s in services]
    )


@router.get("/{service_id}", response_model=ServiceResponse)
async def get_service(
        service_id: str = Path(..., description="The service ID"),
        store: AppointmentStore = Depends(get_store)
):
    service = store.get_service(service_id)
    if not service or not service.active:
        raise NotFoundError("Service not found")
    return ServiceResponse(**service.to_dict())
