# ============================================================================
# FILE: barberbook/api/v1/dashboard/services.py
# Service catalog management
# ============================================================================
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from barberbook.api.dependencies import require_admin
from barberbook.config.database import get_db
from barberbook.models.admin_session import AdminSession
from barberbook.schemas.service import ServiceCreate, ServiceUpdate, ServiceResponse, ServiceListResponse
from barberbook.services.catalog.catalog_service import CatalogService

router = APIRouter(prefix="/services", tags=["dashboard-services"])


@router.get("", response_model=ServiceListResponse)
async def list_services(
        include_inactive: bool = Query(True),
        session: AdminSession = Depends(require_admin),
        db: Session = Depends(get_db)
):
    services = CatalogService.list_services(db, include_inactive=include_inactive)
    return ServiceListResponse(
        total=len(services),
        services=[ServiceResponse(**s.to_dict()) for s in services]
    )


@router.post("", response_model=ServiceResponse, status_code=status.HTTP_201_CREATED)
async def create_service(
        service_data: ServiceCreate,
        session: AdminSession = Depends(require_admin),
        db: Session = Depends(get_db)
):
    service = CatalogService.create_service(db, service_data.model_dump())
    return ServiceResponse(**service.to_dict())


@router.patch("/{service_id}", response_model=ServiceResponse)
async def update_service(
        service_id: str,
        changes: ServiceUpdate,
        session: AdminSession = Depends(require_admin),
        db: Session = Depends(get_db)
):
    """
    Edit or (de)activate a service. Existing appointments keep the price they were booked at.
    """
    service = CatalogService.update_service(db, service_id, changes.model_dump(exclude_unset=True))
    return ServiceResponse(**service.to_dict())
