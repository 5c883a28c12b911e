# ============================================================================
# FILE: barberbook/api/v1/dashboard/appointments.py
# Operator appointment review - thin HTTP layer
# ============================================================================
from fastapi import APIRouter, Depends, Query, Path
from sqlalchemy.orm import Session
from datetime import date, datetime
from typing import Optional

from barberbook.api.dependencies import require_admin
from barberbook.config.database import get_db
from barberbook.config.settings import get_settings
from barberbook.models.admin_session import AdminSession
from barberbook.schemas.appointment import StatusUpdateRequest
from barberbook.services.appointment.appointment_query_service import AppointmentQueryService

router = APIRouter(prefix="/appointments", tags=["dashboard-appointments"])


@router.get("")
async def list_appointments(
        status: Optional[str] = Query(None, description="Filter by status (pending, confirmed, cancelled)"),
        start_date: Optional[date] = Query(None, description="Appointments on or after this date"),
        end_date: Optional[date] = Query(None, description="Appointments on or before this date"),
        updated_since: Optional[datetime] = Query(
            None, description="Only appointments changed after this cursor (the synced_at of a previous call)"
        ),
        session: AdminSession = Depends(require_admin),
        db: Session = Depends(get_db)
):
    """
    Appointments ordered by date and time.
    Requires admin session.
    """
    return AppointmentQueryService.list_appointments(
        db=db,
        status=status,
        start_date=start_date,
        end_date=end_date,
        updated_since=updated_since
    )


@router.get("/stats")
async def get_appointment_stats(
        session: AdminSession = Depends(require_admin),
        db: Session = Depends(get_db)
):
    """
    Counts by status.
    Requires admin session.
    """
    return AppointmentQueryService.get_appointment_stats(db)


@router.get("/{appointment_id}")
async def get_appointment(
        appointment_id: str = Path(..., description="The appointment ID"),
        session: AdminSession = Depends(require_admin),
        db: Session = Depends(get_db)
):
    return AppointmentQueryService.get_appointment(db, appointment_id).to_dict()


@router.patch("/{appointment_id}/status")
async def update_appointment_status(
        request: StatusUpdateRequest,
        appointment_id: str = Path(..., description="The appointment ID"),
        session: AdminSession = Depends(require_admin),
        db: Session = Depends(get_db)
):
    """
    Confirm or cancel an appointment. A notification message for the
    customer is queued in the same step.
    """
    return AppointmentQueryService.update_status(
        db, appointment_id, request.status, get_settings().BUSINESS_NAME
    )
