# ============================================================================
# FILE: barberbook/api/v1/dashboard/settings.py
# Business hours, closures and notification settings
# ============================================================================
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from barberbook.api.dependencies import require_admin
from barberbook.config.database import get_db
from barberbook.models.admin_session import AdminSession
from barberbook.schemas.business import SettingsUpdateRequest, SettingsResponse, DayOffRequest
from barberbook.services.business.settings_service import SettingsService
from barberbook.utils.text_processing import parse_date
from barberbook.core.exceptions import BookingValidationError

router = APIRouter(prefix="/settings", tags=["dashboard-settings"])


def _parse_day(value: str):
    try:
        return parse_date(value)
    except ValueError:
        raise BookingValidationError("Dates must be YYYY-MM-DD")


@router.get("", response_model=SettingsResponse)
async def get_settings_view(
        session: AdminSession = Depends(require_admin),
        db: Session = Depends(get_db)
):
    return SettingsService.get_settings_row(db).to_dict()


@router.put("", response_model=SettingsResponse)
async def update_settings(
        request: SettingsUpdateRequest,
        session: AdminSession = Depends(require_admin),
        db: Session = Depends(get_db)
):
    """
    Update working hours, closures and notification settings.
    Only the fields sent are changed.
    """
    changes = request.model_dump(exclude_unset=True)
    if changes.get("specific_days_off") is not None:
        changes["specific_days_off"] = [_parse_day(d) for d in changes["specific_days_off"]]

    return SettingsService.update_settings(db, changes).to_dict()


@router.post("/days-off", response_model=SettingsResponse)
async def add_day_off(
        request: DayOffRequest,
        session: AdminSession = Depends(require_admin),
        db: Session = Depends(get_db)
):
    return SettingsService.add_day_off(db, _parse_day(request.date), request.reason).to_dict()


@router.delete("/days-off/{day}", response_model=SettingsResponse)
async def remove_day_off(
        day: str,
        session: AdminSession = Depends(require_admin),
        db: Session = Depends(get_db)
):
    return SettingsService.remove_day_off(db, _parse_day(day)).to_dict()
