# ============================================================================
# FILE: barberbook/api/v1/public/auth.py
# Admin login / logout
# ============================================================================
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from barberbook.api.dependencies import create_access_token, require_admin
from barberbook.config.database import get_db
from barberbook.config.settings import get_settings
from barberbook.models.admin_session import AdminSession
from barberbook.schemas.appointment import LoginRequest, TokenResponse
from barberbook.services.auth.admin_session_service import AdminSessionService
from barberbook.services.business.settings_service import SettingsService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, db: Session = Depends(get_db)):
    """
    Exchange the admin password for a session token.
    """
    if not SettingsService.verify_admin_password(db, request.password):
        logger.warning("Failed admin login attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect password"
        )

    session = AdminSessionService.start_session(db, get_settings().ADMIN_SESSION_EXPIRE_MINUTES)
    token = create_access_token({"sid": str(session.id)}, expires_at=session.expires_at)

    return TokenResponse(access_token=token, expires_at=session.expires_at.isoformat())


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
        session: AdminSession = Depends(require_admin),
        db: Session = Depends(get_db)
):
    """
    End the current admin session. The token stops working immediately.
    """
    AdminSessionService.end_session(db, session)
