# ============================================================================
# FILE: barberbook/api/dependencies.py
# Admin session tokens and shared request dependencies
# ============================================================================
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Optional
from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt

from barberbook.config.database import get_db
from barberbook.config.settings import get_settings
from barberbook.models.admin_session import AdminSession
from barberbook.services.appointment.appointment_store import AppointmentStore
from barberbook.services.auth.admin_session_service import AdminSessionService

# ============================================================================
# Security Schemes
# ============================================================================

admin_security = HTTPBearer(
    scheme_name="Admin Session Token",
    description="Enter the access token returned by /auth/login"
)


# ============================================================================
# JWT Token Functions
# ============================================================================

def create_access_token(data: dict, expires_at: Optional[datetime] = None) -> str:
    """
    Create a JWT access token.

    Args:
        data: Dictionary with claims (should include 'sid' with the admin session id)
        expires_at: Optional absolute expiration time

    Returns:
        Encoded JWT token string
    """
    settings = get_settings()
    to_encode = data.copy()

    if expires_at is None:
        expires_at = datetime.now(timezone.utc) + timedelta(
            minutes=settings.ADMIN_SESSION_EXPIRE_MINUTES
        )

    to_encode.update({
        "exp": expires_at,
        "iat": datetime.now(timezone.utc),
        "type": "admin_session"
    })

    return jwt.encode(
        to_encode,
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM
    )


def verify_access_token(token: str) -> dict:
    """
    Verify and decode a JWT access token.

    Raises:
        HTTPException: If token is invalid or expired
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM]
        )
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Could not validate credentials: {str(e)}",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if payload.get("type") != "admin_session":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return payload


# ============================================================================
# Dependencies
# ============================================================================

def get_store(db: Session = Depends(get_db)) -> AppointmentStore:
    """Dependency to get an AppointmentStore bound to the request session."""
    return AppointmentStore(db)


async def require_admin(
        credentials: HTTPAuthorizationCredentials = Depends(admin_security),
        db: Session = Depends(get_db)
) -> AdminSession:
    """
    Dependency that requires a live admin session.

    Usage in routes:
        @router.get("/appointments")
        async def list_appointments(session: AdminSession = Depends(require_admin)):
            pass

    Raises:
        HTTPException 401: If the token is invalid, or its session was revoked or expired
    """
    payload = verify_access_token(credentials.credentials)

    session_id = payload.get("sid")
    session = AdminSessionService.get_active_session(db, session_id) if session_id else None

    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session expired or logged out",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return session
