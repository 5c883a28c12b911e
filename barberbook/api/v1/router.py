"""
API v1 router setup
Organized into: public (customers) and dashboard (admin session) routes
"""
from fastapi import APIRouter

from barberbook.api.v1.public import catalog, availability, bookings, auth
from barberbook.api.v1.dashboard import appointments, settings, services, messages

api_v1_router = APIRouter()

# ============================================================================
# PUBLIC ROUTES (No authentication required)
# ============================================================================
api_v1_router.include_router(catalog.router)
api_v1_router.include_router(availability.router)
api_v1_router.include_router(bookings.router)
api_v1_router.include_router(
    auth.router,
    # No prefix needed - auth.router already has "/auth" prefix
    tags=["Authentication"]
)

# ============================================================================
# DASHBOARD ROUTES (Admin session token required)
# ============================================================================
for dashboard_router in (appointments.router, settings.router, services.router, messages.router):
    api_v1_router.include_router(
        dashboard_router,
        prefix="/dashboard",
        tags=["Dashboard"]
    )


@api_v1_router.get("/", tags=["Info"])
async def api_info():
    """
    API information and available endpoints.
    """
    return {
        "version": "1.0",
        "authentication": {
            "public": "No authentication required",
            "dashboard": "Admin session token required (POST /auth/login)",
        }
    }
