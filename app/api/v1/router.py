"""
API router setup
Organized into: public (booking, availability, login) and staff routes (JWT + role)
"""
from fastapi import APIRouter

from app.api.v1 import reservations, reservation_settings
from app.api.v1.public import auth

api_router = APIRouter()

# ============================================================================
# AUTHENTICATION
# ============================================================================
api_router.include_router(
    auth.router,
    # No prefix needed - auth.router already has "/auth" prefix
    tags=["Authentication"]
)

# ============================================================================
# RESERVATIONS (public booking + staff management, checked per endpoint)
# ============================================================================
api_router.include_router(
    reservations.router,
    tags=["Reservations"]
)

api_router.include_router(
    reservation_settings.router,
    tags=["Reservations"]
)


# ============================================================================
# ROOT ENDPOINT - API Info
# ============================================================================
@api_router.get("/", tags=["Info"])
async def api_info():
    """API information and the authentication each route family expects."""
    return {
        "version": "1.0",
        "authentication": {
            "public": "No authentication required (availability, booking, settings read)",
            "staff": "JWT Bearer token + staff/admin/superuser role",
            "admin": "JWT Bearer token + admin/superuser role (deletes)"
        }
    }
