# =============================================================================
# Auth API Routes
# =============================================================================
#
# Endpoints:
#   POST /auth/login              - Get a token
#   GET  /auth/me                 - Current user (null when anonymous)
#   GET  /auth/permissions/{role} - Capability map for a role
#
# There is no logout: tokens are stateless and simply expire.
#
# =============================================================================

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from tms.auth.context import AuthContext, UserProfile
from tms.auth.jwt import LoginResult
from tms.api.dependencies import get_auth_context, get_service
from tms.services.shipments import ShipmentService

router = APIRouter(prefix="/auth", tags=["auth"])


# =============================================================================
# Request Models
# =============================================================================

class LoginRequest(BaseModel):
    username: str
    password: str


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/login", response_model=LoginResult)
async def login(
    data: LoginRequest,
    service: ShipmentService = Depends(get_service),
):
    """
    Authenticate and get a token.

    Wrong username or password -> 401.
    """
    return service.login(data.username, data.password)


@router.get("/me", response_model=UserProfile | None)
async def get_current_user(
    ctx: AuthContext = Depends(get_auth_context),
    service: ShipmentService = Depends(get_service),
):
    """The signed-in user and what they may do."""
    return service.current_user(ctx.identity)


@router.get("/permissions/{role}", response_model=dict[str, bool])
async def get_role_permissions(
    role: str,
    service: ShipmentService = Depends(get_service),
):
    """Capability map for a role. Unknown roles get all False."""
    return service.get_permissions(role)
