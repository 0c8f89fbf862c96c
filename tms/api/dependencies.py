"""
FastAPI dependencies shared by the routers.

`get_auth_context()` turns the request's bearer credential into an
AuthContext. It never fails: a missing or bad credential yields an
anonymous context, and the guard that runs next decides whether
that's acceptable.
"""

from __future__ import annotations

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from tms.auth.context import AuthContext
from tms.config import Settings
from tms.services.shipments import ShipmentService


# Optional bearer (doesn't fail if no token)
optional_bearer = HTTPBearer(auto_error=False)


def get_service(request: Request) -> ShipmentService:
    """The service built at startup (see create_app)."""
    return request.app.state.service


def get_app_settings(request: Request) -> Settings:
    """The settings the app was created with."""
    return request.app.state.settings


async def get_auth_context(
    credentials: HTTPAuthorizationCredentials | None = Depends(optional_bearer),
    service: ShipmentService = Depends(get_service),
) -> AuthContext:
    """Resolve the request's identity. Anonymous when absent or invalid."""
    if not credentials:
        return AuthContext.anonymous()

    identity = service.authenticate(credentials.credentials)
    return AuthContext(identity=identity)
