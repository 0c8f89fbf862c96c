"""
FastAPI application for the TMS backend.

Run with:  uvicorn tms.api.app:app --reload
"""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tms import __version__
from tms.api import auth_routes, shipment_routes
from tms.auth.jwt import Authenticator, UserDirectory
from tms.config import Settings, get_settings
from tms.core.errors import TMSError
from tms.seed import seed_shipments, seed_users
from tms.services.shipments import ShipmentService
from tms.storage import ShipmentStore

logger = logging.getLogger(__name__)


# =============================================================================
# Wiring
# =============================================================================


def build_service(settings: Settings | None = None) -> ShipmentService:
    """
    Create the store, user directory and service for one process.

    Demo users and shipments are loaded when ``seed_demo_data`` is on.
    """
    settings = settings or get_settings()

    users = UserDirectory()
    store = ShipmentStore()
    if settings.seed_demo_data:
        seed_users(users)
        seed_shipments(store)
        logger.info(f"Seeded {len(users)} users and {len(store)} shipments")

    return ShipmentService(store, Authenticator.from_settings(users, settings))


# =============================================================================
# Error Handling
# =============================================================================


async def handle_domain_error(request: Request, exc: TMSError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=headers,
    )


# =============================================================================
# App Setup
# =============================================================================


def create_app(
    service: ShipmentService | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """
    Build the app. Pass ``service`` to skip startup wiring (tests do).
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialize and cleanup app resources."""
        if getattr(app.state, "service", None) is None:
            app.state.service = build_service(settings)
        logger.info(f"TMS API starting in {settings.environment} mode")

        yield

        logger.info("TMS API shutting down")

    app = FastAPI(
        title="TMS API",
        description="Shipment tracking with role-based access",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.service = service
    app.state.settings = settings

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.add_exception_handler(TMSError, handle_domain_error)

    # Include routers
    app.include_router(auth_routes.router)
    app.include_router(shipment_routes.router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "tms-api"}

    return app


app = create_app()
