# =============================================================================
# Shipment API Routes
# =============================================================================
#
# Endpoints:
#   GET    /shipments            - Filtered, sorted, paginated list
#   GET    /shipments/{id}       - One shipment
#   POST   /shipments            - Create (ADMIN)
#   PATCH  /shipments/{id}       - Partial update (ADMIN, EMPLOYEE)
#   DELETE /shipments/{id}       - Delete (ADMIN)
#   POST   /shipments/{id}/flag  - Toggle flag (ADMIN, EMPLOYEE)
#
# Role checks happen in ShipmentService; this layer only resolves
# the caller and shapes requests.
#
# =============================================================================

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from tms.auth.context import AuthContext
from tms.api.dependencies import get_app_settings, get_auth_context, get_service
from tms.config import Settings
from tms.core.models import (
    LocationFilter,
    Shipment,
    ShipmentFilter,
    ShipmentInput,
    ShipmentPage,
    ShipmentSortField,
    ShipmentUpdate,
    SortOrder,
)
from tms.services.shipments import ShipmentService

router = APIRouter(prefix="/shipments", tags=["shipments"])


def _location_filter(
    city: str | None,
    state: str | None,
    country: str | None,
) -> LocationFilter | None:
    if city is None and state is None and country is None:
        return None
    return LocationFilter(city=city, state=state, country=country)


# =============================================================================
# Reads
# =============================================================================

@router.get("", response_model=ShipmentPage)
async def list_shipments(
    status: str | None = None,
    shipper_name: str | None = Query(None, alias="shipperName"),
    carrier_name: str | None = Query(None, alias="carrierName"),
    is_flagged: bool | None = Query(None, alias="isFlagged"),
    pickup_city: str | None = Query(None, alias="pickupCity"),
    pickup_state: str | None = Query(None, alias="pickupState"),
    pickup_country: str | None = Query(None, alias="pickupCountry"),
    delivery_city: str | None = Query(None, alias="deliveryCity"),
    delivery_state: str | None = Query(None, alias="deliveryState"),
    delivery_country: str | None = Query(None, alias="deliveryCountry"),
    sort_by: ShipmentSortField | None = Query(None, alias="sortBy"),
    sort_order: SortOrder = Query(SortOrder.ASC, alias="sortOrder"),
    page: int = Query(1),
    page_size: int | None = Query(None, alias="pageSize", ge=1),
    service: ShipmentService = Depends(get_service),
    settings: Settings = Depends(get_app_settings),
):
    """List shipments. Out-of-range pages are clamped to the last page."""
    if page_size is not None and page_size > settings.max_page_size:
        raise HTTPException(
            status_code=422,
            detail=f"pageSize must be at most {settings.max_page_size}",
        )

    criteria = ShipmentFilter(
        status=status,
        shipper_name=shipper_name,
        carrier_name=carrier_name,
        is_flagged=is_flagged,
        pickup_location=_location_filter(pickup_city, pickup_state, pickup_country),
        delivery_location=_location_filter(delivery_city, delivery_state, delivery_country),
    )
    return service.list_shipments(
        criteria,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        page_size=page_size or settings.default_page_size,
    )


@router.get("/{shipment_id}", response_model=Shipment)
async def get_shipment(
    shipment_id: str,
    service: ShipmentService = Depends(get_service),
):
    """Get a shipment by ID."""
    shipment = service.get_shipment(shipment_id)
    if not shipment:
        raise HTTPException(status_code=404, detail="Shipment not found")
    return shipment


# =============================================================================
# Writes
# =============================================================================

@router.post("", response_model=Shipment, status_code=201)
async def create_shipment(
    data: ShipmentInput,
    ctx: AuthContext = Depends(get_auth_context),
    service: ShipmentService = Depends(get_service),
):
    """Create a shipment. ADMIN only."""
    return service.create_shipment(ctx.identity, data)


@router.patch("/{shipment_id}", response_model=Shipment)
async def update_shipment(
    shipment_id: str,
    changes: ShipmentUpdate,
    ctx: AuthContext = Depends(get_auth_context),
    service: ShipmentService = Depends(get_service),
):
    """Merge the supplied fields into a shipment."""
    return service.update_shipment(ctx.identity, shipment_id, changes)


@router.delete("/{shipment_id}")
async def delete_shipment(
    shipment_id: str,
    ctx: AuthContext = Depends(get_auth_context),
    service: ShipmentService = Depends(get_service),
):
    """Delete a shipment. Unknown ids report deleted=false, not 404."""
    return {"deleted": service.delete_shipment(ctx.identity, shipment_id)}


@router.post("/{shipment_id}/flag", response_model=Shipment)
async def toggle_flag(
    shipment_id: str,
    ctx: AuthContext = Depends(get_auth_context),
    service: ShipmentService = Depends(get_service),
):
    """Flip a shipment's flag."""
    return service.toggle_flag(ctx.identity, shipment_id)
