"""
Core domain: shipment models, errors, and shared utilities.
"""

from tms.core.errors import (
    TMSError,
    InvalidCredentials,
    Unauthenticated,
    Forbidden,
    NotFound,
)
from tms.core.models import (
    Location,
    TrackingEvent,
    Shipment,
    ShipmentInput,
    ShipmentUpdate,
    ShipmentFilter,
    LocationFilter,
    ShipmentPage,
    ShipmentSortField,
    SortOrder,
)

__all__ = [
    # Errors
    "TMSError",
    "InvalidCredentials",
    "Unauthenticated",
    "Forbidden",
    "NotFound",
    # Models
    "Location",
    "TrackingEvent",
    "Shipment",
    "ShipmentInput",
    "ShipmentUpdate",
    "ShipmentFilter",
    "LocationFilter",
    "ShipmentPage",
    "ShipmentSortField",
    "SortOrder",
]
