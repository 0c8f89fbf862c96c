"""
Core data models for the TMS backend.

Shipments and the value types embedded in them. Attribute names are
snake_case in Python; the JSON form uses camelCase aliases
(``shipperName``, ``isFlagged``...) and both are accepted on input.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that speaks camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Value types
# =============================================================================


class Location(CamelModel):
    """A place. No identity, embedded by value."""

    city: str
    state: str
    country: str


class TrackingEvent(CamelModel):
    """One entry in a shipment's tracking history."""

    timestamp: str
    status: str
    location: Location


# =============================================================================
# Shipment
# =============================================================================


class ShipmentInput(CamelModel):
    """Fields supplied when creating a shipment."""

    reference: str
    shipper_name: str
    carrier_name: str
    pickup_location: Location
    delivery_location: Location
    pickup_date: str
    delivery_date: str
    status: str
    tracking_events: list[TrackingEvent] = Field(default_factory=list)
    rate: float
    currency: str
    service_level: str
    is_flagged: bool = False


class ShipmentUpdate(CamelModel):
    """
    Partial update. Only fields that are supplied (and not null)
    are merged into the stored record.
    """

    reference: str | None = None
    shipper_name: str | None = None
    carrier_name: str | None = None
    pickup_location: Location | None = None
    delivery_location: Location | None = None
    pickup_date: str | None = None
    delivery_date: str | None = None
    status: str | None = None
    tracking_events: list[TrackingEvent] | None = None
    rate: float | None = None
    currency: str | None = None
    service_level: str | None = None
    is_flagged: bool | None = None

    def changes(self) -> dict[str, object]:
        """The supplied, non-null fields keyed by attribute name."""
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }


class Shipment(ShipmentInput):
    """
    A shipment record.

    ``id`` is assigned by the store and never reassigned.
    """

    id: str


# =============================================================================
# Query types
# =============================================================================


class SortOrder(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


class ShipmentSortField(str, Enum):
    """Fields a shipment list can be sorted by (values are wire names)."""

    PICKUP_DATE = "pickupDate"
    DELIVERY_DATE = "deliveryDate"
    SHIPPER_NAME = "shipperName"
    CARRIER_NAME = "carrierName"
    RATE = "rate"

    @property
    def attribute(self) -> str:
        """Python attribute name on Shipment."""
        return {
            "pickupDate": "pickup_date",
            "deliveryDate": "delivery_date",
            "shipperName": "shipper_name",
            "carrierName": "carrier_name",
            "rate": "rate",
        }[self.value]

    @property
    def is_date(self) -> bool:
        return self in (ShipmentSortField.PICKUP_DATE, ShipmentSortField.DELIVERY_DATE)


class LocationFilter(CamelModel):
    """Exact match per field; absent fields match anything."""

    city: str | None = None
    state: str | None = None
    country: str | None = None


class ShipmentFilter(CamelModel):
    """List filter. Every absent criterion is satisfied."""

    status: str | None = None
    shipper_name: str | None = None
    carrier_name: str | None = None
    pickup_location: LocationFilter | None = None
    delivery_location: LocationFilter | None = None
    is_flagged: bool | None = None


class ShipmentPage(CamelModel):
    """One page of a shipment list."""

    items: list[Shipment]
    total_count: int
    page: int
    page_size: int
    total_pages: int
