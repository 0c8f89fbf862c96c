"""
Shipment list queries: filter -> sort -> paginate.

Every step is a pure function over a snapshot and returns a new list.
Nothing here touches the store.
"""

from __future__ import annotations

import math
from typing import Any

from tms.core.models import (
    LocationFilter,
    Location,
    Shipment,
    ShipmentFilter,
    ShipmentPage,
    ShipmentSortField,
    SortOrder,
)
from tms.core.utils import parse_date

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10


# =============================================================================
# Filter
# =============================================================================


def _contains(haystack: str, needle: str) -> bool:
    return needle.lower() in haystack.lower()


def _location_matches(criteria: LocationFilter | None, location: Location) -> bool:
    if criteria is None:
        return True
    if criteria.city and location.city != criteria.city:
        return False
    if criteria.state and location.state != criteria.state:
        return False
    if criteria.country and location.country != criteria.country:
        return False
    return True


def matches(shipment: Shipment, criteria: ShipmentFilter) -> bool:
    """True iff the shipment satisfies every supplied criterion."""
    if criteria.status and shipment.status != criteria.status:
        return False
    if criteria.shipper_name and not _contains(shipment.shipper_name, criteria.shipper_name):
        return False
    if criteria.carrier_name and not _contains(shipment.carrier_name, criteria.carrier_name):
        return False
    if criteria.is_flagged is not None and shipment.is_flagged != criteria.is_flagged:
        return False
    if not _location_matches(criteria.pickup_location, shipment.pickup_location):
        return False
    if not _location_matches(criteria.delivery_location, shipment.delivery_location):
        return False
    return True


def apply_filters(items: list[Shipment], criteria: ShipmentFilter | None) -> list[Shipment]:
    """Keep the shipments matching every supplied criterion."""
    if criteria is None:
        return list(items)
    return [s for s in items if matches(s, criteria)]


# =============================================================================
# Sort
# =============================================================================


def _sort_key(field: ShipmentSortField):
    attribute = field.attribute

    def key(shipment: Shipment) -> tuple[bool, Any]:
        value = getattr(shipment, attribute)
        if field.is_date:
            value = parse_date(value)
        # Missing values sort after everything else in ascending order
        if value is None:
            return (True, 0)
        return (False, value)

    return key


def apply_sorting(
    items: list[Shipment],
    sort_by: ShipmentSortField | str | None,
    sort_order: SortOrder | str | None = SortOrder.ASC,
) -> list[Shipment]:
    """
    Stable sort by one field. Date fields compare chronologically.

    With no sort field the input order is kept.
    """
    if not sort_by:
        return list(items)

    field = ShipmentSortField(sort_by)
    descending = SortOrder(sort_order or SortOrder.ASC) == SortOrder.DESC

    # sorted() keeps equal elements in input order even with reverse=True
    return sorted(items, key=_sort_key(field), reverse=descending)


# =============================================================================
# Paginate
# =============================================================================


def apply_pagination(
    items: list[Shipment],
    page: int | None = DEFAULT_PAGE,
    page_size: int | None = DEFAULT_PAGE_SIZE,
) -> ShipmentPage:
    """
    Slice out one page. Out-of-range pages are clamped, never an error.

    Raises:
        ValueError: page_size is less than 1
    """
    page = DEFAULT_PAGE if page is None else page
    page_size = DEFAULT_PAGE_SIZE if page_size is None else page_size
    if page_size < 1:
        raise ValueError(f"page_size must be at least 1, got {page_size}")

    total_count = len(items)
    total_pages = max(1, math.ceil(total_count / page_size))
    safe_page = min(max(page, 1), total_pages)
    start = (safe_page - 1) * page_size

    return ShipmentPage(
        items=items[start:start + page_size],
        total_count=total_count,
        page=safe_page,
        page_size=page_size,
        total_pages=total_pages,
    )


def run_query(
    items: list[Shipment],
    criteria: ShipmentFilter | None = None,
    sort_by: ShipmentSortField | str | None = None,
    sort_order: SortOrder | str | None = SortOrder.ASC,
    page: int | None = DEFAULT_PAGE,
    page_size: int | None = DEFAULT_PAGE_SIZE,
) -> ShipmentPage:
    """Filter, sort, then paginate a snapshot."""
    filtered = apply_filters(items, criteria)
    ordered = apply_sorting(filtered, sort_by, sort_order)
    return apply_pagination(ordered, page, page_size)
