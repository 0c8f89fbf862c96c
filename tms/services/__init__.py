"""
Services that sit between the HTTP layer and the store.
"""

from tms.services.query import (
    apply_filters,
    apply_sorting,
    apply_pagination,
    run_query,
)
from tms.services.shipments import ShipmentService

__all__ = [
    "apply_filters",
    "apply_sorting",
    "apply_pagination",
    "run_query",
    "ShipmentService",
]
