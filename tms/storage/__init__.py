"""
Storage.

Shipments live in process memory only. ShipmentStore is the seam
where a persistent backend would plug in.
"""

from tms.storage.shipments import ShipmentStore

__all__ = [
    "ShipmentStore",
]
