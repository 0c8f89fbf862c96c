"""
In-memory shipment store.

The store is the only owner of shipment records. It keeps them in
two structures that must agree at all times:

- an ordered list (scan order for list queries)
- an id -> record dict (point lookups)

Both are mutated together under one lock. Callers only ever get
deep copies back, so nothing outside the store can change a record
without going through it.

Records live in process memory and are gone on restart.
"""

from __future__ import annotations

from threading import RLock
import logging

from tms.core.errors import NotFound
from tms.core.models import Shipment, ShipmentInput, ShipmentUpdate

logger = logging.getLogger(__name__)


class ShipmentStore:
    """Ordered, id-indexed shipment collection."""

    def __init__(self):
        self._lock = RLock()
        self._items: list[Shipment] = []
        self._by_id: dict[str, Shipment] = {}
        self._last_id = 0

    def _next_id(self) -> str:
        # Monotonic, so ids are never reused after a delete
        self._last_id += 1
        return str(self._last_id)

    # =========================================================================
    # Reads
    # =========================================================================

    def get(self, shipment_id: str) -> Shipment | None:
        """Get a shipment by ID."""
        with self._lock:
            shipment = self._by_id.get(shipment_id)
            return shipment.model_copy(deep=True) if shipment is not None else None

    def list(self) -> list[Shipment]:
        """Snapshot of all shipments in insertion order."""
        with self._lock:
            return [s.model_copy(deep=True) for s in self._items]

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, shipment_id: object) -> bool:
        return shipment_id in self._by_id

    # =========================================================================
    # Writes
    # =========================================================================

    def add(self, data: ShipmentInput) -> Shipment:
        """Create a shipment with a fresh id and return it."""
        with self._lock:
            fields = data.model_copy(deep=True)
            shipment = Shipment(id=self._next_id(), **dict(fields))
            self._items.append(shipment)
            self._by_id[shipment.id] = shipment
            logger.info(f"Added shipment {shipment.id} ({shipment.reference})")
            return shipment.model_copy(deep=True)

    def update(self, shipment_id: str, changes: ShipmentUpdate) -> Shipment:
        """
        Merge the supplied fields into an existing shipment.

        Fields not supplied are left as they are.

        Raises:
            NotFound: No shipment with this id
        """
        with self._lock:
            existing = self._by_id.get(shipment_id)
            if existing is None:
                raise NotFound()

            supplied = changes.model_copy(deep=True).changes()
            for name, value in supplied.items():
                setattr(existing, name, value)

            logger.info(f"Updated shipment {shipment_id}: {sorted(supplied)}")
            return existing.model_copy(deep=True)

    def delete(self, shipment_id: str) -> bool:
        """Remove a shipment. Returns False if it didn't exist."""
        with self._lock:
            existing = self._by_id.pop(shipment_id, None)
            if existing is None:
                return False
            self._items = [s for s in self._items if s.id != shipment_id]
            logger.info(f"Deleted shipment {shipment_id}")
            return True

    def toggle_flag(self, shipment_id: str) -> Shipment:
        """
        Flip a shipment's flag.

        Raises:
            NotFound: No shipment with this id
        """
        with self._lock:
            existing = self._by_id.get(shipment_id)
            if existing is None:
                raise NotFound()
            existing.is_flagged = not existing.is_flagged
            logger.info(f"Shipment {shipment_id} flagged={existing.is_flagged}")
            return existing.model_copy(deep=True)
