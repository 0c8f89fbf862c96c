"""
Shipment service - the surface the HTTP layer calls.

Every operation resolves an identity first; mutating operations are
gated by role before the store is touched. List reads run the query
pipeline over a snapshot of the store.
"""

from __future__ import annotations

import logging

from tms.auth.capabilities import Role, get_permissions
from tms.auth.context import Identity, UserProfile
from tms.auth.jwt import Authenticator, LoginResult
from tms.auth.policies import require_role
from tms.core.models import (
    Shipment,
    ShipmentFilter,
    ShipmentInput,
    ShipmentPage,
    ShipmentSortField,
    ShipmentUpdate,
    SortOrder,
)
from tms.services.query import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, run_query
from tms.storage.shipments import ShipmentStore

logger = logging.getLogger(__name__)

ADMIN_ONLY = (Role.ADMIN,)
STAFF = (Role.ADMIN, Role.EMPLOYEE)


class ShipmentService:
    """Auth-aware operations over one shipment store."""

    def __init__(self, store: ShipmentStore, authenticator: Authenticator):
        self.store = store
        self.authenticator = authenticator

    # =========================================================================
    # Auth
    # =========================================================================

    def authenticate(self, credential_text: str | None) -> Identity | None:
        """Identity for a request, or None for anonymous."""
        return self.authenticator.resolve(credential_text)

    def login(self, username: str, password: str) -> LoginResult:
        return self.authenticator.login(username, password)

    def get_permissions(self, role: Role | str | None) -> dict[str, bool]:
        return get_permissions(role)

    def current_user(self, identity: Identity | None) -> UserProfile | None:
        """The signed-in user with permissions, None when anonymous."""
        if identity is None:
            return None
        return UserProfile.from_identity(identity)

    # =========================================================================
    # Reads
    # =========================================================================

    def list_shipments(
        self,
        criteria: ShipmentFilter | None = None,
        sort_by: ShipmentSortField | str | None = None,
        sort_order: SortOrder | str | None = SortOrder.ASC,
        page: int | None = DEFAULT_PAGE,
        page_size: int | None = DEFAULT_PAGE_SIZE,
    ) -> ShipmentPage:
        return run_query(self.store.list(), criteria, sort_by, sort_order, page, page_size)

    def get_shipment(self, shipment_id: str) -> Shipment | None:
        return self.store.get(shipment_id)

    # =========================================================================
    # Writes
    # =========================================================================

    def create_shipment(self, identity: Identity | None, data: ShipmentInput) -> Shipment:
        require_role(identity, ADMIN_ONLY)
        return self.store.add(data)

    def update_shipment(
        self,
        identity: Identity | None,
        shipment_id: str,
        changes: ShipmentUpdate,
    ) -> Shipment:
        """Raises NotFound for an unknown id."""
        require_role(identity, STAFF)
        return self.store.update(shipment_id, changes)

    def delete_shipment(self, identity: Identity | None, shipment_id: str) -> bool:
        """Returns False (no error) for an unknown id."""
        require_role(identity, ADMIN_ONLY)
        deleted = self.store.delete(shipment_id)
        if not deleted:
            logger.info(f"Delete of unknown shipment {shipment_id} ignored")
        return deleted

    def toggle_flag(self, identity: Identity | None, shipment_id: str) -> Shipment:
        """Raises NotFound for an unknown id."""
        require_role(identity, STAFF)
        return self.store.toggle_flag(shipment_id)
