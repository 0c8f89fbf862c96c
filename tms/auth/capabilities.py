"""
Roles and capabilities.

This defines WHAT each role can do, not HOW we check it.
The actual checking happens in policies.py.
"""

from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Platform-wide user role."""

    ADMIN = "ADMIN"
    EMPLOYEE = "EMPLOYEE"


class Capability(str, Enum):
    """Named boolean permissions. Values are the wire names."""

    ADD_SHIPMENT = "addShipment"
    UPDATE_SHIPMENT = "updateShipment"
    DELETE_SHIPMENT = "deleteShipment"
    VIEW_ALL_SHIPMENTS = "viewAllShipments"
    VIEW_DETAILED_REPORTS = "viewDetailedReports"
    MANAGE_USERS = "manageUsers"
    FLAG_SHIPMENT = "flagShipment"


# =============================================================================
# Capability Mappings
# =============================================================================


ROLE_CAPABILITIES: dict[Role, set[Capability]] = {
    Role.ADMIN: set(Capability),
    Role.EMPLOYEE: {
        Capability.UPDATE_SHIPMENT,
        Capability.VIEW_ALL_SHIPMENTS,
        Capability.FLAG_SHIPMENT,
    },
}


def _coerce_role(role: Role | str | None) -> Role | None:
    if role is None or isinstance(role, Role):
        return role
    try:
        return Role(role)
    except ValueError:
        return None


def get_capabilities(role: Role | str | None) -> set[Capability]:
    """Capabilities granted to a role. Unknown roles get none."""
    resolved = _coerce_role(role)
    if resolved is None:
        return set()
    return set(ROLE_CAPABILITIES.get(resolved, set()))


def get_permissions(role: Role | str | None) -> dict[str, bool]:
    """
    Full permission map for a role, every capability present.

    Unknown roles fail closed: every capability is False.
    """
    granted = get_capabilities(role)
    return {cap.value: cap in granted for cap in Capability}


def has_capability(role: Role | str | None, capability: Capability | str) -> bool:
    """Check if a role has a specific capability."""
    if isinstance(capability, str) and not isinstance(capability, Capability):
        try:
            capability = Capability(capability)
        except ValueError:
            return False
    return capability in get_capabilities(role)
