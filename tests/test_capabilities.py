"""
Tests for the role -> capability table.
"""

import pytest

from tms.auth.capabilities import (
    Capability,
    Role,
    get_capabilities,
    get_permissions,
    has_capability,
)


ALL_KEYS = {c.value for c in Capability}


class TestPermissionTable:
    def test_admin_has_everything(self):
        perms = get_permissions(Role.ADMIN)

        assert set(perms) == ALL_KEYS
        assert all(perms.values())

    def test_employee_limits(self):
        perms = get_permissions(Role.EMPLOYEE)

        assert set(perms) == ALL_KEYS
        assert perms == {
            "addShipment": False,
            "updateShipment": True,
            "deleteShipment": False,
            "viewAllShipments": True,
            "viewDetailedReports": False,
            "manageUsers": False,
            "flagShipment": True,
        }

    def test_role_accepted_as_string(self):
        assert get_permissions("EMPLOYEE") == get_permissions(Role.EMPLOYEE)

    @pytest.mark.parametrize("role", ["GUEST", "admin", "", None])
    def test_unknown_role_fails_closed(self, role):
        perms = get_permissions(role)

        assert set(perms) == ALL_KEYS
        assert not any(perms.values())
        assert get_capabilities(role) == set()

    def test_deterministic(self):
        assert get_permissions(Role.ADMIN) == get_permissions(Role.ADMIN)

    def test_has_capability(self):
        assert has_capability(Role.ADMIN, Capability.DELETE_SHIPMENT)
        assert has_capability(Role.EMPLOYEE, "flagShipment")
        assert not has_capability(Role.EMPLOYEE, "deleteShipment")
        assert not has_capability(Role.ADMIN, "launchRockets")
