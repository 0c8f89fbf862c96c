"""
Shared fixtures.

Every test gets a fresh store and service; the user directory is
read-only and built once because password hashing is slow on purpose.
"""

import pytest

from tms.auth.capabilities import Role
from tms.auth.context import Identity
from tms.auth.jwt import Authenticator, UserDirectory
from tms.seed import seed_shipments, seed_users
from tms.services.shipments import ShipmentService
from tms.storage.shipments import ShipmentStore

SECRET = "test-secret"


@pytest.fixture(scope="session")
def users():
    """Directory holding the demo admin and employee."""
    directory = UserDirectory()
    seed_users(directory)
    return directory


@pytest.fixture
def authenticator(users):
    return Authenticator(users, secret_key=SECRET, ttl_seconds=3600)


@pytest.fixture
def store():
    """Empty store."""
    return ShipmentStore()


@pytest.fixture
def seeded_store():
    """Store holding the 30 demo shipments (ids "1".."30")."""
    s = ShipmentStore()
    seed_shipments(s)
    return s


@pytest.fixture
def service(seeded_store, authenticator):
    return ShipmentService(seeded_store, authenticator)


@pytest.fixture
def admin():
    return Identity(id="1", username="admin", role=Role.ADMIN)


@pytest.fixture
def employee():
    return Identity(id="2", username="employee", role=Role.EMPLOYEE)
