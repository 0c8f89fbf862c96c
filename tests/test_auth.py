"""
Tests for login, credential resolution, and the role/capability guards.
"""

from datetime import timedelta

import jwt
import pytest

from tms.auth.capabilities import Capability, Role
from tms.auth.context import AuthContext
from tms.auth.jwt import (
    Authenticator,
    UserRecord,
    hash_password,
    strip_bearer,
    verify_password,
)
from tms.auth.policies import check_capability, require_role
from tms.core.errors import Forbidden, InvalidCredentials, Unauthenticated
from tms.core.utils import utc_now

from conftest import SECRET


# =============================================================================
# Password Hashing
# =============================================================================


class TestPasswordHashing:
    def test_round_trip(self):
        hashed = hash_password("s3cret")

        assert "s3cret" not in hashed
        assert verify_password("s3cret", hashed)
        assert not verify_password("S3cret", hashed)

    def test_salted(self):
        assert hash_password("same") != hash_password("same")

    def test_garbage_hash(self):
        assert not verify_password("x", "not-a-hash")


# =============================================================================
# Login
# =============================================================================


class TestLogin:
    def test_admin_login(self, authenticator):
        result = authenticator.login("admin", "admin123")

        assert result.id == "1"
        assert result.role == Role.ADMIN
        assert result.permissions["deleteShipment"] is True
        assert authenticator.resolve(result.token).role == Role.ADMIN

    def test_employee_login(self, authenticator):
        result = authenticator.login("employee", "employee123")

        identity = authenticator.resolve(result.token)
        assert identity.id == "2"
        assert identity.username == "employee"
        assert identity.role == Role.EMPLOYEE

    @pytest.mark.parametrize("username,password", [
        ("admin", "wrong"),
        ("admin", "employee123"),
        ("nobody", "admin123"),
        ("ADMIN", "admin123"),
        ("", ""),
    ])
    def test_bad_credentials(self, authenticator, username, password):
        with pytest.raises(InvalidCredentials):
            authenticator.login(username, password)

    def test_token_lifetime_is_exactly_ttl(self, authenticator):
        token = authenticator.login("admin", "admin123").token
        claims = jwt.decode(token, options={"verify_signature": False})

        assert claims["exp"] - claims["iat"] == 3600
        assert claims["sub"] == "1"
        assert claims["username"] == "admin"
        assert claims["role"] == "ADMIN"


# =============================================================================
# Resolve
# =============================================================================


class TestResolve:
    def test_bearer_prefix_stripped(self, authenticator):
        token = authenticator.login("admin", "admin123").token

        assert authenticator.resolve(f"Bearer {token}").id == "1"
        assert strip_bearer(f"Bearer {token}") == token
        assert strip_bearer(token) == token

    @pytest.mark.parametrize("text", [None, "", "Bearer ", "garbage", "Bearer a.b.c"])
    def test_malformed_is_anonymous(self, authenticator, text):
        assert authenticator.resolve(text) is None

    def test_expired_is_anonymous(self, users):
        issued_long_ago = Authenticator(
            users,
            secret_key=SECRET,
            ttl_seconds=3600,
            clock=lambda: utc_now() - timedelta(seconds=3601),
        )
        token = issued_long_ago.login("admin", "admin123").token

        assert issued_long_ago.resolve(token) is None

    def test_not_yet_expired(self, users):
        issued_recently = Authenticator(
            users,
            secret_key=SECRET,
            ttl_seconds=3600,
            clock=lambda: utc_now() - timedelta(seconds=3500),
        )
        token = issued_recently.login("admin", "admin123").token

        assert issued_recently.resolve(token).id == "1"

    def test_bad_signature_is_anonymous(self, users, authenticator):
        forger = Authenticator(users, secret_key="other-secret")
        token = forger.login("admin", "admin123").token

        assert authenticator.resolve(token) is None

    def test_unknown_subject_is_anonymous(self, authenticator):
        ghost = UserRecord(id="99", username="ghost", password_hash="x:y", role=Role.ADMIN)
        token = authenticator.create_access_token(ghost)

        assert authenticator.resolve(token) is None

    def test_wrong_token_type_is_anonymous(self, authenticator):
        token = jwt.encode(
            {"sub": "1", "iat": utc_now(), "exp": utc_now() + timedelta(hours=1), "type": "refresh"},
            SECRET,
            algorithm="HS256",
        )

        assert authenticator.resolve(token) is None


# =============================================================================
# Guards
# =============================================================================


class TestRequireRole:
    def test_anonymous(self):
        with pytest.raises(Unauthenticated):
            require_role(None, [Role.ADMIN])

    def test_wrong_role(self, employee):
        with pytest.raises(Forbidden):
            require_role(employee, [Role.ADMIN])

    def test_allowed(self, admin, employee):
        require_role(admin, [Role.ADMIN])
        require_role(employee, ["ADMIN", "EMPLOYEE"])


class TestCheckCapability:
    def test_anonymous(self):
        with pytest.raises(Unauthenticated):
            check_capability(None, Capability.UPDATE_SHIPMENT)

    def test_missing_capability(self, employee):
        with pytest.raises(Forbidden, match="deleteShipment"):
            check_capability(employee, Capability.DELETE_SHIPMENT)

    def test_unknown_capability(self, admin):
        with pytest.raises(Forbidden):
            check_capability(admin, "launchRockets")

    def test_granted(self, admin, employee):
        check_capability(admin, "manageUsers")
        check_capability(employee, Capability.FLAG_SHIPMENT)


class TestAuthContext:
    def test_anonymous(self):
        ctx = AuthContext.anonymous()

        assert ctx.is_anonymous
        assert ctx.role is None
        assert not ctx.can("viewAllShipments")

    def test_employee(self, employee):
        ctx = AuthContext(identity=employee)

        assert ctx.is_authenticated
        assert ctx.can(Capability.FLAG_SHIPMENT)
        assert not ctx.can("addShipment")
        assert not ctx.can("not-a-capability")
