"""
Authentication and authorization.

Design:
1. A static role -> capability table (capabilities.py)
2. Stateless signed credentials, resolved per request (jwt.py)
3. Synchronous guards run before any mutation (policies.py)
"""

from tms.auth.context import AuthContext, Identity, UserProfile
from tms.auth.policies import (
    require_role,
    check_capability,
)
from tms.auth.capabilities import (
    Capability,
    Role,
    get_permissions,
    has_capability,
)
from tms.auth.jwt import (
    Authenticator,
    LoginResult,
    UserDirectory,
    hash_password,
    verify_password,
)

__all__ = [
    # Main interface
    "require_role",
    "check_capability",
    "AuthContext",
    # Types
    "Identity",
    "UserProfile",
    "Capability",
    "Role",
    "get_permissions",
    "has_capability",
    # JWT
    "Authenticator",
    "LoginResult",
    "UserDirectory",
    "hash_password",
    "verify_password",
]
