"""
Policies - the guards that gate mutating operations.

`require_role()` and `check_capability()` are synchronous checks run
at the start of an operation, before any state is touched. Failures
raise `Unauthenticated` (no identity) or `Forbidden` (wrong role or
missing capability).
"""

from __future__ import annotations

from typing import Iterable
import logging

from tms.auth.capabilities import Capability, Role, has_capability
from tms.auth.context import Identity
from tms.core.errors import Forbidden, Unauthenticated

logger = logging.getLogger(__name__)


# =============================================================================
# Guards
# =============================================================================


def require_role(identity: Identity | None, allowed_roles: Iterable[Role | str]) -> None:
    """
    Allow the operation only for the listed roles.

    Raises:
        Unauthenticated: No identity
        Forbidden: Identity's role isn't allowed
    """
    if identity is None:
        raise Unauthenticated()

    allowed = {Role(r) if not isinstance(r, Role) else r for r in allowed_roles}
    if identity.role not in allowed:
        logger.warning(
            f"User {identity.id} ({identity.role.value}) denied; "
            f"requires one of {sorted(r.value for r in allowed)}"
        )
        raise Forbidden()


def check_capability(identity: Identity | None, capability: Capability | str) -> None:
    """
    Allow the operation only if the identity's role grants the capability.

    Raises:
        Unauthenticated: No identity
        Forbidden: Capability absent or false for the role
    """
    if identity is None:
        raise Unauthenticated()

    if not has_capability(identity.role, capability):
        name = capability.value if isinstance(capability, Capability) else capability
        logger.warning(f"User {identity.id} ({identity.role.value}) lacks {name}")
        raise Forbidden(f"Permission denied: {name}")

