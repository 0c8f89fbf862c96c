"""
Auth context - the "who can do what" for each request.

Built once per request from the bearer credential and handed to
the service layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict

from tms.auth.capabilities import Capability, Role, get_capabilities, get_permissions


class Identity(BaseModel):
    """A resolved, signed-in user. Never carries the password."""

    model_config = ConfigDict(frozen=True)

    id: str
    username: str
    role: Role


class UserProfile(BaseModel):
    """Identity plus its permission map, as shown to the client."""

    id: str
    username: str
    role: Role
    permissions: dict[str, bool]

    @classmethod
    def from_identity(cls, identity: Identity) -> UserProfile:
        return cls(
            id=identity.id,
            username=identity.username,
            role=identity.role,
            permissions=get_permissions(identity.role),
        )


@dataclass
class AuthContext:
    """
    Authorization context for a request.

    Usage in routes:
        async def my_route(ctx: AuthContext = Depends(get_auth_context)):
            if ctx.can("flagShipment"):
                ...
    """

    identity: Identity | None = None

    # Computed capabilities (cached)
    _capabilities: set[Capability] = field(default_factory=set, repr=False)

    def __post_init__(self):
        """Compute capabilities from role."""
        role = self.identity.role if self.identity else None
        self._capabilities = get_capabilities(role)

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None

    @property
    def is_anonymous(self) -> bool:
        return self.identity is None

    @property
    def role(self) -> Role | None:
        return self.identity.role if self.identity else None

    @property
    def capabilities(self) -> set[Capability]:
        return self._capabilities

    def can(self, capability: Capability | str) -> bool:
        """Check if the user has a capability. Unknown names are False."""
        if not isinstance(capability, Capability):
            try:
                capability = Capability(capability)
            except ValueError:
                return False
        return capability in self._capabilities

    @classmethod
    def anonymous(cls) -> AuthContext:
        """Create an anonymous context (no user)."""
        return cls()
