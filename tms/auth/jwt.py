# =============================================================================
# JWT Authentication Implementation
# =============================================================================
#
# This module provides:
#   - Password hashing
#   - In-memory user directory
#   - Token creation and validation
#   - The Authenticator (login + per-request credential resolution)
#
# Credentials are stateless: there is no revocation list, so a token
# stays valid until it expires.
#
# =============================================================================

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from threading import RLock
from typing import Callable
import hashlib
import logging
import secrets

from pydantic import BaseModel
import jwt

from tms.auth.capabilities import Role, get_permissions
from tms.auth.context import Identity
from tms.config import Settings, get_settings
from tms.core.errors import InvalidCredentials
from tms.core.utils import generate_id, utc_now

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


# =============================================================================
# Models
# =============================================================================

class TokenPayload(BaseModel):
    """Validated JWT claims."""
    sub: str  # user_id
    username: str
    role: str
    exp: datetime
    iat: datetime
    type: str
    jti: str


class UserRecord(BaseModel):
    """User stored in the directory. Only the Authenticator sees it."""
    id: str
    username: str
    password_hash: str
    role: Role

    def to_identity(self) -> Identity:
        return Identity(id=self.id, username=self.username, role=self.role)


class LoginResult(BaseModel):
    """What a successful login hands back to the client."""
    id: str
    username: str
    role: Role
    token: str
    permissions: dict[str, bool]


# =============================================================================
# Password Hashing
# =============================================================================

def hash_password(password: str) -> str:
    """
    Hash a password using PBKDF2-SHA256.

    Returns: salt:hash format string
    """
    salt = secrets.token_hex(32)
    hash_bytes = hashlib.pbkdf2_hmac(
        'sha256',
        password.encode('utf-8'),
        salt.encode('utf-8'),
        iterations=100_000
    )
    return f"{salt}:{hash_bytes.hex()}"


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash."""
    try:
        salt, stored_hash = password_hash.split(':')
        hash_bytes = hashlib.pbkdf2_hmac(
            'sha256',
            password.encode('utf-8'),
            salt.encode('utf-8'),
            iterations=100_000
        )
        return secrets.compare_digest(hash_bytes.hex(), stored_hash)
    except (ValueError, AttributeError):
        return False


# =============================================================================
# In-Memory User Directory
# =============================================================================

class UserDirectory:
    """Users keyed by id, with a username index."""

    def __init__(self):
        self._lock = RLock()
        self._users: dict[str, UserRecord] = {}
        self._by_username: dict[str, str] = {}  # username -> user_id

    def add_user(self, user_id: str, username: str, password: str, role: Role | str) -> UserRecord:
        """Register a user. The password is hashed before it's stored."""
        with self._lock:
            if username in self._by_username:
                raise ValueError(f"Username already registered: {username}")
            if user_id in self._users:
                raise ValueError(f"User id already registered: {user_id}")
            user = UserRecord(
                id=user_id,
                username=username,
                password_hash=hash_password(password),
                role=Role(role),
            )
            self._users[user.id] = user
            self._by_username[user.username] = user.id
        return user

    def get_by_id(self, user_id: str) -> UserRecord | None:
        return self._users.get(user_id)

    def get_by_username(self, username: str) -> UserRecord | None:
        """Exact (case-sensitive) username lookup."""
        user_id = self._by_username.get(username)
        return self._users.get(user_id) if user_id else None

    def __len__(self) -> int:
        return len(self._users)


# =============================================================================
# Token Validation
# =============================================================================

class TokenError(Exception):
    """Base exception for token errors."""
    pass


class TokenExpiredError(TokenError):
    """Token has expired."""
    pass


class TokenInvalidError(TokenError):
    """Token is invalid or malformed."""
    pass


def strip_bearer(credential_text: str | None) -> str:
    """Drop a transport "Bearer " prefix if present."""
    if not credential_text:
        return ""
    text = credential_text.strip()
    if text.lower().startswith(BEARER_PREFIX):
        text = text[len(BEARER_PREFIX):].strip()
    return text


# =============================================================================
# Authenticator
# =============================================================================

class Authenticator:
    """
    Issues credentials on login and resolves them back to identities.

    Args:
        users: Directory used to check logins and resolve subjects
        secret_key: HMAC signing secret
        algorithm: JWT algorithm
        ttl_seconds: Credential lifetime
        clock: Source of "now" for issuance
    """

    def __init__(
        self,
        users: UserDirectory,
        secret_key: str,
        algorithm: str = "HS256",
        ttl_seconds: int = 3600,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.users = users
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    @classmethod
    def from_settings(cls, users: UserDirectory, settings: Settings | None = None) -> Authenticator:
        settings = settings or get_settings()
        return cls(
            users,
            secret_key=settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            ttl_seconds=settings.token_ttl_seconds,
        )

    # -------------------------------------------------------------------------
    # Issuing
    # -------------------------------------------------------------------------

    def create_access_token(self, user: UserRecord) -> str:
        """Create a signed access token for a user."""
        now = self._clock()
        expire = now + timedelta(seconds=self.ttl_seconds)

        payload = {
            "sub": user.id,
            "username": user.username,
            "role": user.role.value,
            "exp": expire,
            "iat": now,
            "type": "access",
            "jti": generate_id("tok"),
        }

        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def login(self, username: str, password: str) -> LoginResult:
        """
        Check a username/password pair and issue a credential.

        Raises:
            InvalidCredentials: Unknown username or wrong password
        """
        user = self.users.get_by_username(username)
        if not user or not verify_password(password, user.password_hash):
            logger.info(f"Login failed for username '{username}'")
            raise InvalidCredentials()

        logger.info(f"User {user.id} ({user.role.value}) logged in")
        return LoginResult(
            id=user.id,
            username=user.username,
            role=user.role,
            token=self.create_access_token(user),
            permissions=get_permissions(user.role),
        )

    # -------------------------------------------------------------------------
    # Resolving
    # -------------------------------------------------------------------------

    def decode_token(self, token: str) -> TokenPayload:
        """
        Decode and validate an access token.

        Raises:
            TokenExpiredError: Token has expired
            TokenInvalidError: Token is invalid
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat", "sub"]},
            )

            if payload.get("type") != "access":
                raise TokenInvalidError(f"Expected access token, got {payload.get('type')}")

            return TokenPayload(
                sub=payload["sub"],
                username=payload.get("username", ""),
                role=payload.get("role", ""),
                exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
                iat=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                type=payload["type"],
                jti=payload.get("jti", ""),
            )

        except jwt.ExpiredSignatureError:
            raise TokenExpiredError("Token has expired")
        except jwt.InvalidTokenError as e:
            raise TokenInvalidError(f"Invalid token: {e}")

    def resolve(self, credential_text: str | None) -> Identity | None:
        """
        Resolve a credential to an identity.

        Any failure (missing, malformed, expired, bad signature, unknown
        subject) yields None, meaning anonymous. Never raises.
        """
        token = strip_bearer(credential_text)
        if not token:
            return None

        try:
            payload = self.decode_token(token)
        except TokenError as e:
            logger.debug(f"Credential rejected: {e}")
            return None

        user = self.users.get_by_id(payload.sub)
        if not user:
            logger.debug(f"Credential subject {payload.sub} is not a known user")
            return None

        return user.to_identity()
