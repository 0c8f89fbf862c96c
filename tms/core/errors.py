"""
Domain errors.

Raised by the auth and shipment layers; the HTTP layer maps each
one to a status code.
"""


class TMSError(Exception):
    """Base exception for all domain errors."""

    status_code: int = 400
    default_message: str = "Request failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class InvalidCredentials(TMSError):
    """Login failed: unknown username or wrong password."""

    status_code = 401
    default_message = "Invalid credentials"


class Unauthenticated(TMSError):
    """A gated operation was attempted without a valid identity."""

    status_code = 401
    default_message = "Authentication required."


class Forbidden(TMSError):
    """The identity lacks the role or capability for the operation."""

    status_code = 403
    default_message = "You do not have permission to perform this action."


class NotFound(TMSError):
    """The operation referenced a shipment that doesn't exist."""

    status_code = 404
    default_message = "Shipment not found"
