"""Error taxonomy for the student records API.

Domain services raise these; the boundary in ``main`` maps each type to an
HTTP status and the uniform response envelope.
"""

import enum
from typing import Optional


class StudentRecordsError(Exception):
    """Base exception for all student records errors."""

    status_code = 500

    @property
    def public_message(self) -> str:
        return str(self)


class ConfigurationError(StudentRecordsError):
    """Raised at startup when required configuration is missing or invalid."""

    pass


class ValidationError(StudentRecordsError):
    """Raised when request input is missing or malformed."""

    status_code = 400


class AuthFailure(enum.Enum):
    """Internal reason an authentication attempt was rejected."""

    MISSING_TOKEN = "missing_token"
    INVALID_TOKEN = "invalid_token"
    UNKNOWN_IDENTITY = "unknown_identity"
    BAD_CREDENTIALS = "bad_credentials"


# UNKNOWN_IDENTITY shares the MISSING_TOKEN message so clients cannot tell them apart.
_AUTH_MESSAGES = {
    AuthFailure.MISSING_TOKEN: "Access token required",
    AuthFailure.UNKNOWN_IDENTITY: "Access token required",
    AuthFailure.INVALID_TOKEN: "Invalid or expired token",
    AuthFailure.BAD_CREDENTIALS: "Invalid email or password",
}


class AuthenticationError(StudentRecordsError):
    """Raised when a request cannot be tied to a student."""

    status_code = 401

    def __init__(self, kind: AuthFailure):
        """Initialize the exception.

        Args:
            kind: Why authentication failed. Only used internally; the
                external message is derived from it.
        """
        self.kind = kind
        super().__init__(_AUTH_MESSAGES[kind])

    @property
    def is_token_failure(self) -> bool:
        return self.kind is not AuthFailure.BAD_CREDENTIALS


class NotFoundError(StudentRecordsError):
    """Raised when a resource is absent or not owned by the caller."""

    status_code = 404

    def __init__(self, resource: str, resource_id: Optional[object] = None):
        """Initialize the exception.

        Args:
            resource: Human readable resource name, e.g. ``"Note"``.
            resource_id: Identifier that was looked up, kept for logging only.
        """
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} not found")


class InfrastructureError(StudentRecordsError):
    """Raised when the store, hasher or token subsystem faults."""

    status_code = 500

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        """Initialize the exception.

        Args:
            message: Stable message safe to show to clients.
            cause: Underlying exception; only exposed in development mode.
        """
        self.cause = cause
        super().__init__(message)

    @property
    def detail(self) -> Optional[str]:
        return str(self.cause) if self.cause is not None else None
