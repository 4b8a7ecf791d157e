from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class PersistenceError(DomainError):
    """Raised when the local snapshot cannot be read or written."""


class RedemptionError(DomainError):
    """Base class for every reason a session token can be refused."""

    code = "RedemptionError"
    default_message = "Attendance could not be recorded"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class MalformedTokenError(RedemptionError):
    code = "MalformedToken"
    default_message = "Invalid QR code"


class SessionNotFoundError(RedemptionError):
    code = "SessionNotFound"
    default_message = "Session not found"


class SessionEndedError(RedemptionError):
    code = "SessionEnded"
    default_message = "This session has already ended"


class SessionExpiredError(RedemptionError):
    code = "SessionExpired"
    default_message = "This QR code has expired"


class ClassMismatchError(RedemptionError):
    code = "ClassMismatch"
    default_message = "This session is not for your class"
