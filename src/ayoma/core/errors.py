"""Domain error taxonomy shared by the services and the HTTP boundary.

Every error carries a human readable message and the HTTP status the API
layer answers with. Token failures all derive from ``Unauthenticated`` so
callers can deny access uniformly while logs and tests still see the cause.
"""

from __future__ import annotations

from fastapi import status


class AyomaError(Exception):
    """Base class for all domain errors."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AyomaError):
    """Malformed or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class SelfReferenceError(ValidationError):
    """The actor targeted itself."""

    default_message = "You cannot follow yourself"


class DuplicateError(AyomaError):
    """A uniqueness constraint was violated."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        super().__init__(message or f"This {field} is already taken")


class NotFoundError(AyomaError):
    """A referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InvalidCredentialsError(AyomaError):
    """The supplied password does not match."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Incorrect password"


class Unauthenticated(AyomaError):
    """A bearer token could not be accepted."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied: invalid or expired token"
    reason = "invalid"


class TokenMissingError(Unauthenticated):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Access denied: missing token"
    reason = "missing"


class TokenMalformedError(Unauthenticated):
    reason = "malformed"


class TokenExpiredError(Unauthenticated):
    reason = "expired"


class TokenSignatureError(Unauthenticated):
    reason = "bad-signature"


class StorageError(AyomaError):
    """A collection could not be read from or written to durable storage."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Storage failure"
