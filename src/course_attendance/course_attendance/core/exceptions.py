from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a course or student reference does not resolve."""


class AuthenticationError(DomainError):
    """Raised when there is no valid identity (bad login, no session)."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class StorageFailure(DomainError):
    """Raised when persistence is unavailable or a write could not be applied.

    For bulk writes ``attempted`` and ``applied`` tell the caller how far the
    batch got, so it can decide whether to resubmit.
    """

    def __init__(self, message: str, *, attempted: Optional[int] = None, applied: Optional[int] = None):
        super().__init__(message)
        self.attempted = attempted
        self.applied = applied
