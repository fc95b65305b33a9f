from __future__ import annotations

from typing import Mapping, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    def __init__(self, message: str, *, errors: Optional[Mapping[str, str]] = None):
        super().__init__(message)
        self.errors = dict(errors or {})


class NotFoundError(DomainError):
    """Raised when a record does not exist in the store."""


class AlreadyClockedInError(DomainError):
    """Raised on clock-in while the employee already has an open session."""


class NotClockedInError(DomainError):
    """Raised on clock-out when the employee has no open session."""


class StoreUnavailableError(DomainError):
    """Raised when the record store rejects or cannot serve a call."""
