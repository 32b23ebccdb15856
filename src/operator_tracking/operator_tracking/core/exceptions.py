from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is missing or invalid."""


class NotFoundError(DomainError):
    """Raised when an operation targets a record that does not exist."""


class ConflictError(DomainError):
    """Raised when a write would violate a uniqueness rule."""

    def __init__(self, message: str, *, constraint: Optional[str] = None):
        super().__init__(message)
        self.constraint = constraint


class AlreadyClockedInError(ConflictError):
    """The operator already has a clock-in for the day."""

    def __init__(self, message: str = "Already clocked in today"):
        super().__init__(message, constraint="uq_attendance_day")


class NoActiveClockInError(NotFoundError):
    """There is no open clock-in to close."""

    def __init__(self, message: str = "No active clock-in found for today"):
        super().__init__(message)


class StoreUnavailableError(DomainError):
    """Raised when the database cannot be reached."""
