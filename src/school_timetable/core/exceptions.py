from __future__ import annotations

from typing import Any, Optional

from .enums import ErrorKind


class DomainError(Exception):
    """Base exception for business rule violations.

    Each subclass maps to exactly one ``ErrorKind``; ``detail`` is the
    human-readable message naming the offending entity.
    """

    kind: ErrorKind = ErrorKind.VALIDATION

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

    @property
    def retryable(self) -> bool:
        return self.kind == ErrorKind.TRANSIENT


class ValidationError(DomainError):
    """Raised when a required field is missing or malformed."""

    kind = ErrorKind.VALIDATION


class NotFoundError(ValidationError):
    """Raised when a referenced record does not exist."""


class RangeViolationError(DomainError):
    """Raised when a range falls outside its parent bounds or start > end."""

    kind = ErrorKind.RANGE_VIOLATION


class OverlapError(DomainError):
    """Raised when a non-break term range conflicts with an existing one."""

    kind = ErrorKind.OVERLAP

    def __init__(self, detail: str, *, conflicting: Optional[Any] = None):
        super().__init__(detail)
        self.conflicting = conflicting


class BreakTimeslotAssignmentError(DomainError):
    """Raised when a timetable entry targets a break timeslot."""

    kind = ErrorKind.BREAK_TIMESLOT_ASSIGNMENT


class ReferentialBlockError(DomainError):
    """Raised when a delete is refused because other records still reference the target."""

    kind = ErrorKind.REFERENTIAL_BLOCK


class TransientError(DomainError):
    """Raised when the remote store is unreachable or timed out."""

    kind = ErrorKind.TRANSIENT
