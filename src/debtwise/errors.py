"""Typed failure signals raised across DebtWise."""

from __future__ import annotations


class DebtWiseError(Exception):
    """Base class for all DebtWise errors."""


class ValidationError(DebtWiseError, ValueError):
    """User-supplied input was rejected at the boundary."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class InvariantViolation(DebtWiseError):
    """An impossible value reached the aggregation/projection core."""


class NotFoundError(DebtWiseError, LookupError):
    """The record does not exist or is not owned by the requesting user."""


class AuthenticationError(DebtWiseError):
    """Credentials or session token were rejected."""


class ImmutableRecordError(DebtWiseError, TypeError):
    """The record cannot be changed once written; delete and re-create it."""
