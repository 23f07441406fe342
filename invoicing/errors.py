"""Exceptions raised by the service layer.

Routes translate them into HTTP responses; scripts let them propagate.
"""
from __future__ import annotations


class DataAccessError(Exception):
    """A query failed. ``message`` is safe to show to a user; the driver
    error is kept as ``__cause__``."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(Exception):
    """Raised when input validation fails."""

    def __init__(self, message: str, fields: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.fields = fields or {}


class NotFoundError(Exception):
    """Raised when a requested resource cannot be found."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
