"""Exception hierarchy for the back-office service.

Every message is user-facing and written in Spanish, the same text the
admin panel shows in its toasts and alert boxes.
"""

from typing import Any


class BackofficeError(Exception):
    """Base exception for all back-office errors."""


class ValidationError(BackofficeError):
    """Raised when a precondition fails before any backend call is made."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class BackendError(BackofficeError):
    """Raised when the REST backend answers with an error or is unreachable."""

    def __init__(self, message: str, status_code: int | None = None, payload: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class NotFoundError(BackendError):
    """Raised when the backend answers 404 for the requested resource."""
