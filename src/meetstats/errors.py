from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-facing errors.

    All errors that inherit from UserError will have their messages
    returned to the API client. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Document not found") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when user input fails validation."""


class NetworkError(Exception):
    """Raised by the tracker when a call to the session API fails.

    Covers connection failures, timeouts, non-2xx responses and unreadable
    response bodies. Never crosses the HTTP boundary of the backend.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ProbeError(Exception):
    """Raised when the open-tab signal cannot be sampled."""
