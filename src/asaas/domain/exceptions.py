"""Domain-level exceptions.

Every failure the SDK can report is a subclass of AsaasError so callers
can catch them uniformly. Each class carries a ``FailureKind`` tag, which
makes it easy to ``match`` on the kind of failure without isinstance
chains, and exposes the structured detail needed to act on it (field
name, remote error list, retry-after) without parsing message strings.

Local failures (ValidationError and subclasses) are raised before any
network call. Remote failures (ApiError and subclasses) are raised only
after an HTTP exchange completed. ConnectionFailedError means no
exchange completed at all.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class FailureKind(Enum):
    MISSING_FIELD = "MISSING_FIELD"
    INVALID_FORMAT = "INVALID_FORMAT"
    AUTHENTICATION = "AUTHENTICATION"
    NOT_FOUND = "NOT_FOUND"
    REMOTE_VALIDATION = "REMOTE_VALIDATION"
    RATE_LIMITED = "RATE_LIMITED"
    API = "API"
    CONNECTION = "CONNECTION"


class AsaasError(Exception):
    """Base class for all SDK errors."""

    kind: FailureKind = FailureKind.API

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def is_local(self) -> bool:
        return self.kind in (FailureKind.MISSING_FIELD, FailureKind.INVALID_FORMAT)


# --- Local validation ---------------------------------------------------------


class ValidationError(AsaasError):
    """Input was rejected before being sent to the API."""

    kind = FailureKind.INVALID_FORMAT

    def __init__(self, field: str, reason: str, message: str | None = None) -> None:
        super().__init__(message or reason)
        self.field = field
        self.reason = reason


class MissingFieldError(ValidationError):
    """A required field is absent or empty."""

    kind = FailureKind.MISSING_FIELD

    def __init__(self, field: str) -> None:
        super().__init__(
            field,
            "required field is missing",
            f"Required field '{field}' is missing",
        )


class InvalidFormatError(ValidationError):
    """A field is present but malformed."""

    kind = FailureKind.INVALID_FORMAT

    def __init__(self, field: str, reason: str | None = None) -> None:
        super().__init__(
            field,
            reason or "invalid format",
            reason or f"Field '{field}' has invalid format",
        )


# --- Remote outcomes ----------------------------------------------------------


class ApiError(AsaasError):
    """The API answered with an error status (generic case)."""

    kind = FailureKind.API

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(ApiError):
    """HTTP 401: invalid or missing API token."""

    kind = FailureKind.AUTHENTICATION

    def __init__(self, message: str = "Invalid API token or unauthorized access") -> None:
        super().__init__(message, 401)


class NotFoundError(ApiError):
    """HTTP 404: the requested resource does not exist."""

    kind = FailureKind.NOT_FOUND

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, 404)


class RemoteValidationError(ApiError):
    """HTTP 400: the API rejected the payload.

    ``errors`` is the API's list of ``{"code": ..., "description": ...}``
    entries, untouched.
    """

    kind = FailureKind.REMOTE_VALIDATION

    def __init__(
        self,
        message: str = "Invalid data provided",
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message, 400)
        self.errors = list(errors or [])


class RateLimitError(ApiError):
    """HTTP 429: too many requests.

    ``retry_after`` is the number of seconds suggested by the API, when
    it sent a Retry-After header.
    """

    kind = FailureKind.RATE_LIMITED

    def __init__(
        self,
        message: str = "Rate limit exceeded. Please try again later.",
        retry_after: int | None = None,
    ) -> None:
        super().__init__(message, 429)
        self.retry_after = retry_after


# --- Transport ----------------------------------------------------------------


class ConnectionFailedError(AsaasError):
    """No HTTP exchange completed (DNS, refused connection, timeout)."""

    kind = FailureKind.CONNECTION
