"""Domain service: Response Classifier.

Turns a completed HTTP exchange into either the decoded JSON body or
the matching typed ApiError. A 2xx status is the only success path;
every other status is mapped to exactly one error class.

``classify()`` returns the failure as a value so callers can inspect it
without exception handling; ``handle()`` raises it.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from asaas.domain.exceptions import (
    ApiError,
    AuthenticationError,
    NotFoundError,
    RateLimitError,
    RemoteValidationError,
)
from asaas.domain.gateway.transport import RawResponse, header_value

logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "Unknown error"


class ResponseClassifier:

    def handle(self, response: RawResponse) -> dict[str, Any]:
        """Return the decoded body of a successful response, or raise."""
        result = self.classify(response.status_code, response.headers, response.body)
        if isinstance(result, ApiError):
            raise result
        return result

    def classify(
        self,
        status_code: int,
        headers: Mapping[str, str],
        body: bytes | str,
    ) -> dict[str, Any] | ApiError:
        if 200 <= status_code < 300:
            try:
                return _decode(body)
            except ValueError as exc:
                return ApiError(f"Invalid response body: {exc}", status_code)

        try:
            payload = _decode(body)
        except ValueError:
            payload = {}
        message = _error_message(payload)
        logger.debug("Asaas API answered %s: %s", status_code, message or "<no detail>")

        if status_code == 401:
            return AuthenticationError(message or "Invalid API token or unauthorized access")
        if status_code == 400:
            errors = payload.get("errors")
            return RemoteValidationError(
                message or "Invalid data provided",
                errors if isinstance(errors, list) else [],
            )
        if status_code == 404:
            return NotFoundError(message or "Resource not found")
        if status_code == 429:
            return RateLimitError(
                message or "Rate limit exceeded. Please try again later.",
                _retry_after(headers),
            )
        if status_code >= 500:
            return ApiError(
                message or "Asaas API server error. Please try again later.",
                status_code,
            )
        return ApiError(message or "Unexpected error occurred", status_code)


def _decode(body: bytes | str) -> dict[str, Any]:
    """Decode a JSON object body; an empty body decodes to ``{}``.

    Raises ValueError for anything that is not a JSON object.
    """
    if isinstance(body, bytes):
        body = body.decode("utf-8")
    if not body.strip():
        return {}
    data = json.loads(body)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


def _error_message(payload: Mapping[str, Any]) -> str | None:
    errors = payload.get("errors")
    if not isinstance(errors, list):
        return None
    messages = []
    for error in errors:
        if isinstance(error, Mapping):
            messages.append(str(error.get("description") or error.get("message") or UNKNOWN_ERROR))
        else:
            messages.append(str(error))
    return "; ".join(messages)


def _retry_after(headers: Mapping[str, str]) -> int | None:
    value = header_value(headers, "Retry-After")
    if value is None:
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None
