"""Shared plumbing for the application handlers.

Each handler validates its input into a DTO, sends it through the
Transport, and lets the ResponseClassifier decide between a decoded
body and a typed ApiError. Retries happen inside the transport, so the
classifier only ever sees the attempt that was allowed to stand.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from asaas.domain.exceptions import MissingFieldError
from asaas.domain.gateway.transport import Transport
from asaas.domain.service.response_classifier import ResponseClassifier


class ApiHandler:

    def __init__(
        self,
        transport: Transport,
        classifier: ResponseClassifier | None = None,
    ) -> None:
        self._transport = transport
        self._classifier = classifier or ResponseClassifier()

    def _execute(
        self,
        method: str,
        path: str,
        *,
        json: Mapping[str, Any] | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        response = self._transport.send(method, path, json=json, params=params)
        return self._classifier.handle(response)

    @staticmethod
    def _resource_id(raw_id: str | None) -> str:
        """Trim and URL-quote a resource id; an empty id is a missing field."""
        resource_id = (raw_id or "").strip()
        if not resource_id:
            raise MissingFieldError("id")
        return quote(resource_id, safe="")
