"""httpx-backed Transport with retries."""

from __future__ import annotations

import json as jsonlib
import logging
import time
from collections.abc import Callable, Mapping
from typing import Any

import httpx

from asaas.domain.exceptions import ConnectionFailedError
from asaas.domain.gateway.transport import RawResponse, Transport
from asaas.domain.service.retry_policy import RetryPolicy
from asaas.infrastructure.config import AsaasSettings

logger = logging.getLogger(__name__)

USER_AGENT = "asaas-sdk-python/0.1.0"


def build_http_client(settings: AsaasSettings) -> httpx.Client:
    return httpx.Client(
        base_url=settings.base_url,
        headers={
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
            "access_token": settings.token or "",
        },
        timeout=httpx.Timeout(
            settings.timeout_seconds,
            connect=settings.connect_timeout_seconds,
        ),
    )


class HttpxTransport(Transport):
    """Sends requests through a sync httpx.Client.

    Non-2xx answers are returned as they are; the retry policy decides
    whether to send again. A connection failure that outlives the
    retries becomes ConnectionFailedError.
    """

    def __init__(
        self,
        client: httpx.Client,
        retry_policy: RetryPolicy | None = None,
        sleep: Callable[[float], None] = time.sleep,
        log_requests: bool = False,
    ) -> None:
        self._client = client
        self._retry_policy = retry_policy or RetryPolicy()
        self._sleep = sleep
        self._log_requests = log_requests

    def send(
        self,
        method: str,
        path: str,
        *,
        json: Mapping[str, Any] | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> RawResponse:
        if self._log_requests:
            logger.info(
                "Asaas request %s %s params=%s body=%s",
                method,
                path,
                dict(params or {}),
                jsonlib.dumps(dict(json), ensure_ascii=False) if json is not None else "",
            )

        attempt = 0
        while True:
            attempt += 1
            logger.debug("Asaas %s %s (attempt %d)", method, path, attempt)
            try:
                response = self._client.request(
                    method,
                    path,
                    json=dict(json) if json is not None else None,
                    params=dict(params) if params else None,
                )
            except httpx.TransportError as exc:
                if not self._retry_policy.should_retry(attempt, connection_error=exc):
                    raise ConnectionFailedError(
                        f"Connection error: {exc}"
                    ) from exc
                self._wait(attempt, method, path, f"connection error ({exc})")
                continue

            raw = RawResponse(
                status_code=response.status_code,
                headers=dict(response.headers),
                body=response.content,
            )
            if not self._retry_policy.should_retry(attempt, response=raw):
                return raw
            self._wait(attempt, method, path, f"status {raw.status_code}")

    def _wait(self, attempt: int, method: str, path: str, reason: str) -> None:
        delay = self._retry_policy.delay_for(attempt)
        logger.warning(
            "Retrying Asaas %s %s after %s; attempt %d, waiting %.1fs",
            method,
            path,
            reason,
            attempt,
            delay,
        )
        self._sleep(delay)

    def close(self) -> None:
        self._client.close()
