"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from asaas.application.client import AsaasClient
from asaas.domain.service.retry_policy import RetryPolicy
from asaas.infrastructure.config import AsaasSettings
from asaas.infrastructure.http.httpx_transport import HttpxTransport, build_http_client


def settings() -> AsaasSettings:
    return AsaasSettings()


def transport(config: AsaasSettings) -> HttpxTransport:
    return HttpxTransport(
        build_http_client(config),
        retry_policy=RetryPolicy(
            max_retries=config.max_retries,
            base_delay=config.retry_base_delay_seconds,
        ),
        log_requests=config.log_requests,
    )


def asaas_client(config: AsaasSettings | None = None) -> AsaasClient:
    return AsaasClient(transport(config or settings()))
