"""Domain service: Retry Policy.

Decides, after each transport attempt, whether the request should be
sent again and how long to wait first. Connection-level failures and
transient statuses are retried; everything else is final.

The backoff is linear (``attempt * base_delay``) with no jitter; the
client is low-QPS and talks to a single API.
"""

from __future__ import annotations

from dataclasses import dataclass

from asaas.domain.gateway.transport import RawResponse

RETRYABLE_STATUSES = frozenset({429, 500, 502, 503, 504})

MAX_RETRIES = 3
BASE_DELAY_SECONDS = 1.0


@dataclass(frozen=True)
class RetryPolicy:

    max_retries: int = MAX_RETRIES
    base_delay: float = BASE_DELAY_SECONDS

    def should_retry(
        self,
        attempt: int,
        response: RawResponse | None = None,
        connection_error: BaseException | None = None,
    ) -> bool:
        """Return True if attempt number *attempt* (1-based) may be followed by another.

        With the default of 3 retries a request is sent at most 4 times.
        """
        if attempt > self.max_retries:
            return False
        if connection_error is not None:
            return True
        return response is not None and response.status_code in RETRYABLE_STATUSES

    def delay_for(self, attempt: int) -> float:
        """Seconds to wait after attempt *attempt* before the next one."""
        return attempt * self.base_delay
