"""Abstract transport to the Asaas REST API.

Defined in the domain layer so the domain never depends on
infrastructure. The concrete implementation (httpx) lives in the
infrastructure layer; tests use an in-memory fake.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RawResponse:
    """A completed HTTP exchange, before any interpretation."""

    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""

    def header(self, name: str) -> str | None:
        return header_value(self.headers, name)


def header_value(headers: Mapping[str, str], name: str) -> str | None:
    """Case-insensitive header lookup."""
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


class Transport(ABC):

    @abstractmethod
    def send(
        self,
        method: str,
        path: str,
        *,
        json: Mapping[str, Any] | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> RawResponse:
        """Perform one logical request and return whatever the API answered.

        Must not raise on non-2xx statuses. Raises ConnectionFailedError
        when no response could be obtained.
        """

    def close(self) -> None:
        """Release held connections. Transports without any keep the default."""
