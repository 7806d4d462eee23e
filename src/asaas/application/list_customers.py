"""Application service: List Customers use case."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from asaas.application.api_handler import ApiHandler
from asaas.application.customer_dtos import ListCustomersDTO


class ListCustomersHandler(ApiHandler):

    def handle(self, filters: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Return one page of customers.

        Malformed filters are dropped rather than rejected, so a bad
        filter widens the query instead of failing it.
        """
        dto = ListCustomersDTO.from_raw(filters or {})
        return self._execute("GET", "customers", params=dto.to_payload())
