"""Application service: Get Customer use case."""

from __future__ import annotations

from typing import Any

from asaas.application.api_handler import ApiHandler


class GetCustomerHandler(ApiHandler):

    def handle(self, customer_id: str) -> dict[str, Any]:
        return self._execute("GET", f"customers/{self._resource_id(customer_id)}")
