"""Application service: Delete Customer use case."""

from __future__ import annotations

from typing import Any

from asaas.application.api_handler import ApiHandler


class DeleteCustomerHandler(ApiHandler):

    def handle(self, customer_id: str) -> dict[str, Any]:
        """Soft-delete a customer; it can be brought back with restore."""
        return self._execute("DELETE", f"customers/{self._resource_id(customer_id)}")
