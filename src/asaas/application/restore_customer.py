"""Application service: Restore Customer use case."""

from __future__ import annotations

from typing import Any

from asaas.application.api_handler import ApiHandler


class RestoreCustomerHandler(ApiHandler):

    def handle(self, customer_id: str) -> dict[str, Any]:
        """Undo a previous delete."""
        return self._execute("POST", f"customers/{self._resource_id(customer_id)}/restore")
