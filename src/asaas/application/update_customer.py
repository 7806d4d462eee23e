"""Application service: Update Customer use case."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from asaas.application.api_handler import ApiHandler
from asaas.application.customer_dtos import UpdateCustomerDTO


class UpdateCustomerHandler(ApiHandler):

    def handle(self, customer_id: str, data: Mapping[str, Any]) -> dict[str, Any]:
        """Change the given fields of an existing customer; others are untouched."""
        path = f"customers/{self._resource_id(customer_id)}"
        dto = UpdateCustomerDTO.from_raw(data)
        return self._execute("PUT", path, json=dto.to_payload())
