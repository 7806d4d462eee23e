"""Application service: Create Customer use case."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from asaas.application.api_handler import ApiHandler
from asaas.application.customer_dtos import CreateCustomerDTO


class CreateCustomerHandler(ApiHandler):

    def handle(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Register a new customer.

        The input is fully validated before anything is sent: a missing
        name or document number, or any malformed optional field, raises
        a ValidationError and no request is made.
        """
        dto = CreateCustomerDTO.from_raw(data)
        return self._execute("POST", "customers", json=dto.to_payload())
