"""Application service: Create Payment use case."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from asaas.application.api_handler import ApiHandler
from asaas.application.payment_dtos import CreatePaymentDTO


class CreatePaymentHandler(ApiHandler):

    def handle(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Create a charge for an existing customer.

        Discount, interest, fine, split and callback are validated as
        value objects; split totals are checked against the payment value
        before the request is sent.
        """
        dto = CreatePaymentDTO.from_raw(data)
        return self._execute("POST", "payments", json=dto.to_payload())
