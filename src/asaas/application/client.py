"""Façade bundling every operation behind a single object."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from asaas.application.create_customer import CreateCustomerHandler
from asaas.application.create_payment import CreatePaymentHandler
from asaas.application.delete_customer import DeleteCustomerHandler
from asaas.application.get_customer import GetCustomerHandler
from asaas.application.list_customers import ListCustomersHandler
from asaas.application.restore_customer import RestoreCustomerHandler
from asaas.application.update_customer import UpdateCustomerHandler
from asaas.domain.gateway.transport import Transport
from asaas.domain.service.response_classifier import ResponseClassifier


class AsaasClient:

    def __init__(
        self,
        transport: Transport,
        classifier: ResponseClassifier | None = None,
    ) -> None:
        self._transport = transport
        classifier = classifier or ResponseClassifier()
        self._create_customer = CreateCustomerHandler(transport, classifier)
        self._list_customers = ListCustomersHandler(transport, classifier)
        self._get_customer = GetCustomerHandler(transport, classifier)
        self._update_customer = UpdateCustomerHandler(transport, classifier)
        self._delete_customer = DeleteCustomerHandler(transport, classifier)
        self._restore_customer = RestoreCustomerHandler(transport, classifier)
        self._create_payment = CreatePaymentHandler(transport, classifier)

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> AsaasClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # --- Customers -------------------------------------------------------------

    def create_customer(self, data: Mapping[str, Any]) -> dict[str, Any]:
        return self._create_customer.handle(data)

    def list_customers(self, filters: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return self._list_customers.handle(filters)

    def get_customer(self, customer_id: str) -> dict[str, Any]:
        return self._get_customer.handle(customer_id)

    def update_customer(self, customer_id: str, data: Mapping[str, Any]) -> dict[str, Any]:
        return self._update_customer.handle(customer_id, data)

    def delete_customer(self, customer_id: str) -> dict[str, Any]:
        return self._delete_customer.handle(customer_id)

    def restore_customer(self, customer_id: str) -> dict[str, Any]:
        return self._restore_customer.handle(customer_id)

    # --- Payments --------------------------------------------------------------

    def create_payment(self, data: Mapping[str, Any]) -> dict[str, Any]:
        return self._create_payment.handle(data)
