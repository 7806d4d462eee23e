"""DTOs for the customer operations.

Create and update are strict: any malformed field aborts with a
ValidationError. The list filter is lenient: a malformed filter is
dropped, so the query runs without it instead of failing.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar

from asaas.application.dto import (
    BaseDTO,
    Transmit,
    lenient_value_object,
    raw_value,
    strict_value_object,
)
from asaas.domain import sanitizer
from asaas.domain.exceptions import MissingFieldError
from asaas.domain.model.value_objects import (
    Cnpj,
    Cpf,
    Email,
    Phone,
    PostalCode,
    document_number,
)

# Optional free-text fields shared by create and update.
_TEXT_FIELDS = (
    "address",
    "address_number",
    "complement",
    "external_reference",
    "additional_emails",
    "municipal_inscription",
    "state_inscription",
    "observations",
    "group_name",
    "company",
)


def _sanitize_customer(data: Mapping[str, Any]) -> dict[str, Any]:
    sanitized: dict[str, Any] = {
        "name": sanitizer.normalize_string(raw_value(data, "name")),
        "cpf_cnpj": sanitizer.normalize_string(raw_value(data, "cpf_cnpj")),
        "email": sanitizer.normalize_string(raw_value(data, "email")),
        "phone": sanitizer.normalize_string(raw_value(data, "phone")),
        "mobile_phone": sanitizer.normalize_string(raw_value(data, "mobile_phone")),
        "province": sanitizer.normalize_string(raw_value(data, "province", "neighborhood")),
        "postal_code": sanitizer.normalize_string(raw_value(data, "postal_code")),
        "notification_disabled": sanitizer.coerce_boolean(
            raw_value(data, "notification_disabled")
        ),
        "foreign_customer": sanitizer.coerce_boolean(raw_value(data, "foreign_customer")),
    }
    for name in _TEXT_FIELDS:
        sanitized[name] = sanitizer.normalize_string(raw_value(data, name))
    return sanitized


def _validate_contact(data: dict[str, Any]) -> None:
    strict_value_object(data, "cpf_cnpj", document_number)
    strict_value_object(data, "email", Email.of)
    strict_value_object(data, "phone", Phone.of)
    strict_value_object(data, "mobile_phone", Phone.of)
    strict_value_object(data, "postal_code", PostalCode.of)


@dataclass(frozen=True)
class CreateCustomerDTO(BaseDTO):

    name: str
    cpf_cnpj: Cpf | Cnpj
    email: Email | None = None
    phone: Phone | None = None
    mobile_phone: Phone | None = None
    address: str | None = None
    address_number: str | None = None
    complement: str | None = None
    province: str | None = None
    postal_code: PostalCode | None = None
    external_reference: str | None = None
    notification_disabled: bool | None = None
    additional_emails: str | None = None
    municipal_inscription: str | None = None
    state_inscription: str | None = None
    observations: str | None = None
    group_name: str | None = None
    company: str | None = None
    foreign_customer: bool | None = None

    transmit: ClassVar[Mapping[str, Transmit]] = {"postal_code": Transmit("formatted")}

    @classmethod
    def sanitize(cls, data: Mapping[str, Any]) -> dict[str, Any]:
        return _sanitize_customer(data)

    @classmethod
    def validate(cls, data: dict[str, Any]) -> dict[str, Any]:
        # Required fields are checked before any format check.
        if not data["name"]:
            raise MissingFieldError("name")
        if not data["cpf_cnpj"]:
            raise MissingFieldError("cpfCnpj")
        _validate_contact(data)
        return data


@dataclass(frozen=True)
class UpdateCustomerDTO(BaseDTO):
    """Partial update: only the fields present are sent."""

    name: str | None = None
    cpf_cnpj: Cpf | Cnpj | None = None
    email: Email | None = None
    phone: Phone | None = None
    mobile_phone: Phone | None = None
    address: str | None = None
    address_number: str | None = None
    complement: str | None = None
    province: str | None = None
    postal_code: PostalCode | None = None
    external_reference: str | None = None
    notification_disabled: bool | None = None
    additional_emails: str | None = None
    municipal_inscription: str | None = None
    state_inscription: str | None = None
    observations: str | None = None
    group_name: str | None = None
    company: str | None = None
    foreign_customer: bool | None = None

    transmit: ClassVar[Mapping[str, Transmit]] = {"postal_code": Transmit("formatted")}

    @classmethod
    def sanitize(cls, data: Mapping[str, Any]) -> dict[str, Any]:
        return _sanitize_customer(data)

    @classmethod
    def validate(cls, data: dict[str, Any]) -> dict[str, Any]:
        _validate_contact(data)
        return data


@dataclass(frozen=True)
class ListCustomersDTO(BaseDTO):
    """Filters and pagination for listing customers."""

    offset: int | None = None
    limit: int | None = None
    name: str | None = None
    email: Email | None = None
    cpf_cnpj: Cpf | Cnpj | None = None
    group_name: str | None = None
    external_reference: str | None = None

    @classmethod
    def sanitize(cls, data: Mapping[str, Any]) -> dict[str, Any]:
        offset = sanitizer.coerce_integer(raw_value(data, "offset"))
        limit = sanitizer.coerce_integer(raw_value(data, "limit"))
        return {
            "offset": offset if offset is not None and offset >= 0 else None,
            "limit": limit if limit is not None and limit > 0 else None,
            "name": sanitizer.normalize_string(raw_value(data, "name")),
            "email": lenient_value_object(raw_value(data, "email"), Email.of),
            "cpf_cnpj": lenient_value_object(raw_value(data, "cpf_cnpj"), document_number),
            "group_name": sanitizer.normalize_string(raw_value(data, "group_name")),
            "external_reference": sanitizer.normalize_string(
                raw_value(data, "external_reference")
            ),
        }
