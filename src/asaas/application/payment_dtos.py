"""DTO for payment creation (strict)."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, ClassVar

from asaas.application.dto import (
    BaseDTO,
    Transmit,
    raw_value,
    strict_value_object,
    wire_name,
)
from asaas.domain import sanitizer
from asaas.domain.exceptions import InvalidFormatError, MissingFieldError
from asaas.domain.model.payment_terms import (
    BillingType,
    Callback,
    Discount,
    Fine,
    Interest,
    Split,
)

DUE_DATE_FORMATS = ("%Y-%m-%d", "%d/%m/%Y")

_REQUIRED = (
    ("customer", "customer"),
    ("billing_type", "billingType"),
    ("value", "value"),
    ("due_date", "dueDate"),
)


@dataclass(frozen=True)
class CreatePaymentDTO(BaseDTO):

    customer: str
    billing_type: BillingType
    value: Decimal
    due_date: date
    description: str | None = None
    days_after_due_date_to_registration_cancellation: int | None = None
    external_reference: str | None = None
    installment_count: int | None = None
    total_value: Decimal | None = None
    installment_value: Decimal | None = None
    discount: Discount | None = None
    interest: Interest | None = None
    fine: Fine | None = None
    postal_service: bool | None = None
    split: Split | None = None
    callback: Callback | None = None

    transmit: ClassVar[Mapping[str, Transmit]] = {
        "due_date": Transmit("strftime", ("%Y-%m-%d",)),
    }

    @classmethod
    def sanitize(cls, data: Mapping[str, Any]) -> dict[str, Any]:
        return {
            "customer": sanitizer.normalize_string(raw_value(data, "customer", "customerId")),
            "billing_type": _blank_to_none(raw_value(data, "billing_type")),
            "value": _blank_to_none(raw_value(data, "value")),
            "due_date": _blank_to_none(raw_value(data, "due_date")),
            "description": sanitizer.normalize_string(raw_value(data, "description")),
            "days_after_due_date_to_registration_cancellation": raw_value(
                data, "days_after_due_date_to_registration_cancellation"
            ),
            "external_reference": sanitizer.normalize_string(
                raw_value(data, "external_reference")
            ),
            "installment_count": raw_value(data, "installment_count"),
            "total_value": raw_value(data, "total_value"),
            "installment_value": raw_value(data, "installment_value"),
            "discount": raw_value(data, "discount"),
            "interest": raw_value(data, "interest"),
            "fine": raw_value(data, "fine"),
            "postal_service": sanitizer.coerce_boolean(raw_value(data, "postal_service")),
            "split": raw_value(data, "split"),
            "callback": raw_value(data, "callback"),
        }

    @classmethod
    def validate(cls, data: dict[str, Any]) -> dict[str, Any]:
        for key, field_name in _REQUIRED:
            if data[key] is None or data[key] == "":
                raise MissingFieldError(field_name)

        billing_type = BillingType.parse(data["billing_type"])
        if billing_type is None:
            raise InvalidFormatError(
                "billingType", f"Invalid billing type: {data['billing_type']!r}"
            )
        data["billing_type"] = billing_type

        data["value"] = _positive_amount("value", data["value"])
        data["due_date"] = _parse_due_date(data["due_date"])

        _coerce(data, "days_after_due_date_to_registration_cancellation", sanitizer.coerce_integer)
        _coerce(data, "installment_count", sanitizer.coerce_integer)
        if data["installment_count"] is not None and data["installment_count"] < 1:
            raise InvalidFormatError("installmentCount", "Installment count must be positive")
        for key in ("total_value", "installment_value"):
            if data[key] is not None:
                data[key] = _positive_amount(key, data[key])

        strict_value_object(data, "discount", Discount.from_raw, Discount)
        strict_value_object(data, "interest", Interest.from_raw, Interest)
        strict_value_object(data, "fine", Fine.from_raw, Fine)
        strict_value_object(data, "split", Split.from_raw, Split)
        strict_value_object(data, "callback", Callback.from_raw, Callback)

        # Split totals are checked against the installment total when given.
        if data["split"] is not None:
            charged = data["total_value"] if data["total_value"] is not None else data["value"]
            data["split"].validate_for(charged)
        return data


def _blank_to_none(raw: Any) -> Any:
    """Blank strings are absent; dates, numbers and enums pass through."""
    if isinstance(raw, str):
        return sanitizer.normalize_string(raw)
    return raw


def _positive_amount(key: str, raw: Any) -> Decimal:
    field_name = wire_name(key)
    amount = sanitizer.coerce_decimal(raw)
    if amount is None:
        raise InvalidFormatError(field_name, f"Invalid amount for '{field_name}': {raw!r}")
    if amount <= 0:
        raise InvalidFormatError(field_name, f"'{field_name}' must be greater than 0")
    return amount


def _coerce(data: dict[str, Any], key: str, coerce: Callable[[Any], Any]) -> None:
    raw = data[key]
    if raw is None:
        return
    value = coerce(raw)
    if value is None:
        raise InvalidFormatError(wire_name(key), f"Invalid number for '{wire_name(key)}': {raw!r}")
    data[key] = value


def _parse_due_date(raw: Any) -> date:
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    text = sanitizer.normalize_string(raw) or ""
    for fmt in DUE_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise InvalidFormatError("dueDate", f"Invalid due date: {raw!r} (expected YYYY-MM-DD)")
