"""Structured Value Objects describing how a payment is charged.

Discounts, interest, fines, splits and the post-payment callback are
small aggregates of already-validated fields. Like the simple value
objects, they validate in ``__post_init__`` so an instance is always
well-formed; ``from_raw()`` builds one from the API-shaped mapping a
caller supplies, and ``to_payload()`` renders it back in the API's
camelCase JSON shape.

Money is carried as Decimal and only turned into a JSON number at the
edge.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import HttpUrl, TypeAdapter
from pydantic import ValidationError as UrlError

from asaas.domain import sanitizer
from asaas.domain.exceptions import InvalidFormatError

HUNDRED = Decimal("100")

_HTTP_URL = TypeAdapter(HttpUrl)


class BillingType(Enum):
    UNDEFINED = "UNDEFINED"
    BOLETO = "BOLETO"
    CREDIT_CARD = "CREDIT_CARD"
    PIX = "PIX"

    @property
    def label(self) -> str:
        return _BILLING_LABELS[self]

    @staticmethod
    def parse(raw: Any) -> BillingType | None:
        """Resolve a billing type from its API name or a common alias."""
        if isinstance(raw, BillingType):
            return raw
        return _BILLING_ALIASES.get(sanitizer.normalize_case(raw) or "")


_BILLING_LABELS = {
    BillingType.UNDEFINED: "Desconhecido",
    BillingType.BOLETO: "Boleto",
    BillingType.CREDIT_CARD: "Cartão de Crédito",
    BillingType.PIX: "Pix",
}

_BILLING_ALIASES = {
    "undefined": BillingType.UNDEFINED,
    "boleto": BillingType.BOLETO,
    "boleto_bancario": BillingType.BOLETO,
    "ticket": BillingType.BOLETO,
    "credit_card": BillingType.CREDIT_CARD,
    "creditcard": BillingType.CREDIT_CARD,
    "cartão de crédito": BillingType.CREDIT_CARD,
    "cartao de credito": BillingType.CREDIT_CARD,
    "pix": BillingType.PIX,
}


class ValueType(Enum):
    """Whether an amount is absolute or a percentage of the payment."""

    FIXED = "FIXED"
    PERCENTAGE = "PERCENTAGE"

    @staticmethod
    def parse(raw: Any) -> ValueType | None:
        if isinstance(raw, ValueType):
            return raw
        return _VALUE_TYPE_ALIASES.get(sanitizer.normalize_case(raw) or "")


_VALUE_TYPE_ALIASES = {
    "fixed": ValueType.FIXED,
    "fixo": ValueType.FIXED,
    "percentage": ValueType.PERCENTAGE,
    "porcentagem": ValueType.PERCENTAGE,
}


class StructuredValueObject(ABC):

    @abstractmethod
    def to_payload(self) -> Any:
        """Render the object in the shape the API expects."""


# --- Charges and reductions ---------------------------------------------------


@dataclass(frozen=True)
class Discount(StructuredValueObject):
    """Early-payment discount.

    ``due_date_limit_days`` is how many days before the due date the
    discount stops applying (0 means "until the due date").
    """

    value: Decimal
    discount_type: ValueType = ValueType.FIXED
    due_date_limit_days: int | None = None

    def __post_init__(self) -> None:
        _require_decimal("discount", self.value)
        if self.value <= 0:
            raise InvalidFormatError("discount", "Discount value must be greater than 0")
        if self.discount_type is ValueType.PERCENTAGE and self.value > HUNDRED:
            raise InvalidFormatError("discount", "Discount percentage cannot exceed 100%")
        if self.due_date_limit_days is not None and self.due_date_limit_days < 0:
            raise InvalidFormatError("discount", "Discount dueDateLimitDays cannot be negative")

    def calculate_amount(self, payment_value: Decimal) -> Decimal:
        if self.discount_type is ValueType.PERCENTAGE:
            return payment_value * self.value / HUNDRED
        return self.value

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "value": float(self.value),
            "type": self.discount_type.value,
        }
        if self.due_date_limit_days is not None:
            payload["dueDateLimitDays"] = self.due_date_limit_days
        return payload

    @staticmethod
    def from_raw(data: Mapping[str, Any]) -> Discount:
        value = _require_amount("discount", data.get("value"), "Discount value is required")
        discount_type = ValueType.FIXED
        if data.get("type") is not None:
            discount_type = ValueType.parse(data["type"])
            if discount_type is None:
                raise InvalidFormatError("discount", f"Invalid discount type: {data['type']!r}")
        days = None
        if data.get("dueDateLimitDays") is not None:
            days = sanitizer.coerce_integer(data["dueDateLimitDays"])
            if days is None:
                raise InvalidFormatError("discount", "Discount dueDateLimitDays must be an integer")
        return Discount(value, discount_type, days)


@dataclass(frozen=True)
class Interest(StructuredValueObject):
    """Monthly interest percentage charged after the due date."""

    value: Decimal

    def __post_init__(self) -> None:
        _require_decimal("interest", self.value)
        if self.value < 0:
            raise InvalidFormatError("interest", "Interest value cannot be negative")
        if self.value > HUNDRED:
            raise InvalidFormatError("interest", "Interest value cannot exceed 100%")

    def to_payload(self) -> dict[str, Any]:
        return {"value": float(self.value)}

    @staticmethod
    def from_raw(data: Mapping[str, Any]) -> Interest:
        return Interest(
            _require_amount("interest", data.get("value"), "Interest value is required")
        )


@dataclass(frozen=True)
class Fine(StructuredValueObject):
    """One-off fine charged when the payment is late."""

    value: Decimal
    fine_type: ValueType = ValueType.PERCENTAGE

    def __post_init__(self) -> None:
        _require_decimal("fine", self.value)
        if self.value < 0:
            raise InvalidFormatError("fine", "Fine value cannot be negative")
        if self.fine_type is ValueType.PERCENTAGE and self.value > HUNDRED:
            raise InvalidFormatError("fine", "Fine percentage cannot exceed 100%")

    def to_payload(self) -> dict[str, Any]:
        return {"value": float(self.value), "type": self.fine_type.value}

    @staticmethod
    def from_raw(data: Mapping[str, Any]) -> Fine:
        value = _require_amount("fine", data.get("value"), "Fine value is required")
        fine_type = ValueType.PERCENTAGE
        if data.get("type") is not None:
            fine_type = ValueType.parse(data["type"])
            if fine_type is None:
                raise InvalidFormatError("fine", f"Invalid fine type: {data['type']!r}")
        return Fine(value, fine_type)


# --- Split --------------------------------------------------------------------


@dataclass(frozen=True)
class SplitEntry(StructuredValueObject):
    """Share of a payment forwarded to another Asaas wallet."""

    wallet_id: str
    fixed_value: Decimal | None = None
    percentual_value: Decimal | None = None
    total_fixed_value: Decimal | None = None
    external_reference: str | None = None
    description: str | None = None

    def __post_init__(self) -> None:
        if not self.wallet_id:
            raise InvalidFormatError("split", "walletId is required")
        amounts = (self.fixed_value, self.percentual_value, self.total_fixed_value)
        if all(amount is None for amount in amounts):
            raise InvalidFormatError(
                "split",
                "Split entry needs a fixedValue, percentualValue or totalFixedValue",
            )
        for amount in amounts:
            if amount is not None:
                _require_decimal("split", amount)
                if amount < 0:
                    raise InvalidFormatError("split", "Split values cannot be negative")
        if self.percentual_value is not None and self.percentual_value > HUNDRED:
            raise InvalidFormatError("split", "Percentual value must be between 0 and 100")

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"walletId": self.wallet_id}
        if self.fixed_value is not None:
            payload["fixedValue"] = float(self.fixed_value)
        if self.percentual_value is not None:
            payload["percentualValue"] = float(self.percentual_value)
        if self.total_fixed_value is not None:
            payload["totalFixedValue"] = float(self.total_fixed_value)
        if self.external_reference is not None:
            payload["externalReference"] = self.external_reference
        if self.description is not None:
            payload["description"] = self.description
        return payload

    @staticmethod
    def from_raw(data: Mapping[str, Any]) -> SplitEntry:
        percentual = data.get("percentualValue", data.get("percentageValue"))
        return SplitEntry(
            wallet_id=sanitizer.normalize_string(data.get("walletId")) or "",
            fixed_value=_optional_amount("split", data.get("fixedValue")),
            percentual_value=_optional_amount("split", percentual),
            total_fixed_value=_optional_amount("split", data.get("totalFixedValue")),
            external_reference=sanitizer.normalize_string(data.get("externalReference")),
            description=sanitizer.normalize_string(data.get("description")),
        )


@dataclass(frozen=True)
class Split(StructuredValueObject):
    """All split entries of one payment.

    Totals can only be checked against the payment value, which the split
    does not know; callers must run ``validate_for()`` once it is known.
    """

    entries: tuple[SplitEntry, ...]

    def __post_init__(self) -> None:
        if not self.entries:
            raise InvalidFormatError("split", "Split entries must not be empty")
        if not all(isinstance(entry, SplitEntry) for entry in self.entries):
            raise InvalidFormatError("split", "Split entries must be SplitEntry instances")

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def total_percentage(self) -> Decimal:
        return sum(
            (entry.percentual_value or Decimal("0") for entry in self.entries),
            Decimal("0"),
        )

    @property
    def total_fixed_value(self) -> Decimal:
        return sum(
            (
                (entry.fixed_value or Decimal("0")) + (entry.total_fixed_value or Decimal("0"))
                for entry in self.entries
            ),
            Decimal("0"),
        )

    def validate_for(self, payment_value: Decimal) -> None:
        total_percentage = self.total_percentage
        if total_percentage > HUNDRED:
            raise InvalidFormatError(
                "split",
                f"Split percentages sum to {total_percentage}%, which exceeds 100%",
            )
        total_fixed = self.total_fixed_value
        if total_fixed > payment_value:
            raise InvalidFormatError(
                "split",
                f"Split fixed values sum to R$ {total_fixed}, "
                f"which exceeds payment value of R$ {payment_value}",
            )

    def to_payload(self) -> list[dict[str, Any]]:
        return [entry.to_payload() for entry in self.entries]

    @staticmethod
    def from_raw(data: Sequence[Mapping[str, Any] | SplitEntry]) -> Split:
        if isinstance(data, (str, bytes, Mapping)) or not isinstance(data, Sequence):
            raise InvalidFormatError("split", "Split must be a list of entries")
        return Split(
            tuple(
                entry if isinstance(entry, SplitEntry) else SplitEntry.from_raw(entry)
                for entry in data
            )
        )


# --- Callback -----------------------------------------------------------------


@dataclass(frozen=True)
class Callback(StructuredValueObject):
    """Where the payer is sent after paying through the checkout page."""

    success_url: str
    auto_redirect: bool = True

    def __post_init__(self) -> None:
        try:
            url = _HTTP_URL.validate_python(self.success_url)
        except UrlError as exc:
            raise InvalidFormatError(
                "callback", f"Invalid success URL: {self.success_url}"
            ) from exc
        if url.scheme != "https":
            raise InvalidFormatError("callback", "Success URL must use HTTPS protocol")

    def to_payload(self) -> dict[str, Any]:
        return {"successUrl": self.success_url, "autoRedirect": self.auto_redirect}

    @staticmethod
    def from_raw(data: Mapping[str, Any]) -> Callback:
        url = sanitizer.normalize_string(data.get("successUrl"))
        if url is None:
            raise InvalidFormatError("callback", "successUrl is required")
        auto_redirect = sanitizer.coerce_boolean(data.get("autoRedirect"))
        return Callback(url, True if auto_redirect is None else auto_redirect)


# --- Internal helpers ---------------------------------------------------------


def _require_decimal(field: str, value: Any) -> None:
    if not isinstance(value, Decimal) or not value.is_finite():
        raise InvalidFormatError(
            field, f"Amount must be a finite Decimal, got {type(value).__name__}"
        )


def _require_amount(field: str, raw: Any, missing_message: str) -> Decimal:
    if raw is None:
        raise InvalidFormatError(field, missing_message)
    amount = sanitizer.coerce_decimal(raw)
    if amount is None:
        raise InvalidFormatError(field, f"Invalid amount: {raw!r}")
    return amount


def _optional_amount(field: str, raw: Any) -> Decimal | None:
    if raw is None:
        return None
    amount = sanitizer.coerce_decimal(raw)
    if amount is None:
        raise InvalidFormatError(field, f"Invalid amount: {raw!r}")
    return amount
