"""Unit tests for CreatePaymentDTO."""

from datetime import date
from decimal import Decimal

import pytest

from asaas.application.payment_dtos import CreatePaymentDTO
from asaas.domain.exceptions import InvalidFormatError, MissingFieldError
from asaas.domain.model.payment_terms import BillingType, Discount, ValueType


def _payment(**overrides):
    data = {
        "customer": "cus_000005219613",
        "billingType": "boleto",
        "value": "150,00",
        "dueDate": "2026-11-30",
    }
    data.update(overrides)
    return data


# ── Happy path ───────────────────────────────────────────────────────────────


class TestCreatePaymentDTO:

    def test_minimal(self):
        dto = CreatePaymentDTO.from_raw(_payment())
        assert dto.billing_type is BillingType.BOLETO
        assert dto.value == Decimal("150")
        assert dto.due_date == date(2026, 11, 30)
        assert dto.to_payload() == {
            "customer": "cus_000005219613",
            "billingType": "BOLETO",
            "value": 150.0,
            "dueDate": "2026-11-30",
        }

    def test_customer_id_alias(self):
        data = _payment()
        data["customerId"] = data.pop("customer")
        assert CreatePaymentDTO.from_raw(data).customer == "cus_000005219613"

    def test_brazilian_due_date(self):
        dto = CreatePaymentDTO.from_raw(_payment(dueDate="30/11/2026"))
        assert dto.to_payload()["dueDate"] == "2026-11-30"

    def test_date_object(self):
        dto = CreatePaymentDTO.from_raw(_payment(dueDate=date(2026, 12, 1)))
        assert dto.due_date == date(2026, 12, 1)

    def test_payment_terms(self):
        dto = CreatePaymentDTO.from_raw(
            _payment(
                discount={"value": 10, "type": "PERCENTAGE", "dueDateLimitDays": 0},
                interest={"value": "1"},
                fine={"value": "2"},
                callback={"successUrl": "https://loja.com.br/obrigado"},
                postalService="yes",
            )
        )
        payload = dto.to_payload()
        assert payload["discount"] == {"value": 10.0, "type": "PERCENTAGE", "dueDateLimitDays": 0}
        assert payload["interest"] == {"value": 1.0}
        assert payload["fine"] == {"value": 2.0, "type": "PERCENTAGE"}
        assert payload["callback"] == {
            "successUrl": "https://loja.com.br/obrigado",
            "autoRedirect": True,
        }
        assert payload["postalService"] is True

    def test_value_object_instances_kept(self):
        discount = Discount(Decimal("5"), ValueType.FIXED)
        assert CreatePaymentDTO.from_raw(_payment(discount=discount)).discount is discount

    def test_split(self):
        dto = CreatePaymentDTO.from_raw(
            _payment(split=[{"walletId": "w1", "percentualValue": "20"}])
        )
        assert dto.to_payload()["split"] == [{"walletId": "w1", "percentualValue": 20.0}]

    def test_split_checked_against_installment_total(self):
        dto = CreatePaymentDTO.from_raw(
            _payment(
                value="100",
                totalValue="200",
                installmentCount="2",
                split=[{"walletId": "w1", "fixedValue": 150}],
            )
        )
        assert dto.installment_count == 2
        assert dto.total_value == Decimal("200")


# ── Validation ───────────────────────────────────────────────────────────────


class TestCreatePaymentValidation:

    @pytest.mark.parametrize("field", ["customer", "billingType", "value", "dueDate"])
    def test_required_fields(self, field):
        data = _payment()
        del data[field]
        with pytest.raises(MissingFieldError) as exc_info:
            CreatePaymentDTO.from_raw(data)
        assert exc_info.value.field == field

    @pytest.mark.parametrize("field", ["billingType", "value", "dueDate"])
    def test_blank_required_field_is_missing(self, field):
        with pytest.raises(MissingFieldError) as exc_info:
            CreatePaymentDTO.from_raw(_payment(**{field: "   "}))
        assert exc_info.value.field == field

    def test_padded_values_are_trimmed(self):
        dto = CreatePaymentDTO.from_raw(_payment(billingType=" pix ", dueDate=" 2026-11-30 "))
        assert dto.billing_type is BillingType.PIX
        assert dto.due_date == date(2026, 11, 30)

    def test_required_fields_checked_before_formats(self):
        with pytest.raises(MissingFieldError) as exc_info:
            CreatePaymentDTO.from_raw(
                {"customer": "cus_1", "billingType": "bitcoin", "value": "abc"}
            )
        assert exc_info.value.field == "dueDate"

    def test_unknown_billing_type(self):
        with pytest.raises(InvalidFormatError) as exc_info:
            CreatePaymentDTO.from_raw(_payment(billingType="bitcoin"))
        assert exc_info.value.field == "billingType"

    @pytest.mark.parametrize("value", ["0", "-10", 0])
    def test_value_must_be_positive(self, value):
        with pytest.raises(InvalidFormatError, match="greater than 0"):
            CreatePaymentDTO.from_raw(_payment(value=value))

    def test_value_must_be_a_number(self):
        with pytest.raises(InvalidFormatError, match="Invalid amount"):
            CreatePaymentDTO.from_raw(_payment(value="abc"))

    def test_bad_due_date(self):
        with pytest.raises(InvalidFormatError) as exc_info:
            CreatePaymentDTO.from_raw(_payment(dueDate="tomorrow"))
        assert exc_info.value.field == "dueDate"

    def test_installment_count_must_be_positive(self):
        with pytest.raises(InvalidFormatError) as exc_info:
            CreatePaymentDTO.from_raw(_payment(installmentCount="0"))
        assert exc_info.value.field == "installmentCount"

    def test_invalid_discount_reported_under_its_field(self):
        with pytest.raises(InvalidFormatError) as exc_info:
            CreatePaymentDTO.from_raw(_payment(discount={"value": 0}))
        assert exc_info.value.field == "discount"
        assert "greater than 0" in exc_info.value.message

    def test_discount_must_be_a_mapping(self):
        with pytest.raises(InvalidFormatError) as exc_info:
            CreatePaymentDTO.from_raw(_payment(discount="10"))
        assert exc_info.value.field == "discount"

    def test_split_above_payment_value(self):
        with pytest.raises(InvalidFormatError, match="exceeds payment value"):
            CreatePaymentDTO.from_raw(
                _payment(value="100", split=[{"walletId": "w1", "fixedValue": 150}])
            )

    def test_http_callback_rejected(self):
        with pytest.raises(InvalidFormatError) as exc_info:
            CreatePaymentDTO.from_raw(_payment(callback={"successUrl": "http://loja.com.br"}))
        assert exc_info.value.field == "callback"
