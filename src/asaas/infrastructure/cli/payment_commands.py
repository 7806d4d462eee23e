"""CLI commands for payments."""

from __future__ import annotations

import click

from asaas.infrastructure.cli.output import drop_empty, run


def _parse_amount(raw: str) -> tuple[str, str]:
    """Parse '10%' or '5.00' into (type, value)."""
    raw = raw.strip()
    if raw.endswith("%"):
        return "PERCENTAGE", raw[:-1].strip()
    return "FIXED", raw


def _parse_split(raw: str) -> list[dict[str, str]]:
    """Parse 'wallet1:30%,wallet2:10.00' into split entries."""
    entries: list[dict[str, str]] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid split format '{pair}'. Expected 'WalletId:Amount' or 'WalletId:Percent%'."
            )
        wallet_id, amount = pair.rsplit(":", 1)
        kind, value = _parse_amount(amount)
        key = "percentualValue" if kind == "PERCENTAGE" else "fixedValue"
        entries.append({"walletId": wallet_id.strip(), key: value})
    return entries


@click.command("create")
@click.option("--customer", required=True, help="Customer ID.")
@click.option("--billing-type", required=True, help="BOLETO, CREDIT_CARD, PIX or UNDEFINED.")
@click.option("--value", required=True, help="Amount, e.g. 150.00 or 150,00.")
@click.option("--due-date", required=True, help="YYYY-MM-DD or DD/MM/YYYY.")
@click.option("--description", default=None)
@click.option("--external-reference", default=None)
@click.option("--installment-count", type=int, default=None)
@click.option("--discount", default=None, help="Discount as '5.00' or '10%'.")
@click.option("--discount-days", type=int, default=None, help="Days before due date the discount ends.")
@click.option("--interest", default=None, help="Monthly interest percentage.")
@click.option("--fine", default=None, help="Fine as '2%' or '5.00'.")
@click.option("--split", "split_str", default=None, help="Split as 'Wallet:30%,Wallet:10.00'.")
@click.option("--callback-url", default=None, help="HTTPS URL to redirect to after payment.")
def payment_create(
    customer: str,
    billing_type: str,
    value: str,
    due_date: str,
    description: str | None,
    external_reference: str | None,
    installment_count: int | None,
    discount: str | None,
    discount_days: int | None,
    interest: str | None,
    fine: str | None,
    split_str: str | None,
    callback_url: str | None,
) -> None:
    """Create a new payment for a customer."""
    data = drop_empty(
        {
            "customer": customer,
            "billingType": billing_type,
            "value": value,
            "dueDate": due_date,
            "description": description,
            "externalReference": external_reference,
            "installmentCount": installment_count,
        }
    )
    if discount is not None:
        kind, amount = _parse_amount(discount)
        data["discount"] = drop_empty(
            {"value": amount, "type": kind, "dueDateLimitDays": discount_days}
        )
    if interest is not None:
        data["interest"] = {"value": interest.strip().rstrip("%")}
    if fine is not None:
        kind, amount = _parse_amount(fine)
        data["fine"] = {"value": amount, "type": kind}
    if split_str:
        data["split"] = _parse_split(split_str)
    if callback_url is not None:
        data["callback"] = {"successUrl": callback_url}

    run(lambda client: client.create_payment(data))
