"""CLI commands for customers."""

from __future__ import annotations

import click

from asaas.infrastructure.cli.output import drop_empty, run


def _contact_options(command):
    """Options shared by create and update."""
    for option in reversed(
        [
            click.option("--email", default=None, help="Contact email."),
            click.option("--phone", default=None, help="Landline phone (10 digits)."),
            click.option("--mobile-phone", default=None, help="Mobile phone (11 digits)."),
            click.option("--postal-code", default=None, help="CEP, with or without mask."),
            click.option("--address", default=None),
            click.option("--address-number", default=None),
            click.option("--complement", default=None),
            click.option("--province", default=None, help="Neighborhood."),
            click.option("--external-reference", default=None),
            click.option(
                "--notification-disabled",
                is_flag=True,
                default=False,
                help="Turn Asaas notifications off.",
            ),
        ]
    ):
        command = option(command)
    return command


def _customer_data(name, cpf_cnpj, **options) -> dict:
    return drop_empty(
        {
            "name": name,
            "cpfCnpj": cpf_cnpj,
            "email": options["email"],
            "phone": options["phone"],
            "mobilePhone": options["mobile_phone"],
            "postalCode": options["postal_code"],
            "address": options["address"],
            "addressNumber": options["address_number"],
            "complement": options["complement"],
            "province": options["province"],
            "externalReference": options["external_reference"],
            "notificationDisabled": options["notification_disabled"] or None,
        }
    )


@click.command("create")
@click.option("--name", required=True, help="Customer name.")
@click.option("--cpf-cnpj", required=True, help="CPF or CNPJ, with or without mask.")
@_contact_options
def customer_create(name: str, cpf_cnpj: str, **options) -> None:
    """Register a new customer."""
    data = _customer_data(name, cpf_cnpj, **options)
    run(lambda client: client.create_customer(data))


@click.command("update")
@click.option("--id", "customer_id", required=True, help="Customer ID to update.")
@click.option("--name", default=None, help="New customer name.")
@click.option("--cpf-cnpj", default=None, help="New CPF or CNPJ.")
@_contact_options
def customer_update(customer_id: str, name: str | None, cpf_cnpj: str | None, **options) -> None:
    """Change fields of an existing customer."""
    data = _customer_data(name, cpf_cnpj, **options)
    if not data:
        raise click.ClickException("Nothing to update")
    run(lambda client: client.update_customer(customer_id, data))


@click.command("list")
@click.option("--offset", type=int, default=None)
@click.option("--limit", type=int, default=None)
@click.option("--name", default=None, help="Filter by name.")
@click.option("--email", default=None, help="Filter by email.")
@click.option("--cpf-cnpj", default=None, help="Filter by CPF or CNPJ.")
def customer_list(
    offset: int | None,
    limit: int | None,
    name: str | None,
    email: str | None,
    cpf_cnpj: str | None,
) -> None:
    """List customers (malformed filters are ignored)."""
    filters = drop_empty(
        {"offset": offset, "limit": limit, "name": name, "email": email, "cpfCnpj": cpf_cnpj}
    )
    run(lambda client: client.list_customers(filters))


@click.command("show")
@click.option("--id", "customer_id", required=True, help="Customer ID to display.")
def customer_show(customer_id: str) -> None:
    """Show details of an existing customer."""
    run(lambda client: client.get_customer(customer_id))


@click.command("delete")
@click.option("--id", "customer_id", required=True, help="Customer ID to delete.")
def customer_delete(customer_id: str) -> None:
    """Delete a customer (it can be restored later)."""
    run(lambda client: client.delete_customer(customer_id))


@click.command("restore")
@click.option("--id", "customer_id", required=True, help="Customer ID to restore.")
def customer_restore(customer_id: str) -> None:
    """Restore a deleted customer."""
    run(lambda client: client.restore_customer(customer_id))
