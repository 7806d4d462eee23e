import logging

import click

from asaas.infrastructure.cli.customer_commands import (
    customer_create,
    customer_delete,
    customer_list,
    customer_restore,
    customer_show,
    customer_update,
)
from asaas.infrastructure.cli.payment_commands import payment_create


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log HTTP activity.")
def cli(verbose: bool) -> None:
    """Asaas — payment API client"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.group()
def customer() -> None:
    """Manage customers."""


@cli.group()
def payment() -> None:
    """Manage payments."""


# Register subcommands
customer.add_command(customer_create)
customer.add_command(customer_delete)
customer.add_command(customer_list)
customer.add_command(customer_restore)
customer.add_command(customer_show)
customer.add_command(customer_update)
payment.add_command(payment_create)
