import click

from gstbill.infrastructure.cli.invoice_commands import (
    dashboard,
    invoice_create,
    invoice_list,
    invoice_show,
)
from gstbill.infrastructure.cli.party_commands import (
    party_add,
    party_delete,
    party_list,
    party_update,
)
from gstbill.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_import,
    product_list,
    product_update,
)
from gstbill.infrastructure.config import get_settings
from gstbill.infrastructure.logging_setup import configure_logging


@click.group()
def cli() -> None:
    """gstbill: GST billing and inventory"""
    configure_logging(get_settings().LOG_LEVEL)


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def party() -> None:
    """Manage parties."""


@cli.group()
def invoice() -> None:
    """Manage invoices."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_import)
product.add_command(product_list)
product.add_command(product_update)
party.add_command(party_add)
party.add_command(party_delete)
party.add_command(party_list)
party.add_command(party_update)
invoice.add_command(invoice_create)
invoice.add_command(invoice_list)
invoice.add_command(invoice_show)
cli.add_command(dashboard)
