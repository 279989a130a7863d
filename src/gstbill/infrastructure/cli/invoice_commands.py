"""CLI commands for the Invoice aggregate and the dashboard."""

from __future__ import annotations

import click

from gstbill.application.create_invoice import CreateInvoiceHandler
from gstbill.application.dto import InvoiceDTO, InvoiceLineSpec
from gstbill.application.show_dashboard import ShowDashboardHandler
from gstbill.application.show_invoice import ListInvoicesHandler, ShowInvoiceHandler
from gstbill.domain.exceptions import DomainException
from gstbill.infrastructure.bootstrap import (
    company_profile,
    invoice_assembler,
    invoice_repository,
    party_repository,
    product_repository,
)


def _parse_items(raw: str) -> list[InvoiceLineSpec]:
    """Parse '3:2,7:5' (product ID : quantity) into InvoiceLineSpec list."""
    specs: list[InvoiceLineSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductID:Quantity'."
            )
        pid_str, qty_str = pair.rsplit(":", 1)
        try:
            product_id = int(pid_str)
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid product ID or quantity in '{pair}'."
            )
        specs.append(InvoiceLineSpec(product_id=product_id, quantity=qty))
    return specs


def _display_invoice(dto: InvoiceDTO) -> None:
    """Shared formatting for displaying an invoice."""
    click.echo(f"Invoice {dto.invoice_no}  (#{dto.id}, {dto.date})")
    click.echo(f"Party:   {dto.party_name}")
    click.echo()
    click.echo(
        f"  {'#':<3} {'Item':<24} {'HSN':<8} {'Qty':>5} {'Rate':>12} "
        f"{'Tax %':>6} {'Tax':>12} {'Total':>14}"
    )
    click.echo(f"  {'-'*90}")
    for index, item in enumerate(dto.items, start=1):
        click.echo(
            f"  {index:<3} {item.name[:24]:<24} {item.hsn:<8} {item.quantity:>5} "
            f"{item.rate:>12} {item.tax_rate:>6} {item.tax:>12} {item.total:>14}"
        )
    click.echo(f"  {'-'*90}")
    click.echo(f"  {'Sub Total':<30} {dto.sub_total:>60}")
    click.echo(f"  {'Total Tax':<30} {dto.tax_total:>60}")
    click.echo(f"  {'Grand Total':<30} {dto.grand_total:>60}")


@click.command("create")
@click.option("--party", "party_id", required=True, type=int, help="Party ID to bill.")
@click.option("--items", required=True, help="Items as 'ProductID:Qty,ProductID:Qty'.")
def invoice_create(party_id: int, items: str) -> None:
    """Save a new invoice and generate its printable document."""
    specs = _parse_items(items)

    handler = CreateInvoiceHandler(
        party_repo=party_repository(),
        product_repo=product_repository(),
        assembler=invoice_assembler(),
        home_state=company_profile().state,
    )

    try:
        dto = handler.handle(party_id=party_id, line_specs=specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_invoice(dto)
    click.echo()
    click.echo(f"Document written to {dto.document}")


@click.command("show")
@click.option("--id", "invoice_id", required=True, type=int, help="Invoice ID to display.")
def invoice_show(invoice_id: int) -> None:
    """Show details of an existing invoice."""
    handler = ShowInvoiceHandler(invoice_repo=invoice_repository())

    try:
        dto = handler.handle(invoice_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_invoice(dto)


@click.command("list")
@click.option("--party", "party_name", default=None, help="Filter by party name.")
def invoice_list(party_name: str | None) -> None:
    """List saved invoices."""
    handler = ListInvoicesHandler(invoice_repo=invoice_repository())

    try:
        rows = handler.handle(party_name=party_name)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not rows:
        click.echo("No invoices found.")
        return

    click.echo(f"{'ID':<6} {'Invoice':<12} {'Date':<12} {'Party':<28} {'Total':>14}")
    click.echo("-" * 76)
    for row in rows:
        click.echo(
            f"{row.id:<6} {row.invoice_no:<12} {row.date:<12} "
            f"{row.party_name[:28]:<28} {row.grand_total:>14}"
        )


@click.command("dashboard")
def dashboard() -> None:
    """Show catalog, party and sales totals."""
    handler = ShowDashboardHandler(
        product_repo=product_repository(),
        party_repo=party_repository(),
        invoice_repo=invoice_repository(),
    )

    try:
        dto = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Total revenue: {dto.total_revenue}")
    click.echo(f"Invoices:      {dto.invoices}")
    click.echo(f"Parties:       {dto.parties}")
    click.echo(f"Products:      {dto.products}")
    if dto.recent:
        click.echo()
        click.echo("Recent invoices:")
        for row in dto.recent:
            click.echo(f"  {row.invoice_no:<12} {row.party_name[:28]:<28} {row.grand_total:>14}")
