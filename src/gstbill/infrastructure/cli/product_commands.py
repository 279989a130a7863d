"""CLI commands for the Product aggregate."""

from __future__ import annotations

from pathlib import Path

import click

from gstbill.application.add_product import AddProductHandler
from gstbill.application.delete_product import DeleteProductHandler
from gstbill.application.import_catalog import ImportOutcome
from gstbill.application.update_product import UpdateProductHandler
from gstbill.domain.exceptions import DomainException
from gstbill.domain.model.value_objects import TAX_RATES
from gstbill.infrastructure.bootstrap import import_pipeline, product_repository
from gstbill.infrastructure.importing.process_worker import ProcessParseWorker

_TAX_CHOICE = click.Choice([str(r) for r in TAX_RATES])


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--hsn", default="", help="HSN code.")
@click.option("--price", default="0", help="Base price excluding tax (e.g. 15.00).")
@click.option("--tax-rate", default="18", type=_TAX_CHOICE, help="GST %.")
@click.option("--stock", default=0, type=int, help="Units in stock.")
def product_add(name: str, hsn: str, price: str, tax_rate: str, stock: int) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(
            name=name, hsn=hsn, price=price, tax_rate=tax_rate, stock=stock
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' added at {product.price}")


@click.command("list")
@click.option("--search", default="", help="Filter by name or HSN.")
def product_list(search: str) -> None:
    """List products in the catalog."""
    repo = product_repository()
    try:
        products = repo.search(search) if search else repo.list_all()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found. Add one or import via Excel.")
        return

    click.echo(f"{'ID':<6} {'Name':<30} {'HSN':<10} {'Price':>12} {'Tax':>5} {'Stock':>7}")
    click.echo("-" * 75)
    for p in products:
        click.echo(
            f"{p.id:<6} {p.name[:30]:<30} {p.hsn:<10} {str(p.price):>12} "
            f"{str(p.tax_rate):>5} {p.stock:>7}"
        )


@click.command("update")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--hsn", default=None, help="New HSN code.")
@click.option("--price", default=None, help="New base price (e.g. 29.99).")
@click.option("--tax-rate", default=None, type=_TAX_CHOICE, help="New GST %.")
@click.option("--stock", default=None, type=int, help="New stock level.")
def product_update(
    product_id: int,
    name: str | None,
    hsn: str | None,
    price: str | None,
    tax_rate: str | None,
    stock: int | None,
) -> None:
    """Update a product."""
    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(
            product_id=product_id, name=name, hsn=hsn,
            price=price, tax_rate=tax_rate, stock=stock,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' updated")


@click.command("delete")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
def product_delete(product_id: int) -> None:
    """Delete a product. Existing invoices are not affected."""
    handler = DeleteProductHandler(product_repo=product_repository())

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} deleted.")


@click.command("import")
@click.argument(
    "file", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
def product_import(file: Path) -> None:
    """Import products from an .xlsx or .csv price list."""
    with ProcessParseWorker() as worker:
        pipeline = import_pipeline(worker)
        with click.progressbar(length=100, label="Importing products") as bar:
            shown = 0

            def on_progress(pct: int) -> None:
                nonlocal shown
                bar.update(pct - shown)
                shown = pct

            try:
                report = pipeline.run(file, on_progress=on_progress)
            except DomainException as exc:
                raise click.ClickException(str(exc))

    if report.outcome is ImportOutcome.NO_VALID_ROWS:
        raise click.ClickException(
            "No valid products found in the file. Please check column names."
        )

    if report.outcome is ImportOutcome.FAILED:
        if report.committed:
            chunks = ", ".join(str(n) for n in report.chunk_sizes)
            click.echo(
                f"{report.committed} of {report.accepted} products were saved "
                f"before the failure (chunks: {chunks}); "
                f"resume from record {report.resume_offset}.",
                err=True,
            )
        raise click.ClickException(report.error or "Import failed")

    click.echo(f"Successfully imported {report.committed} products!")
    if report.rejected:
        click.echo(f"Skipped {report.rejected} rows without a usable name or values.")
