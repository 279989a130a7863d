"""CLI commands for the Party aggregate."""

from __future__ import annotations

import click

from gstbill.application.add_party import AddPartyHandler
from gstbill.application.delete_party import DeletePartyHandler
from gstbill.application.update_party import UpdatePartyHandler
from gstbill.domain.exceptions import DomainException
from gstbill.infrastructure.bootstrap import company_profile, party_repository


@click.command("add")
@click.option("--name", required=True, help="Party / business name.")
@click.option("--mobile", required=True, help="Mobile number.")
@click.option("--state", default=None, help="State (defaults to the company's state).")
@click.option("--gstin", default="", help="GSTIN, if registered.")
@click.option("--address", default="", help="Address.")
@click.option("--email", default=None, help="Email address.")
def party_add(
    name: str,
    mobile: str,
    state: str | None,
    gstin: str,
    address: str,
    email: str | None,
) -> None:
    """Add a new party."""
    handler = AddPartyHandler(
        party_repo=party_repository(), default_state=company_profile().state
    )

    try:
        party = handler.handle(
            name=name, mobile=mobile, state=state,
            gstin=gstin, address=address, email=email,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Party #{party.id} '{party.name}' added ({party.state})")


@click.command("list")
@click.option("--search", default="", help="Filter by name or mobile.")
def party_list(search: str) -> None:
    """List parties."""
    repo = party_repository()
    try:
        parties = repo.search(search) if search else repo.list_all()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not parties:
        click.echo("No parties found.")
        return

    click.echo(f"{'ID':<6} {'Name':<28} {'Mobile':<14} {'GSTIN':<16} {'State':<18}")
    click.echo("-" * 84)
    for p in parties:
        click.echo(
            f"{p.id:<6} {p.name[:28]:<28} {p.mobile:<14} "
            f"{(p.gstin or '-'):<16} {p.state:<18}"
        )


@click.command("update")
@click.option("--id", "party_id", required=True, type=int, help="Party ID.")
@click.option("--name", default=None)
@click.option("--mobile", default=None)
@click.option("--state", default=None)
@click.option("--gstin", default=None)
@click.option("--address", default=None)
@click.option("--email", default=None)
def party_update(
    party_id: int,
    name: str | None,
    mobile: str | None,
    state: str | None,
    gstin: str | None,
    address: str | None,
    email: str | None,
) -> None:
    """Update a party."""
    handler = UpdatePartyHandler(party_repo=party_repository())

    try:
        party = handler.handle(
            party_id=party_id, name=name, mobile=mobile, state=state,
            gstin=gstin, address=address, email=email,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Party #{party.id} '{party.name}' updated")


@click.command("delete")
@click.option("--id", "party_id", required=True, type=int, help="Party ID.")
def party_delete(party_id: int) -> None:
    """Delete a party. Past invoices keep the party name."""
    handler = DeletePartyHandler(party_repo=party_repository())

    try:
        handler.handle(party_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Party #{party_id} deleted.")
