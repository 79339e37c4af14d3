"""Add entry command."""

import click
from pendit.cli.error_handling import handle_domain_error, handle_store_error
from pendit.cli.services import lifecycle_service
from pendit.domain.errors import DomainError, StoreError
from pendit.domain.status import known_statuses
from pendit.utils.date_parser import parse_date, timestamp_for_date


@click.command("add")
@click.option("--party", required=True, help="Counterparty name")
@click.option("--item", required=True, help="What was collected or given")
@click.option(
    "--status",
    required=True,
    type=click.Choice(known_statuses()),
    help="Initial status",
)
@click.option("--qty", default="1", show_default=True, help="Quantity (invalid values become 1)")
@click.option("--notes", help="Notes")
@click.option("--date", help="Entry date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.pass_context
def add_entry(
    ctx,
    party: str,
    item: str,
    status: str,
    qty: str,
    notes: str | None,
    date: str | None,
):
    """Add a pending or closed entry.

    Examples:
        pendit add --party "ABC Electronics" --item "Laptop Charger" --status "Collected for Repairing"
        pendit add --party "XYZ Supplies" --item "Projector" --status "Standby Given" --qty 2
    """
    service = lifecycle_service(ctx)
    state = ctx.obj["state"]

    timestamp = None
    if date:
        try:
            timestamp = timestamp_for_date(parse_date(date))
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    is_new_party = party.strip() not in state.snapshot.parties

    try:
        entry = service.create_entry(
            party=party,
            item=item,
            quantity=qty,
            status=status,
            notes=notes,
            timestamp=timestamp,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    except StoreError as e:
        handle_store_error(ctx, e)

    click.echo(f"Created entry {entry.id}")
    click.echo(f"  Party: {entry.party}{' (new)' if is_new_party else ''}")
    click.echo(f"  Item: {entry.item} x{entry.quantity}")
    click.echo(f"  Status: {entry.status} ({entry.phase.value})")
    if entry.status_info.follow_up:
        click.echo(f"  Awaiting: {entry.status_info.follow_up}")


@click.command("edit")
@click.argument("entry_id")
@click.option("--party", help="Counterparty name")
@click.option("--item", help="Item description")
@click.option("--status", type=click.Choice(known_statuses()), help="Status")
@click.option("--qty", help="Quantity (invalid values become 1)")
@click.option("--notes", help="Notes (empty string to clear)")
@click.pass_context
def edit_entry(
    ctx,
    entry_id: str,
    party: str | None,
    item: str | None,
    status: str | None,
    qty: str | None,
    notes: str | None,
) -> None:
    """Edit an entry.

    Fields that are not given keep their current value. The entry keeps its
    ID and moves to the top of the newest-first listing.

    Examples:
        pendit edit lq3k9x2abc123def --qty 3
        pendit edit lq3k9x2abc123def --notes ""  # Clear notes
    """
    service = lifecycle_service(ctx)

    try:
        current = service.require_entry(entry_id)
        entry = service.edit_entry(
            entry_id,
            party=party if party is not None else current.party,
            item=item if item is not None else current.item,
            quantity=qty if qty is not None else current.quantity,
            status=status if status is not None else current.status,
            notes=notes if notes is not None else current.notes,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    except StoreError as e:
        handle_store_error(ctx, e)

    click.echo(f"Updated entry {entry.id}")


def register_commands(cli):
    """Register add and edit commands with main CLI."""
    cli.add_command(add_entry)
    cli.add_command(edit_entry)
