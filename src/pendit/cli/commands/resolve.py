"""Lifecycle transition commands: advance, close, resolve and delete."""

import click
from pendit.cli.error_handling import handle_domain_error, handle_store_error
from pendit.cli.services import lifecycle_service
from pendit.domain.errors import DomainError, StoreError
from pendit.domain.status import closing_statuses

yes_option = click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")


def _report(entry, verb: str) -> None:
    if entry is None:
        click.echo("Cancelled.")
        return
    click.echo(f"{verb} entry {entry.id}: {entry.status} ({entry.phase.value})")


@click.command("advance")
@click.argument("entry_id")
@yes_option
@click.pass_context
def advance_entry(ctx, entry_id: str, yes: bool) -> None:
    """Move an entry to its follow-up status.

    "Collected for Repairing" and "Collected" become "Given",
    "Standby Given" becomes "Standby Collected".

    Examples:
        pendit advance lq3k9x2abc123def
    """
    service = lifecycle_service(ctx, yes=yes)
    try:
        entry = service.advance_entry(entry_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    except StoreError as e:
        handle_store_error(ctx, e)
    _report(entry, "Advanced")


@click.command("close")
@click.argument("entry_id")
@click.option(
    "--as",
    "closing_status",
    type=click.Choice(closing_statuses()),
    help="Closed status to apply (default from PENDIT_CLOSING_STATUS)",
)
@yes_option
@click.pass_context
def close_entry(ctx, entry_id: str, closing_status: str | None, yes: bool) -> None:
    """Close a pending entry directly, without its paired follow-up.

    Examples:
        pendit close lq3k9x2abc123def
        pendit close lq3k9x2abc123def --as Delivered
    """
    service = lifecycle_service(ctx, yes=yes)
    try:
        entry = service.close_entry(entry_id, closing_status)
    except DomainError as e:
        handle_domain_error(ctx, e)
    except StoreError as e:
        handle_store_error(ctx, e)
    _report(entry, "Closed")


@click.command("resolve")
@click.argument("entry_id")
@yes_option
@click.pass_context
def resolve_entry(ctx, entry_id: str, yes: bool) -> None:
    """Resolve an entry using the configured strategy.

    PENDIT_RESOLVE_STRATEGY=advance (default) applies the follow-up status,
    PENDIT_RESOLVE_STRATEGY=close applies the closing status.
    """
    service = lifecycle_service(ctx, yes=yes)
    try:
        entry = service.resolve_entry(entry_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    except StoreError as e:
        handle_store_error(ctx, e)
    _report(entry, "Resolved")


@click.command("delete")
@click.argument("entry_id")
@yes_option
@click.pass_context
def delete_entry(ctx, entry_id: str, yes: bool) -> None:
    """Permanently delete an entry.

    Examples:
        pendit delete lq3k9x2abc123def
    """
    service = lifecycle_service(ctx, yes=yes)
    try:
        deleted = service.delete_entry(entry_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    except StoreError as e:
        handle_store_error(ctx, e)

    if not deleted:
        click.echo("Deletion cancelled.")
        return
    click.echo(f"Deleted entry {entry_id}")


def register_commands(cli):
    """Register transition commands with main CLI."""
    cli.add_command(advance_entry)
    cli.add_command(close_entry)
    cli.add_command(resolve_entry)
    cli.add_command(delete_entry)
