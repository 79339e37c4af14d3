"""Entry viewing commands."""

import click
from pendit.cli.error_handling import handle_domain_error
from pendit.cli.rendering import render_detail, render_table, styled_status
from pendit.cli.services import lifecycle_service, query_service
from pendit.domain.errors import DomainError
from pendit.domain.party import PartyService
from pendit.domain.query import PhaseFilter, SortOrder
from pendit.domain.status import STATUS_REGISTRY, StatusKind, classify


def filter_options(command):
    """Attach the shared filter options used by list and export."""
    options = [
        click.option(
            "--phase",
            type=click.Choice([p.value for p in PhaseFilter]),
            default=PhaseFilter.ALL.value,
            show_default=True,
            help="Lifecycle phase to show",
        ),
        click.option("--pending", is_flag=True, help="Show only pending entries (ignores --phase and --search)"),
        click.option("--search", help="Case-insensitive text matched against party, item and notes"),
        click.option("--status", help="Exact status label"),
        click.option(
            "--order",
            type=click.Choice([o.value for o in SortOrder]),
            help="Ordering (default from PENDIT_SORT_ORDER)",
        ),
    ]
    for option in reversed(options):
        command = option(command)
    return command


def build_cli_query(ctx, phase, pending, search, status, order):
    service = query_service(ctx)
    if pending:
        phase, search = PhaseFilter.PENDING.value, None
    try:
        return service, service.build_query(phase=phase, search=search, status=status, order=order)
    except DomainError as e:
        handle_domain_error(ctx, e)


@click.command("list")
@filter_options
@click.option("--verbose", "-v", is_flag=True, help="Show every field of each entry")
@click.pass_context
def list_entries(
    ctx,
    phase: str,
    pending: bool,
    search: str | None,
    status: str | None,
    order: str | None,
    verbose: bool,
):
    """List entries with optional filters.

    Examples:
        pendit list --pending
        pendit list --phase closed --search charger
        pendit list --order urgency
    """
    service, query = build_cli_query(ctx, phase, pending, search, status, order)
    entries = service.list_entries(query)

    if not entries:
        click.echo("No entries found.")
        return

    counts = service.counts()
    click.echo(
        f"\nShowing {len(entries)} of {counts['all']} entr{'y' if counts['all'] == 1 else 'ies'} "
        f"({counts['pending']} pending, {counts['closed']} closed):"
    )

    if verbose:
        lifecycle = lifecycle_service(ctx)
        for entry in entries:
            render_detail(entry, lifecycle.available_actions(entry))
            click.echo("-" * 60)
    else:
        render_table(entries)


@click.command("show")
@click.argument("entry_id")
@click.pass_context
def show_entry(ctx, entry_id: str) -> None:
    """Show one entry and the actions available for it."""
    lifecycle = lifecycle_service(ctx)
    try:
        entry = lifecycle.require_entry(entry_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    render_detail(entry, lifecycle.available_actions(entry))


@click.command("statuses")
def list_statuses() -> None:
    """List recognized statuses, their phase and follow-up."""
    click.echo(f"{'Status':<26} {'Phase':<9} {'Follow-up':<20}")
    click.echo("-" * 56)
    for kind in STATUS_REGISTRY:
        if kind is StatusKind.UNKNOWN:
            continue
        info = classify(kind.value)
        click.echo(f"{styled_status(info.label, 26)} {info.phase.value:<9} {info.follow_up or '-':<20}")
    click.echo("\nUnrecognized statuses are treated as pending with no follow-up.")


@click.command("parties")
@click.option("--prefix", default="", help="Only names starting with this text")
@click.pass_context
def list_parties(ctx, prefix: str) -> None:
    """List known party names."""
    names = PartyService(ctx.obj["state"]).suggest(prefix)
    if not names:
        click.echo("No parties found.")
        return
    for name in names:
        click.echo(name)


def register_commands(cli):
    """Register viewing commands with main CLI."""
    cli.add_command(list_entries)
    cli.add_command(show_entry)
    cli.add_command(list_statuses)
    cli.add_command(list_parties)
