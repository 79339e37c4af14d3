"""CSV export command."""

import click
from pendit.cli.commands.view import build_cli_query, filter_options
from pendit.cli.error_handling import handle_domain_error
from pendit.domain.errors import DomainError
from pendit.domain.export import default_export_filename, export_csv, write_csv


@click.command("export")
@filter_options
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Output file (default: pending_export_<date>.csv)")
@click.option("--delimiter", help="Field delimiter (default from PENDIT_EXPORT_DELIMITER)")
@click.option("--stdout", "to_stdout", is_flag=True, help="Print to standard output instead of a file")
@click.pass_context
def export_entries(
    ctx,
    phase: str,
    pending: bool,
    search: str | None,
    status: str | None,
    order: str | None,
    output: str | None,
    delimiter: str | None,
    to_stdout: bool,
) -> None:
    """Export the filtered entries as CSV.

    Examples:
        pendit export --pending
        pendit export --phase closed --output closed.csv
    """
    service, query = build_cli_query(ctx, phase, pending, search, status, order)
    entries = service.list_entries(query)
    delimiter = delimiter or ctx.obj["config"].export_delimiter

    try:
        if to_stdout:
            click.echo(export_csv(entries, delimiter=delimiter), nl=False)
            return
        path = output or default_export_filename()
        count = write_csv(entries, path, delimiter=delimiter)
    except DomainError as e:
        handle_domain_error(ctx, e)
    except OSError as e:
        click.echo(f"Error: Could not write export file: {e}", err=True)
        ctx.exit(1)

    click.echo(f"Exported {count} entr{'y' if count == 1 else 'ies'} to {path}")


def register_commands(cli):
    """Register export command with main CLI."""
    cli.add_command(export_entries)
