"""Data migration command."""

import click
from pendit.cli.error_handling import handle_domain_error, handle_store_error
from pendit.domain.errors import DomainError, StoreError


@click.command("migrate")
@click.option(
    "--from-file",
    type=click.Path(exists=True, dir_okay=False),
    help="Import a saved snapshot (any schema version) and replace current data",
)
@click.option("--yes", "-y", is_flag=True, help="Do not ask before replacing current data")
@click.pass_context
def migrate(ctx, from_file: str | None, yes: bool) -> None:
    """Report on or run the migration of older data.

    Data found under a legacy storage key is migrated automatically when the
    store is opened; this command reports what happened. With --from-file a
    JSON snapshot exported from an older version is migrated and imported.

    Examples:
        pendit migrate
        pendit migrate --from-file old_pending.json
    """
    state = ctx.obj["state"]

    if from_file is None:
        if state.migrated_from is not None:
            click.echo(
                f"Migrated {len(state.snapshot.entries)} entries from '{state.migrated_from}' "
                f"to '{state.storage_key}'"
            )
        elif state.snapshot.entries or state.store.exists(state.storage_key):
            click.echo(f"Migration already applied: data is current under '{state.storage_key}'")
        else:
            click.echo("No legacy data found.")
        return

    if state.snapshot.entries and not yes:
        if not click.confirm(
            f"Replace {len(state.snapshot.entries)} current entries with the contents of {from_file}?"
        ):
            click.echo("Import cancelled.")
            return

    try:
        with open(from_file, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        click.echo(f"Error: Could not read {from_file}: {e}", err=True)
        ctx.exit(1)

    try:
        snapshot = state.import_text(text)
    except DomainError as e:
        handle_domain_error(ctx, e)
    except StoreError as e:
        handle_store_error(ctx, e)

    click.echo(f"Imported {len(snapshot.entries)} entries and {len(snapshot.parties)} parties from {from_file}")


def register_commands(cli):
    """Register migrate command with main CLI."""
    cli.add_command(migrate)
