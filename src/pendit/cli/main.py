"""Main CLI entry point."""

import click
from pendit.config import LOG_LEVELS, load_config
from pendit.database.factories import create_sqlite_store
from pendit.domain.errors import StoreError, ValidationError
from pendit.domain.state import TrackerState
from pendit.logging_setup import configure_logging

# Import and register all commands at module level
from pendit.cli.commands import add, export_cmd, migrate, resolve, view


@click.group()
@click.option(
    "--db-path",
    type=click.Path(dir_okay=False),
    help="Path to database file (overrides PENDIT_DB_PATH environment variable)",
    envvar="PENDIT_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Log level (overrides PENDIT_LOG_LEVEL environment variable)",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None):
    """Pendit - track items collected from or given to other parties.

    An entry stays pending until the matching return or collection is
    recorded, then moves to closed.
    """
    ctx.ensure_object(dict)

    try:
        config = load_config().with_overrides(database_path=db_path, log_level=log_level)
    except ValidationError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    configure_logging(config.log_level)
    ctx.obj["config"] = config

    # Open the store only when actually running a command (not when showing help)
    if ctx.invoked_subcommand is not None:
        try:
            store = create_sqlite_store(database_path=config.database_path)
            store.connect()
            store.initialize_schema()
            ctx.call_on_close(store.disconnect)
            state = TrackerState.open(
                store, storage_key=config.storage_key, legacy_keys=config.legacy_keys
            )
        except StoreError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)
        ctx.obj["store"] = store
        ctx.obj["state"] = state


# Register all commands
add.register_commands(cli)
resolve.register_commands(cli)
view.register_commands(cli)
export_cmd.register_commands(cli)
migrate.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
