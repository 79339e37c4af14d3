"""CLI error handling helpers."""

import click

from pendit.domain.errors import DomainError, StoreError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def handle_store_error(ctx: click.Context, error: StoreError) -> None:
    """Warn that a change was applied in memory but not persisted, then exit."""
    click.echo(f"Warning: changes could not be saved: {error}", err=True)
    ctx.exit(1)


def confirmation_port(yes: bool):
    """Return the confirmation callable for lifecycle operations."""
    if yes:
        return lambda prompt: True
    return lambda prompt: click.confirm(prompt, default=False)
