"""Build domain services from the CLI context."""

import click

from pendit.cli.error_handling import confirmation_port
from pendit.domain.lifecycle import LifecycleService
from pendit.domain.query import QueryService


def lifecycle_service(ctx: click.Context, yes: bool = False) -> LifecycleService:
    config = ctx.obj["config"]
    return LifecycleService(
        ctx.obj["state"],
        confirm=confirmation_port(yes),
        resolve_strategy=config.resolve_strategy,
        closing_status=config.closing_status,
    )


def query_service(ctx: click.Context) -> QueryService:
    return QueryService(ctx.obj["state"], default_order=ctx.obj["config"].sort_order)
