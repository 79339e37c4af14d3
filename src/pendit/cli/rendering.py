"""Text rendering of entries for the CLI."""

import click

from pendit.domain.entities import Entry
from pendit.domain.status import display_hint

HINT_COLORS = {
    "repair": "yellow",
    "collected": "yellow",
    "standby": "cyan",
    "standby-returned": "green",
    "given": "green",
    "delivered": "green",
    "unknown": "magenta",
}

TABLE_WIDTH = 120


def styled_status(status: str, width: int = 0) -> str:
    """Pad a status label and color it by its registry display hint."""
    text = f"{status:<{width}}" if width else status
    return click.style(text, fg=HINT_COLORS.get(display_hint(status)))


def _clip(text: str, width: int) -> str:
    return text if len(text) <= width else text[: width - 1] + "…"


def render_table(entries: list[Entry]) -> None:
    """Print entries as a compact table."""
    click.echo("-" * TABLE_WIDTH)
    click.echo(
        f"{'ID':<18} {'Date':<12} {'Party':<20} {'Item':<24} {'Qty':<5} {'Status':<24} {'Phase':<8}"
    )
    click.echo("-" * TABLE_WIDTH)
    for entry in entries:
        click.echo(
            f"{entry.id:<18} {entry.timestamp.date().isoformat():<12} "
            f"{_clip(entry.party, 20):<20} {_clip(entry.item, 24):<24} {entry.quantity:<5} "
            f"{styled_status(_clip(entry.status, 24), 24)} {entry.phase.value:<8}"
        )


def render_detail(entry: Entry, actions=()) -> None:
    """Print every field of an entry."""
    info = entry.status_info
    click.echo(f"\nEntry ID: {entry.id}")
    click.echo(f"  Date: {entry.timestamp.isoformat(timespec='seconds')}")
    click.echo(f"  Party: {entry.party}")
    click.echo(f"  Item: {entry.item}")
    click.echo(f"  Quantity: {entry.quantity}")
    click.echo(f"  Status: {styled_status(entry.status)}")
    click.echo(f"  Phase: {entry.phase.value}")
    if info.follow_up:
        click.echo(f"  Follow-up: {info.follow_up}")
    if entry.notes:
        click.echo(f"  Notes: {entry.notes}")
    if actions:
        click.echo(f"  Actions: {', '.join(action.value for action in actions)}")
