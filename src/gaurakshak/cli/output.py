"""Plain-text table output for CLI commands."""

from typing import Sequence

import click


def echo_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
    """Print rows under headers with each column padded to its widest cell."""
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def line(cells: Sequence[str]) -> str:
        return " | ".join(f"{cell:<{widths[i]}}" for i, cell in enumerate(cells)).rstrip()

    click.echo(line(headers))
    click.echo("-" * (sum(widths) + 3 * (len(widths) - 1)))
    for row in rows:
        click.echo(line(row))
