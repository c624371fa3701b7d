"""List the available market modes."""

import click
from rich.table import Table

from ohlcsynth.cli.main import console
from ohlcsynth.models import MarketMode


@click.command()
def modes() -> None:
    """Show market modes and their suggested parameters."""
    table = Table(title="Market Modes", show_header=True, header_style="bold cyan")
    table.add_column("Mode", style="bold")
    table.add_column("Description")
    table.add_column("Volatility", justify="right")
    table.add_column("Trend", justify="right")

    for mode in MarketMode:
        table.add_row(
            mode.value,
            mode.description,
            f"{mode.suggested_volatility:g}",
            f"{mode.suggested_trend:+g}",
        )

    console.print(table)
