"""Generate and analyze commands for the ohlcsynth CLI."""

from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from ohlcsynth.analysis import analyze as analyze_candles
from ohlcsynth.analysis import average_volatility, determine_trend
from ohlcsynth.cli.main import console
from ohlcsynth.cli.options import build_config, generation_options
from ohlcsynth.generators import CandleGenerator
from ohlcsynth.models import Candle


def _candle_table(candles: list[Candle], title: str) -> Table:
    table = Table(title=title, show_header=True, header_style="bold cyan")

    table.add_column("#", justify="right", style="dim")
    table.add_column("Time", style="dim")
    table.add_column("Open", justify="right")
    table.add_column("High", justify="right", style="green")
    table.add_column("Low", justify="right", style="red")
    table.add_column("Close", justify="right")
    table.add_column("Volume", justify="right", style="dim")

    for index, candle in enumerate(candles, start=1):
        close_style = "green" if candle.is_bullish else "red" if candle.is_bearish else ""
        table.add_row(
            str(index),
            candle.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
            f"{candle.open:.2f}",
            f"{candle.high:.2f}",
            f"{candle.low:.2f}",
            f"[{close_style}]{candle.close:.2f}[/{close_style}]" if close_style else f"{candle.close:.2f}",
            f"{candle.volume:,.0f}",
        )
    return table


@click.command()
@click.argument("count", type=int, required=False)
@generation_options
@click.option(
    "-n", "--show",
    default=5,
    type=int,
    help="Number of candles to display (default: 5).",
)
def generate(count: Optional[int], show: int, **options) -> None:
    """Generate COUNT candles and display the first few.

    COUNT defaults to the config file value, or 100.

    \b
    Examples:
      ohlcsynth generate 100                  # Flat market
      ohlcsynth generate 50 --mode uptrend    # Uptrend
      ohlcsynth generate 200 -m garch -s 42   # Reproducible GARCH series
    """
    config, seed = build_config(count, **options)
    candles = CandleGenerator(config, seed=seed).generate()

    console.print(
        f"[green]Generated {len(candles)} candles[/green] in "
        f"[bold]{config.market_mode.description}[/bold] mode"
    )
    if not candles or show <= 0:
        return

    display = candles[:show]
    console.print(_candle_table(display, f"First {len(display)} candles"))


@click.command()
@click.argument("count", type=int, required=False)
@generation_options
def analyze(count: Optional[int], **options) -> None:
    """Generate COUNT candles and summarize their statistics.

    \b
    Examples:
      ohlcsynth analyze 200 --mode panic
      ohlcsynth analyze 1000 -m ou --volatility 0.02
    """
    config, seed = build_config(count, **options)
    candles = CandleGenerator(config, seed=seed).generate()
    stats = analyze_candles(candles)

    lines = [
        f"[bold]Total candles:[/bold] {stats.total_candles}",
        f"[bold]Average volume:[/bold] {stats.average_volume:,.2f}",
        f"[bold]Price range:[/bold] {stats.min_price:.2f} - {stats.max_price:.2f} "
        f"({stats.price_range:.2f})",
        f"[bold]Bullish candles:[/bold] [green]{stats.bullish_candles}[/green]",
        f"[bold]Bearish candles:[/bold] [red]{stats.bearish_candles}[/red]",
        f"[bold]Doji candles:[/bold] {stats.doji_candles}",
        f"[bold]Average range:[/bold] {average_volatility(candles):.3f}%",
        f"[bold]Price change:[/bold] {stats.price_change_percent:+.2f}%",
        f"[bold]Trend:[/bold] {determine_trend(candles)}",
    ]

    console.print(Panel(
        "\n".join(lines),
        title=f"[bold cyan]Analysis - {config.market_mode.description}[/bold cyan]",
        border_style="cyan",
    ))
