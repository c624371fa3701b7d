"""Export command for the ohlcsynth CLI."""

from datetime import datetime
from pathlib import Path
from typing import Optional

import click

from ohlcsynth.cli.main import console
from ohlcsynth.cli.options import build_config, error_panel, generation_options
from ohlcsynth.export import ExportFormat, save_to_file
from ohlcsynth.generators import CandleGenerator


@click.command()
@click.argument("count", type=int)
@click.argument("file", type=click.Path(dir_okay=False, path_type=Path))
@generation_options
@click.option(
    "-f", "--format", "fmt",
    type=click.Choice([f.value for f in ExportFormat], case_sensitive=False),
    default=ExportFormat.CSV.value,
    help="Output format (default: csv).",
)
@click.option("--symbol", default="SYMBOL", help="Symbol written to the CSV header.")
@click.option("--description", default="Generated OHLC data", help="Description written to the CSV header.")
def export(
    count: int,
    file: Path,
    fmt: str,
    symbol: str,
    description: str,
    **options,
) -> None:
    """Generate COUNT candles and write them to FILE.

    \b
    Examples:
      ohlcsynth export 500 candles.csv --mode volatile
      ohlcsynth export 100 btc.csv -m uptrend --symbol BTC --description "Bitcoin"
      ohlcsynth export 1000 series.json -f json -m jump_diffusion -s 7
    """
    config, seed = build_config(count, **options)
    candles = CandleGenerator(config, seed=seed).generate()

    metadata: Optional[dict[str, str]] = None
    if ExportFormat(fmt) is ExportFormat.CSV:
        metadata = {
            "Symbol": symbol,
            "Description": description,
            "Generated": datetime.now().isoformat(timespec="seconds"),
            "Mode": config.market_mode.value,
        }

    try:
        path = save_to_file(candles, file, fmt, metadata=metadata)
    except OSError as e:
        error_panel(f"[red]Export failed:[/red]\n\n{e}")
        raise SystemExit(1)

    console.print(f"[green]Exported {len(candles)} candles to {path}[/green]")
    console.print(f"[dim]  Symbol: {symbol}[/dim]")
    console.print(f"[dim]  Description: {description}[/dim]")
