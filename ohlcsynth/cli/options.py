"""Options and config assembly shared by the generation commands."""

from datetime import datetime
from typing import Any, Callable, Optional

import click
from pydantic import ValidationError
from rich.panel import Panel

from ohlcsynth.cli.main import console
from ohlcsynth.models import GeneratorConfig, MarketMode

DEFAULT_COUNT = 100


def _parse_mode(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> Optional[MarketMode]:
    if value is None:
        return None
    try:
        return MarketMode.parse(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


def _parse_start(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise click.BadParameter(f"Expected an ISO timestamp, got '{value}'") from e


def generation_options(func: Callable) -> Callable:
    """Attach the common generation options to a command."""
    options = [
        click.option("-m", "--mode", callback=_parse_mode, help="Market mode (see `ohlcsynth modes`)."),
        click.option("-p", "--price", "initial_price", type=float, help="Initial price (default: 100)."),
        click.option("--volatility", type=float, help="Volatility (default: mode suggestion)."),
        click.option("--trend", "trend_strength", type=float, help="Trend strength -1..1 (default: mode suggestion)."),
        click.option("-i", "--interval", "candle_interval", type=float, help="Seconds between candles (default: 60)."),
        click.option("--base-volume", type=float, help="Base volume (default: 1000)."),
        click.option("--volume-multiplier", "volume_volatility_multiplier", type=float,
                     help="Volume/volatility coupling (default: 2)."),
        click.option("--start", callback=_parse_start, help="First candle time, ISO format (default: now)."),
        click.option("-s", "--seed", type=int, help="Random seed for reproducible output."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _load_defaults() -> dict[str, Any]:
    from ohlcsynth.settings import generator_defaults, load_config

    return generator_defaults(load_config())


def build_config(count: Optional[int], **options: Any) -> tuple[GeneratorConfig, Optional[int]]:
    """Merge config-file defaults with command-line options.

    Command-line values win over the ``[generator]`` table of the config
    file. Exits with status 1 on invalid parameters.

    Returns:
        Tuple of (configuration, seed).
    """
    params = _load_defaults()
    if count is not None:
        params["candle_count"] = count
    params.setdefault("candle_count", DEFAULT_COUNT)

    if options.get("mode") is not None:
        params["mode"] = options["mode"]
    for key in (
        "initial_price",
        "volatility",
        "trend_strength",
        "candle_interval",
        "base_volume",
        "volume_volatility_multiplier",
        "seed",
    ):
        if options.get(key) is not None:
            params[key] = options[key]
    if options.get("start") is not None:
        params["start_time"] = options["start"]

    seed = params.pop("seed", None)
    mode = params.pop("mode", MarketMode.FLAT)

    try:
        config = GeneratorConfig(market_mode=mode, **params)
    except (ValidationError, ValueError) as e:
        error_panel(f"[red]Invalid generator parameters:[/red]\n\n{e}")
        raise SystemExit(1)

    return config, seed


def error_panel(message: str, title: str = "Error") -> None:
    """Print an error panel in the CLI's usual style."""
    console.print(Panel(
        message,
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))
