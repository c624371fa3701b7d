"""Main CLI entry point for ohlcsynth.

This module provides the main click group and lazy loading of the
command modules, which keeps pandas out of startup for commands that do
not export.
"""

import logging

import click
from rich.console import Console

# Console for rich output
console = Console()


class LazyGroup(click.Group):
    """A click Group whose commands are imported on first use.

    Commands are registered as ``"package.module:attribute"`` targets, so
    several commands can share one module and only ``export`` pulls in
    pandas.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self._targets = dict(lazy_subcommands or {})

    def list_commands(self, ctx: click.Context) -> list[str]:
        return sorted(set(super().list_commands(ctx)) | set(self._targets))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        command = super().get_command(ctx, cmd_name)
        if command is None and cmd_name in self._targets:
            command = self._resolve(cmd_name)
            self.add_command(command, cmd_name)
        return command

    def _resolve(self, cmd_name: str) -> click.Command:
        """Import the command registered under ``cmd_name``."""
        import importlib

        module_path, _, attr_name = self._targets[cmd_name].partition(":")
        command = getattr(importlib.import_module(module_path), attr_name or cmd_name, None)
        if not isinstance(command, click.Command):
            raise click.ClickException(
                f"'{self._targets[cmd_name]}' does not name a click command"
            )
        return command


LAZY_SUBCOMMANDS = {
    "generate": "ohlcsynth.cli.generate:generate",
    "analyze": "ohlcsynth.cli.generate:analyze",
    "export": "ohlcsynth.cli.export:export",
    "modes": "ohlcsynth.cli.modes:modes",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="ohlcsynth")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """ohlcsynth - synthetic OHLCV candlestick generator.

    Generate candle sequences for a chosen market regime, inspect their
    statistics, or export them for backtests and charting tools.

    \b
    Quick Start:
      ohlcsynth generate 100                 # 100 flat-market candles
      ohlcsynth analyze 500 --mode panic     # Statistics for a sell-off
      ohlcsynth export 1000 btc.csv -m gbm   # Write a GBM series to CSV
      ohlcsynth modes                        # List market modes
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        )
    ctx.ensure_object(dict)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
