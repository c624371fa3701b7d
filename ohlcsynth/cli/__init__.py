"""CLI commands for ohlcsynth.

This package provides the command-line interface for generating,
analyzing and exporting synthetic candle data.
"""

from ohlcsynth.cli.main import cli, main

__all__ = ["cli", "main"]
