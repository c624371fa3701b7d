"""Serialization of candle sequences to common text formats."""

from ohlcsynth.export.exporter import (
    ExportFormat,
    save_to_file,
    to_csv,
    to_dataframe,
    to_json,
    to_metatrader,
    to_tradingview,
)

__all__ = [
    "ExportFormat",
    "save_to_file",
    "to_csv",
    "to_dataframe",
    "to_json",
    "to_metatrader",
    "to_tradingview",
]
