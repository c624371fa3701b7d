"""Export candle sequences to CSV, JSON and charting-platform formats."""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Optional

import pandas as pd

from ohlcsynth.models.candle import Candle

logger = logging.getLogger(__name__)

COLUMNS = ["timestamp", "open", "high", "low", "close", "volume"]
CSV_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ExportFormat(str, Enum):
    """Supported export formats."""

    CSV = "csv"
    JSON = "json"
    TRADINGVIEW = "tradingview"
    METATRADER = "metatrader"


def to_dataframe(candles: list[Candle]) -> pd.DataFrame:
    """Convert candles to a DataFrame with one row per candle."""
    df = pd.DataFrame([c.model_dump() for c in candles], columns=COLUMNS)
    df["timestamp"] = pd.to_datetime(df["timestamp"])
    return df


def _rows(df: pd.DataFrame, header: bool) -> str:
    return df.to_csv(index=False, header=header, lineterminator="\n")


def to_csv(
    candles: list[Candle],
    include_headers: bool = True,
    metadata: Optional[dict[str, str]] = None,
) -> str:
    """Export candles as CSV.

    Args:
        candles: Candles to export.
        include_headers: Whether to write the column header row.
        metadata: Optional ``# key: value`` comment lines written first.

    Returns:
        CSV text with ``Timestamp,Open,High,Low,Close,Volume`` columns.
    """
    lines = ""
    if metadata:
        lines = "".join(f"# {key}: {value}\n" for key, value in metadata.items()) + "#\n"

    df = to_dataframe(candles)
    df["timestamp"] = df["timestamp"].dt.strftime(CSV_DATE_FORMAT)
    df.columns = [name.title() for name in COLUMNS]

    if df.empty:
        header = ",".join(df.columns) + "\n" if include_headers else ""
        return lines + header
    return lines + _rows(df, include_headers)


def to_json(candles: list[Candle]) -> str:
    """Export candles as a pretty-printed JSON array with ISO timestamps."""
    return json.dumps([c.model_dump(mode="json") for c in candles], indent=2)


def to_tradingview(candles: list[Candle]) -> str:
    """Export candles in TradingView's headerless CSV layout."""
    return to_csv(candles, include_headers=False)


def to_metatrader(candles: list[Candle]) -> str:
    """Export candles in MetaTrader's ``YYYY.MM.DD,HH:MM,O,H,L,C,V`` layout."""
    if not candles:
        return ""

    df = to_dataframe(candles)
    df.insert(0, "date", df["timestamp"].dt.strftime("%Y.%m.%d"))
    df.insert(1, "time", df["timestamp"].dt.strftime("%H:%M"))
    df = df.drop(columns=["timestamp"])
    return _rows(df, header=False)


_WRITERS = {
    ExportFormat.CSV: to_csv,
    ExportFormat.JSON: to_json,
    ExportFormat.TRADINGVIEW: to_tradingview,
    ExportFormat.METATRADER: to_metatrader,
}


def save_to_file(
    candles: list[Candle],
    file_path: "str | Path",
    fmt: "ExportFormat | str" = ExportFormat.CSV,
    metadata: Optional[dict[str, str]] = None,
) -> Path:
    """Write candles to a file.

    Args:
        candles: Candles to export.
        file_path: Destination path.
        fmt: Export format.
        metadata: Comment lines for CSV output, ignored for other formats.

    Returns:
        The written path.

    Raises:
        ValueError: If the format is unknown.
        OSError: If the file cannot be written.
    """
    fmt = ExportFormat(fmt)
    if fmt is ExportFormat.CSV:
        content = to_csv(candles, metadata=metadata)
    else:
        content = _WRITERS[fmt](candles)

    path = Path(file_path)
    path.write_text(content, encoding="utf-8")
    logger.info("Exported %d candles to %s (%s)", len(candles), path, fmt.value)
    return path
