"""Analysis helpers for generated candle sequences."""

from ohlcsynth.analysis.statistics import (
    CandleStatistics,
    analyze,
    average_volatility,
    determine_trend,
    find_extremes,
    highest_volume_candles,
    largest_body_candles,
    largest_shadow_candles,
)

__all__ = [
    "CandleStatistics",
    "analyze",
    "average_volatility",
    "determine_trend",
    "find_extremes",
    "highest_volume_candles",
    "largest_body_candles",
    "largest_shadow_candles",
]
