"""Data models for ohlcsynth."""

from ohlcsynth.models.candle import Candle
from ohlcsynth.models.config import GeneratorConfig
from ohlcsynth.models.market_mode import MarketMode

__all__ = [
    "Candle",
    "GeneratorConfig",
    "MarketMode",
]
