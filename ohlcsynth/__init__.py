"""ohlcsynth - synthetic OHLCV candlestick generator.

Generates candle sequences whose statistical texture follows a selectable
market regime (trends, panics, news spikes, GBM, jump-diffusion, GARCH,
Ornstein-Uhlenbeck).
"""

from ohlcsynth.generators import CandleGenerator, RandomGenerator, generate_candles
from ohlcsynth.models import Candle, GeneratorConfig, MarketMode

__version__ = "0.1.0"

__all__ = [
    "Candle",
    "CandleGenerator",
    "GeneratorConfig",
    "MarketMode",
    "RandomGenerator",
    "generate_candles",
]
