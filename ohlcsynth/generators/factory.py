"""Factory helpers for commonly used generator setups."""

from typing import Any, Optional

from ohlcsynth.generators.stepper import CandleGenerator
from ohlcsynth.models.config import GeneratorConfig
from ohlcsynth.models.market_mode import MarketMode

# Recommended configuration for every mode
PRESETS: dict[MarketMode, GeneratorConfig] = {
    mode: GeneratorConfig.for_mode(mode) for mode in MarketMode
}


def for_mode(
    mode: "MarketMode | str",
    initial_price: float = 100.0,
    seed: Optional[int] = None,
    **overrides: Any,
) -> CandleGenerator:
    """Create a generator using the mode's recommended parameters.

    Args:
        mode: Market mode (or its name).
        initial_price: Starting price.
        seed: Seed for reproducible output.
        **overrides: Any other ``GeneratorConfig`` field.
    """
    config = GeneratorConfig.for_mode(mode, initial_price=initial_price, **overrides)
    return CandleGenerator(config, seed=seed)


def flat(
    initial_price: float = 100.0,
    candle_count: int = 100,
    candle_interval: float = 60.0,
    seed: Optional[int] = None,
) -> CandleGenerator:
    """Create a generator for a flat, sideways market."""
    config = GeneratorConfig(
        initial_price=initial_price,
        market_mode=MarketMode.FLAT,
        candle_interval=candle_interval,
        candle_count=candle_count,
    )
    return CandleGenerator(config, seed=seed)


def uptrend(
    initial_price: float = 100.0,
    trend_strength: float = 0.8,
    candle_count: int = 100,
    candle_interval: float = 60.0,
    seed: Optional[int] = None,
) -> CandleGenerator:
    """Create a generator for a steady uptrend.

    Args:
        initial_price: Starting price.
        trend_strength: Trend strength (0.1 - 1.0).
        candle_count: Number of candles.
        candle_interval: Seconds between candles.
        seed: Seed for reproducible output.
    """
    config = GeneratorConfig(
        initial_price=initial_price,
        market_mode=MarketMode.UPTREND,
        trend_strength=trend_strength,
        candle_interval=candle_interval,
        candle_count=candle_count,
    )
    return CandleGenerator(config, seed=seed)


def downtrend(
    initial_price: float = 100.0,
    trend_strength: float = 0.8,
    candle_count: int = 100,
    candle_interval: float = 60.0,
    seed: Optional[int] = None,
) -> CandleGenerator:
    """Create a generator for a steady downtrend.

    ``trend_strength`` is given as a positive magnitude and negated in the
    resulting configuration.
    """
    config = GeneratorConfig(
        initial_price=initial_price,
        market_mode=MarketMode.DOWNTREND,
        trend_strength=-trend_strength,
        candle_interval=candle_interval,
        candle_count=candle_count,
    )
    return CandleGenerator(config, seed=seed)


def _with_volatility(
    mode: MarketMode,
    initial_price: float,
    volatility: float,
    candle_count: int,
    candle_interval: float,
    seed: Optional[int],
) -> CandleGenerator:
    config = GeneratorConfig(
        initial_price=initial_price,
        market_mode=mode,
        volatility=volatility,
        candle_interval=candle_interval,
        candle_count=candle_count,
    )
    return CandleGenerator(config, seed=seed)


def panic(
    initial_price: float = 100.0,
    volatility: float = 0.03,
    candle_count: int = 100,
    candle_interval: float = 60.0,
    seed: Optional[int] = None,
) -> CandleGenerator:
    """Create a generator for a panic sell-off."""
    return _with_volatility(
        MarketMode.PANIC, initial_price, volatility, candle_count, candle_interval, seed
    )


def news_spike(
    initial_price: float = 100.0,
    volatility: float = 0.02,
    candle_count: int = 100,
    candle_interval: float = 60.0,
    seed: Optional[int] = None,
) -> CandleGenerator:
    """Create a generator with occasional news spikes and retracements."""
    return _with_volatility(
        MarketMode.NEWS_SPIKE, initial_price, volatility, candle_count, candle_interval, seed
    )


def consolidation(
    initial_price: float = 100.0,
    volatility: float = 0.002,
    candle_count: int = 100,
    candle_interval: float = 60.0,
    seed: Optional[int] = None,
) -> CandleGenerator:
    """Create a generator for a narrow consolidation range."""
    return _with_volatility(
        MarketMode.CONSOLIDATION, initial_price, volatility, candle_count, candle_interval, seed
    )


def volatile(
    initial_price: float = 100.0,
    volatility: float = 0.015,
    candle_count: int = 100,
    candle_interval: float = 60.0,
    seed: Optional[int] = None,
) -> CandleGenerator:
    """Create a generator for a choppy, volatile market."""
    return _with_volatility(
        MarketMode.VOLATILE, initial_price, volatility, candle_count, candle_interval, seed
    )


def custom(config: GeneratorConfig, seed: Optional[int] = None) -> CandleGenerator:
    """Create a generator for an explicit configuration."""
    return CandleGenerator(config, seed=seed)
