"""Candle generation engine."""

from ohlcsynth.generators.distributions import RandomGenerator
from ohlcsynth.generators.regimes import REGIMES, PriceRange, RegimeModel, StepContext
from ohlcsynth.generators.stepper import (
    CandleGenerator,
    StepperPhase,
    StepperState,
    generate_candles,
    step,
)

__all__ = [
    "CandleGenerator",
    "PriceRange",
    "REGIMES",
    "RandomGenerator",
    "RegimeModel",
    "StepContext",
    "StepperPhase",
    "StepperState",
    "generate_candles",
    "step",
]
