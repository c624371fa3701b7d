"""Candle stepper: folds regime price models into a candle sequence.

``step`` is a pure function of ``(state, config, rng)``; ``CandleGenerator``
wraps it with the single-pass READY -> EMITTING -> DONE lifecycle.
"""

import logging
from datetime import datetime, timedelta
from enum import Enum
from typing import Iterator, Optional

from pydantic import BaseModel, Field

from ohlcsynth.generators.distributions import RandomGenerator
from ohlcsynth.generators.regimes import StepContext, clamp_price, get_regime
from ohlcsynth.models.candle import Candle
from ohlcsynth.models.config import GeneratorConfig

logger = logging.getLogger(__name__)


class StepperPhase(str, Enum):
    """Lifecycle of a ``CandleGenerator``."""

    READY = "ready"
    EMITTING = "emitting"
    DONE = "done"


class StepperState(BaseModel):
    """Running state threaded from one candle to the next."""

    price: float = Field(..., gt=0, description="Close of the previous candle")
    time: datetime = Field(..., description="Timestamp of the next candle")
    variance: float = Field(..., ge=0, description="Running GARCH variance")
    emitted: int = Field(default=0, ge=0, description="Candles produced so far")

    model_config = {"frozen": True}

    @classmethod
    def initial(cls, config: GeneratorConfig) -> "StepperState":
        """Seed state for a fresh run of ``config``."""
        return cls(
            price=config.initial_price,
            time=config.start_time,
            variance=config.variance,
        )


def step(
    state: StepperState,
    config: GeneratorConfig,
    rng: RandomGenerator,
) -> tuple[StepperState, Candle]:
    """Produce the next candle and the state that follows it.

    Args:
        state: State after the previous candle.
        config: Generation parameters.
        rng: Random source.

    Returns:
        Tuple of (next state, candle).
    """
    regime = get_regime(config.market_mode)
    ctx = StepContext(config=config, rng=rng, price=state.price, variance=state.variance)

    open_ = clamp_price(regime.open_price(ctx))
    high, low, close, variance = regime.ohlc(ctx, open_)
    close = clamp_price(close)
    high = max(open_, clamp_price(high), close)
    low = min(open_, clamp_price(low), close)

    volume = rng.volume(
        config.base_volume,
        abs(close - open_) / open_,
        config.volume_volatility_multiplier,
    )

    candle = Candle(
        timestamp=state.time,
        open=open_,
        high=high,
        low=low,
        close=close,
        volume=max(0.0, volume),
    )

    updates = {
        "price": close,
        "time": state.time + timedelta(seconds=config.candle_interval),
        "emitted": state.emitted + 1,
    }
    if variance is not None:
        updates["variance"] = variance
    return state.model_copy(update=updates), candle


class CandleGenerator:
    """Generates a candle sequence for one configuration.

    A generator is single-pass: once it has started emitting it cannot be
    rewound. Build a new generator (with the same seed, for an identical
    sequence) to run a configuration again. Instances are not thread-safe.
    """

    def __init__(
        self,
        config: GeneratorConfig,
        seed: Optional[int] = None,
        rng: Optional[RandomGenerator] = None,
    ):
        """Initialize the generator.

        Args:
            config: Generation parameters.
            seed: Seed for a private random source.
            rng: Random source to use instead of a seeded one.
        """
        self.config = config
        self.rng = rng if rng is not None else RandomGenerator(seed)
        self._state = StepperState.initial(config)

    @property
    def state(self) -> StepperState:
        return self._state

    @property
    def phase(self) -> StepperPhase:
        """Current lifecycle phase."""
        if self._state.emitted >= self.config.candle_count:
            return StepperPhase.DONE
        if self._state.emitted == 0:
            return StepperPhase.READY
        return StepperPhase.EMITTING

    @property
    def remaining(self) -> int:
        return self.config.candle_count - self._state.emitted

    def next_candle(self) -> Candle:
        """Emit the next candle.

        Raises:
            StopIteration: If all configured candles were already emitted.
        """
        if self.phase is StepperPhase.DONE:
            raise StopIteration
        self._state, candle = step(self._state, self.config, self.rng)
        return candle

    def __iter__(self) -> Iterator[Candle]:
        return self

    def __next__(self) -> Candle:
        return self.next_candle()

    def generate(self) -> list[Candle]:
        """Generate the full candle sequence.

        Returns:
            ``config.candle_count`` candles in timestamp order.

        Raises:
            RuntimeError: If this generator already emitted candles.
        """
        if self._state.emitted > 0:
            raise RuntimeError(
                "CandleGenerator is single-pass; create a new generator to run again"
            )

        logger.debug("Generating %s (seed=%s)", self.config.describe(), self.rng.seed)
        candles = list(self)
        if candles:
            logger.debug(
                "Generated %d candles, last close %.6g, variance %.3g",
                len(candles), candles[-1].close, self._state.variance,
            )
        return candles


def generate_candles(config: GeneratorConfig, seed: Optional[int] = None) -> list[Candle]:
    """Generate ``config.candle_count`` candles with a fresh generator."""
    return CandleGenerator(config, seed=seed).generate()
