"""Price-path models for every market regime.

Each regime is a pair of functions registered in ``REGIMES``:

* ``open_price(ctx)`` derives the candle's open from the prior close.
* ``ohlc(ctx, open)`` derives high, low and close (and, for GARCH, the
  variance carried into the next candle).

Discrete regimes (flat, trends, panic, news spike, consolidation,
volatile) shape the candle with a few direct draws. Continuous-time
regimes (GBM, jump-diffusion, GARCH, Ornstein-Uhlenbeck) take one step of
their process for the open and then simulate intra-candle micro-steps to
build a realistic high/low range.
"""

import math
from typing import Callable, NamedTuple, Optional

from ohlcsynth.generators.distributions import RandomGenerator
from ohlcsynth.models.config import GeneratorConfig
from ohlcsynth.models.market_mode import MarketMode

# Price bounds applied after every multiplicative update
PRICE_FLOOR = 1e-4
PRICE_CEILING = 1e15

# Lower bounds used when taking logs and square roots
LOG_FLOOR = 1e-6
MIN_SIGMA = 1e-6

# exp() argument cap, keeps log-price models finite
MAX_EXPONENT = 700.0

SECONDS_PER_DAY = 86400.0
MINUTES_PER_TRADING_DAY = 390.0
MICRO_STEP_SECONDS = 15.0
MIN_MICRO_STEPS = 4
MIN_MICRO_DT = 1e-4

NEWS_SPIKE_PROBABILITY = 0.1
NEWS_SPIKE_THRESHOLD = 1.02

JUMP_INTENSITY_PER_DAY = 0.3
JUMP_PROBABILITY_CAP = 0.5
JUMP_MEAN = -0.02
JUMP_STDDEV = 0.08

GARCH_ALPHA = 0.10
GARCH_BETA = 0.85

OU_REVERSION_SPEED = 0.3


class StepContext(NamedTuple):
    """Everything a regime may read while building one candle."""

    config: GeneratorConfig
    rng: RandomGenerator
    price: float
    variance: float


class PriceRange(NamedTuple):
    """High, low and close of a candle, plus carried GARCH variance."""

    high: float
    low: float
    close: float
    variance: Optional[float] = None


class RegimeModel(NamedTuple):
    open_price: Callable[[StepContext], float]
    ohlc: Callable[[StepContext, float], PriceRange]


def clamp_price(price: float) -> float:
    """Clamp a price into [PRICE_FLOOR, PRICE_CEILING]; NaN collapses to the floor."""
    if not price > PRICE_FLOOR:
        return PRICE_FLOOR
    return min(price, PRICE_CEILING)


def _exp(x: float) -> float:
    return math.exp(min(x, MAX_EXPONENT))


def _envelope(open_: float, close: float, shadow: float) -> PriceRange:
    """Symmetric shadows above the body top and below the body bottom."""
    high = clamp_price(max(open_, close) * (1 + shadow))
    low = clamp_price(min(open_, close) * (1 - shadow))
    return PriceRange(high, low, close)


# ---------------------------------------------------------------------------
# Discrete regimes
# ---------------------------------------------------------------------------

def _flat_open(ctx: StepContext) -> float:
    change = ctx.rng.normal(0.0, ctx.config.volatility * 0.5)
    return clamp_price(ctx.price * (1 + change))


def _flat_ohlc(ctx: StepContext, open_: float) -> PriceRange:
    vol = ctx.config.volatility
    body = ctx.rng.normal(0.0, vol * 0.3)
    close = clamp_price(open_ * (1 + body))
    shadow = abs(ctx.rng.normal(0.0, vol * 0.2))
    return _envelope(open_, close, shadow)


def _trend_open(ctx: StepContext) -> float:
    vol = ctx.config.volatility
    trend_component = ctx.config.trend_strength * vol * 0.5
    random_component = ctx.rng.normal(0.0, vol * 0.3)
    return clamp_price(ctx.price * (1 + trend_component + random_component))


def _trend_ohlc(ctx: StepContext, open_: float) -> PriceRange:
    vol = ctx.config.volatility
    trend = ctx.config.trend_strength
    trend_direction = (trend > 0) - (trend < 0)
    body = ctx.rng.normal(trend_direction * vol * 0.5, vol * 0.3)
    close = clamp_price(open_ * (1 + body))
    shadow = abs(ctx.rng.normal(0.0, vol * 0.2))
    return _envelope(open_, close, shadow)


def _panic_open(ctx: StepContext) -> float:
    vol = ctx.config.volatility
    panic_component = -ctx.rng.exponential(2.0) * vol
    random_component = ctx.rng.normal(0.0, vol * 0.5)
    return clamp_price(ctx.price * (1 + panic_component + random_component))


def _panic_ohlc(ctx: StepContext, open_: float) -> PriceRange:
    vol = ctx.config.volatility
    close = clamp_price(open_ * (1 - ctx.rng.exponential(1.5) * vol))

    # Upper shadow hangs off the open only; sell-offs wick hard to the downside
    upper_shadow = abs(ctx.rng.normal(0.0, vol * 0.3))
    lower_shadow = ctx.rng.exponential(2.0) * vol

    high = open_ * (1 + upper_shadow)
    low = clamp_price(min(open_, close) * (1 - lower_shadow))
    return PriceRange(high, low, close)


def _news_spike_open(ctx: StepContext) -> float:
    vol = ctx.config.volatility
    if ctx.rng.uniform() < NEWS_SPIKE_PROBABILITY:
        spike = ctx.rng.exponential(1.0) * vol * 3
        return clamp_price(ctx.price * (1 + spike))

    change = ctx.rng.normal(0.0, vol * 0.3)
    return clamp_price(ctx.price * (1 + change))


def _news_spike_ohlc(ctx: StepContext, open_: float) -> PriceRange:
    # A spike is recognised from the gap against the prior close, not from
    # the draw made while opening.
    if open_ <= ctx.price * NEWS_SPIKE_THRESHOLD:
        return _flat_ohlc(ctx, open_)

    vol = ctx.config.volatility
    high = open_ * (1 + ctx.rng.exponential(1.0) * vol)
    retracement = ctx.rng.normal(-0.3, 0.2)
    close = clamp_price(open_ * (1 + retracement))
    low = clamp_price(min(open_, close) * (1 - abs(ctx.rng.normal(0.0, vol * 0.2))))
    return PriceRange(high, low, close)


def _consolidation_open(ctx: StepContext) -> float:
    center = ctx.config.initial_price
    band = ctx.config.volatility * 0.5
    price = ctx.rng.bounded_normal(
        center * (1 - band),
        center * (1 + band),
        center=center,
        concentration=0.8,
    )
    return clamp_price(price)


def _consolidation_ohlc(ctx: StepContext, open_: float) -> PriceRange:
    vol = ctx.config.volatility
    close = clamp_price(open_ * (1 + ctx.rng.normal(0.0, vol * 0.1)))
    shadow = abs(ctx.rng.normal(0.0, vol * 0.1))
    return _envelope(open_, close, shadow)


def _volatile_open(ctx: StepContext) -> float:
    direction = ctx.rng.direction(0.5)
    vol = ctx.config.volatility * (1 + abs(ctx.rng.normal(0.0, 0.5)))
    change = direction * ctx.rng.exponential(1.0) * vol
    return clamp_price(ctx.price * (1 + change))


def _volatile_ohlc(ctx: StepContext, open_: float) -> PriceRange:
    vol = ctx.config.volatility
    close = clamp_price(open_ * (1 + ctx.rng.normal(0.0, vol * 0.8)))
    shadow = ctx.rng.exponential(1.0) * vol
    return _envelope(open_, close, shadow)


# ---------------------------------------------------------------------------
# Continuous-time regimes
# ---------------------------------------------------------------------------

def candle_dt(config: GeneratorConfig) -> float:
    """Candle length as a fraction of a day, at least one trading minute."""
    return max(1.0 / MINUTES_PER_TRADING_DAY, config.candle_interval / SECONDS_PER_DAY)


def micro_steps(config: GeneratorConfig) -> int:
    """Number of ~15 second micro-steps simulated inside one candle."""
    return max(MIN_MICRO_STEPS, int(config.candle_interval / MICRO_STEP_SECONDS + 0.5))


def micro_dt(config: GeneratorConfig, steps: int) -> float:
    return max(MIN_MICRO_DT, (config.candle_interval / steps) / SECONDS_PER_DAY)


def _drift(config: GeneratorConfig) -> float:
    return config.trend_strength * config.volatility


def _sigma(config: GeneratorConfig) -> float:
    return max(MIN_SIGMA, config.volatility)


def _gbm_log_return(rng: RandomGenerator, mu: float, sigma: float, dt: float) -> float:
    z = rng.normal(0.0, 1.0)
    return (mu - 0.5 * sigma * sigma) * dt + sigma * math.sqrt(dt) * z


def _jump_factor(rng: RandomGenerator, probability: float) -> float:
    if rng.uniform() < probability:
        return math.exp(JUMP_MEAN + JUMP_STDDEV * rng.normal(0.0, 1.0))
    return 1.0


def _range_from_path(open_: float, path: list[float], variance: Optional[float] = None) -> PriceRange:
    close = path[-1] if path else open_
    return PriceRange(
        high=max(open_, close, *path),
        low=min(open_, close, *path),
        close=close,
        variance=variance,
    )


def _gbm_open(ctx: StepContext) -> float:
    config = ctx.config
    log_return = _gbm_log_return(ctx.rng, _drift(config), _sigma(config), candle_dt(config))
    return clamp_price(ctx.price * _exp(log_return))


def _gbm_ohlc(ctx: StepContext, open_: float) -> PriceRange:
    config = ctx.config
    steps = micro_steps(config)
    dt = micro_dt(config, steps)
    mu, sigma = _drift(config), _sigma(config)

    price = open_
    path = []
    for _ in range(steps):
        price = clamp_price(price * _exp(_gbm_log_return(ctx.rng, mu, sigma, dt)))
        path.append(price)
    return _range_from_path(open_, path)


def _jump_diffusion_open(ctx: StepContext) -> float:
    config = ctx.config
    dt = candle_dt(config)
    multiplier = _exp(_gbm_log_return(ctx.rng, _drift(config), _sigma(config), dt))
    multiplier *= _jump_factor(ctx.rng, min(JUMP_PROBABILITY_CAP, JUMP_INTENSITY_PER_DAY * dt))
    return clamp_price(ctx.price * multiplier)


def _jump_diffusion_ohlc(ctx: StepContext, open_: float) -> PriceRange:
    config = ctx.config
    steps = micro_steps(config)
    dt = micro_dt(config, steps)
    mu, sigma = _drift(config), _sigma(config)
    jump_probability = min(JUMP_PROBABILITY_CAP, JUMP_INTENSITY_PER_DAY * dt)

    price = open_
    path = []
    for _ in range(steps):
        price = price * _exp(_gbm_log_return(ctx.rng, mu, sigma, dt))
        price = clamp_price(price * _jump_factor(ctx.rng, jump_probability))
        path.append(price)
    return _range_from_path(open_, path)


def _garch_open(ctx: StepContext) -> float:
    config = ctx.config
    sigma = math.sqrt(max(1e-10, ctx.variance))
    log_return = _gbm_log_return(ctx.rng, _drift(config), sigma, candle_dt(config))
    return clamp_price(ctx.price * _exp(log_return))


def _garch_ohlc(ctx: StepContext, open_: float) -> PriceRange:
    config = ctx.config
    target_variance = max(1e-8, config.variance)
    omega = target_variance * (1 - GARCH_ALPHA - GARCH_BETA)

    steps = micro_steps(config)
    dt = micro_dt(config, steps)
    mu = _drift(config)

    variance = max(1e-10, ctx.variance)
    price = open_
    path = []
    for _ in range(steps):
        sigma = math.sqrt(max(1e-12, variance))
        log_return = _gbm_log_return(ctx.rng, mu, sigma, dt)
        price = clamp_price(price * _exp(log_return))
        variance = omega + GARCH_ALPHA * log_return * log_return + GARCH_BETA * variance
        path.append(price)
    return _range_from_path(open_, path, variance=variance)


def _ou_step(rng: RandomGenerator, x: float, theta: float, sigma: float, dt: float) -> float:
    z = rng.normal(0.0, 1.0)
    return x + OU_REVERSION_SPEED * (theta - x) * dt + sigma * math.sqrt(dt) * z


def _ou_open(ctx: StepContext) -> float:
    config = ctx.config
    theta = math.log(max(LOG_FLOOR, config.initial_price))
    x = math.log(max(LOG_FLOOR, ctx.price))
    x = _ou_step(ctx.rng, x, theta, _sigma(config), candle_dt(config))
    return clamp_price(_exp(x))


def _ou_ohlc(ctx: StepContext, open_: float) -> PriceRange:
    config = ctx.config
    steps = micro_steps(config)
    dt = micro_dt(config, steps)
    theta = math.log(max(LOG_FLOOR, config.initial_price))
    sigma = _sigma(config)

    x = math.log(max(LOG_FLOOR, open_))
    path = []
    for _ in range(steps):
        x = _ou_step(ctx.rng, x, theta, sigma, dt)
        path.append(clamp_price(_exp(x)))
    return _range_from_path(open_, path)


REGIMES: dict[MarketMode, RegimeModel] = {
    MarketMode.FLAT: RegimeModel(_flat_open, _flat_ohlc),
    MarketMode.UPTREND: RegimeModel(_trend_open, _trend_ohlc),
    MarketMode.DOWNTREND: RegimeModel(_trend_open, _trend_ohlc),
    MarketMode.PANIC: RegimeModel(_panic_open, _panic_ohlc),
    MarketMode.NEWS_SPIKE: RegimeModel(_news_spike_open, _news_spike_ohlc),
    MarketMode.CONSOLIDATION: RegimeModel(_consolidation_open, _consolidation_ohlc),
    MarketMode.VOLATILE: RegimeModel(_volatile_open, _volatile_ohlc),
    MarketMode.GBM: RegimeModel(_gbm_open, _gbm_ohlc),
    MarketMode.JUMP_DIFFUSION: RegimeModel(_jump_diffusion_open, _jump_diffusion_ohlc),
    MarketMode.GARCH: RegimeModel(_garch_open, _garch_ohlc),
    MarketMode.OU: RegimeModel(_ou_open, _ou_ohlc),
}

_unregistered = set(MarketMode) - set(REGIMES)
if _unregistered:
    raise RuntimeError(
        "No price model registered for: " + ", ".join(sorted(m.value for m in _unregistered))
    )


def get_regime(mode: MarketMode) -> RegimeModel:
    """Look up the price model for a market mode."""
    return REGIMES[MarketMode.parse(mode)]
