"""Summary statistics over a generated candle sequence."""

from pydantic import BaseModel, Field

from ohlcsynth.models.candle import Candle


class CandleStatistics(BaseModel):
    """Aggregate figures for a candle sequence."""

    total_candles: int = Field(..., ge=0, description="Number of candles")
    average_price: float = Field(..., description="Mean of (high + low) / 2")
    min_price: float = Field(..., description="Lowest low")
    max_price: float = Field(..., description="Highest high")
    total_volume: float = Field(..., ge=0, description="Sum of volume")
    average_volume: float = Field(..., ge=0, description="Mean volume")
    bullish_candles: int = Field(..., ge=0)
    bearish_candles: int = Field(..., ge=0)
    doji_candles: int = Field(..., ge=0)
    average_body_size: float = Field(..., ge=0, description="Mean absolute body size")
    average_shadow_size: float = Field(..., ge=0, description="Mean upper + lower shadow")
    price_change: float = Field(..., description="Last close minus first open")
    price_change_percent: float = Field(..., description="Price change relative to first open")

    model_config = {"frozen": True}

    @property
    def price_range(self) -> float:
        return self.max_price - self.min_price


def analyze(candles: list[Candle]) -> CandleStatistics:
    """Compute summary statistics for a candle sequence.

    An empty sequence yields all-zero statistics.
    """
    count = len(candles)
    if count == 0:
        return CandleStatistics(
            total_candles=0,
            average_price=0.0,
            min_price=0.0,
            max_price=0.0,
            total_volume=0.0,
            average_volume=0.0,
            bullish_candles=0,
            bearish_candles=0,
            doji_candles=0,
            average_body_size=0.0,
            average_shadow_size=0.0,
            price_change=0.0,
            price_change_percent=0.0,
        )

    total_volume = sum(c.volume for c in candles)
    price_change = candles[-1].close - candles[0].open

    return CandleStatistics(
        total_candles=count,
        average_price=sum((c.high + c.low) / 2 for c in candles) / count,
        min_price=min(c.low for c in candles),
        max_price=max(c.high for c in candles),
        total_volume=total_volume,
        average_volume=total_volume / count,
        bullish_candles=sum(1 for c in candles if c.is_bullish),
        bearish_candles=sum(1 for c in candles if c.is_bearish),
        doji_candles=sum(1 for c in candles if c.is_doji),
        average_body_size=sum(abs(c.body_size) for c in candles) / count,
        average_shadow_size=sum(c.upper_shadow + c.lower_shadow for c in candles) / count,
        price_change=price_change,
        price_change_percent=price_change / candles[0].open * 100,
    )


def highest_volume_candles(candles: list[Candle], count: int = 10) -> list[Candle]:
    """Return the ``count`` candles with the highest volume."""
    return sorted(candles, key=lambda c: c.volume, reverse=True)[:count]


def largest_body_candles(candles: list[Candle], count: int = 10) -> list[Candle]:
    """Return the ``count`` candles with the largest absolute body."""
    return sorted(candles, key=lambda c: abs(c.body_size), reverse=True)[:count]


def largest_shadow_candles(candles: list[Candle], count: int = 10) -> list[Candle]:
    """Return the ``count`` candles with the longest combined shadows."""
    return sorted(candles, key=lambda c: c.upper_shadow + c.lower_shadow, reverse=True)[:count]


def determine_trend(candles: list[Candle]) -> str:
    """Label the overall move from first open to last close.

    Moves beyond 5% are "strong", beyond 1% a plain trend, anything
    smaller is sideways.
    """
    if not candles:
        return "Insufficient data"

    change_percent = (candles[-1].close - candles[0].open) / candles[0].open * 100

    if change_percent > 5:
        return f"Strong uptrend (+{change_percent:.2f}%)"
    elif change_percent > 1:
        return f"Uptrend (+{change_percent:.2f}%)"
    elif change_percent < -5:
        return f"Strong downtrend ({change_percent:.2f}%)"
    elif change_percent < -1:
        return f"Downtrend ({change_percent:.2f}%)"
    return f"Sideways movement ({change_percent:.2f}%)"


def average_volatility(candles: list[Candle]) -> float:
    """Mean candle range as a percentage of the open."""
    if not candles:
        return 0.0
    return sum((c.high - c.low) / c.open * 100 for c in candles) / len(candles)


def find_extremes(candles: list[Candle]) -> tuple[list[Candle], list[Candle]]:
    """Find local highs and lows.

    A candle is a local high when its high exceeds both neighbours' highs,
    and a local low when its low is under both neighbours' lows.

    Returns:
        Tuple of (local highs, local lows).
    """
    highs: list[Candle] = []
    lows: list[Candle] = []

    for i in range(1, len(candles) - 1):
        previous, current, following = candles[i - 1], candles[i], candles[i + 1]
        if current.high > previous.high and current.high > following.high:
            highs.append(current)
        if current.low < previous.low and current.low < following.low:
            lows.append(current)

    return highs, lows
