"""Candle (OHLCV) data model."""

from datetime import datetime

from pydantic import BaseModel, Field, model_validator


class Candle(BaseModel):
    """Represents a single synthetic OHLCV candle.

    The high/low envelope is validated on construction, so every candle
    handed out by the generator satisfies ``low <= min(open, close)`` and
    ``high >= max(open, close)``.
    """

    timestamp: datetime = Field(..., description="Candle open time")
    open: float = Field(..., gt=0, description="Opening price")
    high: float = Field(..., gt=0, description="High price")
    low: float = Field(..., gt=0, description="Low price")
    close: float = Field(..., gt=0, description="Closing price")
    volume: float = Field(default=0.0, ge=0, description="Traded volume")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_envelope(self) -> "Candle":
        if self.high < max(self.open, self.close):
            raise ValueError(
                f"high {self.high} is below max(open, close) = {max(self.open, self.close)}"
            )
        if self.low > min(self.open, self.close):
            raise ValueError(
                f"low {self.low} is above min(open, close) = {min(self.open, self.close)}"
            )
        return self

    @classmethod
    def flat(cls, price: float, timestamp: datetime, volume: float = 0.0) -> "Candle":
        """Create a candle whose open, high, low and close are all ``price``."""
        return cls(
            timestamp=timestamp,
            open=price,
            high=price,
            low=price,
            close=price,
            volume=volume,
        )

    @property
    def body_size(self) -> float:
        """Signed body size (close - open)."""
        return self.close - self.open

    @property
    def upper_shadow(self) -> float:
        return self.high - max(self.open, self.close)

    @property
    def lower_shadow(self) -> float:
        return min(self.open, self.close) - self.low

    @property
    def total_size(self) -> float:
        """Full candle range (high - low)."""
        return self.high - self.low

    @property
    def is_bullish(self) -> bool:
        return self.close > self.open

    @property
    def is_bearish(self) -> bool:
        return self.close < self.open

    @property
    def is_doji(self) -> bool:
        """True when the body is under 10% of the full range."""
        return abs(self.close - self.open) < self.total_size * 0.1
