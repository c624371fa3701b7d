"""Generator configuration model."""

from datetime import datetime, timedelta
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from ohlcsynth.models.market_mode import MarketMode

# Timestamps have microsecond resolution; shorter intervals would collide
MIN_CANDLE_INTERVAL = 1e-6


class GeneratorConfig(BaseModel):
    """Immutable parameters for one generation run.

    ``volatility`` and ``trend_strength`` fall back to the market mode's
    suggested values when omitted (or passed as ``None``). The fallback is
    resolved once, while the model is validated.
    """

    initial_price: float = Field(default=100.0, gt=0, description="Starting price")
    market_mode: MarketMode = Field(default=MarketMode.FLAT, description="Market regime")
    volatility: float = Field(..., ge=0, description="Per-candle volatility (0.0 - 1.0)")
    trend_strength: float = Field(
        ..., ge=-1, le=1, description="Trend strength (-1 strong down, 1 strong up)"
    )
    candle_interval: float = Field(
        default=60.0, ge=MIN_CANDLE_INTERVAL, description="Seconds between candles"
    )
    candle_count: int = Field(default=100, ge=0, description="Number of candles to generate")
    base_volume: float = Field(default=1000.0, ge=0, description="Base traded volume")
    volume_volatility_multiplier: float = Field(
        default=2.0, ge=0, description="Coupling between price movement and volume"
    )
    start_time: datetime = Field(default_factory=datetime.now, description="First candle time")

    model_config = {"frozen": True}

    @field_validator("market_mode", mode="before")
    @classmethod
    def _parse_mode(cls, value: Any) -> MarketMode:
        return MarketMode.parse(value)

    @model_validator(mode="before")
    @classmethod
    def _apply_mode_defaults(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        data = dict(data)
        mode = MarketMode.parse(data.get("market_mode") or MarketMode.FLAT)
        if data.get("volatility") is None:
            data["volatility"] = mode.suggested_volatility
        if data.get("trend_strength") is None:
            data["trend_strength"] = mode.suggested_trend
        return data

    @model_validator(mode="after")
    def _check_time_span(self) -> "GeneratorConfig":
        try:
            self.start_time + timedelta(seconds=self.candle_interval) * self.candle_count
        except OverflowError:
            raise ValueError(
                f"{self.candle_count} candles of {self.candle_interval:g}s from "
                f"{self.start_time.isoformat()} run past the last representable date"
            ) from None
        return self

    @classmethod
    def for_mode(
        cls,
        mode: "MarketMode | str",
        initial_price: float = 100.0,
        **overrides: Any,
    ) -> "GeneratorConfig":
        """Create a configuration with the recommended parameters for a mode.

        Args:
            mode: Market mode (or its name).
            initial_price: Starting price.
            **overrides: Any other ``GeneratorConfig`` field.
        """
        mode = MarketMode.parse(mode)
        params: dict[str, Any] = {
            "volatility": mode.suggested_volatility,
            "trend_strength": mode.suggested_trend,
        }
        params.update(overrides)
        return cls(initial_price=initial_price, market_mode=mode, **params)

    @property
    def variance(self) -> float:
        """Squared volatility, the seed variance of a run."""
        return self.volatility * self.volatility

    def describe(self) -> str:
        """One-line summary used by the CLI and log output."""
        return (
            f"{self.market_mode.value} x{self.candle_count} "
            f"@ {self.initial_price:g} (vol={self.volatility:g}, "
            f"trend={self.trend_strength:g}, interval={self.candle_interval:g}s)"
        )
