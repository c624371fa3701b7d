"""Market regimes and their suggested generation defaults."""

from enum import Enum
from typing import NamedTuple


class _ModeProfile(NamedTuple):
    description: str
    volatility: float
    trend: float


class MarketMode(str, Enum):
    """Market behaviour modes for synthetic data generation."""

    FLAT = "flat"
    UPTREND = "uptrend"
    DOWNTREND = "downtrend"
    PANIC = "panic"
    NEWS_SPIKE = "news_spike"
    CONSOLIDATION = "consolidation"
    VOLATILE = "volatile"
    GBM = "gbm"
    JUMP_DIFFUSION = "jump_diffusion"
    GARCH = "garch"
    OU = "ou"

    @property
    def description(self) -> str:
        """Human readable mode description."""
        return _PROFILES[self].description

    @property
    def suggested_volatility(self) -> float:
        """Per-candle volatility used when the caller gives none."""
        return _PROFILES[self].volatility

    @property
    def suggested_trend(self) -> float:
        """Trend strength (-1 to 1) used when the caller gives none."""
        return _PROFILES[self].trend

    @classmethod
    def parse(cls, value: "str | MarketMode") -> "MarketMode":
        """Resolve a mode from a loosely formatted name.

        Accepts any casing with ``-``, ``_`` or no separator, so
        ``newsSpike``, ``news-spike`` and ``news_spike`` all resolve to
        ``NEWS_SPIKE``.

        Raises:
            ValueError: If the name matches no mode.
        """
        if isinstance(value, cls):
            return value

        key = str(value).strip().lower().replace("-", "").replace("_", "")
        for mode in cls:
            if mode.value.replace("_", "") == key:
                return mode

        valid = ", ".join(mode.value for mode in cls)
        raise ValueError(f"Unknown market mode '{value}'. Must be one of: {valid}")


_PROFILES: dict[MarketMode, _ModeProfile] = {
    MarketMode.FLAT: _ModeProfile("Flat - sideways movement", 0.001, 0.0),
    MarketMode.UPTREND: _ModeProfile("Uptrend", 0.005, 0.8),
    MarketMode.DOWNTREND: _ModeProfile("Downtrend", 0.005, -0.8),
    MarketMode.PANIC: _ModeProfile("Panic - sharp decline", 0.03, -0.9),
    MarketMode.NEWS_SPIKE: _ModeProfile("News spike", 0.02, 0.6),
    MarketMode.CONSOLIDATION: _ModeProfile("Consolidation", 0.002, 0.0),
    MarketMode.VOLATILE: _ModeProfile("Volatile market", 0.015, 0.0),
    MarketMode.GBM: _ModeProfile("Geometric Brownian Motion", 0.01, 0.1),
    MarketMode.JUMP_DIFFUSION: _ModeProfile("Merton jump-diffusion", 0.015, 0.05),
    MarketMode.GARCH: _ModeProfile("GARCH(1,1) volatility clustering", 0.01, 0.0),
    MarketMode.OU: _ModeProfile("Ornstein-Uhlenbeck mean reversion", 0.01, 0.0),
}
