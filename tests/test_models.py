"""Tests for the candle, market mode and configuration models.

**Feature: ohlcsynth**
"""

from datetime import datetime

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from pydantic import ValidationError

from ohlcsynth.models import Candle, GeneratorConfig, MarketMode

T0 = datetime(2024, 1, 2, 9, 15)


# ============================================================================
# Candle
# ============================================================================

class TestCandle:
    """Derived metrics and envelope validation of a single candle."""

    def test_derived_metrics_bullish(self):
        candle = Candle(timestamp=T0, open=100.0, high=106.0, low=97.0, close=104.0, volume=500.0)

        assert candle.body_size == pytest.approx(4.0)
        assert candle.upper_shadow == pytest.approx(2.0)
        assert candle.lower_shadow == pytest.approx(3.0)
        assert candle.total_size == pytest.approx(9.0)
        assert candle.is_bullish
        assert not candle.is_bearish
        assert not candle.is_doji

    def test_derived_metrics_bearish(self):
        candle = Candle(timestamp=T0, open=104.0, high=106.0, low=97.0, close=100.0)

        assert candle.body_size == pytest.approx(-4.0)
        assert candle.upper_shadow == pytest.approx(2.0)
        assert candle.lower_shadow == pytest.approx(3.0)
        assert candle.is_bearish
        assert candle.volume == 0.0

    def test_doji_when_body_under_tenth_of_range(self):
        candle = Candle(timestamp=T0, open=100.0, high=105.0, low=95.0, close=100.5)
        assert candle.is_doji

        candle = Candle(timestamp=T0, open=100.0, high=105.0, low=95.0, close=101.5)
        assert not candle.is_doji

    def test_flat_candle(self):
        candle = Candle.flat(42.0, T0, volume=10.0)

        assert candle.open == candle.high == candle.low == candle.close == 42.0
        assert candle.body_size == 0.0
        assert not candle.is_doji
        assert not candle.is_bullish and not candle.is_bearish

    def test_high_below_body_rejected(self):
        with pytest.raises(ValidationError, match="high"):
            Candle(timestamp=T0, open=100.0, high=101.0, low=99.0, close=102.0)

    def test_low_above_body_rejected(self):
        with pytest.raises(ValidationError, match="low"):
            Candle(timestamp=T0, open=100.0, high=103.0, low=100.5, close=102.0)

    @pytest.mark.parametrize("field", ["open", "high", "low", "close"])
    def test_non_positive_price_rejected(self, field):
        values = {"open": 1.0, "high": 1.0, "low": 1.0, "close": 1.0}
        values[field] = 0.0
        with pytest.raises(ValidationError):
            Candle(timestamp=T0, **values)

    def test_negative_volume_rejected(self):
        with pytest.raises(ValidationError):
            Candle(timestamp=T0, open=1.0, high=1.0, low=1.0, close=1.0, volume=-1.0)

    def test_candle_is_frozen(self):
        candle = Candle.flat(10.0, T0)
        with pytest.raises(ValidationError):
            candle.close = 11.0


# ============================================================================
# MarketMode
# ============================================================================

class TestMarketMode:
    """Regime catalog and its suggested defaults."""

    def test_catalog_has_eleven_modes(self):
        assert len(list(MarketMode)) == 11

    @pytest.mark.parametrize(
        "mode,volatility,trend",
        [
            (MarketMode.FLAT, 0.001, 0.0),
            (MarketMode.UPTREND, 0.005, 0.8),
            (MarketMode.DOWNTREND, 0.005, -0.8),
            (MarketMode.PANIC, 0.03, -0.9),
            (MarketMode.NEWS_SPIKE, 0.02, 0.6),
            (MarketMode.CONSOLIDATION, 0.002, 0.0),
            (MarketMode.VOLATILE, 0.015, 0.0),
            (MarketMode.GBM, 0.01, 0.1),
        ],
    )
    def test_suggested_values(self, mode, volatility, trend):
        assert mode.suggested_volatility == volatility
        assert mode.suggested_trend == trend

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("flat", MarketMode.FLAT),
            ("FLAT", MarketMode.FLAT),
            ("newsSpike", MarketMode.NEWS_SPIKE),
            ("news-spike", MarketMode.NEWS_SPIKE),
            ("news_spike", MarketMode.NEWS_SPIKE),
            ("newsspike", MarketMode.NEWS_SPIKE),
            ("jumpDiffusion", MarketMode.JUMP_DIFFUSION),
            (" garch ", MarketMode.GARCH),
            ("OU", MarketMode.OU),
        ],
    )
    def test_parse_aliases(self, text, expected):
        assert MarketMode.parse(text) is expected

    def test_parse_passes_members_through(self):
        assert MarketMode.parse(MarketMode.PANIC) is MarketMode.PANIC

    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="Unknown market mode"):
            MarketMode.parse("sideways")

    @given(mode=st.sampled_from(list(MarketMode)))
    def test_every_mode_has_profile(self, mode: MarketMode):
        assert mode.description
        assert mode.suggested_volatility >= 0
        assert -1 <= mode.suggested_trend <= 1


# ============================================================================
# GeneratorConfig
# ============================================================================

class TestGeneratorConfigDefaults:
    """
    **Feature: ohlcsynth, Property 6: Regime Defaults**

    *For any* market mode, omitting volatility and trend strength should
    resolve them to the mode's suggested values exactly once.
    """

    def test_panic_defaults(self):
        config = GeneratorConfig(market_mode=MarketMode.PANIC)

        assert config.volatility == 0.03
        assert config.trend_strength == -0.9

    @given(mode=st.sampled_from(list(MarketMode)))
    @settings(max_examples=30)
    def test_defaults_follow_mode(self, mode: MarketMode):
        config = GeneratorConfig(market_mode=mode)

        assert config.volatility == mode.suggested_volatility
        assert config.trend_strength == mode.suggested_trend

    def test_none_means_default(self):
        config = GeneratorConfig(market_mode="panic", volatility=None, trend_strength=None)
        assert config.volatility == 0.03
        assert config.trend_strength == -0.9

    def test_explicit_values_win(self):
        config = GeneratorConfig(market_mode=MarketMode.PANIC, volatility=0.0, trend_strength=0.0)

        assert config.volatility == 0.0
        assert config.trend_strength == 0.0

    def test_plain_defaults(self):
        config = GeneratorConfig()

        assert config.initial_price == 100.0
        assert config.market_mode is MarketMode.FLAT
        assert config.volatility == 0.001
        assert config.candle_interval == 60.0
        assert config.candle_count == 100
        assert config.base_volume == 1000.0
        assert config.volume_volatility_multiplier == 2.0
        assert isinstance(config.start_time, datetime)

    def test_mode_from_string(self):
        config = GeneratorConfig(market_mode="news-spike")
        assert config.market_mode is MarketMode.NEWS_SPIKE
        assert config.volatility == 0.02

    def test_for_mode_with_overrides(self):
        config = GeneratorConfig.for_mode("gbm", initial_price=250.0, candle_count=10)

        assert config.market_mode is MarketMode.GBM
        assert config.initial_price == 250.0
        assert config.candle_count == 10
        assert config.volatility == 0.01
        assert config.trend_strength == 0.1

    def test_variance(self):
        config = GeneratorConfig(volatility=0.2)
        assert config.variance == pytest.approx(0.04)


class TestGeneratorConfigValidation:
    """Invalid parameters fail fast at construction."""

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"initial_price": 0.0},
            {"initial_price": -5.0},
            {"candle_interval": 0.0},
            {"candle_interval": -60.0},
            {"candle_interval": 1e-7},
            {"candle_count": -1},
            {"volatility": -0.1},
            {"trend_strength": 1.5},
            {"trend_strength": -1.01},
            {"base_volume": -1.0},
            {"volume_volatility_multiplier": -2.0},
            {"market_mode": "sideways"},
        ],
    )
    def test_invalid_parameters_raise(self, kwargs):
        with pytest.raises(ValueError):
            GeneratorConfig(**kwargs)

    def test_error_names_field(self):
        with pytest.raises(ValidationError) as exc_info:
            GeneratorConfig(initial_price=0.0)
        assert "initial_price" in str(exc_info.value)

    def test_config_is_frozen(self):
        config = GeneratorConfig()
        with pytest.raises(ValidationError):
            config.candle_count = 5

    def test_sub_microsecond_interval_rejected(self):
        with pytest.raises(ValidationError, match="candle_interval"):
            GeneratorConfig(candle_interval=4e-7, candle_count=3, start_time=T0)

    def test_run_past_last_date_rejected(self):
        with pytest.raises(ValidationError, match="representable"):
            GeneratorConfig(candle_interval=365 * 86400 * 1000, candle_count=10, start_time=T0)

    def test_run_ending_at_last_date_accepted(self):
        start = datetime(9999, 12, 31, 23, 58)

        config = GeneratorConfig(candle_interval=60.0, candle_count=1, start_time=start)
        assert config.candle_count == 1
        with pytest.raises(ValidationError, match="representable"):
            GeneratorConfig(candle_interval=60.0, candle_count=2, start_time=start)

    def test_zero_count_allowed(self):
        assert GeneratorConfig(candle_count=0).candle_count == 0

    def test_describe(self):
        config = GeneratorConfig(market_mode="ou", candle_count=3, initial_price=50.0)
        assert config.describe().startswith("ou x3 @ 50")
