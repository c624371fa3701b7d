"""Property-based tests for the random primitives.

**Feature: ohlcsynth**
"""

import math
import random
import statistics

import pytest
from hypothesis import given, settings, assume
from hypothesis import strategies as st

from ohlcsynth.generators.distributions import MAX_REJECTIONS, RandomGenerator


class ZeroRandom(random.Random):
    """Random source that always returns the lower edge of [0, 1)."""

    def random(self):
        return 0.0


class TestNormal:
    """
    **Feature: ohlcsynth, Property 1: Box-Muller Normal Draws**

    *For any* seed, normal draws should be finite and follow the requested
    mean and standard deviation.
    """

    def test_sample_moments(self):
        rng = RandomGenerator(seed=7)
        samples = [rng.normal(5.0, 2.0) for _ in range(20000)]

        assert statistics.fmean(samples) == pytest.approx(5.0, abs=0.1)
        assert statistics.pstdev(samples) == pytest.approx(2.0, rel=0.05)

    def test_zero_uniform_does_not_hit_log_zero(self):
        """A uniform draw of exactly 0.0 must not reach log(0)."""
        rng = RandomGenerator(rng=ZeroRandom())

        assert rng.normal(5.0, 2.0) == 5.0

    @given(seed=st.integers(min_value=0, max_value=2**32 - 1))
    @settings(max_examples=50)
    def test_draws_are_finite(self, seed: int):
        rng = RandomGenerator(seed=seed)
        for _ in range(100):
            assert math.isfinite(rng.normal())

    def test_zero_stddev_returns_mean(self):
        rng = RandomGenerator(seed=1)
        assert rng.normal(3.5, 0.0) == 3.5


class TestExponential:
    """
    **Feature: ohlcsynth, Property 2: Exponential Draws**

    *For any* rate, exponential draws should be non-negative with mean 1/rate.
    """

    @given(lam=st.floats(min_value=0.1, max_value=10.0), seed=st.integers(0, 10_000))
    @settings(max_examples=50)
    def test_non_negative(self, lam: float, seed: int):
        rng = RandomGenerator(seed=seed)
        for _ in range(50):
            assert rng.exponential(lam) >= 0

    def test_mean_matches_rate(self):
        rng = RandomGenerator(seed=11)
        samples = [rng.exponential(2.0) for _ in range(20000)]

        assert statistics.fmean(samples) == pytest.approx(0.5, rel=0.05)

    def test_zero_uniform_gives_zero(self):
        rng = RandomGenerator(rng=ZeroRandom())
        assert rng.exponential(1.5) == 0.0


class TestDirection:
    """
    **Feature: ohlcsynth, Property 3: Signed Direction**

    *For any* probability, direction should return only +1 or -1, with +1
    appearing at roughly the requested rate.
    """

    @given(probability=st.floats(min_value=0.0, max_value=1.0), seed=st.integers(0, 10_000))
    @settings(max_examples=50)
    def test_only_unit_values(self, probability: float, seed: int):
        rng = RandomGenerator(seed=seed)
        for _ in range(20):
            assert rng.direction(probability) in (1.0, -1.0)

    def test_rate(self):
        rng = RandomGenerator(seed=3)
        ups = sum(1 for _ in range(10000) if rng.direction(0.7) > 0)

        assert 0.67 <= ups / 10000 <= 0.73

    def test_extremes(self):
        rng = RandomGenerator(seed=3)
        assert all(rng.direction(1.0) == 1.0 for _ in range(100))
        assert all(rng.direction(0.0) == -1.0 for _ in range(100))


class TestBoundedNormal:
    """
    **Feature: ohlcsynth, Property 4: Bounded Normal Terminates In Range**

    *For any* range, center and concentration, bounded_normal should return
    a value inside the range, even when rejection sampling cannot succeed.
    """

    @given(
        low=st.floats(min_value=-1000, max_value=1000),
        width=st.floats(min_value=0.0, max_value=500),
        concentration=st.floats(min_value=0.01, max_value=1.0),
        seed=st.integers(0, 10_000),
    )
    @settings(max_examples=100)
    def test_result_in_range(self, low: float, width: float, concentration: float, seed: int):
        high = low + width
        rng = RandomGenerator(seed=seed)

        value = rng.bounded_normal(low, high, concentration=concentration)

        assert low <= value <= high

    def test_degenerate_range(self):
        rng = RandomGenerator(seed=1)
        assert rng.bounded_normal(50.0, 50.0, center=50.0, concentration=0.8) == 50.0

    def test_unreachable_center_is_clamped(self):
        """A center far outside a narrow range falls back to the nearest bound."""
        rng = RandomGenerator(seed=1)
        assert rng.bounded_normal(0.0, 1.0, center=1000.0, concentration=0.01) == 1.0
        assert rng.bounded_normal(0.0, 1.0, center=-1000.0, concentration=0.01) == 0.0

    def test_swapped_bounds(self):
        rng = RandomGenerator(seed=1)
        value = rng.bounded_normal(10.0, 5.0)
        assert 5.0 <= value <= 10.0

    def test_rejection_cap_is_positive(self):
        assert MAX_REJECTIONS > 0


class TestVolume:
    """
    **Feature: ohlcsynth, Property 5: Volume Coupling**

    *For any* base volume and movement, volume should be non-negative and
    never collapse below 10% of the movement-adjusted base.
    """

    @given(
        base_volume=st.floats(min_value=0.0, max_value=1e7),
        price_volatility=st.floats(min_value=0.0, max_value=5.0),
        multiplier=st.floats(min_value=0.0, max_value=10.0),
        seed=st.integers(0, 10_000),
    )
    @settings(max_examples=100)
    def test_volume_floor(self, base_volume, price_volatility, multiplier, seed):
        rng = RandomGenerator(seed=seed)

        volume = rng.volume(base_volume, price_volatility, multiplier)
        floor = base_volume * (1 + price_volatility * multiplier) * 0.1

        assert volume >= 0
        assert volume >= floor * (1 - 1e-12)

    def test_movement_raises_volume(self):
        calm = RandomGenerator(seed=5)
        busy = RandomGenerator(seed=5)

        calm_total = sum(calm.volume(1000.0, 0.0, 2.0) for _ in range(1000))
        busy_total = sum(busy.volume(1000.0, 0.5, 2.0) for _ in range(1000))

        assert busy_total == pytest.approx(calm_total * 2.0)


class TestSeeding:
    """Same seed, same stream; different seeds, different streams."""

    def test_same_seed_same_draws(self):
        a = RandomGenerator(seed=99)
        b = RandomGenerator(seed=99)
        assert [a.normal() for _ in range(10)] == [b.normal() for _ in range(10)]

    @given(seed_a=st.integers(0, 10_000), seed_b=st.integers(0, 10_000))
    @settings(max_examples=20)
    def test_different_seeds_differ(self, seed_a: int, seed_b: int):
        assume(seed_a != seed_b)
        a = RandomGenerator(seed=seed_a)
        b = RandomGenerator(seed=seed_b)
        assert [a.uniform() for _ in range(5)] != [b.uniform() for _ in range(5)]

    def test_log_normal_positive(self):
        rng = RandomGenerator(seed=2)
        assert all(rng.log_normal(0.0, 1.0) > 0 for _ in range(1000))

    def test_with_trend_zero_volatility(self):
        rng = RandomGenerator(seed=2)
        assert rng.with_trend(100.0, 0.0, 0.8) == 100.0
