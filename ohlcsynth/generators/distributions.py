"""Random number draws used by the candle generator.

Every draw goes through one injected ``random.Random`` so a run can be
replayed from its seed. Distributions are built from plain uniform draws
(Box-Muller for the normal, inverse CDF for the exponential) rather than
the ``random`` module helpers, which keeps the stream layout stable.
"""

import logging
import math
import random
from typing import Optional

logger = logging.getLogger(__name__)

# Upper bound on rejection-sampling attempts in bounded_normal
MAX_REJECTIONS = 1000


class RandomGenerator:
    """Seedable source of the distributions used by the market regimes."""

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        """Initialize the generator.

        Args:
            seed: Seed for a private ``random.Random``. Ignored when ``rng``
                is given.
            rng: Pre-built random source to draw from.
        """
        self.seed = seed
        self._rng = rng if rng is not None else random.Random(seed)

    def uniform(self) -> float:
        """Uniform draw in [0, 1)."""
        return self._rng.random()

    def normal(self, mean: float = 0.0, stddev: float = 1.0) -> float:
        """Normal draw via the Box-Muller transform.

        Args:
            mean: Mean of the distribution.
            stddev: Standard deviation.

        Returns:
            ``mean + stddev * z`` for a standard normal ``z``.
        """
        # 1 - [0, 1) keeps u1 in (0, 1] so log(u1) is finite
        u1 = 1.0 - self._rng.random()
        u2 = self._rng.random()
        z = math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)
        return mean + z * stddev

    def exponential(self, lam: float = 1.0) -> float:
        """Exponential draw with rate ``lam`` via the inverse CDF."""
        u = self._rng.random()
        return -math.log(1.0 - u) / lam

    def log_normal(self, mean: float = 0.0, stddev: float = 1.0) -> float:
        """Log-normal draw; ``mean``/``stddev`` describe the underlying normal."""
        return math.exp(self.normal(mean, stddev))

    def direction(self, probability: float = 0.5) -> float:
        """Return 1.0 with the given probability, otherwise -1.0."""
        return 1.0 if self._rng.random() < probability else -1.0

    def bounded_normal(
        self,
        low: float,
        high: float,
        center: Optional[float] = None,
        concentration: float = 0.5,
    ) -> float:
        """Normal draw restricted to ``[low, high]`` by rejection sampling.

        The standard deviation is ``(high - low) * concentration / 3``.
        After ``MAX_REJECTIONS`` rejected draws the last draw is clamped
        into the range instead.

        Args:
            low: Lower bound (inclusive).
            high: Upper bound (inclusive).
            center: Mean of the draw, defaults to the middle of the range.
            concentration: Spread around the center (0.1 - 1.0).

        Returns:
            A value in ``[low, high]``.
        """
        if high < low:
            low, high = high, low
        mean = (low + high) / 2 if center is None else center
        stddev = (high - low) * concentration / 3

        result = mean
        for _ in range(MAX_REJECTIONS):
            result = self.normal(mean, stddev)
            if low <= result <= high:
                return result

        logger.debug(
            "bounded_normal gave up after %d draws in [%g, %g]; clamping %g",
            MAX_REJECTIONS, low, high, result,
        )
        return min(high, max(low, result))

    def with_trend(self, base_value: float, volatility: float, trend_strength: float) -> float:
        """Scale ``base_value`` by a normal shock plus a trend component."""
        random_component = self.normal(0.0, volatility)
        trend_component = trend_strength * volatility * 2
        return base_value * (1 + random_component + trend_component)

    def volume(
        self,
        base_volume: float,
        price_volatility: float,
        multiplier: float = 2.0,
    ) -> float:
        """Draw a traded volume that grows with the candle's price movement.

        Args:
            base_volume: Volume of a candle with no price movement.
            price_volatility: Relative price movement of the candle.
            multiplier: How strongly movement inflates volume.

        Returns:
            Non-negative volume; the noise factor is floored at 0.1.
        """
        volatility_multiplier = 1.0 + price_volatility * multiplier
        random_multiplier = self.normal(1.0, 0.3)
        return base_volume * volatility_multiplier * max(0.1, random_multiplier)
