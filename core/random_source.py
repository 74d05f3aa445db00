"""Injectable randomness provider used by decks, shoes, and strategies."""

from random import Random
from typing import Protocol


class Randomizer(Protocol):
    """Source of uniform integer and float draws."""

    def int_between(self, low: int, high: int) -> int:
        """Return a uniform integer in [low, high]."""
        ...

    def int_less_than(self, n: int) -> int:
        """Return a uniform integer in [0, n)."""
        ...

    def unit_float(self) -> float:
        """Return a uniform float in [0, 1)."""
        ...


class RandomSource:
    """Randomizer backed by ``random.Random``."""

    def __init__(self, seed: int | None = None, rng: Random | None = None) -> None:
        """
        Initialize the source.

        Args:
            seed: Seed for a new generator (ignored if rng is given)
            rng: Existing generator to draw from
        """
        self._rng = rng or Random(seed)

    def int_between(self, low: int, high: int) -> int:
        if low > high:
            raise ValueError(f"Empty range [{low}, {high}]")
        return self._rng.randint(low, high)

    def int_less_than(self, n: int) -> int:
        if n < 1:
            raise ValueError(f"Empty range [0, {n})")
        return self._rng.randrange(n)

    def unit_float(self) -> float:
        return self._rng.random()
