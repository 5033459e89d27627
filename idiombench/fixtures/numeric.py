"""Integer fixtures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np

from .base import FixtureBuilder, FixtureConfig


@dataclass(eq=False, repr=False)
class RangeFixture(FixtureBuilder):
    """Consecutive integers ``start, start + 1, ...``."""

    start: int = 1

    def __init__(self, size: int, start: int = 1) -> None:
        super().__init__(FixtureConfig(size=size, seed=None, params={"start": start}))
        self.start = start

    def generate(self, rng: np.random.Generator) -> range:  # type: ignore[override]
        return range(self.start, self.start + self.size)


@dataclass(eq=False, repr=False)
class RandomIntegerFixture(FixtureBuilder):
    """Uniform integers in ``[low, high)`` drawn from a seeded generator."""

    seed: int = 0
    low: int = 0
    high: int = 1_000

    def __init__(self, size: int, seed: int = 0, low: int = 0, high: int = 1_000) -> None:
        if high <= low:
            raise ValueError("high must be greater than low")
        super().__init__(
            FixtureConfig(size=size, seed=seed, params={"low": low, "high": high})
        )
        self.seed = seed
        self.low = low
        self.high = high

    def generate(self, rng: np.random.Generator) -> List[int]:  # type: ignore[override]
        # Plain ints, so results compare and hash like Python numbers.
        return rng.integers(self.low, self.high, size=self.size).tolist()


@dataclass(eq=False, repr=False)
class RandomFloatFixture(FixtureBuilder):
    """Uniform floats in ``[0, scale)`` drawn from a seeded generator."""

    seed: int = 0
    scale: float = 1.0

    def __init__(self, size: int, seed: int = 0, scale: float = 1.0) -> None:
        if scale <= 0:
            raise ValueError("scale must be positive")
        super().__init__(FixtureConfig(size=size, seed=seed, params={"scale": scale}))
        self.seed = seed
        self.scale = scale

    def generate(self, rng: np.random.Generator) -> List[float]:  # type: ignore[override]
        return (rng.random(self.size) * self.scale).tolist()


__all__ = ["RangeFixture", "RandomIntegerFixture", "RandomFloatFixture"]
