"""Nested sequences for the flatten workload."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from .base import FixtureBuilder, FixtureConfig


@dataclass(eq=False, repr=False)
class NestedFixture(FixtureBuilder):
    """``size`` inner tuples of random length in ``[0, max_inner]``."""

    seed: int = 0
    max_inner: int = 8

    def __init__(self, size: int, seed: int = 0, max_inner: int = 8) -> None:
        if max_inner < 0:
            raise ValueError("max_inner must be non-negative")
        super().__init__(
            FixtureConfig(size=size, seed=seed, params={"max_inner": max_inner})
        )
        self.seed = seed
        self.max_inner = max_inner

    def generate(self, rng: np.random.Generator) -> List[Tuple[int, ...]]:  # type: ignore[override]
        lengths = rng.integers(0, self.max_inner + 1, size=self.size)
        counter = 0
        inner: List[Tuple[int, ...]] = []
        for length in lengths:
            inner.append(tuple(range(counter, counter + int(length))))
            counter += int(length)
        return inner


__all__ = ["NestedFixture"]
