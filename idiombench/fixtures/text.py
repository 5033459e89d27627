"""String fixtures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np

from .base import FixtureBuilder, FixtureConfig


@dataclass(eq=False, repr=False)
class ItemStringFixture(FixtureBuilder):
    """``item1``, ``item2``, ... as in the original string workloads."""

    prefix: str = "item"

    def __init__(self, size: int, prefix: str = "item") -> None:
        super().__init__(FixtureConfig(size=size, seed=None, params={"prefix": prefix}))
        self.prefix = prefix

    def generate(self, rng: np.random.Generator) -> Iterator[str]:  # type: ignore[override]
        return (f"{self.prefix}{x}" for x in range(1, self.size + 1))


__all__ = ["ItemStringFixture"]
