"""Fixture builders for benchmark cases."""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import numpy as np


@dataclass
class FixtureConfig:
    """Generic configuration for a fixture builder."""

    size: int
    seed: Optional[int]
    params: Dict[str, Any]


class FixtureBuilder(ABC):
    """Interface implemented by all fixture generators.

    Randomness only ever comes from the generator seeded with
    ``config.seed``, so the same builder always yields the same fixture.
    """

    def __init__(self, config: FixtureConfig) -> None:
        if config.size < 0:
            raise ValueError(f"Fixture size must be non-negative, got {config.size}")
        self.config = config

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.config == other.config  # type: ignore[attr-defined]

    def __repr__(self) -> str:
        params = ", ".join(f"{k}={v!r}" for k, v in self.config.params.items())
        seed = "" if self.config.seed is None else f", seed={self.config.seed}"
        extra = f", {params}" if params else ""
        return f"{type(self).__name__}(size={self.config.size}{seed}{extra})"

    @property
    def size(self) -> int:
        return self.config.size

    def build(self) -> Tuple[Any, ...]:
        """Return the immutable fixture."""

        rng = np.random.default_rng(self.config.seed)
        return tuple(self.generate(rng))

    @abstractmethod
    def generate(self, rng: np.random.Generator) -> Any:
        """Return an iterable of ``size`` elements."""


__all__ = ["FixtureConfig", "FixtureBuilder"]
