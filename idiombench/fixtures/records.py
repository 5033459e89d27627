"""Record fixtures for the object workloads."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np

from .base import FixtureBuilder, FixtureConfig


@dataclass
class Person:
    """Mutable record; the update workload renames people in place."""

    id: int
    name: str = ""


@dataclass(eq=False, repr=False)
class PeopleFixture(FixtureBuilder):
    """People with ids ``1..size`` named ``<name_prefix><id>``."""

    name_prefix: str = "Name"

    def __init__(self, size: int, name_prefix: str = "Name") -> None:
        super().__init__(
            FixtureConfig(size=size, seed=None, params={"name_prefix": name_prefix})
        )
        self.name_prefix = name_prefix

    def generate(self, rng: np.random.Generator) -> Iterator[Person]:  # type: ignore[override]
        return (Person(id=x, name=f"{self.name_prefix}{x}") for x in range(1, self.size + 1))


__all__ = ["Person", "PeopleFixture"]
