"""Shared pytest fixtures and factories for the benchmark tests."""
from __future__ import annotations

from typing import Any, Callable, Iterable, Sequence

import matplotlib
import pytest

matplotlib.use("Agg")

from idiombench.case import Case, Transformation, Variant  # noqa: E402
from idiombench.idioms import make_variants  # noqa: E402
from idiombench.runner import BenchmarkRunner, RunnerConfig  # noqa: E402


class StepClock:
    """Deterministic clock advancing by ``step`` on every call."""

    def __init__(self, step: float = 1.0) -> None:
        self.step = step
        self.now = 0.0

    def __call__(self) -> float:
        self.now += self.step
        return self.now


def double(x: int) -> int:
    return x * 2


def make_case(
    name: str = "double",
    fixture: Iterable[Any] = (1, 2, 3),
    variants: Sequence[Variant] | None = None,
    transformation: Transformation = Transformation.MAP,
    **kwargs: Any,
) -> Case:
    return Case(
        name=name,
        transformation=transformation,
        fixture=fixture,
        variants=variants if variants is not None else make_variants("map_", double),
        **kwargs,
    )


def variant(name: str, func: Callable[[Sequence[Any]], Any]) -> Variant:
    return Variant(name=name, func=func, idiom="custom")


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def runner(clock: StepClock) -> BenchmarkRunner:
    return BenchmarkRunner(RunnerConfig(clock=clock))
