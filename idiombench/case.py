"""Benchmark cases: one fixture plus the variants that transform it."""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Generic, Iterable, Sequence, Tuple, TypeVar

from .equality import Equality, exact_equality

TIn = TypeVar("TIn")
TOut = TypeVar("TOut")


class Transformation(str, Enum):
    """Logical operation implemented by every variant of a case."""

    MAP = "map"
    FILTER = "filter"
    REDUCE = "reduce"
    GROUP_BY = "group_by"
    SLICE = "slice"
    FLATTEN = "flatten"
    UPDATE = "update"


@dataclass(frozen=True)
class Variant(Generic[TIn, TOut]):
    """A named implementation strategy for a case's transformation."""

    name: str
    func: Callable[[Sequence[TIn]], TOut]
    idiom: str = ""

    def __call__(self, fixture: Sequence[TIn]) -> TOut:
        return self.func(fixture)


@dataclass(frozen=True)
class Case(Generic[TIn, TOut]):
    """Groups a read-only fixture with the variants compared on it.

    ``fixture`` is frozen into a tuple on construction. When
    ``mutates_input`` is set the variants update records in place, so each
    execution receives its own deep copy via :meth:`fixture_for_run`.
    """

    name: str
    transformation: Transformation
    fixture: Tuple[TIn, ...]
    variants: Tuple[Variant[TIn, TOut], ...]
    equality: Equality = field(default_factory=exact_equality)
    description: str = ""
    mutates_input: bool = False

    def __init__(
        self,
        name: str,
        transformation: Transformation | str,
        fixture: Iterable[TIn],
        variants: Iterable[Variant[TIn, TOut]],
        equality: Equality | None = None,
        description: str = "",
        mutates_input: bool = False,
    ) -> None:
        if not name:
            raise ValueError("Case name must not be empty")
        variants = tuple(variants)
        names = [variant.name for variant in variants]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(
                f"Case '{name}' has duplicate variant names: {', '.join(duplicates)}"
            )

        object.__setattr__(self, "name", name)
        object.__setattr__(self, "transformation", Transformation(transformation))
        object.__setattr__(self, "fixture", tuple(fixture))
        object.__setattr__(self, "variants", variants)
        object.__setattr__(self, "equality", equality or exact_equality())
        object.__setattr__(self, "description", description)
        object.__setattr__(self, "mutates_input", mutates_input)

    @property
    def variant_names(self) -> Tuple[str, ...]:
        return tuple(variant.name for variant in self.variants)

    def variant(self, name: str) -> Variant[TIn, TOut]:
        for variant in self.variants:
            if variant.name == name:
                return variant
        raise KeyError(name)

    def fixture_for_run(self) -> Tuple[TIn, ...]:
        if self.mutates_input:
            return copy.deepcopy(self.fixture)
        return self.fixture


__all__ = ["Transformation", "Variant", "Case"]
