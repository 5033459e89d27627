"""Catalog of the showcase benchmark cases."""
from __future__ import annotations

import logging
import math
import operator
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Tuple

from .case import Case, Transformation, Variant
from .equality import (
    Equality,
    approximate_equality,
    exact_equality,
    multiset_grouping_equality,
)
from .errors import UnknownCaseError
from .fixtures import (
    FixtureBuilder,
    ItemStringFixture,
    NestedFixture,
    PeopleFixture,
    Person,
    RandomFloatFixture,
    RandomIntegerFixture,
    RangeFixture,
)
from .idioms import make_variants
from .runner import BenchmarkRunner, RunnerConfig

logger = logging.getLogger("idiombench.suite")


@dataclass
class SuiteConfig:
    size: int = 10_000
    seed: int = 42
    random_high: int = 1_000
    group_modulus: int = 2
    take_count: int = 100
    skip_count: int = 100
    page: int = 3
    page_size: int = 100
    max_inner: int = 8

    def __post_init__(self) -> None:
        if self.size < 0:
            raise ValueError(f"size must be non-negative, got {self.size}")
        if self.group_modulus <= 0:
            raise ValueError("group_modulus must be positive")


# ---------------------------------------------------------------------------
# Per-element operations
# ---------------------------------------------------------------------------
def double(x: int) -> int:
    return x + x


def to_upper(text: str) -> str:
    return text.upper()


def create_person(x: int) -> Person:
    return Person(id=x, name=f"Name{x}")


def rename_person(person: Person) -> Person:
    person.name = f"Updated{person.id}"
    return person


def is_even(x: int) -> bool:
    return x % 2 == 0


def expensive_predicate(x: int) -> bool:
    return math.sin(x) * math.log(x + 1) + math.sqrt(x) > 1000


def starts_with_item1(text: str) -> bool:
    return text.startswith("item1")


def even_id_with_five(person: Person) -> bool:
    return person.id % 2 == 0 and "5" in person.name


@dataclass
class CaseDefinition:
    """Holds the constructors required to assemble one case."""

    transformation: Transformation
    fixture_constructor: Callable[[SuiteConfig], FixtureBuilder]
    variants_constructor: Callable[[SuiteConfig], Tuple[Variant, ...]]
    description: str = ""
    equality_constructor: Callable[[], Equality] = exact_equality
    mutates_input: bool = False


CASE_DEFINITIONS: Dict[str, CaseDefinition] = {
    "select_math": CaseDefinition(
        transformation=Transformation.MAP,
        fixture_constructor=lambda config: RangeFixture(config.size),
        variants_constructor=lambda _: make_variants("map_", double),
        description="x + x over consecutive integers",
    ),
    "select_string": CaseDefinition(
        transformation=Transformation.MAP,
        fixture_constructor=lambda config: ItemStringFixture(config.size),
        variants_constructor=lambda _: make_variants("map_", to_upper),
        description="upper-case item strings",
    ),
    "object_create": CaseDefinition(
        transformation=Transformation.MAP,
        fixture_constructor=lambda config: RangeFixture(config.size),
        variants_constructor=lambda _: make_variants("map_", create_person),
        description="allocate a Person per integer",
    ),
    "object_update": CaseDefinition(
        transformation=Transformation.UPDATE,
        fixture_constructor=lambda config: PeopleFixture(config.size, name_prefix="OldName"),
        variants_constructor=lambda _: make_variants("update", rename_person),
        description="rename people in place",
        mutates_input=True,
    ),
    "cheap_where": CaseDefinition(
        transformation=Transformation.FILTER,
        fixture_constructor=lambda config: RangeFixture(config.size),
        variants_constructor=lambda _: make_variants("filter_", is_even),
        description="keep even integers",
    ),
    "expensive_where": CaseDefinition(
        transformation=Transformation.FILTER,
        fixture_constructor=lambda config: RangeFixture(config.size),
        variants_constructor=lambda _: make_variants("filter_", expensive_predicate),
        description="sin(x) * log(x + 1) + sqrt(x) > 1000",
    ),
    "where_string": CaseDefinition(
        transformation=Transformation.FILTER,
        fixture_constructor=lambda config: ItemStringFixture(config.size),
        variants_constructor=lambda _: make_variants("filter_", starts_with_item1),
        description="strings starting with 'item1'",
    ),
    "where_object": CaseDefinition(
        transformation=Transformation.FILTER,
        fixture_constructor=lambda config: PeopleFixture(config.size),
        variants_constructor=lambda _: make_variants("filter_", even_id_with_five),
        description="even id and a '5' in the name",
    ),
    "reduce_sum": CaseDefinition(
        transformation=Transformation.REDUCE,
        fixture_constructor=lambda config: RandomIntegerFixture(
            config.size, seed=config.seed, high=config.random_high
        ),
        variants_constructor=lambda _: make_variants("reduce_", operator.add, 0),
        description="sum of random integers",
    ),
    "reduce_float_sum": CaseDefinition(
        transformation=Transformation.REDUCE,
        fixture_constructor=lambda config: RandomFloatFixture(config.size, seed=config.seed),
        variants_constructor=lambda _: make_variants("reduce_", operator.add, 0.0),
        description="sum of random floats",
        equality_constructor=lambda: approximate_equality(rel_tol=1e-9),
    ),
    "group_by_parity": CaseDefinition(
        transformation=Transformation.GROUP_BY,
        fixture_constructor=lambda config: RandomIntegerFixture(
            config.size, seed=config.seed, high=config.random_high
        ),
        variants_constructor=lambda config: make_variants(
            "group_by", lambda x: x % config.group_modulus
        ),
        description="random integers grouped by remainder",
        equality_constructor=multiset_grouping_equality,
    ),
    "take_head": CaseDefinition(
        transformation=Transformation.SLICE,
        fixture_constructor=lambda config: RangeFixture(config.size),
        variants_constructor=lambda config: make_variants("take", config.take_count),
        description="first take_count elements",
    ),
    "skip_tail": CaseDefinition(
        transformation=Transformation.SLICE,
        fixture_constructor=lambda config: RangeFixture(config.size),
        variants_constructor=lambda config: make_variants("skip", config.skip_count),
        description="everything after skip_count elements",
    ),
    "paginate": CaseDefinition(
        transformation=Transformation.SLICE,
        fixture_constructor=lambda config: RangeFixture(config.size),
        variants_constructor=lambda config: make_variants(
            "paginate", config.page, config.page_size
        ),
        description="one zero-based page",
    ),
    "flatten_nested": CaseDefinition(
        transformation=Transformation.FLATTEN,
        fixture_constructor=lambda config: NestedFixture(
            config.size, seed=config.seed, max_inner=config.max_inner
        ),
        variants_constructor=lambda _: make_variants("flatten"),
        description="concatenate random-length runs",
    ),
}


def build_case(name: str, config: SuiteConfig | None = None) -> Case:
    """Instantiate the catalog case ``name``."""

    config = config or SuiteConfig()
    try:
        definition = CASE_DEFINITIONS[name]
    except KeyError as exc:
        raise UnknownCaseError(name) from exc

    fixture = definition.fixture_constructor(config).build()
    return Case(
        name=name,
        transformation=definition.transformation,
        fixture=fixture,
        variants=definition.variants_constructor(config),
        equality=definition.equality_constructor(),
        description=definition.description,
        mutates_input=definition.mutates_input,
    )


def build_default_runner(
    config: SuiteConfig | None = None,
    names: Optional[Iterable[str]] = None,
    runner_config: RunnerConfig | None = None,
) -> BenchmarkRunner:
    """Return a runner with the catalog cases registered in catalog order."""

    config = config or SuiteConfig()
    selected = list(CASE_DEFINITIONS) if names is None else list(names)
    for name in selected:
        if name not in CASE_DEFINITIONS:
            raise UnknownCaseError(name)

    runner = BenchmarkRunner(runner_config)
    for name in CASE_DEFINITIONS:
        if name in selected:
            runner.register(build_case(name, config))
    logger.info(
        "Built suite with %d case(s), size=%d, seed=%d",
        len(runner),
        config.size,
        config.seed,
    )
    return runner


__all__ = [
    "SuiteConfig",
    "CaseDefinition",
    "CASE_DEFINITIONS",
    "build_case",
    "build_default_runner",
]
