"""Collection of benchmark fixture builders."""

from .base import FixtureBuilder, FixtureConfig
from .nested import NestedFixture
from .numeric import RandomFloatFixture, RandomIntegerFixture, RangeFixture
from .records import PeopleFixture, Person
from .text import ItemStringFixture

__all__ = [
    "FixtureBuilder",
    "FixtureConfig",
    "ItemStringFixture",
    "NestedFixture",
    "PeopleFixture",
    "Person",
    "RandomFloatFixture",
    "RandomIntegerFixture",
    "RangeFixture",
]
