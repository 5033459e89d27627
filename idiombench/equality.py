"""Equality predicates used to check that variants agree."""
from __future__ import annotations

from collections import Counter
from collections.abc import Hashable, Mapping
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, Tuple

import numpy as np


@dataclass(frozen=True)
class Equality:
    """Pairs an equality predicate with a function explaining mismatches.

    ``describe(expected, actual)`` returns ``None`` when the values are equal
    under the predicate, otherwise a short human readable description.
    """

    name: str
    describe: Callable[[Any, Any], Optional[str]]

    def __call__(self, expected: Any, actual: Any) -> bool:
        return self.describe(expected, actual) is None


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _short(value: Any, limit: int = 60) -> str:
    text = repr(value)
    return text if len(text) <= limit else text[: limit - 3] + "..."


def _describe_exact(expected: Any, actual: Any) -> Optional[str]:
    if _is_sequence(expected) and _is_sequence(actual):
        for index, (left, right) in enumerate(zip(expected, actual)):
            if left != right:
                return f"first difference at index {index}: {_short(left)} != {_short(right)}"
        if len(expected) != len(actual):
            return f"length {len(expected)} != {len(actual)}"
        return None
    if expected != actual:
        return f"{_short(expected)} != {_short(actual)}"
    return None


def _multisets(left: Iterable[Any], right: Iterable[Any]) -> Tuple[Counter, Counter]:
    left_items = list(left)
    right_items = list(right)
    if all(isinstance(item, Hashable) for item in left_items + right_items):
        return Counter(left_items), Counter(right_items)
    # Mutable records on either side: both sides are compared through repr.
    return Counter(map(repr, left_items)), Counter(map(repr, right_items))


def _describe_grouping(expected: Any, actual: Any) -> Optional[str]:
    if not isinstance(expected, Mapping) or not isinstance(actual, Mapping):
        return (
            "grouping results must be mappings, got "
            f"{type(expected).__name__} and {type(actual).__name__}"
        )

    missing = [key for key in expected if key not in actual]
    extra = [key for key in actual if key not in expected]
    if missing or extra:
        return f"keys differ: missing {sorted(map(repr, missing))}, extra {sorted(map(repr, extra))}"

    for key, members in expected.items():
        left, right = _multisets(members, actual[key])
        if left != right:
            only_left = sorted(map(repr, (left - right).elements()))
            only_right = sorted(map(repr, (right - left).elements()))
            return (
                f"group {key!r} differs: only in first {only_left}, "
                f"only in second {only_right}"
            )
    return None


def exact_equality() -> Equality:
    """Plain ``==``; lists and tuples compare element-wise."""

    return Equality("exact", _describe_exact)


def multiset_grouping_equality() -> Equality:
    """Groupings are equal when every key maps to the same multiset of members.

    Neither key order nor member order is significant.
    """

    return Equality("multiset-grouping", _describe_grouping)


def approximate_equality(rel_tol: float = 1e-9, abs_tol: float = 0.0) -> Equality:
    """Float comparison through :func:`numpy.allclose`."""

    if rel_tol < 0 or abs_tol < 0:
        raise ValueError("Tolerances must be non-negative")

    def describe(expected: Any, actual: Any) -> Optional[str]:
        left = np.asarray(expected, dtype=float)
        right = np.asarray(actual, dtype=float)
        if left.shape != right.shape:
            return f"shape {left.shape} != {right.shape}"
        if np.allclose(left, right, rtol=rel_tol, atol=abs_tol, equal_nan=True):
            return None
        if left.ndim == 0:
            return f"{float(left)!r} != {float(right)!r} (rel_tol={rel_tol})"
        mismatch = np.flatnonzero(
            ~np.isclose(left, right, rtol=rel_tol, atol=abs_tol, equal_nan=True)
        )
        first = int(mismatch[0])
        return (
            f"{mismatch.size} element(s) differ, first at index {first}: "
            f"{left.flat[first]!r} != {right.flat[first]!r}"
        )

    return Equality(f"approximate(rel_tol={rel_tol})", describe)


__all__ = [
    "Equality",
    "exact_equality",
    "multiset_grouping_equality",
    "approximate_equality",
]
