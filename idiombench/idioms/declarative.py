"""Higher-order operators: ``map``, ``filter``, ``functools.reduce``, ``itertools``.

``group_by`` folds the input into a dict with :func:`functools.reduce`; keys
only need to be hashable.
"""
from __future__ import annotations

import functools
import itertools
from typing import Callable, Dict, List, Sequence, TypeVar

from ._bounds import check_count, check_page

T = TypeVar("T")
R = TypeVar("R")
K = TypeVar("K")


def map_(items: Sequence[T], operation: Callable[[T], R]) -> List[R]:
    return list(map(operation, items))


def filter_(items: Sequence[T], predicate: Callable[[T], bool]) -> List[T]:
    return list(filter(predicate, items))


def reduce_(items: Sequence[T], operation: Callable[[R, T], R], initial: R) -> R:
    return functools.reduce(operation, items, initial)


def group_by(items: Sequence[T], key: Callable[[T], K]) -> Dict[K, List[T]]:
    def _add(groups: Dict[K, List[T]], item: T) -> Dict[K, List[T]]:
        groups.setdefault(key(item), []).append(item)
        return groups

    return functools.reduce(_add, items, {})


def take(items: Sequence[T], count: int) -> List[T]:
    return list(itertools.islice(items, check_count("count", count)))


def skip(items: Sequence[T], count: int) -> List[T]:
    return list(itertools.islice(items, check_count("count", count), None))


def paginate(items: Sequence[T], page: int, page_size: int) -> List[T]:
    start, stop = check_page(page, page_size)
    return list(itertools.islice(items, start, stop))


def flatten(items: Sequence[Sequence[T]]) -> List[T]:
    return list(itertools.chain.from_iterable(items))


def update(items: Sequence[T], operation: Callable[[T], T]) -> List[T]:
    return list(map(operation, items))


__all__ = [
    "map_",
    "filter_",
    "reduce_",
    "group_by",
    "take",
    "skip",
    "paginate",
    "flatten",
    "update",
]
