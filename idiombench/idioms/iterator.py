"""Iterator loops: ``for item in items`` with a running output index."""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Sequence, TypeVar

from ._bounds import check_count, check_page

T = TypeVar("T")
R = TypeVar("R")
K = TypeVar("K")


def map_(items: Sequence[T], operation: Callable[[T], R]) -> List[R]:
    result: List[Any] = [None] * len(items)
    index = 0
    for item in items:
        result[index] = operation(item)
        index += 1
    return result


def filter_(items: Sequence[T], predicate: Callable[[T], bool]) -> List[T]:
    result: List[T] = []
    for item in items:
        if predicate(item):
            result.append(item)
    return result


def reduce_(items: Sequence[T], operation: Callable[[R, T], R], initial: R) -> R:
    accumulator = initial
    for item in items:
        accumulator = operation(accumulator, item)
    return accumulator


def group_by(items: Sequence[T], key: Callable[[T], K]) -> Dict[K, List[T]]:
    groups: Dict[K, List[T]] = {}
    for item in items:
        groups.setdefault(key(item), []).append(item)
    return groups


def take(items: Sequence[T], count: int) -> List[T]:
    remaining = check_count("count", count)
    result: List[T] = []
    iterator = iter(items)
    while remaining > 0:
        try:
            result.append(next(iterator))
        except StopIteration:
            break
        remaining -= 1
    return result


def skip(items: Sequence[T], count: int) -> List[T]:
    to_skip = check_count("count", count)
    result: List[T] = []
    for position, item in enumerate(items):
        if position >= to_skip:
            result.append(item)
    return result


def paginate(items: Sequence[T], page: int, page_size: int) -> List[T]:
    start, stop = check_page(page, page_size)
    result: List[T] = []
    for position, item in enumerate(items):
        if position >= stop:
            break
        if position >= start:
            result.append(item)
    return result


def flatten(items: Sequence[Sequence[T]]) -> List[T]:
    result: List[T] = []
    for inner in items:
        for item in inner:
            result.append(item)
    return result


def update(items: Sequence[T], operation: Callable[[T], T]) -> List[T]:
    result: List[Any] = [None] * len(items)
    index = 0
    for item in items:
        result[index] = operation(item)
        index += 1
    return result


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
