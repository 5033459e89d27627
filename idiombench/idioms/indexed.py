"""Explicit index loops: ``for i in range(len(items))`` with subscripting.

Results that have a known length are pre-allocated and filled by index.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Sequence, TypeVar

from ._bounds import check_count, check_page

T = TypeVar("T")
R = TypeVar("R")
K = TypeVar("K")


def map_(items: Sequence[T], operation: Callable[[T], R]) -> List[R]:
    result: List[Any] = [None] * len(items)
    for i in range(len(items)):
        result[i] = operation(items[i])
    return result


def filter_(items: Sequence[T], predicate: Callable[[T], bool]) -> List[T]:
    result: List[T] = []
    for i in range(len(items)):
        if predicate(items[i]):
            result.append(items[i])
    return result


def reduce_(items: Sequence[T], operation: Callable[[R, T], R], initial: R) -> R:
    accumulator = initial
    for i in range(len(items)):
        accumulator = operation(accumulator, items[i])
    return accumulator


def group_by(items: Sequence[T], key: Callable[[T], K]) -> Dict[K, List[T]]:
    groups: Dict[K, List[T]] = {}
    for i in range(len(items)):
        group_key = key(items[i])
        if group_key not in groups:
            groups[group_key] = []
        groups[group_key].append(items[i])
    return groups


def take(items: Sequence[T], count: int) -> List[T]:
    stop = min(check_count("count", count), len(items))
    result: List[Any] = [None] * stop
    for i in range(stop):
        result[i] = items[i]
    return result


def skip(items: Sequence[T], count: int) -> List[T]:
    start = min(check_count("count", count), len(items))
    result: List[Any] = [None] * (len(items) - start)
    for i in range(start, len(items)):
        result[i - start] = items[i]
    return result


def paginate(items: Sequence[T], page: int, page_size: int) -> List[T]:
    start, stop = check_page(page, page_size)
    start = min(start, len(items))
    stop = min(stop, len(items))
    result: List[Any] = [None] * (stop - start)
    for i in range(start, stop):
        result[i - start] = items[i]
    return result


def flatten(items: Sequence[Sequence[T]]) -> List[T]:
    result: List[T] = []
    for i in range(len(items)):
        inner = items[i]
        for j in range(len(inner)):
            result.append(inner[j])
    return result


def update(items: Sequence[T], operation: Callable[[T], T]) -> List[T]:
    result: List[Any] = [None] * len(items)
    for i in range(len(items)):
        result[i] = operation(items[i])
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
