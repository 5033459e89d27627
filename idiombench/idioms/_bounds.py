"""Argument checks shared by the slicing idioms."""
from __future__ import annotations

from ..errors import RangeError


def check_count(name: str, value: int) -> int:
    if value < 0:
        raise RangeError(f"{name} must be non-negative, got {value}")
    return int(value)


def check_page(page: int, page_size: int) -> tuple[int, int]:
    """Return the ``(start, stop)`` offsets of a zero-based page."""

    check_count("page", page)
    check_count("page_size", page_size)
    start = page * page_size
    return start, start + page_size
