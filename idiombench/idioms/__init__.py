"""The three iteration idioms compared by the benchmark.

Each module exposes the same functions (``map_``, ``filter_``, ``reduce_``,
``group_by``, ``take``, ``skip``, ``paginate``, ``flatten``, ``update``) with
identical signatures, so any one of them can back a :class:`Variant`.
"""
from __future__ import annotations

from types import ModuleType
from typing import Any, Callable, Dict, Iterable, Sequence, Tuple

from ..case import Variant
from . import declarative, indexed, iterator

IDIOMS: Dict[str, ModuleType] = {
    "indexed": indexed,
    "iterator": iterator,
    "declarative": declarative,
}

OPERATIONS: Tuple[str, ...] = (
    "map_",
    "filter_",
    "reduce_",
    "group_by",
    "take",
    "skip",
    "paginate",
    "flatten",
    "update",
)


def idiom_function(idiom: str, operation: str) -> Callable[..., Any]:
    """Return ``operation`` as implemented by ``idiom``."""

    idiom_name = idiom.lower()
    if idiom_name not in IDIOMS:
        raise ValueError(f"Unsupported idiom: {idiom}")
    if operation not in OPERATIONS:
        raise ValueError(f"Unsupported operation: {operation}")
    return getattr(IDIOMS[idiom_name], operation)


def make_variants(
    operation: str,
    *args: Any,
    idioms: Iterable[str] = tuple(IDIOMS),
) -> Tuple[Variant, ...]:
    """Build one :class:`Variant` per idiom, bound to ``operation(fixture, *args)``.

    The variant is named after its idiom, e.g. ``make_variants("map_", double)``
    yields ``indexed``, ``iterator`` and ``declarative``.
    """

    variants = []
    for idiom in idioms:
        func = idiom_function(idiom, operation)

        def _run(fixture: Sequence[Any], _func: Callable[..., Any] = func) -> Any:
            return _func(fixture, *args)

        variants.append(Variant(name=idiom, func=_run, idiom=idiom))
    return tuple(variants)


__all__ = ["IDIOMS", "OPERATIONS", "idiom_function", "make_variants"]
