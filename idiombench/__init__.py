"""Microbenchmarks comparing indexed loops, iterator loops and declarative operators."""

from .case import Case, Transformation, Variant
from .errors import (
    BenchmarkError,
    DuplicateCaseError,
    RangeError,
    UnknownCaseError,
    UnknownVariantError,
    VariantExecutionError,
    VariantMismatchError,
    VariantTimeoutError,
)
from .results import ResultSet, VariantResult
from .runner import BenchmarkRunner, RunnerConfig

__all__ = [
    "BenchmarkRunner",
    "RunnerConfig",
    "Case",
    "Variant",
    "Transformation",
    "ResultSet",
    "VariantResult",
    "BenchmarkError",
    "DuplicateCaseError",
    "UnknownCaseError",
    "UnknownVariantError",
    "RangeError",
    "VariantExecutionError",
    "VariantMismatchError",
    "VariantTimeoutError",
]
