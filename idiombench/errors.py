"""Error taxonomy of the benchmark harness."""
from __future__ import annotations

from typing import Optional


class BenchmarkError(Exception):
    """Base class for every error raised by :mod:`idiombench`."""


# ---------------------------------------------------------------------------
# Registration errors, raised straight to the caller of the runner API
# ---------------------------------------------------------------------------
class DuplicateCaseError(BenchmarkError, ValueError):
    def __init__(self, case_name: str) -> None:
        super().__init__(f"Benchmark case '{case_name}' is already registered")
        self.case_name = case_name


class UnknownCaseError(BenchmarkError, ValueError):
    def __init__(self, case_name: str) -> None:
        super().__init__(f"Unknown benchmark case '{case_name}'")
        self.case_name = case_name


class UnknownVariantError(BenchmarkError, ValueError):
    def __init__(self, case_name: str, variant_name: str) -> None:
        super().__init__(
            f"Unknown variant '{variant_name}' for benchmark case '{case_name}'"
        )
        self.case_name = case_name
        self.variant_name = variant_name


# ---------------------------------------------------------------------------
# Per-variant errors, recorded on the failing variant's result
# ---------------------------------------------------------------------------
class RangeError(BenchmarkError, ValueError):
    """Negative offset, count or page size passed to a slicing idiom."""


class VariantExecutionError(BenchmarkError):
    """Wraps the exception raised inside a variant."""

    def __init__(self, variant: str, cause: BaseException) -> None:
        super().__init__(
            f"Variant '{variant}' failed: {type(cause).__name__}: {cause}"
        )
        self.variant = variant
        self.cause = cause


class VariantTimeoutError(BenchmarkError):
    """The variant finished but overran its soft time budget."""

    def __init__(self, variant: str, elapsed: float, budget: float) -> None:
        super().__init__(
            f"Variant '{variant}' took {elapsed:.6f}s, budget was {budget:.6f}s"
        )
        self.variant = variant
        self.elapsed = elapsed
        self.budget = budget


# ---------------------------------------------------------------------------
# Correctness errors, raised by ``BenchmarkRunner.verify`` only
# ---------------------------------------------------------------------------
class VariantMismatchError(BenchmarkError):
    def __init__(
        self,
        variant_a: str,
        variant_b: str,
        diff_description: str,
        case_name: Optional[str] = None,
    ) -> None:
        where = f" in case '{case_name}'" if case_name else ""
        super().__init__(
            f"Variants '{variant_a}' and '{variant_b}' disagree{where}: "
            f"{diff_description}"
        )
        self.variant_a = variant_a
        self.variant_b = variant_b
        self.diff_description = diff_description
        self.case_name = case_name


__all__ = [
    "BenchmarkError",
    "DuplicateCaseError",
    "UnknownCaseError",
    "UnknownVariantError",
    "RangeError",
    "VariantExecutionError",
    "VariantTimeoutError",
    "VariantMismatchError",
]
