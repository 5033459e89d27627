"""Per-variant results and the report shape handed to presentation code."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

import numpy as np


def summarize_output(value: Any, preview: int = 3) -> str:
    """Short, deterministic description of a variant's output."""

    if isinstance(value, Mapping):
        parts = []
        for key in sorted(value, key=repr)[:preview]:
            members = value[key]
            size = len(members) if hasattr(members, "__len__") else 1
            parts.append(f"{key!r}: {size}")
        more = ", ..." if len(value) > preview else ""
        return f"{type(value).__name__}[{len(value)}] {{{', '.join(parts)}{more}}}"
    if isinstance(value, (list, tuple)):
        head = ", ".join(repr(item) for item in value[:preview])
        more = ", ..." if len(value) > preview else ""
        return f"{type(value).__name__}[{len(value)}] [{head}{more}]"
    text = repr(value)
    return text if len(text) <= 80 else text[:77] + "..."


@dataclass(frozen=True)
class VariantResult:
    """Output and elapsed time of one variant execution.

    ``elapsed`` is the mean of ``timings`` in seconds. A failed entry carries
    the recorded ``error``; a timed-out entry also keeps its ``output``.
    """

    variant: str
    elapsed: float
    output: Any = None
    error: Optional[BaseException] = None
    idiom: str = ""
    timings: Tuple[float, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def output_summary(self) -> str:
        return summarize_output(self.output)

    @property
    def error_description(self) -> Optional[str]:
        if self.error is None:
            return None
        return f"{type(self.error).__name__}: {self.error}"

    def as_report_entry(self) -> Dict[str, Any]:
        entry: Dict[str, Any] = {
            "variantName": self.variant,
            "elapsedDuration": self.elapsed,
        }
        if self.ok:
            entry["outputSummary"] = self.output_summary
        else:
            entry["errorDescription"] = self.error_description
        return entry


@dataclass(frozen=True)
class ResultSet:
    """Results of one case, in variant registration order."""

    case_name: str
    results: Tuple[VariantResult, ...]
    cancelled: bool = False

    def __iter__(self) -> Iterator[VariantResult]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)

    def __getitem__(self, variant: str) -> VariantResult:
        for result in self.results:
            if result.variant == variant:
                return result
        raise KeyError(variant)

    @property
    def variant_names(self) -> Tuple[str, ...]:
        return tuple(result.variant for result in self.results)

    @property
    def succeeded(self) -> Tuple[VariantResult, ...]:
        return tuple(result for result in self.results if result.ok)

    @property
    def failed(self) -> Tuple[VariantResult, ...]:
        return tuple(result for result in self.results if not result.ok)

    def elapsed(self) -> np.ndarray:
        return np.asarray([result.elapsed for result in self.results], dtype=float)

    def fastest(self) -> Optional[VariantResult]:
        """Fastest successful variant, or ``None`` if every variant failed."""

        candidates = self.succeeded
        if not candidates:
            return None
        times = np.asarray([result.elapsed for result in candidates], dtype=float)
        return candidates[int(np.argmin(times))]

    def relative_elapsed(self) -> Dict[str, float]:
        """Elapsed time of each successful variant relative to the fastest one."""

        best = self.fastest()
        if best is None:
            return {}
        reference = best.elapsed if best.elapsed > 0 else np.finfo(float).tiny
        return {
            result.variant: float(result.elapsed / reference)
            for result in self.succeeded
        }

    def as_report(self) -> List[Dict[str, Any]]:
        return [result.as_report_entry() for result in self.results]


__all__ = ["VariantResult", "ResultSet", "summarize_output"]
