"""Benchmark case registry and runner."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Protocol, Tuple

import numpy as np
from tqdm import tqdm

from .case import Case, Variant
from .errors import (
    DuplicateCaseError,
    RangeError,
    UnknownCaseError,
    UnknownVariantError,
    VariantExecutionError,
    VariantMismatchError,
    VariantTimeoutError,
)
from .results import ResultSet, VariantResult

logger = logging.getLogger("idiombench.runner")


class CancelSignal(Protocol):
    """Anything with ``is_set()``, e.g. :class:`threading.Event`."""

    def is_set(self) -> bool:
        ...


@dataclass
class RunnerConfig:
    repeats: int = 1
    timeout: Optional[float] = None
    progress: bool = False
    cancel_event: Optional[CancelSignal] = None
    clock: Callable[[], float] = field(default=time.perf_counter, repr=False)

    def __post_init__(self) -> None:
        if self.repeats < 1:
            raise ValueError(f"repeats must be at least 1, got {self.repeats}")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")


class BenchmarkRunner:
    """Registers cases and times their variants one after another.

    Variants never run concurrently. Cancellation is honoured only between
    variant executions, so a measurement is never cut short. A failing
    variant is recorded in its own :class:`VariantResult` and the remaining
    variants still run.
    """

    def __init__(self, config: RunnerConfig | None = None) -> None:
        self.config = config or RunnerConfig()
        self._cases: Dict[str, Case] = {}

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------
    def register(self, case: Case) -> Case:
        if case.name in self._cases:
            raise DuplicateCaseError(case.name)
        self._cases[case.name] = case
        logger.debug(
            "Registered case %s (%s, %d variant(s), %d element(s))",
            case.name,
            case.transformation.value,
            len(case.variants),
            len(case.fixture),
        )
        return case

    def get(self, case_name: str) -> Case:
        try:
            return self._cases[case_name]
        except KeyError as exc:
            raise UnknownCaseError(case_name) from exc

    @property
    def cases(self) -> Tuple[str, ...]:
        return tuple(self._cases)

    def __contains__(self, case_name: object) -> bool:
        return case_name in self._cases

    def __len__(self) -> int:
        return len(self._cases)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------
    def run(self, case_name: str, selection: Iterable[str] | None = None) -> ResultSet:
        """Execute the (selected) variants of ``case_name``.

        Results follow the variants' registration order, whatever the order
        of ``selection`` or the variants' speed.
        """

        case = self.get(case_name)
        variants = self._select(case, selection)
        logger.info("Running case %s with %d variant(s)", case.name, len(variants))

        results: List[VariantResult] = []
        cancelled = False
        for variant in tqdm(
            variants, desc=case.name, disable=not self.config.progress, leave=False
        ):
            if self._cancel_requested():
                logger.info(
                    "Case %s cancelled after %d of %d variant(s)",
                    case.name,
                    len(results),
                    len(variants),
                )
                cancelled = True
                break
            results.append(self._execute(case, variant))

        return ResultSet(case_name=case.name, results=tuple(results), cancelled=cancelled)

    def compare_all(self) -> Dict[str, ResultSet]:
        """Run every case in registration order."""

        report: Dict[str, ResultSet] = {}
        for case_name in self._cases:
            if self._cancel_requested():
                logger.info("Comparison cancelled before case %s", case_name)
                break
            result_set = self.run(case_name)
            report[case_name] = result_set
            if result_set.cancelled:
                break
        return report

    def verify(self, case_name: str) -> ResultSet:
        """Run all variants and check that their outputs agree.

        Every output is compared with the first variant's output under the
        case's equality predicate. Raises :class:`VariantMismatchError` on
        the first disagreement, or the recorded error of a variant that
        could not produce an output. Timed-out variants still have their
        output compared.
        """

        case = self.get(case_name)
        result_set = self.run(case_name)

        for result in result_set:
            if result.error is not None and not isinstance(
                result.error, VariantTimeoutError
            ):
                raise result.error

        if len(result_set) < 2:
            return result_set

        reference = result_set.results[0]
        for other in result_set.results[1:]:
            diff = case.equality.describe(reference.output, other.output)
            if diff is not None:
                logger.warning(
                    "Case %s: %s and %s disagree: %s",
                    case.name,
                    reference.variant,
                    other.variant,
                    diff,
                )
                raise VariantMismatchError(
                    reference.variant, other.variant, diff, case_name=case.name
                )
        logger.info(
            "Case %s verified: %d variant(s) agree under %s equality",
            case.name,
            len(result_set),
            case.equality.name,
        )
        return result_set

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _select(self, case: Case, selection: Iterable[str] | None) -> Tuple[Variant, ...]:
        if selection is None:
            return case.variants
        wanted = set()
        for name in selection:
            if name not in case.variant_names:
                raise UnknownVariantError(case.name, name)
            wanted.add(name)
        return tuple(variant for variant in case.variants if variant.name in wanted)

    def _cancel_requested(self) -> bool:
        event = self.config.cancel_event
        return event is not None and event.is_set()

    def _execute(self, case: Case, variant: Variant) -> VariantResult:
        clock = self.config.clock
        timings: List[float] = []
        output = None

        for _ in range(self.config.repeats):
            fixture = case.fixture_for_run()
            start = clock()
            try:
                output = variant(fixture)
            except RangeError as exc:
                timings.append(clock() - start)
                logger.warning("Variant %s/%s rejected its bounds: %s", case.name, variant.name, exc)
                return self._failed(variant, timings, exc)
            except Exception as exc:
                timings.append(clock() - start)
                error = VariantExecutionError(variant.name, exc)
                error.__cause__ = exc
                logger.warning("Variant %s/%s failed: %s", case.name, variant.name, exc)
                return self._failed(variant, timings, error)
            timings.append(clock() - start)

        elapsed = float(np.mean(timings))
        logger.debug(
            "Variant %s/%s took %.6fs over %d repeat(s)",
            case.name,
            variant.name,
            elapsed,
            len(timings),
        )

        budget = self.config.timeout
        slowest = float(np.max(timings))
        if budget is not None and slowest > budget:
            logger.warning(
                "Variant %s/%s exceeded its %.6fs budget (%.6fs)",
                case.name,
                variant.name,
                budget,
                slowest,
            )
            return VariantResult(
                variant=variant.name,
                elapsed=elapsed,
                output=output,
                error=VariantTimeoutError(variant.name, slowest, budget),
                idiom=variant.idiom,
                timings=tuple(timings),
            )

        return VariantResult(
            variant=variant.name,
            elapsed=elapsed,
            output=output,
            idiom=variant.idiom,
            timings=tuple(timings),
        )

    @staticmethod
    def _failed(variant: Variant, timings: List[float], error: BaseException) -> VariantResult:
        return VariantResult(
            variant=variant.name,
            elapsed=float(np.mean(timings)),
            error=error,
            idiom=variant.idiom,
            timings=tuple(timings),
        )


__all__ = ["BenchmarkRunner", "RunnerConfig", "CancelSignal"]
