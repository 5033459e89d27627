"""Run the showcase suite and collect per-variant timings."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Dict, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np

from idiombench.plotting import BenchmarkPlotter, PlotConfig
from idiombench.results import ResultSet
from idiombench.runner import RunnerConfig
from idiombench.suite import CASE_DEFINITIONS, SuiteConfig, build_default_runner

logger = logging.getLogger("idiombench.tasks.compare_idioms")

SUMMARY_HEADER = "case,variant,idiom,elapsed_s,relative,status"


def summary_rows(report: Dict[str, ResultSet]) -> np.ndarray:
    """Flatten ``report`` into a string array with one row per variant."""

    rows = []
    for case_name, result_set in report.items():
        relative = result_set.relative_elapsed()
        for result in result_set:
            status = "ok" if result.ok else type(result.error).__name__
            rows.append(
                [
                    case_name,
                    result.variant,
                    result.idiom,
                    f"{result.elapsed:.9f}",
                    f"{relative[result.variant]:.3f}" if result.variant in relative else "",
                    status,
                ]
            )
    return np.asarray(rows, dtype=str).reshape(-1, 6)


def compare_idioms(
    *,
    config: SuiteConfig | None = None,
    runner_config: RunnerConfig | None = None,
    cases: Optional[Sequence[str]] = None,
    output_root: Path | None = None,
    plot: bool = True,
    verify: bool = False,
) -> Dict[str, ResultSet]:
    """Run the selected cases, write ``summary.csv`` and optionally plot."""

    output_root = (
        output_root
        if output_root is not None
        else Path(__file__).resolve().parent / "results" / "compare_idioms"
    )
    output_root.mkdir(parents=True, exist_ok=True)

    runner = build_default_runner(config, names=cases, runner_config=runner_config)

    if verify:
        for case_name in runner.cases:
            runner.verify(case_name)

    report = runner.compare_all()

    np.savetxt(
        output_root / "summary.csv",
        summary_rows(report),
        fmt="%s",
        delimiter=",",
        header=SUMMARY_HEADER,
        comments="",
    )
    logger.info("Wrote summary for %d case(s) to %s", len(report), output_root / "summary.csv")

    if plot and report:
        plotter = BenchmarkPlotter(PlotConfig(relative=True))
        for result_set in report.values():
            plotter.plot_case(result_set, output_dir=output_root)
        plotter.plot_suite(report, output_dir=output_root)
        plt.close("all")

    for case_name, result_set in report.items():
        for entry in result_set.as_report():
            detail = entry.get("outputSummary") or entry.get("errorDescription")
            print(
                f"  {case_name:<16} {entry['variantName']:<12} "
                f"{entry['elapsedDuration'] * 1000:10.3f}ms  {detail}"
            )

    return report


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Compare indexed loops, iterator loops and declarative operators "
            "on the showcase workloads."
        )
    )
    parser.add_argument("--size", type=int, default=SuiteConfig.size, help="Fixture size.")
    parser.add_argument("--seed", type=int, default=SuiteConfig.seed, help="Fixture seed.")
    parser.add_argument(
        "--cases",
        nargs="+",
        choices=sorted(CASE_DEFINITIONS),
        metavar="CASE",
        help="Cases to run. Defaults to the whole catalog.",
    )
    parser.add_argument("--repeats", type=int, default=1, help="Executions per variant.")
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Soft per-variant budget in seconds.",
    )
    parser.add_argument(
        "--output-root",
        type=Path,
        default=None,
        help="Directory where results should be written.",
    )
    parser.add_argument("--no-plot", action="store_true", help="Skip the PDF figures.")
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Check that all variants agree before timing them.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        level=logging.DEBUG if args.verbose else logging.INFO,
    )
    compare_idioms(
        config=SuiteConfig(size=args.size, seed=args.seed),
        runner_config=RunnerConfig(
            repeats=args.repeats, timeout=args.timeout, progress=True
        ),
        cases=args.cases,
        output_root=args.output_root,
        plot=not args.no_plot,
        verify=args.verify,
    )


if __name__ == "__main__":
    main()
