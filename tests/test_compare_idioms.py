"""Tests for the plotting helpers and the compare task."""
from __future__ import annotations

from pathlib import Path

import numpy as np
from conftest import make_case, variant

from idiombench.plotting import BenchmarkPlotter, PlotConfig
from idiombench.runner import BenchmarkRunner, RunnerConfig
from idiombench.suite import SuiteConfig
from idiombench.tasks.compare_idioms import compare_idioms, main, summary_rows


def test_plot_case_and_suite(tmp_path: Path, runner: BenchmarkRunner) -> None:
    def broken(xs):
        raise RuntimeError("nope")

    runner.register(make_case())
    runner.register(make_case("mixed", variants=[variant("copy", list), variant("broken", broken)]))
    report = runner.compare_all()

    plotter = BenchmarkPlotter(PlotConfig(relative=True, file_format="png"))
    case_path = plotter.plot_case(report["mixed"], output_dir=tmp_path)
    suite_path = plotter.plot_suite(report, output_dir=tmp_path / "suite")

    assert case_path == tmp_path / "mixed.png"
    assert case_path.exists()
    assert suite_path.exists()


def test_summary_rows(runner: BenchmarkRunner) -> None:
    runner.register(make_case())
    rows = summary_rows(runner.compare_all())
    assert rows.shape == (3, 6)
    assert list(rows[:, 1]) == ["indexed", "iterator", "declarative"]
    assert set(rows[:, 5]) == {"ok"}


def test_summary_rows_empty() -> None:
    assert summary_rows({}).shape == (0, 6)


def test_compare_idioms_writes_summary(tmp_path: Path) -> None:
    report = compare_idioms(
        config=SuiteConfig(size=50),
        runner_config=RunnerConfig(),
        cases=["select_math", "paginate"],
        output_root=tmp_path,
        plot=False,
        verify=True,
    )
    assert list(report) == ["select_math", "paginate"]

    lines = (tmp_path / "summary.csv").read_text().splitlines()
    assert lines[0] == "case,variant,idiom,elapsed_s,relative,status"
    assert len(lines) == 1 + 6
    assert not list(tmp_path.glob("*.pdf"))


def test_main_plots(tmp_path: Path) -> None:
    main(["--size", "20", "--cases", "cheap_where", "--output-root", str(tmp_path)])
    assert (tmp_path / "cheap_where.pdf").exists()
    assert (tmp_path / "suite.pdf").exists()
    rows = np.loadtxt(tmp_path / "summary.csv", dtype=str, delimiter=",", skiprows=1)
    assert rows.shape == (3, 6)
