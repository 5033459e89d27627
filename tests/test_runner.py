"""Tests for the case registry and runner."""
from __future__ import annotations

import threading

import pytest
from conftest import StepClock, make_case, variant

from idiombench.case import Case, Transformation
from idiombench.equality import multiset_grouping_equality
from idiombench.errors import (
    DuplicateCaseError,
    RangeError,
    UnknownCaseError,
    UnknownVariantError,
    VariantExecutionError,
    VariantMismatchError,
    VariantTimeoutError,
)
from idiombench.fixtures import PeopleFixture, Person
from idiombench.idioms import make_variants
from idiombench.runner import BenchmarkRunner, RunnerConfig


# ── Registry ──────────────────────────────────────────────────────────────


def test_register_rejects_duplicate_names(runner: BenchmarkRunner) -> None:
    runner.register(make_case("double"))
    with pytest.raises(DuplicateCaseError):
        runner.register(make_case("double"))
    assert runner.cases == ("double",)


def test_run_unknown_case(runner: BenchmarkRunner) -> None:
    with pytest.raises(UnknownCaseError):
        runner.run("missing")


def test_run_unknown_variant_fails_before_running(runner: BenchmarkRunner) -> None:
    calls = []
    runner.register(
        make_case(variants=[variant("ok", lambda xs: calls.append(xs) or list(xs))])
    )
    with pytest.raises(UnknownVariantError) as excinfo:
        runner.run("double", selection=["ok", "nope"])
    assert excinfo.value.variant_name == "nope"
    assert calls == []


def test_case_rejects_duplicate_variant_names() -> None:
    with pytest.raises(ValueError):
        make_case(variants=[variant("a", list), variant("a", list)])


# ── Running ───────────────────────────────────────────────────────────────


def test_map_case_outputs(runner: BenchmarkRunner) -> None:
    runner.register(make_case())
    result_set = runner.run("double")
    assert result_set.variant_names == ("indexed", "iterator", "declarative")
    assert [r.output for r in result_set] == [[2, 4, 6]] * 3
    assert all(r.ok for r in result_set)


def test_filter_case_outputs(runner: BenchmarkRunner) -> None:
    runner.register(
        make_case(
            "even",
            fixture=[1, 2, 3, 4, 5],
            variants=make_variants("filter_", lambda x: x % 2 == 0),
            transformation=Transformation.FILTER,
        )
    )
    assert [r.output for r in runner.run("even")] == [[2, 4]] * 3


def test_results_follow_registration_order_not_selection_or_speed(
    runner: BenchmarkRunner,
) -> None:
    slow = variant("slow", lambda xs: sum(range(100_000)) and list(xs))
    fast = variant("fast", list)
    runner.register(make_case(variants=[slow, fast]))

    assert runner.run("double").variant_names == ("slow", "fast")
    assert runner.run("double", selection=["fast", "slow"]).variant_names == (
        "slow",
        "fast",
    )
    assert runner.run("double", selection=["fast"]).variant_names == ("fast",)


def test_elapsed_uses_configured_clock() -> None:
    runner = BenchmarkRunner(RunnerConfig(clock=StepClock(0.5), repeats=3))
    runner.register(make_case(variants=[variant("copy", list)]))
    result = runner.run("double")["copy"]
    assert result.timings == (0.5, 0.5, 0.5)
    assert result.elapsed == pytest.approx(0.5)


def test_failing_variant_does_not_abort_siblings(runner: BenchmarkRunner) -> None:
    def broken(xs):
        raise KeyError("boom")

    runner.register(
        make_case(variants=[variant("broken", broken), variant("copy", list)])
    )
    result_set = runner.run("double")

    failed = result_set["broken"]
    assert not failed.ok
    assert isinstance(failed.error, VariantExecutionError)
    assert isinstance(failed.error.cause, KeyError)
    assert failed.error.__cause__ is failed.error.cause
    assert result_set["copy"].output == [1, 2, 3]
    assert [r.variant for r in result_set.failed] == ["broken"]


def test_group_by_key_failure_is_wrapped(runner: BenchmarkRunner) -> None:
    def key(x: int) -> int:
        if x == 13:
            raise ValueError("no key")
        return x % 2

    runner.register(
        make_case(
            "groups",
            fixture=[10, 11, 12, 13],
            variants=make_variants("group_by", key),
            transformation=Transformation.GROUP_BY,
            equality=multiset_grouping_equality(),
        )
    )
    for result in runner.run("groups"):
        assert isinstance(result.error, VariantExecutionError)
        assert isinstance(result.error.cause, ValueError)


def test_range_error_is_recorded_as_is(runner: BenchmarkRunner) -> None:
    runner.register(
        make_case(
            "take",
            variants=make_variants("take", -1),
            transformation=Transformation.SLICE,
        )
    )
    for result in runner.run("take"):
        assert isinstance(result.error, RangeError)
        assert result.as_report_entry()["errorDescription"].startswith("RangeError")


def test_skip_equal_to_length_is_empty(runner: BenchmarkRunner) -> None:
    runner.register(
        make_case(
            "skip",
            fixture=[1, 2, 3],
            variants=make_variants("skip", 3),
            transformation=Transformation.SLICE,
        )
    )
    assert [r.output for r in runner.verify("skip")] == [[], [], []]


def test_empty_fixture_runs_every_variant(runner: BenchmarkRunner) -> None:
    runner.register(make_case("map", fixture=[]))
    runner.register(
        make_case(
            "sum",
            fixture=[],
            variants=make_variants("reduce_", lambda a, b: a + b, 0),
            transformation=Transformation.REDUCE,
        )
    )
    runner.register(
        make_case(
            "page",
            fixture=[],
            variants=make_variants("paginate", 2, 5),
            transformation=Transformation.SLICE,
        )
    )
    report = runner.compare_all()
    assert [r.output for r in report["map"]] == [[], [], []]
    assert [r.output for r in report["sum"]] == [0, 0, 0]
    assert [r.output for r in report["page"]] == [[], [], []]


def test_soft_timeout_keeps_output() -> None:
    runner = BenchmarkRunner(RunnerConfig(clock=StepClock(2.0), timeout=1.0))
    runner.register(make_case(variants=[variant("copy", list)]))
    result = runner.run("double")["copy"]
    assert isinstance(result.error, VariantTimeoutError)
    assert result.error.budget == 1.0
    assert result.output == [1, 2, 3]


def test_timeout_not_reported_within_budget() -> None:
    runner = BenchmarkRunner(RunnerConfig(clock=StepClock(0.5), timeout=1.0))
    runner.register(make_case(variants=[variant("copy", list)]))
    assert runner.run("double")["copy"].ok


def test_runner_config_validation() -> None:
    with pytest.raises(ValueError):
        RunnerConfig(repeats=0)
    with pytest.raises(ValueError):
        RunnerConfig(timeout=0)


def test_mutating_case_gets_fresh_copies(runner: BenchmarkRunner) -> None:
    def rename(person: Person) -> Person:
        person.name = f"Updated{person.id}"
        return person

    fixture = PeopleFixture(3, name_prefix="OldName").build()
    case = runner.register(
        Case(
            "update",
            Transformation.UPDATE,
            fixture,
            make_variants("update", rename),
            mutates_input=True,
        )
    )
    result_set = runner.verify("update")

    assert [p.name for p in case.fixture] == ["OldName1", "OldName2", "OldName3"]
    assert [p.name for p in result_set["declarative"].output] == [
        "Updated1",
        "Updated2",
        "Updated3",
    ]


def test_run_is_idempotent(runner: BenchmarkRunner) -> None:
    runner.register(make_case())
    first = runner.run("double")
    second = runner.run("double")
    assert [r.output_summary for r in first] == [r.output_summary for r in second]


# ── Cancellation ──────────────────────────────────────────────────────────


def test_cancellation_is_checked_between_variants() -> None:
    event = threading.Event()

    def cancel_then_copy(xs):
        event.set()
        return list(xs)

    runner = BenchmarkRunner(RunnerConfig(cancel_event=event))
    runner.register(
        make_case(
            variants=[variant("first", cancel_then_copy), variant("second", list)]
        )
    )
    runner.register(make_case("other"))

    report = runner.compare_all()

    assert list(report) == ["double"]
    result_set = report["double"]
    assert result_set.cancelled
    assert result_set.variant_names == ("first",)
    assert result_set["first"].output == [1, 2, 3]


def test_compare_all_runs_cases_in_registration_order(runner: BenchmarkRunner) -> None:
    for name in ("c", "a", "b"):
        runner.register(make_case(name))
    report = runner.compare_all()
    assert list(report) == ["c", "a", "b"]
    assert not any(rs.cancelled for rs in report.values())


# ── Verification ──────────────────────────────────────────────────────────


def test_verify_group_by_ignores_ordering(runner: BenchmarkRunner) -> None:
    runner.register(
        make_case(
            "groups",
            fixture=[13, 10, 11, 12],
            variants=make_variants("group_by", lambda x: x % 2),
            transformation=Transformation.GROUP_BY,
            equality=multiset_grouping_equality(),
        )
    )
    result_set = runner.verify("groups")
    for result in result_set:
        assert {k: set(v) for k, v in result.output.items()} == {
            0: {10, 12},
            1: {11, 13},
        }


def test_verify_detects_off_by_one(runner: BenchmarkRunner) -> None:
    def correct(xs):
        return [x + x for x in xs]

    def off_by_one(xs):
        # Doubles the index instead of the element.
        return [i + i for i in range(len(xs))]

    runner.register(
        make_case(variants=[variant("for_each", correct), variant("for_loop", off_by_one)])
    )
    with pytest.raises(VariantMismatchError) as excinfo:
        runner.verify("double")

    error = excinfo.value
    assert (error.variant_a, error.variant_b) == ("for_each", "for_loop")
    assert error.diff_description == "first difference at index 0: 2 != 0"
    assert "for_each" in str(error) and "for_loop" in str(error)


def test_verify_surfaces_execution_errors(runner: BenchmarkRunner) -> None:
    def broken(xs):
        raise RuntimeError("nope")

    runner.register(make_case(variants=[variant("copy", list), variant("broken", broken)]))
    with pytest.raises(VariantExecutionError):
        runner.verify("double")


# ── Report shape ──────────────────────────────────────────────────────────


def test_report_shape(runner: BenchmarkRunner) -> None:
    def broken(xs):
        raise RuntimeError("nope")

    runner.register(make_case(variants=[variant("copy", list), variant("broken", broken)]))
    report = runner.run("double").as_report()

    assert report[0] == {
        "variantName": "copy",
        "elapsedDuration": 1.0,
        "outputSummary": "list[3] [1, 2, 3]",
    }
    assert report[1]["variantName"] == "broken"
    assert "outputSummary" not in report[1]
    assert report[1]["errorDescription"].startswith("VariantExecutionError")


def test_fastest_and_relative_elapsed() -> None:
    clock_values = iter([0.0, 4.0, 10.0, 12.0])
    runner = BenchmarkRunner(RunnerConfig(clock=lambda: next(clock_values)))
    runner.register(make_case(variants=[variant("slow", list), variant("fast", list)]))
    result_set = runner.run("double")

    assert result_set.fastest().variant == "fast"
    assert result_set.relative_elapsed() == {"slow": 2.0, "fast": 1.0}


def test_verify_group_by_with_none_key(runner: BenchmarkRunner) -> None:
    runner.register(
        make_case(
            "groups",
            fixture=[10, 11, 12],
            variants=make_variants("group_by", lambda x: None if x == 11 else x % 2),
            transformation=Transformation.GROUP_BY,
            equality=multiset_grouping_equality(),
        )
    )
    result_set = runner.verify("groups")
    assert all(result.ok for result in result_set)
    assert result_set["declarative"].output == {0: [10, 12], None: [11]}


def test_zero_size_page_runs_every_variant(runner: BenchmarkRunner) -> None:
    runner.register(
        make_case(
            "page",
            fixture=[1, 2, 3],
            variants=make_variants("paginate", 0, 0),
            transformation=Transformation.SLICE,
        )
    )
    assert [r.output for r in runner.verify("page")] == [[], [], []]
