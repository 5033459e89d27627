"""Plotting helpers for benchmark result sets."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping

import matplotlib.pyplot as plt
import numpy as np

from .results import ResultSet


@dataclass
class PlotConfig:
    log_scale: bool = False
    relative: bool = False
    file_format: str = "pdf"


class BenchmarkPlotter:
    """Bar charts of elapsed time per variant."""

    def __init__(self, config: PlotConfig | None = None) -> None:
        self.config = config or PlotConfig()

    def plot_case(self, result_set: ResultSet, output_dir: str | Path = "results") -> Path:
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        names = list(result_set.variant_names)
        values = self._values(result_set, names)
        failed = [not result.ok for result in result_set]

        fig = plt.figure(figsize=(6, 4))
        bars = plt.bar(np.arange(len(names)), values, color="tab:blue")
        for bar, is_failed in zip(bars, failed):
            if is_failed:
                bar.set_color("tab:red")
                bar.set_hatch("//")
        plt.xticks(np.arange(len(names)), names, rotation=20)
        plt.ylabel(self._ylabel())
        if self.config.log_scale:
            plt.yscale("log")
        plt.title(result_set.case_name)
        plt.grid(True, axis="y", ls=":")
        plt.tight_layout()

        path = output_dir / f"{result_set.case_name}.{self.config.file_format}"
        plt.savefig(path, format=self.config.file_format, bbox_inches="tight")
        plt.close(fig)
        return path

    def plot_suite(
        self, report: Mapping[str, ResultSet], output_dir: str | Path = "results"
    ) -> Path:
        """Grouped bars: one group per case, one bar per variant name."""

        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        case_names = list(report)
        variant_names: List[str] = []
        for result_set in report.values():
            for name in result_set.variant_names:
                if name not in variant_names:
                    variant_names.append(name)

        width = 0.8 / max(len(variant_names), 1)
        x = np.arange(len(case_names))

        fig = plt.figure(figsize=(max(6, 1.2 * len(case_names)), 4))
        for i_variant, variant in enumerate(variant_names):
            heights = np.full(len(case_names), np.nan)
            for i_case, case_name in enumerate(case_names):
                result_set = report[case_name]
                if variant in result_set.variant_names:
                    values = self._values(result_set, [variant])
                    heights[i_case] = values[0]
            plt.bar(x + i_variant * width, heights, width=width, label=variant)

        plt.xticks(x + width * (len(variant_names) - 1) / 2, case_names, rotation=30, ha="right")
        plt.ylabel(self._ylabel())
        if self.config.log_scale:
            plt.yscale("log")
        plt.grid(True, axis="y", ls=":")
        if variant_names:
            plt.legend()
        plt.tight_layout()

        path = output_dir / f"suite.{self.config.file_format}"
        plt.savefig(path, format=self.config.file_format, bbox_inches="tight")
        plt.close(fig)
        return path

    def _values(self, result_set: ResultSet, names: List[str]) -> np.ndarray:
        if self.config.relative:
            relative = result_set.relative_elapsed()
            return np.asarray([relative.get(name, np.nan) for name in names], dtype=float)
        return np.asarray([result_set[name].elapsed for name in names], dtype=float)

    def _ylabel(self) -> str:
        return "time relative to fastest" if self.config.relative else "elapsed [s]"


__all__ = ["BenchmarkPlotter", "PlotConfig"]
