"""
Leading-digit report orchestration.

Runs the digit-law test over every configured (column, year) scope of a
panel, reusing one simulated reference distribution per sample size, then
writes a results CSV, charts and a Markdown narrative into a run directory.
"""
from __future__ import annotations

import re
from collections import OrderedDict
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import numpy as np
import pandas as pd

from benfordlab.config import ReportConfig, load_report_config
from benfordlab.core.goodness_of_fit import DigitTestResult, run_digit_test, simulate_distribution
from benfordlab.core.logging import logger, setup_json_logfile, setup_logfile
from benfordlab.core.utils import make_output_dir, make_rng
from benfordlab.data.panel import PanelDataset, load_panel, select_column
from benfordlab.reporting.narrative import render_report
from benfordlab.reporting.plots import DigitReportPlotter

Scope = Tuple[str, str, Optional[int]]


def _slug(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "_", text.lower()).strip("_")


class BenfordReport:
    """Main class for running the leading-digit report."""

    def __init__(
        self,
        config_or_path: Union[ReportConfig, dict, str, Path],
        panel: Optional[PanelDataset] = None,
        output_dir: Optional[Path] = None,
    ):
        self.logger = logger
        if isinstance(config_or_path, ReportConfig):
            self.config = config_or_path
        elif isinstance(config_or_path, dict):
            self.config = ReportConfig.model_validate(config_or_path)
        else:
            self.config, _ = load_report_config(config_or_path)

        self.panel = panel
        self.rng = make_rng(self.config.seed)
        self._explicit_output = Path(output_dir) if output_dir else None
        self.output_dir: Optional[Path] = None
        self._simulations: Dict[Tuple[int, int], np.ndarray] = {}

    # ------------------------------------------------------------------ setup

    def _setup_output_directory(self) -> Path:
        if self._explicit_output is not None:
            self._explicit_output.mkdir(parents=True, exist_ok=True)
            out = self._explicit_output
        else:
            out = make_output_dir(self.config.report_name, base_output_dir=self.config.output_dir)
        self.logger.info(f"Output directory: {out}")
        return out

    def _ensure_panel(self) -> PanelDataset:
        if self.panel is None:
            self.panel = load_panel(self.config.data_path)
        return self.panel

    # --------------------------------------------------------------- analysis

    def scopes(self) -> List[Scope]:
        """(label, column, year) for every analysis; year None means the pooled panel."""
        out: List[Scope] = []
        for column in self.config.columns:
            name = self.config.label_for(column)
            if self.config.include_all_years:
                out.append((f"{name}, all years", column, None))
            for year in self.config.years:
                out.append((f"{name}, {year}", column, year))
        return out

    def reference_distribution(self, n: int) -> np.ndarray:
        """Simulated statistics for sample size ``n``, computed once per (n, trials)."""
        key = (n, self.config.trials)
        if key not in self._simulations:
            self.logger.info(f"Simulating {self.config.trials} datasets of size n={n}")
            self._simulations[key] = simulate_distribution(
                n, self.config.trials, rng=self.rng, processes=self.config.processes
            )
        return self._simulations[key]

    def analyze_scope(self, label: str, column: str, year: Optional[int]) -> DigitTestResult:
        panel = self._ensure_panel()
        values = select_column(panel, column, year=year, drop_nonpositive=self.config.drop_nonpositive)
        simulated = self.reference_distribution(len(values)) if len(values) else None
        return run_digit_test(
            values,
            trials=self.config.trials,
            rng=self.rng,
            alpha=self.config.alpha,
            simulated=simulated,
            label=label,
            column=column,
            year=year,
        )

    def run_analyses(self) -> List[DigitTestResult]:
        results = []
        for label, column, year in self.scopes():
            result = self.analyze_scope(label, column, year)
            self.logger.info(
                f"{label}: n={result.n}, chi2={result.statistic:.2f}, "
                f"p_mc={result.mc_p_value:.4f}, p_chi2={result.closed_form_p_value:.4f} "
                f"-> {result.verdict.value}"
            )
            results.append(result)
        return results

    @staticmethod
    def results_frame(results: List[DigitTestResult]) -> pd.DataFrame:
        return pd.DataFrame([r.to_row() for r in results])

    # ---------------------------------------------------------------- outputs

    def save_results(self, results_df: pd.DataFrame) -> Path:
        csv_path = self.output_dir / f"{self.config.report_name}_results.csv"
        results_df.to_csv(csv_path, index=False)
        self.logger.info(f"Results saved to: {csv_path}")
        return csv_path

    def generate_plots(self, results: List[DigitTestResult]) -> Dict[str, List[Path]]:
        plotter = DigitReportPlotter(self.config.plotting)
        figures: Dict[str, List[Path]] = {r.label: [] for r in results}

        by_year: "OrderedDict[Optional[int], List[DigitTestResult]]" = OrderedDict()
        for r in results:
            by_year.setdefault(r.year, []).append(r)

        for year, group in by_year.items():
            tag = "all_years" if year is None else str(year)
            path = plotter.digit_comparison(
                group,
                [r.label for r in group],
                self.output_dir / f"digits_{tag}.png",
            )
            for r in group:
                figures[r.label].append(path)

        for r in results:
            path = plotter.simulated_histogram(
                r,
                f"Simulated chi-square: {r.label}",
                self.output_dir / f"simulated_{_slug(r.label)}.png",
            )
            figures[r.label].append(path)

        self.logger.info(f"Plots saved to: {self.output_dir}")
        return figures

    def write_narrative(self, results: List[DigitTestResult], figures: Dict[str, List[Path]]) -> Path:
        md_path = self.output_dir / f"{self.config.report_name}.md"
        text = render_report(results, self._ensure_panel().source, figures, self.output_dir)
        md_path.write_text(text, encoding="utf-8")
        self.logger.info(f"Narrative saved to: {md_path}")
        return md_path

    def run_full_analysis(self) -> Tuple[List[DigitTestResult], Dict[str, Path]]:
        self.output_dir = self._setup_output_directory()
        sink_ids = [setup_logfile(self.output_dir / f"{self.config.report_name}.log",
                                  level=self.config.log_level)]
        if self.config.json_log:
            sink_ids.append(setup_json_logfile(self.output_dir / f"{self.config.report_name}.jsonl",
                                               level=self.config.log_level))
        try:
            self.logger.info("Starting leading-digit report")
            results = self.run_analyses()
            artifacts: Dict[str, Path] = {}

            if not self.config.skip_save:
                artifacts["csv"] = self.save_results(self.results_frame(results))

            figures: Dict[str, List[Path]] = {}
            if not self.config.skip_plots:
                figures = self.generate_plots(results)

            artifacts["markdown"] = self.write_narrative(results, figures)
            self.logger.info("Report complete")
            return results, artifacts
        finally:
            for sink_id in sink_ids:
                self.logger.remove(sink_id)
