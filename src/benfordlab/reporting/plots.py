"""
Charts for the leading-digit report.

All figures are written to disk and closed; nothing is shown interactively.
"""
from __future__ import annotations

from pathlib import Path
from typing import Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
from scipy import stats

from benfordlab.config import PlottingConfig
from benfordlab.core.digits import DIGITS
from benfordlab.core.goodness_of_fit import DigitTestResult
from benfordlab.core.law import DEGREES_OF_FREEDOM, probability_vector


class DigitReportPlotter:
    """Renders digit bar charts and Monte Carlo histograms."""

    def __init__(self, plotting: PlottingConfig):
        self.cfg = plotting

    def _style(self):
        try:
            plt.style.use(self.cfg.style)
        except OSError:
            plt.style.use("default")

    def _digit_axis(self, ax, result: DigitTestResult, title: str):
        digits = np.array(DIGITS)
        observed = np.array([result.proportions[d] for d in DIGITS])

        ax.bar(digits, observed, color="tab:blue", alpha=0.8, label="Observed", zorder=2)
        ax.plot(digits, probability_vector(), "ro-", lw=2, label="Benford's law", zorder=3)
        ax.set_title(title, fontsize=self.cfg.title_fontsize)
        ax.set_xlabel("Leading digit", fontsize=self.cfg.label_fontsize)
        ax.set_ylabel("Proportion", fontsize=self.cfg.label_fontsize)
        ax.set_xticks(digits)
        ax.legend(fontsize=self.cfg.legend_fontsize)
        ax.grid(True, linestyle="--", alpha=0.6)

        text = (
            f"n = {result.n}\n"
            f"$\\chi^2$ = {result.statistic:.2f}\n"
            f"p (MC) = {result.mc_p_value:.4f}"
        )
        ax.text(0.95, 0.95, text, transform=ax.transAxes, fontsize=10,
                verticalalignment="top", horizontalalignment="right",
                bbox=dict(boxstyle="round,pad=0.5", fc="wheat", alpha=0.5))

    def digit_comparison(self, results: Sequence[DigitTestResult], titles: Sequence[str],
                         output_path: Path) -> Path:
        """Side-by-side observed vs. theoretical bars, one panel per result."""
        self._style()
        width, height = self.cfg.figsize
        fig, axes = plt.subplots(1, len(results), figsize=(width, height), squeeze=False)
        for ax, result, title in zip(axes[0], results, titles):
            self._digit_axis(ax, result, title)
        fig.tight_layout()
        fig.savefig(output_path, dpi=self.cfg.dpi, bbox_inches="tight", facecolor="white")
        plt.close(fig)
        return output_path

    def simulated_histogram(self, result: DigitTestResult, title: str, output_path: Path) -> Path:
        """Histogram of simulated statistics with the observed value and chi-square density."""
        self._style()
        fig, ax = plt.subplots(figsize=(self.cfg.figsize[0] / 2 + 2, self.cfg.figsize[1]))

        sim = result.simulated
        ax.hist(sim, bins=self.cfg.bins, density=True, color="lightgray",
                edgecolor="gray", label=f"Simulated ({result.trials} trials)")

        upper = max(float(sim.max()), result.statistic, result.critical_value) * 1.05
        xs = np.linspace(0.0, upper, 400)
        ax.plot(xs, stats.chi2.pdf(xs, df=DEGREES_OF_FREEDOM), "k--", lw=1.5,
                label=f"$\\chi^2$ density, df={DEGREES_OF_FREEDOM}")

        ax.axvline(result.critical_value, color="orange", lw=2,
                   label=f"Critical value (alpha={result.alpha:g}) = {result.critical_value:.2f}")
        ax.axvline(result.statistic, color="red", lw=2,
                   label=f"Observed = {result.statistic:.2f}")

        ax.set_xlim(0.0, upper)
        ax.set_title(title, fontsize=self.cfg.title_fontsize)
        ax.set_xlabel("Chi-square statistic", fontsize=self.cfg.label_fontsize)
        ax.set_ylabel("Density", fontsize=self.cfg.label_fontsize)
        ax.legend(fontsize=self.cfg.legend_fontsize)
        ax.grid(True, linestyle="--", alpha=0.6)

        fig.tight_layout()
        fig.savefig(output_path, dpi=self.cfg.dpi, bbox_inches="tight", facecolor="white")
        plt.close(fig)
        return output_path
