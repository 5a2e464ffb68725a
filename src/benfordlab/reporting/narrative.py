"""Markdown narrative for the leading-digit report."""
from __future__ import annotations

import datetime
from pathlib import Path
from typing import Dict, List, Sequence

import pandas as pd

from benfordlab.core.digits import DIGITS
from benfordlab.core.enums import Verdict
from benfordlab.core.goodness_of_fit import DigitTestResult
from benfordlab.core.law import BENFORD_PROBABILITIES, DEGREES_OF_FREEDOM


def markdown_table(df: pd.DataFrame) -> str:
    headers = [str(col) for col in df.columns]
    rows = df.astype(str).values.tolist()
    header_line = "| " + " | ".join(headers) + " |"
    separator_line = "| " + " | ".join(["---"] * len(headers)) + " |"
    row_lines = ["| " + " | ".join(row) + " |" for row in rows]
    return "\n".join([header_line, separator_line, *row_lines])


def law_table() -> pd.DataFrame:
    return pd.DataFrame({
        "digit": list(DIGITS),
        "probability": [f"{BENFORD_PROBABILITIES[d]:.4f}" for d in DIGITS],
    })


def digit_table(result: DigitTestResult) -> pd.DataFrame:
    return pd.DataFrame({
        "digit": list(DIGITS),
        "count": [result.counts[d] for d in DIGITS],
        "expected": [f"{result.expected[d]:.1f}" for d in DIGITS],
        "observed %": [f"{100 * result.proportions[d]:.1f}" for d in DIGITS],
        "Benford %": [f"{100 * BENFORD_PROBABILITIES[d]:.1f}" for d in DIGITS],
    })


def summary_table(results: Sequence[DigitTestResult]) -> pd.DataFrame:
    return pd.DataFrame([{
        "dataset": r.label,
        "n": r.n,
        "chi-square": f"{r.statistic:.2f}",
        "p (Monte Carlo)": f"{r.mc_p_value:.4f}",
        "p (chi-square)": f"{r.closed_form_p_value:.4f}",
        "MAD": f"{r.mad:.4f}",
        "conformity": r.conformity.value,
        "verdict": r.verdict.value,
    } for r in results])


def interpret(result: DigitTestResult) -> str:
    """One paragraph of prose for a single scope."""
    leader = max(DIGITS, key=lambda d: result.counts[d])
    sentence = (
        f"For **{result.label}** ({result.n} observations) the chi-square statistic is "
        f"{result.statistic:.2f} against a critical value of {result.critical_value:.2f} "
        f"at significance level {result.alpha:g}. Of {result.trials} datasets simulated under the law, "
        f"{result.mc_p_value:.2%} produced a statistic at least this large "
        f"(closed-form chi-square p-value: {result.closed_form_p_value:.4f}). "
        f"The most frequent leading digit is {leader} "
        f"({100 * result.proportions[leader]:.1f}% vs. {100 * BENFORD_PROBABILITIES[leader]:.1f}% expected). "
    )
    if result.verdict is Verdict.REJECTED:
        sentence += "The data are **not** consistent with Benford's law at this level."
    else:
        sentence += "There is no evidence against Benford's law at this level."
    sentence += f" The mean absolute deviation of {result.mad:.4f} indicates {result.conformity.value}."
    return sentence


def render_report(
    results: Sequence[DigitTestResult],
    source: str,
    figures: Dict[str, List[Path]],
    base_dir: Path,
) -> str:
    """Assemble the full Markdown document."""
    lines = [
        "# Benford's Law in Population and GDP per Capita",
        "",
        f"Data source: `{source}`  ",
        f"Generated: {datetime.datetime.now().strftime('%Y-%m-%d %H:%M')}",
        "",
        "## The law",
        "Benford's law states that in many naturally occurring datasets the leading digit *d* "
        "appears with probability log10(1 + 1/d): a leading 1 about 30.1% of the time, a leading 9 "
        "only about 4.6% of the time.",
        "",
        markdown_table(law_table()),
        "",
        "## Method",
        "- **Leading digit**: first significant digit (0.034 -> 3, 5,000,000 -> 5).",
        "- **Chi-square statistic**: sum over digits of (observed - expected)^2 / expected, "
        f"with {DEGREES_OF_FREEDOM} degrees of freedom.",
        "- **Monte Carlo p-value**: share of datasets of the same size drawn from the law whose "
        "statistic is at least the observed one.",
        "- **MAD**: mean absolute deviation between observed and expected proportions.",
        "",
        "## Summary",
        markdown_table(summary_table(results)) if results else "No datasets analysed.",
        "",
    ]

    for result in results:
        lines += [
            f"## {result.label}",
            "",
            interpret(result),
            "",
            markdown_table(digit_table(result)),
            "",
        ]
        for fig in figures.get(result.label, []):
            rel = Path(fig).relative_to(base_dir) if Path(fig).is_relative_to(base_dir) else Path(fig)
            lines += [f"![{result.label}]({rel.as_posix()})", ""]

    lines.append("Report generated by `benfordlab report`.")
    return "\n".join(lines)
