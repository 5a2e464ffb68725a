"""
Chi-square goodness-of-fit against the leading-digit law, with a Monte Carlo
reference distribution.

The statistic for observed counts O_d and expected counts E_d = n * P(d) is

    X^2 = sum_d (O_d - E_d)^2 / E_d

Under the null hypothesis it follows (approximately) a chi-square law with
8 degrees of freedom. Rather than trusting that approximation alone, the
sampling distribution is simulated directly: draw n digits from the law,
tally them, compute X^2, repeat. The upper-tail fraction of the simulated
sample at or above the observed X^2 is the Monte Carlo p-value.

Exports:
    - compute_statistic: X^2 for an observed table against expected counts.
    - simulate_one: One synthetic frequency table of size n.
    - simulate_distribution: `trials` simulated statistics, in generation order.
    - estimate_p_value: Upper-tail fraction of a simulated sample.
    - closed_form_p_value / critical_value: chi-square(8) survival and quantile.
    - DigitTestResult / run_digit_test: The whole per-dataset pipeline.
"""
from __future__ import annotations

import multiprocessing
import numbers
from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Optional, Sequence, Union

import numpy as np
from scipy import stats

from benfordlab.core.digits import DIGITS
from benfordlab.core.distribution import (
    build_frequency,
    classify_conformity,
    frequency_from_digits,
    mean_absolute_deviation,
    to_proportions,
)
from benfordlab.core.enums import Conformity, Verdict
from benfordlab.core.errors import (
    EmptyDatasetError,
    InvalidArgumentError,
    InvalidExpectedValueError,
)
from benfordlab.core.law import DEGREES_OF_FREEDOM, expected_counts, probability_vector
from benfordlab.core.logging import logger

__all__ = [
    "DEFAULT_TRIALS",
    "compute_statistic",
    "simulate_one",
    "simulate_distribution",
    "estimate_p_value",
    "closed_form_p_value",
    "critical_value",
    "DigitTestResult",
    "run_digit_test",
]

DEFAULT_TRIALS = 10_000

RandomSource = Union[None, int, np.random.Generator, np.random.SeedSequence]

DigitTable = Union[Mapping[int, float], Sequence[float], np.ndarray]


# =============================================================================
# Argument checks
# =============================================================================

def _positive_int(value, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value <= 0:
        raise InvalidArgumentError(f"{name} must be a positive integer, got {value!r}")
    return int(value)


def _as_vector(table: DigitTable, name: str) -> np.ndarray:
    """Order a digit table as a length-9 float vector (digit 1 first)."""
    if hasattr(table, "keys"):
        keys = set(table.keys())
        if keys != set(DIGITS):
            missing = sorted(set(DIGITS) - keys)
            unexpected = sorted(keys - set(DIGITS), key=str)
            raise InvalidArgumentError(
                f"{name} must be keyed by exactly the digits 1..9 "
                f"(missing {missing}, unexpected {unexpected})"
            )
        values = [table[d] for d in DIGITS]
    else:
        values = list(table)
        if len(values) != len(DIGITS):
            raise InvalidArgumentError(f"{name} must have 9 entries, got {len(values)}")
    return np.asarray(values, dtype=float)


def _make_rng(rng: RandomSource) -> np.random.Generator:
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


# =============================================================================
# Statistic
# =============================================================================

def compute_statistic(observed_counts: DigitTable, expected_counts_: DigitTable) -> float:
    """
    Chi-square statistic sum((O - E)^2 / E) over the nine digits.

    Both tables may be digit-keyed mappings or sequences ordered 1..9.

    Raises:
        InvalidArgumentError: If either table does not cover exactly 9 digits.
        InvalidExpectedValueError: If any expected count is <= 0.
    """
    observed = _as_vector(observed_counts, "Observed frequency table")
    expected = _as_vector(expected_counts_, "Expected-count vector")
    if np.any(expected <= 0):
        raise InvalidExpectedValueError(f"Expected counts must be strictly positive, got {expected.tolist()}")
    return float(np.sum((observed - expected) ** 2 / expected))


# =============================================================================
# Monte Carlo
# =============================================================================

def simulate_one(n: int, rng: RandomSource = None) -> Dict[int, int]:
    """Draw ``n`` digits from the law and return their frequency table."""
    n = _positive_int(n, "n")
    gen = _make_rng(rng)
    draws = gen.choice(np.arange(1, 10), size=n, p=probability_vector())
    return frequency_from_digits(draws)


def _run_trials(n: int, trials: int, gen: np.random.Generator) -> np.ndarray:
    expected = expected_counts(n)
    out = np.empty(trials, dtype=float)
    for i in range(trials):
        out[i] = compute_statistic(simulate_one(n, gen), expected)
    return out


def _simulate_chunk(args) -> np.ndarray:
    """Worker body: ``trials`` statistics at sample size ``n`` from one seed stream."""
    n, trials, seed_seq = args
    return _run_trials(n, trials, np.random.default_rng(seed_seq))


def _split_trials(trials: int, chunks: int) -> list:
    base, extra = divmod(trials, chunks)
    sizes = [base + 1] * extra + [base] * (chunks - extra)
    return [s for s in sizes if s > 0]


def simulate_distribution(
    n: int,
    trials: int = DEFAULT_TRIALS,
    rng: RandomSource = None,
    processes: int = 1,
) -> np.ndarray:
    """
    Simulate the sampling distribution of the statistic under the null.

    Runs ``simulate_one`` followed by ``compute_statistic`` exactly ``trials``
    times and returns the statistics in generation order.

    Args:
        n: Sample size of each synthetic dataset.
        trials: Number of simulated statistics.
        rng: Generator, seed or SeedSequence. ``None`` draws fresh entropy.
        processes: Worker processes. With more than one, each worker gets an
            independent child stream spawned from a SeedSequence and the
            chunks are concatenated in worker order.

    Returns:
        np.ndarray: ``trials`` non-negative statistics.
    """
    n = _positive_int(n, "n")
    trials = _positive_int(trials, "trials")
    processes = _positive_int(processes, "processes")

    if processes == 1:
        return _run_trials(n, trials, _make_rng(rng))

    if isinstance(rng, np.random.SeedSequence):
        root = rng
    elif isinstance(rng, np.random.Generator):
        root = np.random.SeedSequence(int(rng.integers(0, 2**63 - 1)))
    else:
        root = np.random.SeedSequence(rng)

    sizes = _split_trials(trials, processes)
    jobs = [(n, size, child) for size, child in zip(sizes, root.spawn(len(sizes)))]
    logger.debug(f"Simulating {trials} trials at n={n} on {len(jobs)} processes")
    with multiprocessing.Pool(processes=len(jobs)) as pool:
        parts = pool.map(_simulate_chunk, jobs)
    return np.concatenate(parts)


def estimate_p_value(simulated: Iterable[float], observed_statistic: float) -> float:
    """
    Upper-tail Monte Carlo p-value: share of simulated values >= the observed one.

    Raises:
        EmptyDatasetError: If ``simulated`` is empty.
        InvalidArgumentError: If the observed statistic or any simulated value
            is NaN or infinite.
    """
    if not isinstance(simulated, np.ndarray):
        simulated = list(simulated)
    sample = np.asarray(simulated, dtype=float)
    if sample.size == 0:
        raise EmptyDatasetError("Cannot estimate a p-value from an empty simulated sample")
    if not np.isfinite(observed_statistic):
        raise InvalidArgumentError(f"Observed statistic must be finite, got {observed_statistic}")
    if not np.all(np.isfinite(sample)):
        raise InvalidArgumentError("Simulated sample contains NaN or infinite values")
    return float(np.count_nonzero(sample >= observed_statistic) / sample.size)


def closed_form_p_value(statistic: float, dof: int = DEGREES_OF_FREEDOM) -> float:
    """Chi-square survival function at ``statistic``."""
    return float(stats.chi2.sf(statistic, df=dof))


def critical_value(alpha: float = 0.05, dof: int = DEGREES_OF_FREEDOM) -> float:
    """Statistic above which the null is rejected at level ``alpha``."""
    if not 0.0 < alpha < 1.0:
        raise InvalidArgumentError(f"alpha must lie in (0, 1), got {alpha}")
    return float(stats.chi2.ppf(1.0 - alpha, df=dof))


# =============================================================================
# Per-dataset pipeline
# =============================================================================

@dataclass(frozen=True)
class DigitTestResult:
    """Everything the report needs about one dataset scope."""
    label: str
    column: str
    year: Optional[int]
    n: int
    counts: Dict[int, int]
    proportions: Dict[int, float]
    expected: Dict[int, float]
    statistic: float
    mc_p_value: float
    closed_form_p_value: float
    critical_value: float
    alpha: float
    mad: float
    conformity: Conformity
    trials: int
    simulated: np.ndarray = field(repr=False, compare=False)

    @property
    def verdict(self) -> Verdict:
        return Verdict.REJECTED if self.mc_p_value < self.alpha else Verdict.CONSISTENT

    def to_row(self) -> Dict:
        """Flat dict for tabular export."""
        row = {
            "label": self.label,
            "column": self.column,
            "year": self.year,
            "n": self.n,
            "statistic": self.statistic,
            "mc_p_value": self.mc_p_value,
            "closed_form_p_value": self.closed_form_p_value,
            "critical_value": self.critical_value,
            "mad": self.mad,
            "conformity": self.conformity.value,
            "verdict": self.verdict.value,
            "trials": self.trials,
        }
        for d in DIGITS:
            row[f"count_{d}"] = self.counts[d]
            row[f"proportion_{d}"] = self.proportions[d]
        return row


def run_digit_test(
    values: Iterable[float],
    trials: int = DEFAULT_TRIALS,
    rng: RandomSource = None,
    alpha: float = 0.05,
    simulated: Optional[np.ndarray] = None,
    label: str = "",
    column: str = "",
    year: Optional[int] = None,
    processes: int = 1,
) -> DigitTestResult:
    """
    Test one observation set against the law.

    Pass ``simulated`` to reuse a reference distribution; otherwise one is
    simulated here. A reused sample is taken as is: the caller must have
    drawn it at the same sample size as ``values``; only its
    non-emptiness is checked.

    Raises:
        EmptyDatasetError: If ``values`` is empty.
        InvalidArgumentError: If ``alpha`` is outside (0, 1) or ``simulated``
            is given but empty. ``alpha`` is checked before any simulation.
    """
    crit = critical_value(alpha)
    counts = build_frequency(values)
    n = sum(counts.values())
    proportions = to_proportions(counts, n)
    expected = expected_counts(n)
    statistic = compute_statistic(counts, expected)

    if simulated is None:
        simulated = simulate_distribution(n, trials, rng=rng, processes=processes)
    else:
        simulated = np.asarray(simulated, dtype=float)
        if simulated.size == 0:
            raise InvalidArgumentError("Reused simulated sample is empty")

    mad = mean_absolute_deviation(proportions)
    result = DigitTestResult(
        label=label,
        column=column,
        year=year,
        n=n,
        counts=counts,
        proportions=proportions,
        expected=expected,
        statistic=statistic,
        mc_p_value=estimate_p_value(simulated, statistic),
        closed_form_p_value=closed_form_p_value(statistic),
        critical_value=crit,
        alpha=alpha,
        mad=mad,
        conformity=classify_conformity(mad),
        trials=int(simulated.size),
        simulated=simulated,
    )
    logger.debug(
        f"{label or column}: n={n}, X2={statistic:.3f}, "
        f"p_mc={result.mc_p_value:.4f}, p_chi2={result.closed_form_p_value:.4f}"
    )
    return result
