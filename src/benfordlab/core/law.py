"""
The logarithmic leading-digit law (Benford's law).

P(d) = log10(1 + 1/d),  d = 1..9

Exports:
    - theoretical_probability: Law probability of a single digit.
    - probability_table: All nine probabilities keyed by digit.
    - expected_counts: Probability table scaled to a sample size.
    - BENFORD_PROBABILITIES: Precomputed probability table.
    - DEGREES_OF_FREEDOM: 9 digit categories minus the sum-to-one constraint.
"""
from __future__ import annotations

import math
import numbers
from typing import Dict

import numpy as np

from benfordlab.core.digits import DIGITS
from benfordlab.core.errors import InvalidArgumentError

__all__ = [
    "theoretical_probability",
    "probability_table",
    "probability_vector",
    "expected_counts",
    "BENFORD_PROBABILITIES",
    "DEGREES_OF_FREEDOM",
]

DEGREES_OF_FREEDOM = len(DIGITS) - 1


def theoretical_probability(d: int) -> float:
    """Probability that a number obeying the law leads with digit ``d``."""
    if isinstance(d, bool) or not isinstance(d, numbers.Integral) or not 1 <= d <= 9:
        raise InvalidArgumentError(f"Digit must be an integer in 1..9, got {d!r}")
    return math.log10(1 + 1 / int(d))


BENFORD_PROBABILITIES: Dict[int, float] = {d: theoretical_probability(d) for d in DIGITS}


def probability_table() -> Dict[int, float]:
    """Return a fresh copy of the digit -> probability table."""
    return dict(BENFORD_PROBABILITIES)


def probability_vector() -> np.ndarray:
    """Law probabilities as an array ordered by digit 1..9."""
    return np.array([BENFORD_PROBABILITIES[d] for d in DIGITS], dtype=float)


def expected_counts(n: int) -> Dict[int, float]:
    """Expected count per digit for a sample of ``n`` observations."""
    if isinstance(n, bool) or not isinstance(n, numbers.Integral) or n <= 0:
        raise InvalidArgumentError(f"Sample size must be a positive integer, got {n!r}")
    return {d: n * p for d, p in BENFORD_PROBABILITIES.items()}
