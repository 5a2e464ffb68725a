"""
Empirical leading-digit distributions.

Builds digit frequency tables from observations, normalises them to
proportions and scores their distance from the law with the mean absolute
deviation (MAD) used in digital-analysis audits.
"""
from __future__ import annotations

from typing import Dict, Iterable, Mapping

import numpy as np

from benfordlab.core.digits import DIGITS, leading_digits
from benfordlab.core.enums import Conformity
from benfordlab.core.errors import EmptyDatasetError, InvalidArgumentError
from benfordlab.core.law import BENFORD_PROBABILITIES

__all__ = [
    "MAD_THRESHOLDS",
    "build_frequency",
    "frequency_from_digits",
    "to_proportions",
    "mean_absolute_deviation",
    "classify_conformity",
]

# First-digit MAD bands (Nigrini, 2012): upper bound -> class
MAD_THRESHOLDS = (
    (0.006, Conformity.CLOSE),
    (0.012, Conformity.ACCEPTABLE),
    (0.015, Conformity.MARGINAL),
)


def frequency_from_digits(digits: np.ndarray) -> Dict[int, int]:
    """Tally an array of digits (each 1..9) into a complete frequency table."""
    counts = np.bincount(np.asarray(digits, dtype=np.int64), minlength=10)[1:10]
    return {d: int(c) for d, c in zip(DIGITS, counts)}


def build_frequency(observations: Iterable) -> Dict[int, int]:
    """
    Count observations by leading digit.

    Every digit 1..9 is present in the result, with count 0 where no
    observation leads with it. An empty input gives nine zeros.

    Raises:
        InvalidInputError: If any observation is not a positive finite number.
    """
    return frequency_from_digits(leading_digits(observations))


def _check_table(table: Mapping, name: str) -> None:
    keys = set(table.keys())
    if keys != set(DIGITS):
        missing = sorted(set(DIGITS) - keys)
        extra = sorted(keys - set(DIGITS), key=str)
        raise InvalidArgumentError(
            f"{name} must be keyed by digits 1..9 (missing={missing}, unexpected={extra})"
        )


def to_proportions(frequency: Mapping[int, int], total_count: int) -> Dict[int, float]:
    """
    Divide each digit count by ``total_count``.

    Raises:
        InvalidArgumentError: If the table is not keyed 1..9 or
            ``total_count`` differs from the sum of its counts.
        EmptyDatasetError: If ``total_count`` is zero.
    """
    _check_table(frequency, "Frequency table")
    observed_total = sum(int(frequency[d]) for d in DIGITS)
    if total_count != observed_total:
        raise InvalidArgumentError(
            f"total_count={total_count} does not match the table's sum of counts ({observed_total})"
        )
    if total_count <= 0:
        raise EmptyDatasetError("Cannot compute proportions of an empty dataset")
    return {d: int(frequency[d]) / total_count for d in DIGITS}


def mean_absolute_deviation(proportions: Mapping[int, float]) -> float:
    """Mean over the nine digits of |observed proportion - law probability|."""
    _check_table(proportions, "Proportion table")
    return float(np.mean([abs(proportions[d] - BENFORD_PROBABILITIES[d]) for d in DIGITS]))


def classify_conformity(mad: float) -> Conformity:
    """Map a first-digit MAD onto its conformity band."""
    if mad < 0:
        raise InvalidArgumentError(f"MAD must be non-negative, got {mad}")
    for upper, label in MAD_THRESHOLDS:
        if mad <= upper:
            return label
    return Conformity.NONCONFORMITY
