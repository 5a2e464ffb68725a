"""
Leading-digit extraction.

The leading digit is the first significant digit of a number written in
scientific notation: 5, 5_000_000 and 0.5 all lead with 5.
"""
from __future__ import annotations

import math
import numbers
from typing import Iterable

import numpy as np

from benfordlab.core.errors import InvalidInputError

__all__ = [
    "DIGITS",
    "leading_digit",
    "leading_digits",
]

DIGITS = tuple(range(1, 10))

_SIGNIFICANT = "123456789"


def leading_digit(x) -> int:
    """Return the leading significant decimal digit (1-9) of a positive number.

    Examples:
        123 -> 1
        0.034 -> 3
        999999 -> 9

    Raises:
        InvalidInputError: If x is not a real number, or is zero, negative,
            NaN or infinite.
    """
    if isinstance(x, (bool, np.bool_)) or not isinstance(x, numbers.Real):
        raise InvalidInputError(f"Observation must be a real number, got {x!r}")

    if isinstance(x, numbers.Integral):
        if x <= 0:
            raise InvalidInputError(f"Observation must be strictly positive, got {x!r}")
        # exact, no float round-off for very large integers
        return int(str(int(x))[0])

    value = float(x)
    if not math.isfinite(value) or value <= 0:
        raise InvalidInputError(f"Observation must be finite and strictly positive, got {x!r}")

    # repr is the shortest round-tripping form, e.g. '0.034', '1e-05', '1.5e+20'
    for ch in repr(value):
        if ch in _SIGNIFICANT:
            return int(ch)
    raise InvalidInputError(f"No significant digit found in {x!r}")  # pragma: no cover


def leading_digits(values: Iterable) -> np.ndarray:
    """Vectorised convenience wrapper: leading digit of every value."""
    return np.fromiter((leading_digit(v) for v in values), dtype=np.int64)
