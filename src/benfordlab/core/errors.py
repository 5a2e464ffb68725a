"""
Exception types raised by the benfordlab core.

Exports:
    - BenfordError: Base class for every core failure.
    - InvalidInputError: Observation is zero, negative, non-finite or non-numeric.
    - EmptyDatasetError: A non-empty observation set was required.
    - InvalidArgumentError: Bad sample size, trial count or malformed digit table.
    - InvalidExpectedValueError: An expected count is not strictly positive.
"""

__all__ = [
    "BenfordError",
    "InvalidInputError",
    "EmptyDatasetError",
    "InvalidArgumentError",
    "InvalidExpectedValueError",
]


class BenfordError(ValueError):
    """Base class for errors raised by the digit-law core."""


class InvalidInputError(BenfordError):
    """An observation lies outside the positive, finite reals."""


class EmptyDatasetError(BenfordError):
    """An operation needed at least one observation and got none."""


class InvalidArgumentError(BenfordError):
    """A size, trial count or digit table argument is malformed."""


class InvalidExpectedValueError(BenfordError):
    """An expected count is zero or negative."""
