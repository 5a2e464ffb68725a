"""Tests for frequency tables, proportions and MAD conformity."""

import numpy as np
import pytest

from benfordlab.core.distribution import (
    build_frequency,
    classify_conformity,
    mean_absolute_deviation,
    to_proportions,
)
from benfordlab.core.enums import Conformity
from benfordlab.core.errors import EmptyDatasetError, InvalidArgumentError, InvalidInputError
from benfordlab.core.law import probability_table


def test_all_digits_present_and_counts_sum_to_length():
    values = [1, 12, 150, 0.19, 3, 3.3, 8e7]
    freq = build_frequency(values)
    assert sorted(freq) == list(range(1, 10))
    assert sum(freq.values()) == len(values)
    assert freq[1] == 4
    assert freq[3] == 2
    assert freq[8] == 1
    assert freq[2] == freq[9] == 0


def test_random_sequences_keep_the_count_invariant():
    rng = np.random.default_rng(11)
    for size in (1, 17, 500):
        values = np.exp(rng.uniform(-10, 20, size))
        freq = build_frequency(values)
        assert set(freq) == set(range(1, 10))
        assert sum(freq.values()) == size


def test_empty_input_gives_zero_table():
    assert build_frequency([]) == {d: 0 for d in range(1, 10)}


def test_invalid_observation_propagates():
    with pytest.raises(InvalidInputError):
        build_frequency([10, 0, 3])


def test_to_proportions():
    freq = build_frequency([1, 1, 2, 9])
    props = to_proportions(freq, 4)
    assert props[1] == pytest.approx(0.5)
    assert props[2] == pytest.approx(0.25)
    assert props[5] == 0.0
    assert sum(props.values()) == pytest.approx(1.0)


def test_to_proportions_total_must_match():
    freq = build_frequency([1, 2, 3])
    with pytest.raises(InvalidArgumentError, match="does not match"):
        to_proportions(freq, 4)


def test_to_proportions_empty_dataset():
    with pytest.raises(EmptyDatasetError):
        to_proportions(build_frequency([]), 0)


def test_to_proportions_missing_digit():
    freq = build_frequency([1, 2, 3])
    del freq[9]
    with pytest.raises(InvalidArgumentError):
        to_proportions(freq, 3)


def test_mad_zero_for_exact_law():
    assert mean_absolute_deviation(probability_table()) == pytest.approx(0.0)


def test_mad_for_single_digit_data():
    props = {d: (1.0 if d == 1 else 0.0) for d in range(1, 10)}
    law = probability_table()
    expected = (abs(1 - law[1]) + sum(law[d] for d in range(2, 10))) / 9
    assert mean_absolute_deviation(props) == pytest.approx(expected)


@pytest.mark.parametrize(
    "mad, label",
    [
        (0.0, Conformity.CLOSE),
        (0.006, Conformity.CLOSE),
        (0.009, Conformity.ACCEPTABLE),
        (0.014, Conformity.MARGINAL),
        (0.05, Conformity.NONCONFORMITY),
    ],
)
def test_classify_conformity(mad, label):
    assert classify_conformity(mad) is label


def test_classify_conformity_rejects_negative():
    with pytest.raises(InvalidArgumentError):
        classify_conformity(-0.1)
