"""Tests for the reconstruction check."""
import pytest

from lupivot import compare_reconstruction, decompose
from lupivot.examples import permuted_example, three_by_three_example


def test_exact_reconstruction():
    config = three_by_three_example()
    result = decompose(config.build_store())
    check = compare_reconstruction(config.values, result)
    assert check.n == 3
    assert len(check.abs_errors) == 9
    assert check.max_abs == 0.0
    assert check.scale == 9.0
    assert check.within_tolerance


def test_corrupted_factor_detected():
    config = permuted_example()
    result = decompose(config.build_store())
    result.lu[3][3] += 0.5
    check = compare_reconstruction(config.values, result)
    assert check.max_abs == pytest.approx(0.5)
    assert check.max_rel == pytest.approx(0.5 / 4.0)
    assert not check.within_tolerance


def test_wrong_original_detected():
    config = permuted_example()
    result = decompose(config.build_store())
    other = [list(row) for row in config.values]
    other[0][0] = 1.0
    assert not compare_reconstruction(other, result).within_tolerance


def test_dimension_mismatch():
    result = decompose(three_by_three_example().build_store())
    with pytest.raises(ValueError):
        compare_reconstruction([[1.0, 0.0], [0.0, 1.0]], result)
