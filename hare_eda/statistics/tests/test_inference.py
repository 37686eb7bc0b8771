"""
Tests for statistics.inference module.
"""
from __future__ import annotations

import math

import pytest
from scipy import stats

from hare_eda.errors import DegenerateInputError, InsufficientSampleError, UndefinedStatisticError
from hare_eda.statistics.inference import (
    cohens_d,
    compare_samples,
    interpret_cohens_d,
    pooled_sd,
    two_sided_t_p_value,
    welch_t_test,
)

MALE = [1000.0, 1200.0, 1100.0]
FEMALE = [900.0, 950.0, 1000.0]


class TestWelchTTest:
    """Tests for welch_t_test function."""

    def test_known_values(self):
        result = welch_t_test(MALE, FEMALE)
        assert result.statistic == pytest.approx(2.32379, rel=1e-5)
        assert result.df == pytest.approx(2.94118, rel=1e-5)

    def test_matches_scipy(self):
        reference = stats.ttest_ind(MALE, FEMALE, equal_var=False)
        result = welch_t_test(MALE, FEMALE)
        assert result.statistic == pytest.approx(reference.statistic)
        assert result.p_value == pytest.approx(reference.pvalue)

    def test_identical_samples(self):
        result = welch_t_test(MALE, list(MALE))
        assert result.statistic == pytest.approx(0.0)
        assert result.p_value == pytest.approx(1.0)

    def test_antisymmetric(self):
        forward = welch_t_test(MALE, FEMALE)
        backward = welch_t_test(FEMALE, MALE)
        assert backward.statistic == pytest.approx(-forward.statistic)
        assert backward.p_value == pytest.approx(forward.p_value)

    def test_p_value_in_unit_interval(self):
        result = welch_t_test([1.0, 2.0, 3.0, 4.0], [100.0, 101.0, 102.0, 103.0])
        assert 0.0 <= result.p_value <= 1.0

    @pytest.mark.parametrize("sample_a,sample_b", [
        ([1000.0], FEMALE),
        (MALE, [900.0]),
        ([], FEMALE),
    ])
    def test_insufficient_sample(self, sample_a, sample_b):
        with pytest.raises(InsufficientSampleError):
            welch_t_test(sample_a, sample_b)

    def test_both_constant(self):
        with pytest.raises(DegenerateInputError):
            welch_t_test([5.0, 5.0, 5.0], [7.0, 7.0])

    def test_one_constant_is_allowed(self):
        result = welch_t_test([5.0, 5.0, 5.0], [6.0, 7.0, 8.0])
        assert result.statistic < 0


class TestCohensD:
    """Tests for Cohen's d."""

    def test_known_value(self):
        assert pooled_sd(MALE, FEMALE) == pytest.approx(math.sqrt(6250.0))
        assert cohens_d(MALE, FEMALE) == pytest.approx(1.897366, rel=1e-6)

    def test_equal_means(self):
        assert cohens_d([1.0, 2.0, 3.0], [0.0, 2.0, 4.0]) == pytest.approx(0.0)

    def test_zero_pooled_sd(self):
        with pytest.raises(UndefinedStatisticError):
            cohens_d([3.0, 3.0], [3.0, 3.0, 3.0])

    @pytest.mark.parametrize("d,label", [
        (0.0, "negligible"),
        (-0.1, "negligible"),
        (0.3, "small"),
        (-0.6, "medium"),
        (0.8, "large"),
        (1.9, "large"),
    ])
    def test_interpretation(self, d, label):
        assert interpret_cohens_d(d) == label


class TestCompareSamples:
    """Tests for compare_samples function."""

    def test_comparison_result(self):
        result = compare_samples(MALE, FEMALE, label_a="male", label_b="female")
        assert result.label_a == "male"
        assert result.label_b == "female"
        assert result.n_a == 3
        assert result.n_b == 3
        assert result.mean_a == pytest.approx(1100.0)
        assert result.mean_b == pytest.approx(950.0)
        assert result.sd_a == pytest.approx(100.0)
        assert result.sd_b == pytest.approx(50.0)
        assert result.mean_difference == pytest.approx(150.0)
        assert result.percent_difference == pytest.approx(14.634146, rel=1e-6)
        assert result.test_statistic == pytest.approx(2.32379, rel=1e-5)
        assert result.degrees_of_freedom == pytest.approx(2.94118, rel=1e-5)
        assert result.effect_size == pytest.approx(1.897366, rel=1e-6)
        assert result.effect_size_magnitude == "large"

    def test_inputs_not_modified(self):
        male, female = list(MALE), list(FEMALE)
        compare_samples(male, female)
        assert male == MALE
        assert female == FEMALE

    def test_empty_group(self):
        with pytest.raises(InsufficientSampleError):
            compare_samples(MALE, [])


def test_infinite_t_has_zero_p_value():
    assert two_sided_t_p_value(math.inf, 3) == 0.0
    assert two_sided_t_p_value(0.0, 3) == pytest.approx(1.0)


def test_nan_t_statistic_is_undefined():
    with pytest.raises(UndefinedStatisticError):
        two_sided_t_p_value(float("nan"), 3)
    with pytest.raises(UndefinedStatisticError):
        two_sided_t_p_value(1.5, float("nan"))


def test_infinite_weight_rejected():
    """Test that an infinite value cannot turn into a NaN comparison."""
    with pytest.raises(ValueError):
        compare_samples([float("inf"), 1000.0, 1100.0], FEMALE)
