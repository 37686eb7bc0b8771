"""
Two-sample comparison: Welch's t-test and Cohen's d.

Both samples must already have missing values removed. The t-test does not
assume equal variances; degrees of freedom use the Welch-Satterthwaite
approximation and the p-value is two-sided. Cohen's d uses the pooled
standard deviation.
"""
from __future__ import annotations

import logging
import math
from typing import NamedTuple, Sequence

from scipy import stats

from hare_eda.errors import DegenerateInputError, InsufficientSampleError, UndefinedStatisticError
from hare_eda.statistics.descriptive import percent_difference, sample_mean, sample_sd, sample_variance
from hare_eda.statistics.model import ComparisonResult

logger = logging.getLogger(__name__)

MIN_SAMPLE_SIZE = 2

# Conventional |d| thresholds (upper bound, label)
COHENS_D_BANDS = (
    (0.2, "negligible"),
    (0.5, "small"),
    (0.8, "medium"),
)


class TTestResult(NamedTuple):
    statistic: float
    df: float
    p_value: float


def _check_size(values: Sequence[float], label: str) -> None:
    n = len(values)
    if n < MIN_SAMPLE_SIZE:
        raise InsufficientSampleError(
            f"Sample {label} has {n} observation(s); at least {MIN_SAMPLE_SIZE} are required",
            n=n, minimum=MIN_SAMPLE_SIZE,
        )


def _is_constant(values: Sequence[float]) -> bool:
    return max(values) == min(values)


def two_sided_t_p_value(t_statistic: float, df: float) -> float:
    """
    Two-sided tail probability of a t-distribution with df degrees of freedom.

    Raises:
        UndefinedStatisticError: If the statistic or df is NaN.
    """
    if math.isnan(t_statistic) or math.isnan(df):
        raise UndefinedStatisticError(f"p-value is undefined for t = {t_statistic}, df = {df}")
    if math.isinf(t_statistic):
        return 0.0
    return float(min(1.0, 2.0 * stats.t.sf(abs(t_statistic), df)))


def welch_t_test(sample_a: Sequence[float], sample_b: Sequence[float]) -> TTestResult:
    """
    Welch's unequal-variance two-sample t-test of mean_a - mean_b.

    Raises:
        InsufficientSampleError: If either sample has fewer than 2 values.
        DegenerateInputError: If both samples have zero variance, which makes
            the standard error zero.
    """
    _check_size(sample_a, "a")
    _check_size(sample_b, "b")
    n_a, n_b = len(sample_a), len(sample_b)
    se2_a = sample_variance(sample_a) / n_a
    se2_b = sample_variance(sample_b) / n_b
    se2 = se2_a + se2_b
    if se2 == 0 or (_is_constant(sample_a) and _is_constant(sample_b)):
        raise DegenerateInputError(
            "Both samples have zero variance; the t statistic is undefined"
        )

    t = (sample_mean(sample_a) - sample_mean(sample_b)) / math.sqrt(se2)
    df = se2 ** 2 / (se2_a ** 2 / (n_a - 1) + se2_b ** 2 / (n_b - 1))
    return TTestResult(statistic=float(t), df=float(df), p_value=two_sided_t_p_value(t, df))


def pooled_sd(sample_a: Sequence[float], sample_b: Sequence[float]) -> float:
    """Pooled standard deviation of two samples."""
    _check_size(sample_a, "a")
    _check_size(sample_b, "b")
    n_a, n_b = len(sample_a), len(sample_b)
    pooled_var = ((n_a - 1) * sample_variance(sample_a) + (n_b - 1) * sample_variance(sample_b)) / (n_a + n_b - 2)
    return math.sqrt(pooled_var)


def cohens_d(sample_a: Sequence[float], sample_b: Sequence[float]) -> float:
    """
    Cohen's d effect size (pooled SD) of mean_a - mean_b.

    Raises:
        InsufficientSampleError: If either sample has fewer than 2 values.
        UndefinedStatisticError: If the pooled standard deviation is zero.
    """
    sd = pooled_sd(sample_a, sample_b)
    if sd == 0 or (_is_constant(sample_a) and _is_constant(sample_b)):
        raise UndefinedStatisticError("Pooled standard deviation is zero; Cohen's d is undefined")
    return float((sample_mean(sample_a) - sample_mean(sample_b)) / sd)


def interpret_cohens_d(d: float) -> str:
    """Conventional magnitude label for an effect size."""
    magnitude = abs(d)
    for upper, label in COHENS_D_BANDS:
        if magnitude < upper:
            return label
    return "large"


def compare_samples(
    sample_a: Sequence[float],
    sample_b: Sequence[float],
    label_a: str = "a",
    label_b: str = "b",
) -> ComparisonResult:
    """
    Compare two independent samples with Welch's t-test and Cohen's d.

    Inputs are not modified. Missing values must be excluded beforehand.

    Args:
        sample_a: First sample.
        sample_b: Second sample.
        label_a: Name of the first sample (e.g. 'male').
        label_b: Name of the second sample (e.g. 'female').

    Returns:
        ComparisonResult with descriptive statistics, test and effect size.
    """
    a = [float(v) for v in sample_a]
    b = [float(v) for v in sample_b]
    _check_size(a, label_a)
    _check_size(b, label_b)

    mean_a, mean_b = sample_mean(a), sample_mean(b)
    test = welch_t_test(a, b)
    d = cohens_d(a, b)

    result = ComparisonResult(
        mean_a=mean_a,
        sd_a=sample_sd(a),
        n_a=len(a),
        mean_b=mean_b,
        sd_b=sample_sd(b),
        n_b=len(b),
        mean_difference=mean_a - mean_b,
        percent_difference=percent_difference(mean_a, mean_b),
        test_statistic=test.statistic,
        degrees_of_freedom=test.df,
        p_value=test.p_value,
        effect_size=d,
        effect_size_magnitude=interpret_cohens_d(d),
        label_a=label_a,
        label_b=label_b,
    )
    logger.info(
        f"Compared {label_a} (n={result.n_a}) vs {label_b} (n={result.n_b}): "
        f"t({result.degrees_of_freedom:.2f}) = {result.test_statistic:.3f}, p = {result.p_value:.3g}, d = {d:.3f}"
    )
    return result
