"""
Simple linear regression and Pearson correlation.

The model response ~ intercept + slope * predictor is fitted by ordinary least
squares in closed form. Significance of the slope and of Pearson's r both use
a t-distribution with n - 2 degrees of freedom. Model assumptions
(linearity, homoscedasticity) are not checked here.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Iterable, List, NamedTuple, Sequence, Tuple

import numpy as np

from hare_eda.errors import DegenerateInputError, InsufficientSampleError
from hare_eda.statistics.inference import two_sided_t_p_value
from hare_eda.statistics.model import RegressionResult

logger = logging.getLogger(__name__)

MIN_PAIRS = 3


class LinearFit(NamedTuple):
    intercept: float
    slope: float
    r_squared: float
    t_statistic: float
    p_value: float
    slope_std_err: float
    intercept_std_err: float
    residual_std_error: float
    n: int
    df: int


class Correlation(NamedTuple):
    r: float
    p_value: float
    n: int
    df: int


def complete_pairs(pairs: Iterable[Tuple[Any, Any]]) -> Tuple[List[float], List[float]]:
    """
    Drop pairs where either value is missing (None or NaN).

    Returns:
        Tuple of (predictors, responses) as float lists.
    """
    xs, ys = [], []
    for x, y in pairs:
        if x is None or y is None:
            continue
        x, y = float(x), float(y)
        if math.isnan(x) or math.isnan(y):
            continue
        xs.append(x)
        ys.append(y)
    return xs, ys


def _prepare(predictor: Sequence[float], response: Sequence[float]) -> Tuple[np.ndarray, np.ndarray]:
    x = np.asarray(predictor, dtype=float)
    y = np.asarray(response, dtype=float)
    if x.shape != y.shape or x.ndim != 1:
        raise ValueError(f"Predictor and response must be paired 1-D sequences, got {x.shape} and {y.shape}")
    if not (np.isfinite(x).all() and np.isfinite(y).all()):
        raise ValueError("Predictor and response must be finite; drop incomplete pairs first")
    if x.size < MIN_PAIRS:
        raise InsufficientSampleError(
            f"Regression needs at least {MIN_PAIRS} complete pairs, got {x.size}",
            n=int(x.size), minimum=MIN_PAIRS,
        )
    if np.ptp(x) == 0:
        raise DegenerateInputError("Predictor has zero variance; slope is undefined")
    if np.ptp(y) == 0:
        raise DegenerateInputError("Response has zero variance; R-squared and correlation are undefined")
    return x, y


def _sums(x: np.ndarray, y: np.ndarray) -> Tuple[float, float, float]:
    dx = x - x.mean()
    dy = y - y.mean()
    return float(np.dot(dx, dx)), float(np.dot(dx, dy)), float(np.dot(dy, dy))


def fit_linear_regression(predictor: Sequence[float], response: Sequence[float]) -> LinearFit:
    """
    Ordinary least squares fit of response on a single predictor.

    Raises:
        InsufficientSampleError: If fewer than 3 pairs are supplied.
        DegenerateInputError: If predictor (or response) has zero variance.
    """
    x, y = _prepare(predictor, response)
    n = int(x.size)
    df = n - 2
    sxx, sxy, syy = _sums(x, y)

    slope = sxy / sxx
    intercept = float(y.mean() - slope * x.mean())
    residuals = y - (intercept + slope * x)
    sse = float(np.dot(residuals, residuals))

    residual_variance = sse / df
    slope_se = math.sqrt(residual_variance / sxx)
    intercept_se = math.sqrt(residual_variance * (1.0 / n + float(x.mean()) ** 2 / sxx))
    if slope_se == 0:
        t_statistic = math.copysign(math.inf, slope)
    else:
        t_statistic = slope / slope_se
    r_squared = min(1.0, max(0.0, 1.0 - sse / syy))

    return LinearFit(
        intercept=intercept,
        slope=float(slope),
        r_squared=r_squared,
        t_statistic=float(t_statistic),
        p_value=two_sided_t_p_value(t_statistic, df),
        slope_std_err=slope_se,
        intercept_std_err=intercept_se,
        residual_std_error=math.sqrt(residual_variance),
        n=n,
        df=df,
    )


def pearson_correlation(predictor: Sequence[float], response: Sequence[float]) -> Correlation:
    """
    Pearson's r with a two-sided t-test of r = 0 (n - 2 degrees of freedom).

    Raises:
        InsufficientSampleError: If fewer than 3 pairs are supplied.
        DegenerateInputError: If either variable has zero variance.
    """
    x, y = _prepare(predictor, response)
    n = int(x.size)
    df = n - 2
    sxx, sxy, syy = _sums(x, y)

    r = max(-1.0, min(1.0, sxy / math.sqrt(sxx * syy)))
    if abs(r) == 1.0:
        p_value = 0.0
    else:
        p_value = two_sided_t_p_value(r * math.sqrt(df / (1.0 - r * r)), df)
    return Correlation(r=float(r), p_value=p_value, n=n, df=df)


def regress(predictor: Sequence[float], response: Sequence[float]) -> RegressionResult:
    """
    Fit the regression and compute Pearson's r for paired, complete data.

    Args:
        predictor: Predictor values (e.g. hind foot length, mm).
        response: Response values (e.g. weight, g).

    Returns:
        RegressionResult combining the linear fit and the correlation.
    """
    fit = fit_linear_regression(predictor, response)
    correlation = pearson_correlation(predictor, response)
    logger.info(
        f"Regression (n={fit.n}): response = {fit.intercept:.3f} + {fit.slope:.3f} * predictor, "
        f"R2 = {fit.r_squared:.3f}, r = {correlation.r:.3f}"
    )
    return RegressionResult(
        intercept=fit.intercept,
        slope=fit.slope,
        r_squared=fit.r_squared,
        p_value=fit.p_value,
        pearson_r=correlation.r,
        pearson_p=correlation.p_value,
        n=fit.n,
        degrees_of_freedom=fit.df,
        t_statistic=fit.t_statistic,
        slope_std_err=fit.slope_std_err,
        intercept_std_err=fit.intercept_std_err,
        residual_std_error=fit.residual_std_error,
    )


def regress_pairs(pairs: Iterable[Tuple[Any, Any]]) -> RegressionResult:
    """Regress on (predictor, response) pairs, excluding incomplete pairs first."""
    predictor, response = complete_pairs(pairs)
    return regress(predictor, response)
