"""
Descriptive statistics over numeric samples.

Missing values (None or NaN) must be removed before calling sample_mean or
sample_sd; drop_missing does this. The standard deviation is the sample
(Bessel-corrected, divisor n - 1) standard deviation.
"""
from __future__ import annotations

import math
from typing import Any, Iterable, List, Optional, Sequence

import numpy as np

from hare_eda.errors import EmptyGroupError, InsufficientSampleError


def drop_missing(values: Iterable[Any]) -> List[float]:
    """Return the non-missing values as floats, preserving order."""
    kept = []
    for value in values:
        if value is None:
            continue
        number = float(value)
        if math.isnan(number):
            continue
        kept.append(number)
    return kept


def _as_array(values: Sequence[float]) -> np.ndarray:
    arr = np.asarray(values, dtype=float)
    if arr.ndim != 1:
        raise ValueError(f"Expected a one-dimensional sample, got shape {arr.shape}")
    if np.isnan(arr).any():
        raise ValueError("Sample contains missing values; call drop_missing first")
    if np.isinf(arr).any():
        raise ValueError("Sample contains infinite values")
    return arr


def sample_mean(values: Sequence[float]) -> float:
    """
    Arithmetic mean of a sample.

    Raises:
        EmptyGroupError: If the sample is empty.
    """
    arr = _as_array(values)
    if arr.size == 0:
        raise EmptyGroupError("Mean is undefined for an empty sample")
    return float(np.mean(arr))


def sample_sd(values: Sequence[float]) -> float:
    """
    Sample standard deviation with divisor n - 1.

    Raises:
        EmptyGroupError: If the sample is empty.
        InsufficientSampleError: If the sample has a single value.
    """
    arr = _as_array(values)
    if arr.size == 0:
        raise EmptyGroupError("Standard deviation is undefined for an empty sample")
    if arr.size < 2:
        raise InsufficientSampleError(
            "Standard deviation requires at least 2 values", n=int(arr.size), minimum=2
        )
    return float(np.std(arr, ddof=1))


def sample_variance(values: Sequence[float]) -> float:
    """Sample variance with divisor n - 1 (see sample_sd for errors)."""
    return sample_sd(values) ** 2


def describe(values: Sequence[float]) -> dict:
    """
    Summary of a sample: n, mean, sd, median, min, max.

    Statistics that are undefined for the sample size are None.
    """
    arr = _as_array(values)
    n = int(arr.size)
    if n == 0:
        return {'n': 0, 'mean': None, 'sd': None, 'median': None, 'min': None, 'max': None}
    return {
        'n': n,
        'mean': float(np.mean(arr)),
        'sd': float(np.std(arr, ddof=1)) if n >= 2 else None,
        'median': float(np.median(arr)),
        'min': float(np.min(arr)),
        'max': float(np.max(arr)),
    }


def percent_difference(mean_a: float, mean_b: float) -> Optional[float]:
    """
    Difference mean_a - mean_b as a percentage of the average of the two means.

    Returns None when the average is zero.
    """
    average = (mean_a + mean_b) / 2
    if average == 0:
        return None
    return 100.0 * (mean_a - mean_b) / average
