"""
Data models for statistics module.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Hashable, List, Optional, Tuple, Union


@dataclass(frozen=True)
class GroupSummary:
    """
    Descriptive statistics for one group.

    `count` is the number of records sharing the key; `n` is the number of
    non-missing values of the summarized field. Statistics that are not
    defined for the group (mean with n == 0, sd with n < 2) are None.
    """
    key: Hashable
    count: int
    n: int
    mean: Optional[float] = None
    sd: Optional[float] = None
    median: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None

    @property
    def undefined_statistics(self) -> Tuple[str, ...]:
        """Names of the statistics that could not be computed."""
        return tuple(name for name in ('mean', 'sd') if getattr(self, name) is None)

    @property
    def missing(self) -> int:
        """Records in the group with a missing value."""
        return self.count - self.n

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ComparisonResult:
    """
    Welch two-sample t-test and Cohen's d between samples A and B.

    mean_difference is mean_a - mean_b; percent_difference expresses it as a
    percentage of the average of the two means.
    """
    mean_a: float
    sd_a: float
    n_a: int
    mean_b: float
    sd_b: float
    n_b: int
    mean_difference: float
    percent_difference: Optional[float]
    test_statistic: float
    degrees_of_freedom: float
    p_value: float
    effect_size: float
    effect_size_magnitude: str = ""
    label_a: str = "a"
    label_b: str = "b"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class RegressionResult:
    """
    Simple linear regression of response on predictor with Pearson correlation.

    p_value and t_statistic test the slope against zero with n - 2 degrees of
    freedom; pearson_p tests the correlation with the same degrees of freedom.
    """
    intercept: float
    slope: float
    r_squared: float
    p_value: float
    pearson_r: float
    pearson_p: float
    n: int = 0
    degrees_of_freedom: int = 0
    t_statistic: float = 0.0
    slope_std_err: float = 0.0
    intercept_std_err: float = 0.0
    residual_std_error: float = 0.0

    def predict(self, predictor: float) -> float:
        """Fitted response for a predictor value."""
        return self.intercept + self.slope * predictor

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


StatValue = Union[int, float, str, None, List[Any], Dict[Any, Any], GroupSummary, ComparisonResult, RegressionResult]


@dataclass
class Stats:
    """
    Container for statistical results collected from a dataset.

    Statistics are organized into categories (e.g., 'juvenile_counts',
    'weight_comparison') with named values within each category.
    """
    categories: Dict[str, Dict[str, StatValue]] = field(default_factory=dict)

    def add_value(self, category: str, name: str, value: StatValue) -> None:
        """Add a statistical value to a category."""
        if category not in self.categories:
            self.categories[category] = {}
        self.categories[category][name] = value

    def get_value(self, category: str, name: str, default: Optional[StatValue] = None) -> Optional[StatValue]:
        """Get a statistical value from a category."""
        return self.categories.get(category, {}).get(name, default)

    def get_category(self, category: str) -> Dict[str, StatValue]:
        """Get all values in a category."""
        return self.categories.get(category, {})

    def merge(self, other: Stats) -> None:
        """Merge another Stats object into this one."""
        for category, values in other.categories.items():
            if category not in self.categories:
                self.categories[category] = {}
            self.categories[category].update(values)

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        """Convert to a plain dictionary, expanding result records."""
        return {
            category: {name: _plain(value) for name, value in values.items()}
            for category, values in self.categories.items()
        }


def _plain(value: Any) -> Any:
    if isinstance(value, (GroupSummary, ComparisonResult, RegressionResult)):
        return value.to_dict()
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value
