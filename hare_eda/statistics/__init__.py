"""
Statistics module for the juvenile hare analysis.

This module computes the aggregate results handed to the report: grouped
counts and descriptive statistics, a two-sample comparison and a simple
linear regression. Unlike the derivation module, which maps records one at a
time, the statistics module works across the whole set of derived records.

Main components:
    - descriptive / grouping: sample mean and sd, count_by_group, summarize_by_group
    - inference: Welch's t-test and Cohen's d (compare_samples)
    - regression: OLS fit and Pearson correlation (regress)
    - StatisticsCollector: Base class for one analysis of the report
    - StatisticsPipeline: Orchestrates running multiple collectors
"""

from hare_eda.statistics.base import StatisticsCollector, register_collector, get_collector_registry
from hare_eda.statistics.pipeline import StatisticsPipeline, StatisticsConfig
from hare_eda.statistics.model import ComparisonResult, GroupSummary, RegressionResult, Stats, StatValue
from hare_eda.statistics.descriptive import describe, drop_missing, sample_mean, sample_sd
from hare_eda.statistics.grouping import count_by_group, summarize_by_group
from hare_eda.statistics.inference import cohens_d, compare_samples, interpret_cohens_d, welch_t_test
from hare_eda.statistics.regression import fit_linear_regression, pearson_correlation, regress, regress_pairs

# Import collectors to ensure they're registered
from hare_eda.statistics import collectors

__all__ = [
    'StatisticsCollector',
    'register_collector',
    'get_collector_registry',
    'StatisticsPipeline',
    'StatisticsConfig',
    'ComparisonResult',
    'GroupSummary',
    'RegressionResult',
    'Stats',
    'StatValue',
    'describe',
    'drop_missing',
    'sample_mean',
    'sample_sd',
    'count_by_group',
    'summarize_by_group',
    'cohens_d',
    'compare_samples',
    'interpret_cohens_d',
    'welch_t_test',
    'fit_linear_regression',
    'pearson_correlation',
    'regress',
    'regress_pairs',
    'collectors',
]
