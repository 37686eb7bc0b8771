"""
Tests for built-in statistics collectors.
"""
from __future__ import annotations

import pytest

from hare_eda.errors import InsufficientSampleError
from hare_eda.statistics import Stats
from hare_eda.statistics.base import get_collector_registry
from hare_eda.statistics.collectors import (
    JuvenileCountsCollector,
    WeightBySexSiteCollector,
    WeightComparisonCollector,
    WeightHindFootCollector,
)


def test_builtin_collectors_registered():
    registry = get_collector_registry()
    for collector_id in ("juvenile_counts", "weight_by_sex_site", "weight_comparison", "weight_hind_foot"):
        assert collector_id in registry


class TestJuvenileCountsCollector:
    """Tests for JuvenileCountsCollector."""

    def test_annual_counts(self, juvenile_records):
        result = JuvenileCountsCollector().collect(juvenile_records, Stats())

        assert result.get_value('juvenile_counts', 'counts_by_year') == {1998: 2, 1999: 2, 2001: 3}
        assert result.get_value('juvenile_counts', 'total') == 7
        assert result.get_value('juvenile_counts', 'years_with_zero') == [2000]
        assert result.get_value('juvenile_counts', 'annual_min') == 0
        assert result.get_value('juvenile_counts', 'annual_max') == 3
        assert result.get_value('juvenile_counts', 'annual_mean') == pytest.approx(1.75)
        assert result.get_value('juvenile_counts', 'annual_median') == pytest.approx(2.0)
        assert result.get_value('juvenile_counts', 'max_years') == [2001]
        assert result.get_value('juvenile_counts', 'min_years') == [2000]

    def test_without_zero_years(self, juvenile_records):
        """Test summarizing only the years that had trappings."""
        result = JuvenileCountsCollector(include_zero_years=False).collect(juvenile_records, Stats())

        assert result.get_value('juvenile_counts', 'annual_min') == 2
        assert result.get_value('juvenile_counts', 'years_observed') == 3
        assert result.get_value('juvenile_counts', 'min_years') == [1998, 1999]
        assert result.get_value('juvenile_counts', 'years_with_zero') == [2000]

    def test_implausible_year_not_zero_filled(self, make_record):
        """Test that a typo year does not add empty years to the annual summary."""
        records = [make_record("a", "male", "bonrip", 1999),
                   make_record("b", "male", "bonrip", 2000),
                   make_record("c", "male", "bonrip", 1975)]
        collector = JuvenileCountsCollector(plausible_year_min=1998, plausible_year_max=2012)
        result = collector.collect(records, Stats())

        assert result.get_value('juvenile_counts', 'counts_by_year') == {1975: 1, 1999: 1, 2000: 1}
        assert result.get_value('juvenile_counts', 'years_with_zero') == []
        assert result.get_value('juvenile_counts', 'annual_mean') == pytest.approx(1.0)
        assert result.get_value('juvenile_counts', 'annual_min') == 1

    def test_no_records(self):
        result = JuvenileCountsCollector().collect([], Stats())
        assert result.get_value('juvenile_counts', 'total') == 0
        assert result.get_value('juvenile_counts', 'annual_mean') is None


class TestWeightBySexSiteCollector:
    """Tests for WeightBySexSiteCollector."""

    def test_grouped_summaries(self, juvenile_records):
        result = WeightBySexSiteCollector().collect(juvenile_records, Stats())

        summaries = result.get_value('weight_by_sex_site', 'summaries')
        assert list(summaries) == [
            ("female", "Black Spruce stand"),
            ("female", "Bonanza riparian"),
            ("male", "Bonanza mature"),
            ("male", "Bonanza riparian"),
            ("unspecified", "Bonanza riparian"),
        ]
        riparian_males = summaries[("male", "Bonanza riparian")]
        assert riparian_males.n == 2
        assert riparian_males.mean == pytest.approx(1050.0)
        assert riparian_males.sd == pytest.approx(70.7106781)
        assert summaries[("unspecified", "Bonanza riparian")].mean is None

        assert result.get_value('weight_by_sex_site', 'records_with_weight') == 6
        assert result.get_value('weight_by_sex_site', 'records_missing_weight') == 1
        assert sum(result.get_value('weight_by_sex_site', 'counts').values()) == 7

    def test_by_sex_and_by_site(self, juvenile_records):
        result = WeightBySexSiteCollector().collect(juvenile_records, Stats())
        assert result.get_value('weight_by_sex_site', 'by_sex')["female"].mean == pytest.approx(950.0)
        assert result.get_value('weight_by_sex_site', 'by_site')["Bonanza mature"].n == 1


class TestWeightComparisonCollector:
    """Tests for WeightComparisonCollector."""

    def test_male_vs_female(self, juvenile_records):
        result = WeightComparisonCollector().collect(juvenile_records, Stats())

        comparison = result.get_value('weight_comparison', 'result')
        assert comparison.label_a == "male"
        assert comparison.n_a == 3
        assert comparison.n_b == 3
        assert comparison.mean_difference == pytest.approx(150.0)
        assert comparison.effect_size == pytest.approx(1.897366, rel=1e-6)
        assert result.get_value('weight_comparison', 'excluded_other_sex') == 1
        assert result.get_value('weight_comparison', 'excluded_missing_weight') == 0

    def test_reversed_groups(self, juvenile_records):
        collector = WeightComparisonCollector(group_a="female", group_b="male")
        comparison = collector.collect(juvenile_records, Stats()).get_value('weight_comparison', 'result')
        assert comparison.mean_difference == pytest.approx(-150.0)
        assert comparison.test_statistic < 0

    def test_missing_group_raises(self, make_record):
        records = [make_record("m1", "male", "bonrip", 1998, 1000.0),
                   make_record("m2", "male", "bonrip", 1998, 1100.0)]
        with pytest.raises(InsufficientSampleError):
            WeightComparisonCollector().collect(records, Stats())


class TestWeightHindFootCollector:
    """Tests for WeightHindFootCollector."""

    def test_regression(self, juvenile_records):
        result = WeightHindFootCollector().collect(juvenile_records, Stats())

        assert result.get_value('weight_hind_foot', 'pairs') == 5
        assert result.get_value('weight_hind_foot', 'excluded_incomplete') == 2
        regression = result.get_value('weight_hind_foot', 'result')
        assert regression.slope == pytest.approx(10.0)
        assert regression.intercept == pytest.approx(0.0, abs=1e-6)
        assert regression.pearson_r == pytest.approx(1.0)
