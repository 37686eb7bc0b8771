"""
Tests for statistics.grouping module.
"""
from __future__ import annotations

import pytest

from hare_eda.errors import EmptyGroupError, UndefinedStatisticError
from hare_eda.statistics.grouping import (
    by_sex,
    by_sex_and_site,
    by_site,
    by_year,
    count_by_group,
    sort_key,
    summarize_by_group,
    weight_of,
)


class TestCountByGroup:
    """Tests for count_by_group function."""

    def test_counts_by_year(self, juvenile_records):
        assert count_by_group(juvenile_records, by_year) == {1998: 2, 1999: 2, 2001: 3}

    def test_counts_sum_to_total(self, juvenile_records):
        counts = count_by_group(juvenile_records, by_sex_and_site)
        assert sum(counts.values()) == len(juvenile_records)

    def test_order_is_deterministic(self, juvenile_records):
        """Test that output order does not depend on input order."""
        forward = count_by_group(juvenile_records, by_sex_and_site)
        backward = count_by_group(list(reversed(juvenile_records)), by_sex_and_site)
        assert list(forward.items()) == list(backward.items())

    def test_empty(self):
        assert count_by_group([], by_year) == {}


class TestSummarizeByGroup:
    """Tests for summarize_by_group function."""

    def test_summaries_by_sex(self, juvenile_records):
        summaries = summarize_by_group(juvenile_records, by_sex, weight_of)
        assert list(summaries) == ["female", "male", "unspecified"]

        male = summaries["male"]
        assert male.n == 3
        assert male.mean == pytest.approx(1100.0)
        assert male.sd == pytest.approx(100.0)

        unspecified = summaries["unspecified"]
        assert unspecified.count == 1
        assert unspecified.n == 0
        assert unspecified.mean is None
        assert unspecified.undefined_statistics == ('mean', 'sd')
        assert unspecified.missing == 1

    def test_n_sums_to_non_missing(self, juvenile_records):
        summaries = summarize_by_group(juvenile_records, by_sex_and_site, weight_of)
        non_missing = sum(1 for r in juvenile_records if r.weight is not None)
        assert sum(s.n for s in summaries.values()) == non_missing

    def test_single_value_group(self, juvenile_records):
        summaries = summarize_by_group(juvenile_records, by_site, weight_of)
        black_spruce = summaries["Black Spruce stand"]
        assert black_spruce.n == 1
        assert black_spruce.mean == pytest.approx(1000.0)
        assert black_spruce.sd is None

    def test_strict_empty_group(self, juvenile_records):
        with pytest.raises(EmptyGroupError):
            summarize_by_group(juvenile_records, by_sex, weight_of, strict=True)

    def test_strict_single_value(self, make_record):
        records = [make_record("f1", "female", "bonrip", 1998, 900.0)]
        with pytest.raises(UndefinedStatisticError):
            summarize_by_group(records, by_sex, weight_of, strict=True)

    def test_missing_values_excluded(self, make_record):
        records = [
            make_record("a", "female", "bonrip", 1998, 900.0),
            make_record("b", "female", "bonrip", 1998, None),
            make_record("c", "female", "bonrip", 1998, 1000.0),
        ]
        summary = summarize_by_group(records, by_sex, weight_of)["female"]
        assert summary.count == 3
        assert summary.n == 2
        assert summary.mean == pytest.approx(950.0)


def test_sort_key_orders_none_last():
    keys = [("male", None), ("female", "Bonanza riparian"), ("female", None), ("female", "Black Spruce stand")]
    assert sorted(keys, key=sort_key) == [
        ("female", "Black Spruce stand"),
        ("female", "Bonanza riparian"),
        ("female", None),
        ("male", None),
    ]
