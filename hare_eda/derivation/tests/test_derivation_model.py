"""
Tests for derivation.model module.
"""
from __future__ import annotations

from dataclasses import FrozenInstanceError
from datetime import date

import pytest

from hare_eda.derivation.model import DerivationResult, DerivedObservation, Issue


class TestIssue:

    def test_defaults(self):
        issue = Issue(issue_type="unmapped_site_code", severity="warning", message="no label")
        assert issue.record_id is None

    def test_frozen(self):
        issue = Issue(issue_type="x", severity="info", message="m")
        with pytest.raises(FrozenInstanceError):
            issue.message = "changed"


class TestDerivedObservation:

    def test_delegated_fields(self, mock_observation):
        obs = mock_observation("r9", sex="female", site_code="bonbs", weight=800)
        derived = DerivedObservation(observation=obs, capture_date=date(2005, 7, 9), capture_year=2005,
                                     site_label="Black Spruce stand")
        assert derived.record_id == "r9"
        assert derived.age_class == "j"
        assert derived.sex == "female"
        assert derived.site_code == "bonbs"
        assert derived.weight == 800.0
        assert derived.hind_foot_length is None


class TestDerivationResult:

    def test_warnings_exclude_info(self):
        result = DerivationResult(issues=[
            Issue(issue_type="a", severity="info", message="i"),
            Issue(issue_type="b", severity="warning", message="w"),
            Issue(issue_type="c", severity="error", message="e"),
        ])
        assert [i.issue_type for i in result.warnings] == ["b", "c"]
        assert len(result) == 0
