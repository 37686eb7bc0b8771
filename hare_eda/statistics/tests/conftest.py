"""
Pytest fixtures for statistics tests.
"""
from __future__ import annotations

from datetime import date

import pytest

from hare_eda.derivation.model import DerivedObservation
from hare_eda.observation import Observation

SITE_LABELS = {
    "bonbs": "Black Spruce stand",
    "bonmat": "Bonanza mature",
    "bonrip": "Bonanza riparian",
}


@pytest.fixture
def make_record():
    """Create a DerivedObservation for testing."""
    def _make_record(record_id: str, sex: str, site_code: str, year: int,
                     weight=None, hind_foot_length=None) -> DerivedObservation:
        observation = Observation(
            age_class="j",
            sex=sex,
            site_code=site_code,
            capture_date=date(year, 7, 1),
            hind_foot_length=hind_foot_length,
            weight=weight,
            record_id=record_id,
        )
        return DerivedObservation(
            observation=observation,
            capture_date=date(year, 7, 1),
            capture_year=year,
            site_label=SITE_LABELS.get(site_code),
        )

    return _make_record


@pytest.fixture
def juvenile_records(make_record):
    """Juvenile records with weight = 10 * hind foot length."""
    return [
        make_record("m1", "male", "bonrip", 1998, 1000.0, 100.0),
        make_record("m2", "male", "bonmat", 1999, 1200.0, 120.0),
        make_record("m3", "male", "bonrip", 1999, 1100.0, 110.0),
        make_record("f1", "female", "bonrip", 1998, 900.0, 90.0),
        make_record("f2", "female", "bonrip", 2001, 950.0, 95.0),
        make_record("f3", "female", "bonbs", 2001, 1000.0, None),
        make_record("u1", "unspecified", "bonrip", 2001, None, 80.0),
    ]
