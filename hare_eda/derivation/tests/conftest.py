"""
Pytest fixtures for derivation tests.
"""
from __future__ import annotations

import pytest

from hare_eda.observation import Observation
from hare_eda.derivation.config import DerivationConfig


@pytest.fixture
def mock_observation():
    """Create an Observation for testing."""
    def _create_observation(record_id: str = "r1", age_class: str = "j", sex: str = "f",
                            site_code: str = "bonrip", capture_date="11/26/1998",
                            hind_foot_length=None, weight=None) -> Observation:
        return Observation.from_raw(
            record_id=record_id,
            age_class=age_class,
            sex=sex,
            site_code=site_code,
            capture_date=capture_date,
            hind_foot_length=hind_foot_length,
            weight=weight,
        )

    return _create_observation


@pytest.fixture
def default_config():
    """Default derivation configuration."""
    return DerivationConfig()


@pytest.fixture
def mixed_observations(mock_observation):
    """Juvenile and adult records across the three sites."""
    return [
        mock_observation("r1", "j", "f", "bonrip", "11/26/1998", 160, 1370),
        mock_observation("r2", "a", "m", "bonrip", "11/26/1998", 135, 1500),
        mock_observation("r3", "j", "m", "bonmat", "7/8/1999", 130, 1200),
        mock_observation("r4", "j", "NA", "bonbs", "7/9/2005", None, 600),
        mock_observation("r5", "NA", "f", "bonbs", "7/9/2005", 120, 900),
    ]
