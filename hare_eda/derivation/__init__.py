"""Derivation module: juvenile filter and derived fields for trapping records.

Turns raw Observation rows into DerivedObservation records by:
    - Keeping only juvenile records (age-class filter)
    - Parsing the month/day/year capture date and extracting the capture year
    - Mapping trap grid codes to human-readable site labels
    - Recording issues for unparseable dates, implausible years and unmapped sites

Core classes:
    - DerivationPipeline: Runs the filter and per-record derivation
    - DerivationConfig: Juvenile codes, site lookup and year range (config.yaml)
    - DerivationResult: Derived records plus issues and filter counts
    - DerivedObservation: Observation augmented with capture_year and site_label
    - Issue: Data quality issue with severity level and message

Example:
    >>> from hare_eda.derivation import DerivationPipeline
    >>> result = DerivationPipeline().run(observations)
    >>> for issue in result.issues:
    ...     print(f"{issue.severity}: {issue.message}")
"""

from .model import DerivedObservation
from .model import DerivationResult
from .model import Issue
from .config import DerivationConfig
from .pipeline import DerivationPipeline
from .pipeline import derive_observation
from .pipeline import filter_juveniles

__all__ = [
    'DerivedObservation',
    'DerivationResult',
    'Issue',
    'DerivationConfig',
    'DerivationPipeline',
    'derive_observation',
    'filter_juveniles',
]
