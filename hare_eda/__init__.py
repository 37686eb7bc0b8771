"""hare_eda package: Exploratory statistics for juvenile snowshoe hare trapping data."""

from hare_eda.analysis import HareAnalysis
from hare_eda.capture_date import parse_capture_date
from hare_eda.derivation import DerivationConfig, DerivationPipeline, DerivationResult, DerivedObservation, Issue
from hare_eda.errors import (
    DegenerateInputError,
    EmptyGroupError,
    HareAnalysisError,
    InsufficientSampleError,
    ParseError,
    UndefinedStatisticError,
)
from hare_eda.loader import load_observations
from hare_eda.observation import Observation
from hare_eda.statistics import (
    ComparisonResult,
    GroupSummary,
    RegressionResult,
    Stats,
    compare_samples,
    count_by_group,
    regress,
    summarize_by_group,
)

__all__ = [
    "ComparisonResult",
    "DegenerateInputError",
    "DerivationConfig",
    "DerivationPipeline",
    "DerivationResult",
    "DerivedObservation",
    "EmptyGroupError",
    "GroupSummary",
    "HareAnalysis",
    "HareAnalysisError",
    "InsufficientSampleError",
    "Issue",
    "Observation",
    "ParseError",
    "RegressionResult",
    "Stats",
    "UndefinedStatisticError",
    "compare_samples",
    "count_by_group",
    "load_observations",
    "parse_capture_date",
    "regress",
    "summarize_by_group",
]
