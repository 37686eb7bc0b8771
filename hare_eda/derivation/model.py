from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date as _date
from typing import List, Literal, Optional, Tuple

from hare_eda.observation import Observation

Severity = Literal["info", "warning", "error"]


@dataclass(frozen=True)
class Issue:
    """
    Data quality issue found while deriving a record.

    Attributes:
        issue_type (str): Machine-readable type, e.g. 'unparseable_date'.
        severity (Severity): 'info', 'warning' or 'error'.
        message (str): Human-readable description.
        record_id (Optional[str]): Identifier of the record concerned.
    """
    issue_type: str
    severity: Severity
    message: str
    record_id: Optional[str] = None


@dataclass(frozen=True)
class DerivedObservation:
    """
    Class representing a juvenile observation augmented with derived fields.

    Attributes:
        observation (Observation): The source record.
        capture_date (date): Parsed capture date.
        capture_year (int): Year of capture_date.
        site_label (Optional[str]): Human-readable site name, None if unmapped.
    """
    observation: Observation
    capture_date: _date
    capture_year: int
    site_label: Optional[str] = None

    # Delegated source fields
    @property
    def record_id(self) -> Optional[str]:
        return self.observation.record_id

    @property
    def age_class(self) -> Optional[str]:
        return self.observation.age_class

    @property
    def sex(self) -> str:
        return self.observation.sex

    @property
    def site_code(self) -> Optional[str]:
        return self.observation.site_code

    @property
    def hind_foot_length(self) -> Optional[float]:
        return self.observation.hind_foot_length

    @property
    def weight(self) -> Optional[float]:
        return self.observation.weight


@dataclass
class DerivationResult:
    """
    Output of the derivation stage.

    Attributes:
        observations: Derived juvenile records, in input order.
        issues: Issues recorded while deriving.
        total_records: Number of input records.
        excluded_non_juvenile: Number of records removed by the juvenile filter.
        skipped_records: Number of juvenile records left out after a parse failure.
    """
    observations: Tuple[DerivedObservation, ...] = ()
    issues: List[Issue] = field(default_factory=list)
    total_records: int = 0
    excluded_non_juvenile: int = 0
    skipped_records: int = 0

    @property
    def warnings(self) -> List[Issue]:
        """Issues with severity 'warning' or 'error'."""
        return [issue for issue in self.issues if issue.severity != "info"]

    def __len__(self) -> int:
        return len(self.observations)
