"""
loader.py - Read hare trapping records from CSV.

Maps the columns of the Bonanza Creek snowshoe hare trapping file onto
Observation fields. Column names are matched case-insensitively; the first
alias present in the header wins.
"""
from __future__ import annotations

import csv
from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from hare_eda.derivation.model import Issue
from hare_eda.errors import ParseError
from hare_eda.observation import Observation

logger = logging.getLogger(__name__)

COLUMN_ALIASES: Dict[str, Sequence[str]] = {
    'age_class': ('age_class', 'age'),
    'sex': ('sex',),
    'site_code': ('site_code', 'grid', 'site'),
    'capture_date': ('capture_date', 'date'),
    'hind_foot_length': ('hind_foot_length', 'hindft', 'hind_foot'),
    'weight': ('weight',),
    'record_id': ('record_id', 'id', 'b_key', 'trap'),
}

REQUIRED_FIELDS = ('age_class', 'sex', 'site_code', 'capture_date', 'hind_foot_length', 'weight')


def resolve_columns(header: Iterable[str]) -> Dict[str, Optional[str]]:
    """
    Map each Observation field to the matching header column, or None.

    Args:
        header: Column names from the file.

    Returns:
        Dict of field name -> column name in the file.
    """
    lower_to_actual = {name.strip().lower(): name for name in header if name is not None}
    resolved: Dict[str, Optional[str]] = {}
    for field_name, aliases in COLUMN_ALIASES.items():
        resolved[field_name] = next((lower_to_actual[a] for a in aliases if a in lower_to_actual), None)
    return resolved


@dataclass
class LoadResult:
    """Observations read from a file, plus issues for rows that were skipped."""
    observations: List[Observation] = field(default_factory=list)
    issues: List[Issue] = field(default_factory=list)
    rows_read: int = 0

    @property
    def skipped_rows(self) -> int:
        return self.rows_read - len(self.observations)


def observations_from_rows(rows: Iterable[Mapping[str, str]], header: Sequence[str], on_parse_error: str = "skip") -> LoadResult:
    """
    Convert CSV rows into Observations.

    Args:
        rows: Row mappings (e.g. from csv.DictReader).
        header: The column names of the rows.
        on_parse_error: 'skip' to record a warning issue and skip the row,
            'raise' to propagate the ParseError.

    Returns:
        LoadResult with observations in file order.

    Raises:
        ValueError: If a required column is missing from the header.
        ParseError: If on_parse_error is 'raise' and a row is malformed.
    """
    columns = resolve_columns(header)
    missing = [name for name in REQUIRED_FIELDS if columns[name] is None]
    if missing:
        raise ValueError(f"Missing required column(s): {', '.join(missing)}")

    result = LoadResult()
    for row_num, row in enumerate(rows, start=1):
        result.rows_read += 1
        record_id = row.get(columns['record_id']) if columns['record_id'] else None
        record_id = record_id or f"row {row_num}"
        try:
            observation = Observation.from_raw(
                age_class=row.get(columns['age_class']),
                sex=row.get(columns['sex']),
                site_code=row.get(columns['site_code']),
                capture_date=row.get(columns['capture_date']),
                hind_foot_length=row.get(columns['hind_foot_length']),
                weight=row.get(columns['weight']),
                record_id=record_id,
            )
        except ParseError as e:
            if on_parse_error == "raise":
                raise
            logger.warning(f"Skipping {record_id}: {e}")
            result.issues.append(Issue(
                issue_type=f"malformed_{e.field_name or 'field'}",
                severity="warning",
                message=str(e),
                record_id=record_id,
            ))
            continue
        result.observations.append(observation)
    return result


def load_observations(csv_path: Path, on_parse_error: str = "skip", encoding: str = 'utf-8') -> LoadResult:
    """
    Load trapping records from a CSV file.

    Args:
        csv_path: Path to the CSV file.
        on_parse_error: 'skip' or 'raise' for malformed numeric fields.
        encoding: File encoding.

    Returns:
        LoadResult with the parsed observations and any row issues.
    """
    csv_path = Path(csv_path)
    with open(csv_path, 'r', encoding=encoding, newline='') as f:
        csv_reader = csv.DictReader(f, dialect='excel')
        header = csv_reader.fieldnames or []
        result = observations_from_rows(csv_reader, header, on_parse_error=on_parse_error)
    logger.info(f"Loaded {len(result.observations)} observations from {csv_path} "
                f"({result.skipped_rows} rows skipped)")
    return result
