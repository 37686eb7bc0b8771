"""
observation.py - Raw trapping record model.

Provides the Observation class, one row of the hare trapping table, and the
helpers used to normalize the categorical sex and age-class codes.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date as _date
import math
from typing import Any, Optional, Union

from hare_eda.errors import ParseError

SEX_FEMALE = "female"
SEX_MALE = "male"
SEX_UNSPECIFIED = "unspecified"

_SEX_CODES = {
    "f": SEX_FEMALE,
    "female": SEX_FEMALE,
    "m": SEX_MALE,
    "male": SEX_MALE,
}

MISSING_MARKERS = frozenset({"", "na", "n/a", "nan", "null", "none"})


def is_missing(value: Any) -> bool:
    """Return True if value represents an absent field."""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str) and value.strip().lower() in MISSING_MARKERS:
        return True
    return False


def normalize_sex(value: Any) -> str:
    """
    Map a raw sex code to 'female', 'male' or 'unspecified'.

    Args:
        value: Raw code, e.g. 'f', 'M', 'female', None.

    Returns:
        str: Normalized sex label.
    """
    if is_missing(value):
        return SEX_UNSPECIFIED
    return _SEX_CODES.get(str(value).strip().lower(), SEX_UNSPECIFIED)


def normalize_code(value: Any) -> Optional[str]:
    """Lowercase and strip a categorical code; missing becomes None."""
    if is_missing(value):
        return None
    return str(value).strip().lower()


def parse_measurement(value: Any, field_name: str = "", record_id: Optional[str] = None) -> Optional[float]:
    """
    Parse a numeric measurement, treating missing markers as absent.

    Args:
        value: Raw value (str, int, float or None).
        field_name: Field being parsed, used in the error.
        record_id: Record identifier, used in the error.

    Returns:
        float or None: The measurement, or None if absent.

    Raises:
        ParseError: If the value is present but not numeric.
    """
    if is_missing(value):
        return None
    if isinstance(value, bool):
        raise ParseError(f"Boolean is not a valid {field_name or 'measurement'}: {value!r}", value, field_name, record_id)
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            raise ParseError(
                f"Malformed {field_name or 'measurement'} '{value}'" + (f" in record {record_id}" if record_id else ""),
                value, field_name, record_id,
            ) from None
    if math.isnan(number) or math.isinf(number):
        raise ParseError(f"Non-finite {field_name or 'measurement'} '{value}'", value, field_name, record_id)
    return number


@dataclass(frozen=True)
class Observation:
    """
    One trapping record.

    Attributes:
        age_class: Normalized age code (e.g. 'j' for juvenile, 'a' for adult), or None.
        sex: 'female', 'male' or 'unspecified'.
        site_code: Raw trap grid code, e.g. 'bonrip', or None.
        capture_date: Capture date, either parsed or as the raw month/day/year text.
        hind_foot_length: Hind foot length in millimetres, or None if absent.
        weight: Body weight in grams, or None if absent.
        record_id: Optional identifier used when reporting issues.
    """
    age_class: Optional[str] = None
    sex: str = SEX_UNSPECIFIED
    site_code: Optional[str] = None
    capture_date: Union[_date, str, None] = None
    hind_foot_length: Optional[float] = None
    weight: Optional[float] = None
    record_id: Optional[str] = None

    @classmethod
    def from_raw(
        cls,
        age_class: Any = None,
        sex: Any = None,
        site_code: Any = None,
        capture_date: Any = None,
        hind_foot_length: Any = None,
        weight: Any = None,
        record_id: Any = None,
    ) -> Observation:
        """
        Build an Observation from raw (text) field values, normalizing codes.

        Raises:
            ParseError: If hind_foot_length or weight is present but not numeric.
        """
        rid = None if is_missing(record_id) else str(record_id)
        if isinstance(capture_date, str):
            capture_date = None if is_missing(capture_date) else capture_date.strip()
        return cls(
            age_class=normalize_code(age_class),
            sex=normalize_sex(sex),
            site_code=normalize_code(site_code),
            capture_date=capture_date,
            hind_foot_length=parse_measurement(hind_foot_length, "hind_foot_length", rid),
            weight=parse_measurement(weight, "weight", rid),
            record_id=rid,
        )

    def with_record_id(self, record_id: str) -> Observation:
        """Return a copy carrying the given record identifier."""
        return replace(self, record_id=record_id)
