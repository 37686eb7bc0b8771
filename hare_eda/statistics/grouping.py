"""
Grouped counts and grouped descriptive statistics.

Groups are formed by a key extractor applied to each record; results are
returned as dicts ordered by sorted key so repeated runs print identically.
Keys that cannot be compared with each other (e.g. None next to str) are
ordered by their string form with None last.
"""
from __future__ import annotations

from collections import Counter, defaultdict
import logging
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, TypeVar

from hare_eda.errors import EmptyGroupError, UndefinedStatisticError
from hare_eda.statistics.descriptive import describe, drop_missing
from hare_eda.statistics.model import GroupSummary

logger = logging.getLogger(__name__)

R = TypeVar("R")
KeyFn = Callable[[R], Hashable]
NumericFn = Callable[[R], Optional[float]]


def _sort_token(part: Any) -> tuple:
    if part is None:
        return (2, "")
    if isinstance(part, (int, float)) and not isinstance(part, bool):
        return (0, part)
    return (1, str(part))


def sort_key(key: Hashable) -> tuple:
    """Total ordering over group keys, including tuples containing None."""
    if isinstance(key, tuple):
        return tuple(_sort_token(part) for part in key)
    return (_sort_token(key),)


def count_by_group(records: Iterable[R], key_fn: KeyFn) -> Dict[Hashable, int]:
    """
    Count records per group key.

    Args:
        records: Records to count.
        key_fn: Function returning the group key of a record.

    Returns:
        Dict of key -> count, ordered by key.
    """
    counts = Counter(key_fn(record) for record in records)
    return {key: counts[key] for key in sorted(counts, key=sort_key)}


def summarize_by_group(
    records: Iterable[R],
    key_fn: KeyFn,
    numeric_fn: NumericFn,
    strict: bool = False,
) -> Dict[Hashable, GroupSummary]:
    """
    Mean, sample sd and sample size of a numeric field per group.

    Only non-missing values of numeric_fn count towards n. A group with n == 0
    has no mean; a group with n < 2 has no sd.

    Args:
        records: Records to summarize.
        key_fn: Function returning the group key of a record.
        numeric_fn: Function returning the numeric value (or None) of a record.
        strict: If True, raise instead of reporting undefined statistics as None.

    Returns:
        Dict of key -> GroupSummary, ordered by key.

    Raises:
        EmptyGroupError: strict and a group has no non-missing values.
        UndefinedStatisticError: strict and a group has a single value.
    """
    members: Dict[Hashable, List[Any]] = defaultdict(list)
    for record in records:
        members[key_fn(record)].append(numeric_fn(record))

    summaries: Dict[Hashable, GroupSummary] = {}
    for key in sorted(members, key=sort_key):
        raw_values = members[key]
        values = drop_missing(raw_values)
        desc = describe(values)

        if desc['n'] == 0:
            if strict:
                raise EmptyGroupError(f"Group {key!r} has no non-missing values")
            logger.warning(f"Group {key!r}: no non-missing values, mean and sd undefined")
        elif desc['n'] == 1:
            if strict:
                raise UndefinedStatisticError(f"Group {key!r} has a single value, sd undefined")
            logger.warning(f"Group {key!r}: single value, sd undefined")

        summaries[key] = GroupSummary(
            key=key,
            count=len(raw_values),
            n=desc['n'],
            mean=desc['mean'],
            sd=desc['sd'],
            median=desc['median'],
            min=desc['min'],
            max=desc['max'],
        )
    return summaries


# Common key and value extractors for derived observations

def by_year(record: Any) -> Optional[int]:
    return getattr(record, 'capture_year', None)


def by_sex(record: Any) -> Optional[str]:
    return getattr(record, 'sex', None)


def by_site(record: Any) -> Optional[str]:
    return getattr(record, 'site_label', None)


def by_sex_and_site(record: Any) -> tuple:
    return (by_sex(record), by_site(record))


def weight_of(record: Any) -> Optional[float]:
    return getattr(record, 'weight', None)


def hind_foot_of(record: Any) -> Optional[float]:
    return getattr(record, 'hind_foot_length', None)
