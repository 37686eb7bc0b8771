"""
errors.py - Exception taxonomy for the hare analysis pipeline.

Parse failures are per-record and recoverable; the statistic errors mean a
requested quantity is not mathematically defined for the data supplied.
"""
from __future__ import annotations

from typing import Any, Optional


class HareAnalysisError(Exception):
    """Base class for all errors raised by hare_eda."""


class ParseError(HareAnalysisError, ValueError):
    """
    A date or numeric field could not be parsed.

    Attributes:
        value: The raw text that failed to parse.
        field_name: Name of the field being parsed, if known.
        record_id: Identifier of the offending record, if known.
    """

    def __init__(self, message: str, value: Any = None, field_name: Optional[str] = None, record_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.value = value
        self.field_name = field_name
        self.record_id = record_id


class UndefinedStatisticError(HareAnalysisError, ArithmeticError):
    """A statistic has too few (or too uniform) data points to be defined."""


class EmptyGroupError(UndefinedStatisticError):
    """A group has no non-missing values."""


class InsufficientSampleError(UndefinedStatisticError):
    """A sample is smaller than the minimum size a computation needs."""

    def __init__(self, message: str, n: int = 0, minimum: int = 0) -> None:
        super().__init__(message)
        self.n = n
        self.minimum = minimum


class DegenerateInputError(UndefinedStatisticError):
    """Input has zero variance where a computation divides by it."""
