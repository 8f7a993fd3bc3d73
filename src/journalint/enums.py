"""Enumerations for journalint type-safe constants.

Uses StrEnum so members compare and serialize as plain strings.

Python 3.13+.
"""

from enum import StrEnum


class TimeErrorKind(StrEnum):
    """Reason a loose time token could not be resolved against a date.

    StrEnum provides automatic string conversion:
    str(TimeErrorKind.DATE_OVERFLOW) == "date-overflow"
    """

    NOT_TWO_FIELDS = "not-two-fields"
    """Token does not split into exactly two colon-separated fields: 2:4:56"""

    NON_NUMERIC_HOUR = "non-numeric-hour"
    """Hour field contains a non-digit: 2z:56"""

    NON_NUMERIC_MINUTE = "non-numeric-minute"
    """Minute field contains a non-digit: 24:5z"""

    MINUTE_OUT_OF_RANGE = "minute-out-of-range"
    """Minute field is greater than 59: 00:61"""

    DATE_OVERFLOW = "date-overflow"
    """Day overflow moves past the last representable calendar date"""


class OutputFormat(StrEnum):
    """Output format options for the diagnostic report."""

    ONELINE = "oneline"  # file:line:col: rule message
    FANCY = "fancy"  # Annotated source excerpt with caret underline
    JSON = "json"  # One JSON object per line for tooling integration


class ExportFormat(StrEnum):
    """Serialization formats for exported journal entries."""

    JSON = "json"  # JSON Lines, one object per entry
    CSV = "csv"  # Comma-separated values with a header row


__all__ = [
    "ExportFormat",
    "OutputFormat",
    "TimeErrorKind",
]
