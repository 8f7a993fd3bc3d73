"""Diagnostic codes and data structures.

Defines rule identifiers, source spans, and diagnostic records.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Literal

__all__ = [
    "Diagnostic",
    "RelatedInformation",
    "Rule",
    "Severity",
    "Span",
]

type Severity = Literal["error", "warning"]


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open range of character offsets into the source text.

    Offsets index the Python ``str`` that was parsed (code points, not
    UTF-8 bytes). Editor-facing collaborators translate them through
    ``journalint.syntax.position.LineMap``.

    Attributes:
        start: Starting offset (inclusive)
        end: Ending offset (exclusive)

    Example:
        Source: "- 09:00-10:15 ABC 1.25 work"
        Start time span: Span(start=2, end=7)
        Entry span: Span(start=0, end=27)
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate span invariants."""
        if self.start < 0:
            msg = f"Span start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"Span end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)

    def overlaps(self, other: "Span") -> bool:
        """Check whether two spans share a position, touching ends included.

        A caret (empty span) at either end of a token selects that token.
        """
        return max(self.start, other.start) <= min(self.end, other.end)


class Rule(StrEnum):
    """Closed set of diagnostic categories.

    Values are the stable identifiers used as machine-readable diagnostic
    codes and as keys of the command line ``--rule`` filter.
    """

    PARSE_ERROR = "parse-error"
    MISMATCHED_DATES = "date-mismatch"
    MISMATCHED_START_TIME = "starttime-mismatch"
    MISMATCHED_END_TIME = "endtime-mismatch"
    INVALID_START_TIME = "invalid-start-time"
    INVALID_END_TIME = "invalid-end-time"
    MISSING_DATE = "missing-date"
    MISSING_START_TIME = "missing-start-time"
    MISSING_END_TIME = "missing-end-time"
    TIME_JUMPED = "time-jumped"
    NEGATIVE_TIME_RANGE = "negative-time-range"
    INCORRECT_DURATION = "incorrect-duration"

    @classmethod
    def parse(cls, text: str) -> "Rule":
        """Look up a rule by its stable identifier.

        Raises:
            UnknownRuleError: If no rule has that identifier
        """
        from .errors import UnknownRuleError  # noqa: PLC0415 - circular

        try:
            return cls(text)
        except ValueError:
            raise UnknownRuleError(text) from None


@dataclass(frozen=True, slots=True)
class RelatedInformation:
    """Secondary location attached to a diagnostic.

    Attributes:
        uri: Document identifier (path or URI) the span refers to
        span: Location in that document
        message: Explanation of why the location is relevant
    """

    uri: str
    span: Span
    message: str


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Positioned finding produced by the parser or the linter.

    Attributes:
        span: Source location of the finding
        rule: Category of the finding
        message: Human-readable description
        severity: "error" for parse errors, "warning" for lint rules
        suggestion: Replacement text for the span that resolves the finding
        related: Other locations that explain the finding
    """

    span: Span
    rule: Rule
    message: str
    severity: Severity = "warning"
    suggestion: str | None = None
    related: tuple[RelatedInformation, ...] | None = None

    def __str__(self) -> str:
        """Return human-readable description."""
        return self.message
