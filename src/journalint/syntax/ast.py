"""Journal AST (Abstract Syntax Tree) node definitions.

Every node is immutable and carries the span of the text it was built from,
so diagnostics and auto-fix edits can point at exact source locations.
Type guards are static methods on the nodes that need them.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import TypeIs

from journalint.core import LooseDate, LooseTime
from journalint.diagnostics import Span

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Base types
    "Span",
    # Document structure
    "Journal",
    "FrontMatter",
    "FrontMatterDate",
    "FrontMatterStartTime",
    "FrontMatterEndTime",
    # Lines
    "Entry",
    "StartTime",
    "EndTime",
    "Code",
    "Duration",
    "Activity",
    "NonTargetLine",
    "Junk",
    # Type aliases
    "Line",
    "ASTNode",
]

# ============================================================================
# FRONT MATTER
# ============================================================================


@dataclass(frozen=True, slots=True)
class FrontMatterDate:
    """``date:`` field of the front matter. The span covers the value only."""

    value: LooseDate
    span: Span


@dataclass(frozen=True, slots=True)
class FrontMatterStartTime:
    """``start:`` field of the front matter. The span covers the value only."""

    value: LooseTime
    span: Span


@dataclass(frozen=True, slots=True)
class FrontMatterEndTime:
    """``end:`` field of the front matter. The span covers the value only."""

    value: LooseTime
    span: Span


@dataclass(frozen=True, slots=True)
class FrontMatter:
    """Metadata block between the two ``---`` delimiter lines.

    Attributes:
        date: Date field, a Junk node when the value is malformed, or None
        start: Start time field, or None when absent
        end: End time field, or None when absent
        span: From the opening delimiter through the closing delimiter line
    """

    date: "FrontMatterDate | Junk | None"
    start: FrontMatterStartTime | None
    end: FrontMatterEndTime | None
    span: Span


# ============================================================================
# ENTRY COMPONENTS
# ============================================================================


@dataclass(frozen=True, slots=True)
class StartTime:
    """Start time token of an entry."""

    value: LooseTime
    span: Span


@dataclass(frozen=True, slots=True)
class EndTime:
    """End time token of an entry."""

    value: LooseTime
    span: Span


@dataclass(frozen=True, slots=True)
class Code:
    """Whitespace-free project or category tag."""

    value: str
    span: Span


@dataclass(frozen=True, slots=True)
class Duration:
    """Decimal-hours literal, e.g. ``1.25`` for one hour fifteen minutes.

    Attributes:
        value: Elapsed time rounded to whole seconds
        raw: Literal as written
        span: Location of the literal
    """

    value: timedelta
    raw: str
    span: Span

    @staticmethod
    def guard(node: object) -> TypeIs["Duration"]:
        """Type guard for Duration (the duration slot may hold Junk)."""
        return isinstance(node, Duration)


@dataclass(frozen=True, slots=True)
class Activity:
    """Free text after the duration, verbatim up to the line end."""

    value: str
    span: Span


# ============================================================================
# LINES
# ============================================================================


@dataclass(frozen=True, slots=True)
class Entry:
    """One time-tracking line: ``- START-END [CODE [CODE]] DURATION ACTIVITY``.

    No consistency between the fields is enforced here. An end before the
    start or a duration that disagrees with the range is for the linter to
    report.

    Attributes:
        start: Start time token
        end: End time token
        codes: Zero to two tags, left to right
        duration: Duration literal, or Junk when it is not a valid number
        activity: Remaining text of the line
        span: From the leading dash to the end of the activity
    """

    start: StartTime
    end: EndTime
    codes: tuple[Code, ...]
    duration: "Duration | Junk"
    activity: Activity
    span: Span

    @staticmethod
    def guard(line: object) -> TypeIs["Entry"]:
        """Type guard for Entry (used in line filtering)."""
        return isinstance(line, Entry)


@dataclass(frozen=True, slots=True)
class NonTargetLine:
    """Any line that is not an entry: blank lines, headings, prose.

    Kept as a placeholder so the line structure of the document survives.
    """

    content: str
    span: Span


@dataclass(frozen=True, slots=True)
class Junk:
    """Unparseable content (syntax error recovery).

    Stands in for a malformed entry line, a malformed front matter date, or
    a malformed duration literal. The matching parse error is reported
    separately by the parser.

    Attributes:
        content: The unparseable source text
        message: Description of what failed to parse
        span: Location of the junk content in source
    """

    content: str
    message: str
    span: Span

    @staticmethod
    def guard(node: object) -> TypeIs["Junk"]:
        """Type guard for Junk (used in line filtering)."""
        return isinstance(node, Junk)


# ============================================================================
# DOCUMENT
# ============================================================================


@dataclass(frozen=True, slots=True)
class Journal:
    """Root AST node: front matter followed by every line in source order."""

    front_matter: FrontMatter
    lines: tuple["Line", ...]
    span: Span

    @property
    def entries(self) -> tuple[Entry, ...]:
        """Entry lines only, in source order."""
        return tuple(line for line in self.lines if Entry.guard(line))


# ============================================================================
# TYPE ALIASES
# ============================================================================

type Line = Entry | NonTargetLine | Junk

type ASTNode = (
    Journal
    | FrontMatter
    | FrontMatterDate
    | FrontMatterStartTime
    | FrontMatterEndTime
    | Entry
    | StartTime
    | EndTime
    | Code
    | Duration
    | Activity
    | NonTargetLine
    | Junk
)
