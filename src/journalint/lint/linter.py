"""Consistency checks over a parsed journal.

The linter is a single pass over the AST. Each rule is evaluated at the
callback where its inputs become available: front matter rules when the
front matter is complete, per-entry rules at the entry's time and duration
callbacks, and the end-of-day rule when the journal is complete. The one
piece of state carried across entries is the previous entry's end time.

Rules:
    date-mismatch        front matter date differs from the file name date
    starttime-mismatch   front matter start differs from the first entry's start
    endtime-mismatch     front matter end differs from the last entry's end
    invalid-start-time   a start time cannot be resolved against the date
    invalid-end-time     an end time cannot be resolved against the date
    missing-date         no date field in the front matter
    missing-start-time   no start field in the front matter
    missing-end-time     no end field in the front matter
    time-jumped          an entry does not start where the previous one ended
    negative-time-range  an entry ends before it starts
    incorrect-duration   a written duration differs from end minus start

A failed time resolution is reported once and withholds the checks that
depend on it; no rule raises on input-derived problems.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from pathlib import PurePath
from urllib.parse import unquote, urlparse

from journalint.constants import DURATION_TOLERANCE
from journalint.core import LooseDate, LooseTime
from journalint.diagnostics import (
    Diagnostic,
    DiagnosticTemplate,
    InvalidTimeValueError,
    Rule,
    Span,
)
from journalint.syntax import (
    Duration,
    EndTime,
    Entry,
    FrontMatter,
    FrontMatterDate,
    FrontMatterEndTime,
    FrontMatterStartTime,
    Journal,
    JournalParser,
    JournalVisitor,
    StartTime,
    walk,
)

__all__ = ["LintState", "Linter", "date_from_source", "lint", "parse_and_lint"]

logger = logging.getLogger(__name__)

_SECONDS_PER_HOUR = 3600


def date_from_source(source: str | None) -> LooseDate | None:
    """Extract the date encoded in a document identifier's file name.

    Accepts file system paths and URIs; the file stem must be exactly
    ``YYYY-MM-DD``.

    Examples:
        "/journals/2006-01-02.md" -> LooseDate(2006-01-02)
        "file:///journals/2006-01-02.md" -> LooseDate(2006-01-02)
        "notes.md" -> None
    """
    if not source:
        return None
    path = source
    if "://" in source:
        path = unquote(urlparse(source).path)
    try:
        return LooseDate.parse(PurePath(path).stem)
    except ValueError:
        return None


@dataclass(frozen=True, slots=True)
class _ResolvedTime:
    """A time token together with its resolved timestamp."""

    value: datetime
    raw: str
    span: Span


@dataclass(slots=True)
class LintState:
    """Mutable state of one lint traversal.

    Created fresh for every Linter.lint() call and discarded afterwards.

    Attributes:
        reference_date: Front matter date, the reference for every time resolution
        front_matter_start: Front matter start field, if present
        front_matter_end: Front matter end field, if present
        front_matter_end_value: Resolved front matter end time
        seen_first_entry_start: Whether the first entry's start was visited
        current_start: Resolved start of the entry being visited
        current_end: Resolved end of the entry being visited
        previous_end: Resolved end of the last completed entry
        in_entry: Whether an entry is being visited
        diagnostics: Findings in emission order
    """

    reference_date: date | None = None
    front_matter_start: FrontMatterStartTime | None = None
    front_matter_end: FrontMatterEndTime | None = None
    front_matter_end_value: datetime | None = None
    seen_first_entry_start: bool = False
    current_start: _ResolvedTime | None = None
    current_end: _ResolvedTime | None = None
    previous_end: _ResolvedTime | None = None
    in_entry: bool = False
    diagnostics: list[Diagnostic] = field(default_factory=list)


class _LintVisitor(JournalVisitor):
    """Evaluates the rules at their callbacks, writing into a LintState."""

    __slots__ = ("_filename_date", "_state", "_tolerance", "_uri")

    def __init__(
        self,
        state: LintState,
        uri: str,
        filename_date: LooseDate | None,
        tolerance: timedelta,
    ) -> None:
        self._state = state
        self._uri = uri
        self._filename_date = filename_date
        self._tolerance = tolerance

    def _emit(self, diagnostic: Diagnostic) -> None:
        logger.debug(
            "%s at %d..%d: %s",
            diagnostic.rule,
            diagnostic.span.start,
            diagnostic.span.end,
            diagnostic.message,
        )
        self._state.diagnostics.append(diagnostic)

    def _resolve(self, time: LooseTime, span: Span, *, is_start: bool) -> _ResolvedTime | None:
        """Resolve a time against the front matter date, reporting failures."""
        if self._state.reference_date is None:
            return None
        try:
            return _ResolvedTime(time.to_datetime(self._state.reference_date), time.raw, span)
        except InvalidTimeValueError as e:
            if is_start:
                self._emit(DiagnosticTemplate.invalid_start_time(span, str(e)))
            else:
                self._emit(DiagnosticTemplate.invalid_end_time(span, str(e)))
            return None

    # ========================================================================
    # FRONT MATTER
    # ========================================================================

    def visit_FrontMatterDate(self, node: FrontMatterDate) -> None:
        self._state.reference_date = node.value.value
        expected = self._filename_date
        if expected is not None and expected != node.value:
            self._emit(DiagnosticTemplate.mismatched_dates(node.span, str(expected)))

    def visit_FrontMatterStartTime(self, node: FrontMatterStartTime) -> None:
        self._state.front_matter_start = node

    def visit_FrontMatterEndTime(self, node: FrontMatterEndTime) -> None:
        self._state.front_matter_end = node

    def leave_FrontMatter(self, node: FrontMatter) -> None:
        state = self._state
        if state.front_matter_start is not None:
            start = state.front_matter_start
            self._resolve(start.value, start.span, is_start=True)
        if state.front_matter_end is not None:
            end = state.front_matter_end
            resolved = self._resolve(end.value, end.span, is_start=False)
            state.front_matter_end_value = resolved.value if resolved is not None else None

        if node.date is None:
            self._emit(DiagnosticTemplate.missing_field(node.span, Rule.MISSING_DATE, "date"))
        if node.start is None:
            self._emit(
                DiagnosticTemplate.missing_field(node.span, Rule.MISSING_START_TIME, "start")
            )
        if node.end is None:
            self._emit(DiagnosticTemplate.missing_field(node.span, Rule.MISSING_END_TIME, "end"))

    # ========================================================================
    # ENTRIES
    # ========================================================================

    def visit_Entry(self, node: Entry) -> None:
        if self._state.in_entry:
            msg = f"Entry at {node.span.start} visited while another entry is open"
            raise RuntimeError(msg)
        self._state.in_entry = True

    def visit_StartTime(self, node: StartTime) -> None:
        state = self._state
        state.current_start = self._resolve(node.value, node.span, is_start=True)

        if not state.seen_first_entry_start:
            state.seen_first_entry_start = True
            expected = state.front_matter_start
            if expected is not None and expected.value != node.value:
                self._emit(DiagnosticTemplate.mismatched_start_time(expected.span, node.value.raw))

        previous = state.previous_end
        current = state.current_start
        if previous is not None and current is not None and previous.value != current.value:
            self._emit(
                DiagnosticTemplate.time_jumped(node.span, previous.raw, self._uri, previous.span)
            )

    def visit_EndTime(self, node: EndTime) -> None:
        self._state.current_end = self._resolve(node.value, node.span, is_start=False)

    def visit_Duration(self, node: Duration) -> None:
        start = self._state.current_start
        end = self._state.current_end
        if start is None or end is None:
            return
        actual = end.value - start.value
        if actual < timedelta(0):
            self._emit(DiagnosticTemplate.negative_time_range(end.span, start.raw))
            return
        if abs(node.value - actual) > self._tolerance:
            hours = actual.total_seconds() / _SECONDS_PER_HOUR
            self._emit(DiagnosticTemplate.incorrect_duration(node.span, f"{hours:.2f}"))

    def leave_Entry(self, node: Entry) -> None:
        state = self._state
        state.previous_end = state.current_end
        state.current_start = None
        state.current_end = None
        state.in_entry = False

    def leave_Journal(self, node: Journal) -> None:
        state = self._state
        expected = state.front_matter_end
        actual = state.front_matter_end_value
        last_end = state.previous_end
        if expected is None or actual is None or last_end is None:
            return
        if actual != last_end.value:
            self._emit(
                DiagnosticTemplate.mismatched_end_time(
                    expected.span, last_end.raw, self._uri, last_end.span
                )
            )


class Linter:
    """Journal linter.

    Holds configuration only. All traversal state lives in a LintState
    created per lint() call, so one Linter can check any number of
    documents, concurrently if the caller wishes.

    Usage:
        linter = Linter("/journals/2006-01-02.md")
        for diagnostic in linter.lint(journal):
            print(diagnostic.rule, diagnostic.message)
    """

    __slots__ = ("_duration_tolerance", "_source")

    def __init__(
        self,
        source: str | None = None,
        *,
        duration_tolerance: timedelta = DURATION_TOLERANCE,
    ) -> None:
        """Initialize linter.

        Args:
            source: Path or URI of the document. Its file name supplies the
                expected date and it is the location of related information.
            duration_tolerance: Largest accepted difference between a
                written duration and end minus start
        """
        self._source = source
        self._duration_tolerance = duration_tolerance

    @property
    def source(self) -> str | None:
        """Document identifier, if any."""
        return self._source

    def lint(self, journal: Journal) -> tuple[Diagnostic, ...]:
        """Check a journal.

        Args:
            journal: Parsed journal

        Returns:
            Diagnostics in the order the traversal found them
        """
        state = LintState()
        visitor = _LintVisitor(
            state,
            uri=self._source or "",
            filename_date=date_from_source(self._source),
            tolerance=self._duration_tolerance,
        )
        walk(journal, visitor)
        return tuple(state.diagnostics)


def lint(journal: Journal, source: str | None = None) -> tuple[Diagnostic, ...]:
    """Check a journal with the default configuration.

    Convenience function for Linter(source).lint(journal).
    """
    return Linter(source).lint(journal)


def parse_and_lint(
    source: str | None, text: str
) -> tuple[Journal | None, tuple[Diagnostic, ...]]:
    """Parse and check a document.

    Parse errors are converted to diagnostics and come first. When the
    document has no usable front matter only the parse errors are returned.

    Args:
        source: Path or URI of the document, if known
        text: Document text

    Returns:
        (journal, diagnostics)

    Raises:
        ValueError: If text exceeds the parser's size limit
    """
    journal, errors = JournalParser().parse(text)
    diagnostics = tuple(error.to_diagnostic() for error in errors)
    if journal is None:
        return None, diagnostics
    return journal, diagnostics + Linter(source).lint(journal)
