"""Auto-fix commands.

Three rules carry a fix: incorrect-duration, time-jumped and date-mismatch.
Each fix is a command that locates its target node in the AST from a
selection (the diagnostic's span, or an editor selection), computes the
replacement from the AST and returns a TextEdit over the original text.

fix_source() drives the commands the way the command line does: lint,
apply the first available fix, lint again, until nothing is left to fix.
"""

import logging
from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from journalint.constants import MAX_FIX_ITERATIONS
from journalint.core import LooseTime
from journalint.diagnostics import (
    CommandError,
    CommandTargetNotFoundError,
    Diagnostic,
    MissingRequiredValueError,
    Rule,
    Span,
)
from journalint.lint import date_from_source, parse_and_lint
from journalint.syntax import (
    Duration,
    EndTime,
    Entry,
    FrontMatterDate,
    Journal,
    JournalVisitor,
    StartTime,
    walk,
)

__all__ = [
    "AutofixCommand",
    "TextEdit",
    "default_autofix",
    "fix_source",
]

logger = logging.getLogger(__name__)

_SECONDS_PER_HOUR = 3600


@dataclass(frozen=True, slots=True)
class TextEdit:
    """Replacement of a span of the original text.

    Example:
        >>> TextEdit(Span(2, 7), "10:15").apply("- 10:30-11:00")
        '- 10:15-11:00'
    """

    span: Span
    new_text: str

    def apply(self, text: str) -> str:
        """Return text with the span replaced.

        Raises:
            ValueError: If the span lies outside text
        """
        if self.span.end > len(text):
            msg = f"Edit span {self.span.start}..{self.span.end} exceeds text length {len(text)}"
            raise ValueError(msg)
        return text[: self.span.start] + self.new_text + text[self.span.end :]


# ============================================================================
# TARGET LOCATORS
# ============================================================================


class _DurationLocator(JournalVisitor):
    """Finds the first duration overlapping the selection and its entry's times."""

    def __init__(self, selection: Span) -> None:
        self.selection = selection
        self.reference_date: date | None = None
        self.start: LooseTime | None = None
        self.end: LooseTime | None = None
        self.target: Duration | None = None
        self._entry_start: LooseTime | None = None
        self._entry_end: LooseTime | None = None

    def visit_FrontMatterDate(self, node: FrontMatterDate) -> None:
        self.reference_date = node.value.value

    def visit_StartTime(self, node: StartTime) -> None:
        self._entry_start = node.value

    def visit_EndTime(self, node: EndTime) -> None:
        self._entry_end = node.value

    def visit_Duration(self, node: Duration) -> None:
        if self.target is None and node.span.overlaps(self.selection):
            self.target = node
            self.start = self._entry_start
            self.end = self._entry_end


class _StartTimeLocator(JournalVisitor):
    """Finds the first start time overlapping the selection and the end before it."""

    def __init__(self, selection: Span) -> None:
        self.selection = selection
        self.target: StartTime | None = None
        self.previous_end: EndTime | None = None
        self._last_end: EndTime | None = None
        self._current_end: EndTime | None = None

    def visit_StartTime(self, node: StartTime) -> None:
        if self.target is None and node.span.overlaps(self.selection):
            self.target = node
            self.previous_end = self._last_end

    def visit_EndTime(self, node: EndTime) -> None:
        self._current_end = node

    def leave_Entry(self, node: Entry) -> None:
        self._last_end = self._current_end
        self._current_end = None


class _FrontMatterDateLocator(JournalVisitor):
    """Finds the front matter date."""

    def __init__(self) -> None:
        self.target: FrontMatterDate | None = None

    def visit_FrontMatterDate(self, node: FrontMatterDate) -> None:
        self.target = node


# ============================================================================
# COMMANDS
# ============================================================================


def _recalculate_duration(journal: Journal, selection: Span) -> TextEdit | None:
    locator = _DurationLocator(selection)
    walk(journal, locator)
    if locator.target is None:
        msg = f"No duration at {selection.start}..{selection.end}"
        raise CommandTargetNotFoundError(msg)
    if locator.reference_date is None:
        msg = "The front matter has no valid date to resolve times against"
        raise MissingRequiredValueError(msg)
    if locator.start is None or locator.end is None:
        msg = "The entry of the selected duration has no start or end time"
        raise MissingRequiredValueError(msg)

    start = locator.start.to_datetime(locator.reference_date)
    end = locator.end.to_datetime(locator.reference_date)
    if end < start:
        msg = f"Cannot compute a duration: {locator.end} is before {locator.start}"
        raise CommandError(msg)
    hours = (end - start).total_seconds() / _SECONDS_PER_HOUR
    new_text = f"{hours:.2f}"
    if new_text == locator.target.raw:
        return None
    return TextEdit(locator.target.span, new_text)


def _replace_with_previous_end_time(journal: Journal, selection: Span) -> TextEdit | None:
    locator = _StartTimeLocator(selection)
    walk(journal, locator)
    if locator.target is None:
        msg = f"No start time at {selection.start}..{selection.end}"
        raise CommandTargetNotFoundError(msg)
    if locator.previous_end is None:
        msg = "The selected entry has no previous entry"
        raise MissingRequiredValueError(msg)
    if locator.previous_end.value == locator.target.value:
        return None
    return TextEdit(locator.target.span, locator.previous_end.value.raw)


def _use_date_in_filename(journal: Journal, source: str | None) -> TextEdit | None:
    expected = date_from_source(source)
    if expected is None:
        msg = f"No date in the file name of '{source}'"
        raise MissingRequiredValueError(msg)
    locator = _FrontMatterDateLocator()
    walk(journal, locator)
    if locator.target is None:
        msg = "The front matter has no valid date field"
        raise CommandTargetNotFoundError(msg)
    if locator.target.value == expected:
        return None
    return TextEdit(locator.target.span, str(expected))


class AutofixCommand(StrEnum):
    """Auto-fix command; the value is its machine-readable identifier."""

    RECALCULATE_DURATION = "journalint.recalculateDuration"
    REPLACE_WITH_PREVIOUS_END_TIME = "journalint.replaceWithPreviousEndTime"
    USE_DATE_IN_FILENAME = "journalint.useDateInFilename"

    @property
    def title(self) -> str:
        """Short description for user interfaces."""
        match self:
            case AutofixCommand.RECALCULATE_DURATION:
                return "Recalculate duration by the interval between start and end time"
            case AutofixCommand.REPLACE_WITH_PREVIOUS_END_TIME:
                return "Replace with the previous entry's end time"
            case AutofixCommand.USE_DATE_IN_FILENAME:
                return "Use date embedded in the filename"

    @property
    def rule(self) -> Rule:
        """Rule whose diagnostics this command fixes."""
        match self:
            case AutofixCommand.RECALCULATE_DURATION:
                return Rule.INCORRECT_DURATION
            case AutofixCommand.REPLACE_WITH_PREVIOUS_END_TIME:
                return Rule.TIME_JUMPED
            case AutofixCommand.USE_DATE_IN_FILENAME:
                return Rule.MISMATCHED_DATES

    def execute(
        self, journal: Journal, selection: Span, source: str | None = None
    ) -> TextEdit | None:
        """Compute the edit for the node at the selection.

        Args:
            journal: Parsed journal
            selection: Span the command was invoked on
            source: Path or URI of the document (needed for the file name date)

        Returns:
            The edit, or None if the text already has the fixed value

        Raises:
            CommandTargetNotFoundError: No node to edit at the selection
            MissingRequiredValueError: A value the edit depends on is absent
            CommandError: The edit cannot be computed
            InvalidTimeValueError: A time the edit depends on is unresolvable
        """
        match self:
            case AutofixCommand.RECALCULATE_DURATION:
                return _recalculate_duration(journal, selection)
            case AutofixCommand.REPLACE_WITH_PREVIOUS_END_TIME:
                return _replace_with_previous_end_time(journal, selection)
            case AutofixCommand.USE_DATE_IN_FILENAME:
                return _use_date_in_filename(journal, source)


def default_autofix(rule: Rule) -> AutofixCommand | None:
    """Command that fixes diagnostics of a rule, if the rule is fixable."""
    for command in AutofixCommand:
        if command.rule is rule:
            return command
    return None


def _first_fix(
    journal: Journal, diagnostics: tuple[Diagnostic, ...], text: str, source: str | None
) -> TextEdit | None:
    for diagnostic in diagnostics:
        command = default_autofix(diagnostic.rule)
        if command is None:
            continue
        edit = command.execute(journal, diagnostic.span, source)
        if edit is None or edit.apply(text) == text:
            continue
        logger.info(
            "Applying %s to %s at %d..%d",
            command,
            diagnostic.rule,
            edit.span.start,
            edit.span.end,
        )
        return edit
    return None


def fix_source(
    text: str, source: str | None = None, *, max_iterations: int = MAX_FIX_ITERATIONS
) -> tuple[str, int]:
    """Apply auto-fixes until none is left.

    Each round parses and lints the current text and applies the fix of the
    first diagnostic that has one. Later fixes therefore see the effect of
    earlier ones (fixing one entry's start can change the next time jump).

    Args:
        text: Document text
        source: Path or URI of the document
        max_iterations: Upper bound on rounds

    Returns:
        (fixed text, number of fixes applied)

    Raises:
        JournalintError: A fix command failed
    """
    applied = 0
    for _ in range(max_iterations):
        journal, diagnostics = parse_and_lint(source, text)
        if journal is None:
            break
        edit = _first_fix(journal, diagnostics, text, source)
        if edit is None:
            break
        text = edit.apply(text)
        applied += 1
    else:
        logger.warning("Stopped auto-fix after %d rounds", max_iterations)
    return text, applied
