"""Diagnostic message templates.

Centralized message templates for testable, consistent diagnostics.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, RelatedInformation, Rule, Span

__all__ = ["DiagnosticTemplate"]


class DiagnosticTemplate:
    """Centralized diagnostic message templates.

    Every diagnostic the parser or the linter emits is created here, so the
    wording of each rule lives in exactly one place and tests can compare
    against the factory output instead of duplicating message strings.
    """

    # ========================================================================
    # PARSER
    # ========================================================================

    @staticmethod
    def parse_error(span: Span, message: str) -> Diagnostic:
        """Syntax error reported by the parser.

        Args:
            span: Location of the offending text
            message: Description of the first failing production

        Returns:
            Diagnostic for PARSE_ERROR with error severity
        """
        return Diagnostic(
            span=span,
            rule=Rule.PARSE_ERROR,
            message=f"Parse error: {message}",
            severity="error",
        )

    # ========================================================================
    # FRONT MATTER
    # ========================================================================

    @staticmethod
    def mismatched_dates(span: Span, expected: str) -> Diagnostic:
        """Front matter date differs from the date in the file name.

        Args:
            span: Location of the front matter date value
            expected: Date taken from the file name, formatted YYYY-MM-DD

        Returns:
            Diagnostic for MISMATCHED_DATES suggesting the file name date
        """
        return Diagnostic(
            span=span,
            rule=Rule.MISMATCHED_DATES,
            message=f"Date is different from the one in the filename: expected to be {expected}",
            suggestion=expected,
        )

    @staticmethod
    def mismatched_start_time(span: Span, expected: str) -> Diagnostic:
        """Front matter start time differs from the first entry's start time."""
        return Diagnostic(
            span=span,
            rule=Rule.MISMATCHED_START_TIME,
            message=(
                "Start time is different from the one of the first entry: "
                f"expected to be {expected}."
            ),
        )

    @staticmethod
    def mismatched_end_time(
        span: Span, expected: str, uri: str, last_end_span: Span
    ) -> Diagnostic:
        """Front matter end time differs from the last entry's end time.

        Args:
            span: Location of the front matter end value
            expected: Raw end time token of the last entry
            uri: Document identifier for the related location
            last_end_span: Location of the last entry's end time

        Returns:
            Diagnostic for MISMATCHED_END_TIME pointing at the last entry
        """
        return Diagnostic(
            span=span,
            rule=Rule.MISMATCHED_END_TIME,
            message=(
                "End time in the front-matter is different from the one of the last "
                f"entry: expected to be {expected}."
            ),
            related=(
                RelatedInformation(
                    uri=uri,
                    span=last_end_span,
                    message=f"The last entry ends with {expected}.",
                ),
            ),
        )

    @staticmethod
    def missing_field(span: Span, rule: Rule, field_name: str) -> Diagnostic:
        """A front matter field is absent.

        Args:
            span: Location of the whole front matter block
            rule: One of the MISSING_* rules
            field_name: Key of the absent field

        Returns:
            Diagnostic for the given MISSING_* rule
        """
        return Diagnostic(
            span=span,
            rule=rule,
            message=f"Field '{field_name}' is missing",
        )

    # ========================================================================
    # TIME RESOLUTION
    # ========================================================================

    @staticmethod
    def invalid_start_time(span: Span, reason: str) -> Diagnostic:
        """Start time cannot be resolved against the front matter date."""
        return Diagnostic(
            span=span,
            rule=Rule.INVALID_START_TIME,
            message=f"Invalid start time: {reason}",
        )

    @staticmethod
    def invalid_end_time(span: Span, reason: str) -> Diagnostic:
        """End time cannot be resolved against the front matter date."""
        return Diagnostic(
            span=span,
            rule=Rule.INVALID_END_TIME,
            message=f"Invalid end time: {reason}",
        )

    # ========================================================================
    # ENTRIES
    # ========================================================================

    @staticmethod
    def time_jumped(span: Span, previous_end: str, uri: str, previous_span: Span) -> Diagnostic:
        """Entry does not start where the previous entry ended.

        Args:
            span: Location of this entry's start time
            previous_end: Raw end time token of the previous entry
            uri: Document identifier for the related location
            previous_span: Location of the previous entry's end time

        Returns:
            Diagnostic for TIME_JUMPED suggesting the previous end time
        """
        return Diagnostic(
            span=span,
            rule=Rule.TIME_JUMPED,
            message=(
                "The start time does not match the previous entry's end time, "
                f"which is {previous_end}"
            ),
            suggestion=previous_end,
            related=(
                RelatedInformation(
                    uri=uri,
                    span=previous_span,
                    message=f"Previous entry's end time is {previous_end}",
                ),
            ),
        )

    @staticmethod
    def negative_time_range(span: Span, start: str) -> Diagnostic:
        """Entry ends before it starts."""
        return Diagnostic(
            span=span,
            rule=Rule.NEGATIVE_TIME_RANGE,
            message=f"End time is not ahead of start time ({start})",
        )

    @staticmethod
    def incorrect_duration(span: Span, expected: str) -> Diagnostic:
        """Written duration differs from end minus start.

        Args:
            span: Location of the duration literal
            expected: Correct duration in hours with two decimals

        Returns:
            Diagnostic for INCORRECT_DURATION suggesting the correct value
        """
        return Diagnostic(
            span=span,
            rule=Rule.INCORRECT_DURATION,
            message=f"Incorrect duration: expected {expected}",
            suggestion=expected,
        )
