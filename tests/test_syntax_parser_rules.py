"""Tests for syntax.parser.rules and syntax.parser.primitives.

Exercises individual productions directly with a fresh ParseContext, so
spans and recorded failures can be checked without the document driver.
"""

from __future__ import annotations

from datetime import timedelta

import pytest
from hypothesis import given
from hypothesis import strategies as st

from journalint.diagnostics import Span
from journalint.syntax import Duration, Entry, Junk, NonTargetLine
from journalint.syntax.cursor import Cursor
from journalint.syntax.parser import ParseContext
from journalint.syntax.parser.primitives import (
    is_duration_shaped,
    is_entry_start,
    parse_delimiter_line,
    parse_duration_value,
    parse_time,
)
from journalint.syntax.parser.rules import parse_entry, parse_front_matter, parse_line
from tests.strategies import EXAMPLE_ENTRY, FRONT_MATTER

# ============================================================================
# PRIMITIVES
# ============================================================================


class TestParseTime:
    """Test the time token production."""

    @pytest.mark.parametrize("token", ["09:00", "24:30", "9:5", "100:0007"])
    def test_accepts_digit_pairs(self, token: str) -> None:
        """Any digits ':' digits form is a time token."""
        result = parse_time(Cursor(token + " rest", 0), ParseContext())

        assert result is not None
        assert result.value == token
        assert result.cursor.pos == len(token)

    @pytest.mark.parametrize("source", ["1O:15", ":15", "10:", "10", "ab"])
    def test_rejects_malformed(self, source: str) -> None:
        """Missing digits or colon fail with a recorded reason."""
        context = ParseContext()

        assert parse_time(Cursor(source, 0), context) is None
        assert context.failure is not None
        assert context.failure.message == "Malformed time"
        assert context.failure.span == Span(0, len(source))


class TestDurationPrimitives:
    """Test duration literal helpers."""

    @pytest.mark.parametrize(
        ("text", "seconds"),
        [("1.00", 3600), ("1.25", 4500), (".12", 432), ("12.34", 44424), ("0", 0), ("2.", 7200)],
    )
    def test_decimal_hours_to_seconds(self, text: str, seconds: int) -> None:
        """Decimal hours convert to whole seconds."""
        assert parse_duration_value(text) == timedelta(seconds=seconds)

    @pytest.mark.parametrize("text", ["1.2.1", ".", "..", "", "1e3", "-1"])
    def test_rejects_non_numbers(self, text: str) -> None:
        """Texts that are not plain decimals yield None."""
        assert parse_duration_value(text) is None

    def test_huge_value_rejected(self) -> None:
        """Values too large for a timedelta yield None."""
        assert parse_duration_value("9" * 400) is None

    def test_duration_shape(self) -> None:
        """Only digits and dots are duration-shaped."""
        assert is_duration_shaped("1.25")
        assert is_duration_shaped("1.2.1")
        assert not is_duration_shaped("AB3")
        assert not is_duration_shaped("")

    @given(hundredths=st.integers(min_value=0, max_value=100_000))
    def test_two_decimal_literals_are_exact_to_the_second(self, hundredths: int) -> None:
        """Two-decimal literals are 36-second multiples."""
        text = f"{hundredths // 100}.{hundredths % 100:02d}"

        assert parse_duration_value(text) == timedelta(seconds=hundredths * 36)


class TestLineShapes:
    """Test entry and delimiter line detection."""

    @pytest.mark.parametrize("line", ["- 09:00", "-\t9", "-   1"])
    def test_entry_start(self, line: str) -> None:
        """Dash, blanks, digit looks like an entry."""
        assert is_entry_start(Cursor(line, 0))

    @pytest.mark.parametrize("line", ["-09:00", "- x", "* 09:00", "-", "- ", ""])
    def test_not_entry_start(self, line: str) -> None:
        """Anything else is free text."""
        assert not is_entry_start(Cursor(line, 0))

    @pytest.mark.parametrize("line", ["---", "-----", "---  ", "---\n", "---\r\n"])
    def test_delimiter(self, line: str) -> None:
        """Three or more dashes with optional trailing blanks."""
        result = parse_delimiter_line(Cursor(line, 0))

        assert result is not None
        assert result.cursor.is_line_end

    @pytest.mark.parametrize("line", ["--", "--- x", "---x", " ---"])
    def test_not_delimiter(self, line: str) -> None:
        """Short or decorated dash runs are not delimiters."""
        assert parse_delimiter_line(Cursor(line, 0)) is None


# ============================================================================
# FRONT MATTER
# ============================================================================


class TestParseFrontMatter:
    """Test the front matter block production."""

    def test_fields_and_spans(self) -> None:
        """Field spans cover the values only."""
        result = parse_front_matter(Cursor(FRONT_MATTER, 0), ParseContext())

        assert result is not None
        front_matter = result.value
        assert not Junk.guard(front_matter.date)
        assert front_matter.date is not None
        assert str(front_matter.date.value) == "2006-01-02"
        assert front_matter.date.span == Span(10, 20)
        assert front_matter.start is not None
        assert front_matter.start.value.raw == "10:00"
        assert front_matter.start.span == Span(28, 33)
        assert front_matter.end is not None
        assert front_matter.end.value.raw == "12:00"
        assert front_matter.end.span == Span(39, 44)
        assert front_matter.span == Span(0, 48)
        assert result.cursor.pos == 48

    def test_missing_opening_delimiter(self) -> None:
        """A document not starting with a delimiter has no front matter."""
        context = ParseContext()

        assert parse_front_matter(Cursor("date: 2006-01-02\n---\n", 0), context) is None
        assert context.failure is not None
        assert context.failure.span == Span(0, 16)

    def test_unterminated(self) -> None:
        """A block without closing delimiter fails over the rest of the text."""
        source = "---\ndate: 2006-01-02\n"
        context = ParseContext()

        assert parse_front_matter(Cursor(source, 0), context) is None
        assert context.failure is not None
        assert context.failure.message == "Unterminated front matter"
        assert context.failure.span == Span(0, len(source))

    def test_empty_block(self) -> None:
        """Every field may be absent."""
        result = parse_front_matter(Cursor("---\n---\n", 0), ParseContext())

        assert result is not None
        assert result.value.date is None
        assert result.value.start is None
        assert result.value.end is None

    def test_blank_lines_skipped(self) -> None:
        """Blank lines inside the block are ignored without errors."""
        context = ParseContext()
        result = parse_front_matter(Cursor("---\n\ndate: 2006-01-02\n  \n---\n", 0), context)

        assert result is not None
        assert result.value.date is not None
        assert context.errors == []

    def test_unknown_line_reported_and_skipped(self) -> None:
        """Unknown lines are reported; later fields still parse."""
        context = ParseContext()
        result = parse_front_matter(Cursor("---\ntitle: x\nstart: 9:00\n---\n", 0), context)

        assert result is not None
        assert result.value.start is not None
        assert [e.message for e in context.errors] == ["Unexpected line in front matter"]
        assert context.errors[0].span == Span(4, 12)

    def test_last_duplicate_wins(self) -> None:
        """A repeated field keeps its last value."""
        result = parse_front_matter(
            Cursor("---\nstart: 9:00\nstart: 10:00\n---\n", 0), ParseContext()
        )

        assert result is not None
        assert result.value.start is not None
        assert result.value.start.value.raw == "10:00"

    def test_spacing_around_colon(self) -> None:
        """Blanks before and after the colon are allowed; trailing blanks trimmed."""
        result = parse_front_matter(Cursor("---\nstart :15:04  \n---\n", 0), ParseContext())

        assert result is not None
        assert result.value.start is not None
        assert result.value.start.value.raw == "15:04"
        assert result.value.start.span == Span(11, 16)

    def test_malformed_date_becomes_junk(self) -> None:
        """An impossible date is kept as Junk and reported."""
        context = ParseContext()
        result = parse_front_matter(Cursor("---\ndate: 2006-02-30\n---\n", 0), context)

        assert result is not None
        assert Junk.guard(result.value.date)
        assert result.value.date.span == Span(10, 20)
        assert context.errors[0].message.startswith("Unrecognizable date")

    def test_start_time_kept_verbatim(self) -> None:
        """Front matter times are not validated at parse time."""
        context = ParseContext()
        result = parse_front_matter(Cursor("---\nstart: 2z:56\n---\n", 0), context)

        assert result is not None
        assert result.value.start is not None
        assert result.value.start.value.raw == "2z:56"
        assert context.errors == []


# ============================================================================
# ENTRIES
# ============================================================================


class TestParseEntry:
    """Test the entry line production."""

    def test_example_entry_spans(self) -> None:
        """Every component carries its exact span."""
        result = parse_entry(Cursor(EXAMPLE_ENTRY, 0), ParseContext())

        assert result is not None
        entry = result.value
        assert entry.start.value.raw == "09:00"
        assert entry.start.span == Span(2, 7)
        assert entry.end.value.raw == "10:15"
        assert entry.end.span == Span(8, 13)
        assert [c.value for c in entry.codes] == ["ABCDEFG8", "AB3"]
        assert [c.span for c in entry.codes] == [Span(14, 22), Span(23, 26)]
        assert Duration.guard(entry.duration)
        assert entry.duration.value == timedelta(hours=1)
        assert entry.duration.raw == "1.00"
        assert entry.duration.span == Span(27, 31)
        assert entry.activity.value == "foo: bar: baz"
        assert entry.activity.span == Span(32, 45)
        assert entry.span == Span(0, 45)

    @pytest.mark.parametrize(
        ("source", "codes"),
        [
            ("- 09:00-10:00 1.00 work", []),
            ("- 09:00-10:00 ABC 1.00 work", ["ABC"]),
            ("- 09:00-10:00 ABC DEF 1.00 work", ["ABC", "DEF"]),
        ],
    )
    def test_zero_to_two_codes(self, source: str, codes: list[str]) -> None:
        """Up to two codes may precede the duration."""
        result = parse_entry(Cursor(source, 0), ParseContext())

        assert result is not None
        assert [c.value for c in result.value.codes] == codes
        assert result.value.activity.value == "work"

    @pytest.mark.parametrize(
        ("source", "codes", "activity"),
        [
            ("- 09:00-10:00 1.00 2 tasks", [], "2 tasks"),
            ("- 09:00-10:00 ABC 1.00 2.50 tasks", ["ABC"], "2.50 tasks"),
            ("- 09:00-10:00 014 1.00 work", ["014"], "work"),
        ],
    )
    def test_decimal_token_ends_codes(
        self, source: str, codes: list[str], activity: str
    ) -> None:
        """A decimal token is the duration even when the activity starts with a number."""
        result = parse_entry(Cursor(source, 0), ParseContext())

        assert result is not None
        assert [c.value for c in result.value.codes] == codes
        assert Duration.guard(result.value.duration)
        assert result.value.duration.raw == "1.00"
        assert result.value.activity.value == activity

    def test_too_many_codes(self) -> None:
        """A third code leaves no duration where one is expected."""
        context = ParseContext()

        assert parse_entry(Cursor("- 09:00-10:00 A B C 1.00 x", 0), context) is None
        assert context.failure is not None
        assert context.failure.message == "Expected a duration after at most two codes"

    def test_tabs_as_separators(self) -> None:
        """Any inline whitespace separates fields."""
        result = parse_entry(Cursor("-\t09:00-10:00\tABC\t1.00\twork", 0), ParseContext())

        assert result is not None
        assert result.value.codes[0].value == "ABC"

    def test_empty_activity(self) -> None:
        """The activity may be empty."""
        result = parse_entry(Cursor("- 09:00-10:00 1.00", 0), ParseContext())

        assert result is not None
        assert result.value.activity.value == ""
        assert result.value.activity.span == Span(18, 18)

    def test_activity_excludes_crlf(self) -> None:
        """The CR of a CRLF terminator is not part of the activity."""
        result = parse_entry(Cursor("- 09:00-10:00 1.00 work\r\nnext", 0), ParseContext())

        assert result is not None
        assert result.value.activity.value == "work"
        assert result.cursor.pos == 23

    def test_malformed_duration_is_junk(self) -> None:
        """A duration-shaped token that is no number becomes Junk."""
        context = ParseContext()
        result = parse_entry(Cursor("- 09:00-10:00 1.2.3 work", 0), context)

        assert result is not None
        assert Junk.guard(result.value.duration)
        assert result.value.duration.span == Span(14, 19)
        assert context.errors[0].message == "Unrecognizable duration: '1.2.3'"

    def test_missing_range_dash(self) -> None:
        """Start and end must be joined by a dash."""
        context = ParseContext()

        assert parse_entry(Cursor("- 09:00 10:00 1.00 x", 0), context) is None
        assert context.failure is not None
        assert context.failure.message == "Expected '-' between start and end time"


# ============================================================================
# LINES
# ============================================================================


class TestParseLine:
    """Test the line dispatcher."""

    @pytest.mark.parametrize("line", ["# Heading", "", "-not an entry", "- a bullet", "text"])
    def test_non_target_lines(self, line: str) -> None:
        """Lines that do not look like entries are kept verbatim."""
        context = ParseContext()
        result = parse_line(Cursor(line + "\n", 0), context)

        assert isinstance(result.value, NonTargetLine)
        assert result.value.content == line
        assert result.cursor.pos == len(line) + 1
        assert context.errors == []

    def test_entry_line(self) -> None:
        """Entry lines produce Entry nodes; the cursor moves past the newline."""
        result = parse_line(Cursor(EXAMPLE_ENTRY + "\n", 0), ParseContext())

        assert Entry.guard(result.value)
        assert result.cursor.pos == len(EXAMPLE_ENTRY) + 1

    def test_malformed_entry_becomes_junk(self) -> None:
        """An entry-looking line that fails is Junk and its failure is reported."""
        source = "- 09:00-1O:15 1.00 x\n"
        context = ParseContext()
        result = parse_line(Cursor(source, 0), context)

        assert Junk.guard(result.value)
        assert result.value.span == Span(0, 20)
        assert result.value.message == "Malformed time (expected: 'HH:MM')"
        assert [e.span for e in context.errors] == [Span(8, 13)]
        assert context.failure is None
