"""Tests for lint.linter: every rule, its span and its payload.

Documents are built from FRONT_MATTER (date 2006-01-02, start 10:00,
end 12:00; 49 characters) followed by entry lines, so entry offsets are
easy to compute: the first entry line starts at 49.
"""

from __future__ import annotations

from datetime import timedelta

import pytest
from hypothesis import given

from journalint.diagnostics import Rule, Span
from journalint.lint import Linter, date_from_source, lint, parse_and_lint
from journalint.syntax import Journal, parse
from tests.strategies import FRONT_MATTER, GeneratedJournal, consistent_journals

SOURCE = "/journals/2006-01-02.md"


def _journal(source: str) -> Journal:
    journal, errors = parse(source)
    assert journal is not None
    assert errors == ()
    return journal


def _rules(text: str, source: str | None = SOURCE) -> list[Rule]:
    return [d.rule for d in lint(_journal(text), source)]


# ============================================================================
# FILE NAME DATE
# ============================================================================


class TestDateFromSource:
    """Test extracting the date from a document identifier."""

    @pytest.mark.parametrize(
        "source",
        [
            "/journals/2006-01-02.md",
            "2006-01-02.md",
            "2006-01-02",
            "file:///journals/2006-01-02.md",
            "file:///journals/2006%2D01%2D02.md",
        ],
    )
    def test_dated_names(self, source: str) -> None:
        """Paths and URIs whose stem is a date."""
        date = date_from_source(source)

        assert date is not None
        assert str(date) == "2006-01-02"

    @pytest.mark.parametrize(
        "source", [None, "", "notes.md", "/j/2006-02-30.md", "2006-01-02-x.md"]
    )
    def test_undated_names(self, source: str | None) -> None:
        """Anything else yields None."""
        assert date_from_source(source) is None


# ============================================================================
# FRONT MATTER RULES
# ============================================================================


class TestFrontMatterRules:
    """Test date, start, end and missing-field rules."""

    def test_consistent_journal_is_clean(self) -> None:
        """Matching front matter and contiguous entries produce nothing."""
        text = FRONT_MATTER + "- 10:00-11:00 1.00 a\n- 11:00-12:00 1.00 b\n"

        assert lint(_journal(text), SOURCE) == ()

    def test_date_mismatch(self) -> None:
        """The front matter date must match the file name."""
        diagnostics = lint(_journal(FRONT_MATTER), "/journals/2006-01-03.md")

        assert len(diagnostics) == 1
        assert diagnostics[0].rule is Rule.MISMATCHED_DATES
        assert diagnostics[0].span == Span(10, 20)
        assert diagnostics[0].suggestion == "2006-01-03"

    def test_no_source_no_date_check(self) -> None:
        """Without a document identifier the date is not checked."""
        assert lint(_journal(FRONT_MATTER)) == ()

    def test_start_mismatch(self) -> None:
        """The front matter start must equal the first entry's start."""
        text = FRONT_MATTER + "- 09:00-12:00 3.00 a\n"
        diagnostics = lint(_journal(text), SOURCE)

        assert [d.rule for d in diagnostics] == [Rule.MISMATCHED_START_TIME]
        assert diagnostics[0].span == Span(28, 33)
        assert "09:00" in diagnostics[0].message

    def test_end_mismatch(self) -> None:
        """The front matter end must equal the last entry's end."""
        text = FRONT_MATTER + "- 10:00-11:30 1.50 a\n"
        diagnostics = lint(_journal(text), SOURCE)

        assert [d.rule for d in diagnostics] == [Rule.MISMATCHED_END_TIME]
        assert diagnostics[0].span == Span(39, 44)
        assert diagnostics[0].related is not None
        assert diagnostics[0].related[0].span == Span(57, 62)
        assert diagnostics[0].related[0].uri == SOURCE

    def test_no_entries_no_time_checks(self) -> None:
        """Start and end checks need at least one entry."""
        assert _rules(FRONT_MATTER + "# nothing today\n") == []

    def test_missing_fields(self) -> None:
        """Each absent field is reported over the whole front matter."""
        diagnostics = lint(_journal("---\n---\n"), SOURCE)

        assert [d.rule for d in diagnostics] == [
            Rule.MISSING_DATE,
            Rule.MISSING_START_TIME,
            Rule.MISSING_END_TIME,
        ]
        assert {d.span for d in diagnostics} == {Span(0, 7)}

    def test_only_date_present(self) -> None:
        """Fields present in the front matter are not reported as missing."""
        assert _rules("---\ndate: 2006-01-02\n---\n") == [
            Rule.MISSING_START_TIME,
            Rule.MISSING_END_TIME,
        ]

    def test_junk_date_is_not_missing(self) -> None:
        """A malformed date is a parse error, not a missing field."""
        text = "---\ndate: 2006-13-01\nstart: 10:00\nend: 12:00\n---\n"
        journal, diagnostics = parse_and_lint(SOURCE, text)

        assert journal is not None
        assert [d.rule for d in diagnostics] == [Rule.PARSE_ERROR]

    def test_invalid_front_matter_start(self) -> None:
        """An unresolvable front matter start is reported at its span."""
        text = "---\ndate: 2006-01-02\nstart: 2z:56\nend: 12:00\n---\n"
        diagnostics = lint(_journal(text), SOURCE)

        assert [d.rule for d in diagnostics] == [Rule.INVALID_START_TIME]
        assert diagnostics[0].span == Span(28, 33)
        assert diagnostics[0].message.startswith("Invalid start time: hour is not a number")

    def test_past_midnight_end(self) -> None:
        """Times beyond 24:00 resolve on the next day and compare equal."""
        text = "---\ndate: 2006-01-02\nstart: 23:00\nend: 25:00\n---\n- 23:00-25:00 2.00 late\n"

        assert _rules(text) == []


# ============================================================================
# ENTRY RULES
# ============================================================================


class TestEntryRules:
    """Test time-jumped, negative-time-range, incorrect-duration and invalid times."""

    def test_time_jumped(self) -> None:
        """A gap between entries is reported at the later start."""
        text = FRONT_MATTER + "- 10:00-11:00 1.00 a\n- 11:15-12:00 0.75 b\n"
        diagnostics = lint(_journal(text), SOURCE)

        assert [d.rule for d in diagnostics] == [Rule.TIME_JUMPED]
        assert diagnostics[0].span == Span(72, 77)
        assert diagnostics[0].suggestion == "11:00"
        assert diagnostics[0].related is not None
        assert diagnostics[0].related[0].span == Span(57, 62)

    def test_overlap_is_also_a_jump(self) -> None:
        """Starting before the previous end is reported too."""
        text = FRONT_MATTER + "- 10:00-11:00 1.00 a\n- 10:30-12:00 1.50 b\n"

        assert _rules(text) == [Rule.TIME_JUMPED]

    def test_equal_instants_are_contiguous(self) -> None:
        """Different spellings of the same instant do not jump."""
        text = FRONT_MATTER + "- 10:00-11:00 1.00 a\n- 11:0-12:00 1.00 b\n"

        assert _rules(text) == []

    def test_negative_time_range(self) -> None:
        """An end before the start is reported at the end, without a duration check."""
        text = "---\ndate: 2006-01-02\n---\n- 11:00-10:00 1.00 x\n"
        diagnostics = [
            d for d in lint(_journal(text), SOURCE) if d.rule is not Rule.MISSING_START_TIME
        ]

        assert [d.rule for d in diagnostics] == [Rule.MISSING_END_TIME, Rule.NEGATIVE_TIME_RANGE]
        assert diagnostics[1].span == Span(33, 38)
        assert "(11:00)" in diagnostics[1].message

    def test_incorrect_duration(self) -> None:
        """A duration that disagrees with the range suggests the right value."""
        text = FRONT_MATTER + "- 10:00-12:00 1.50 x\n"
        diagnostics = lint(_journal(text), SOURCE)

        assert [d.rule for d in diagnostics] == [Rule.INCORRECT_DURATION]
        assert diagnostics[0].span == Span(63, 67)
        assert diagnostics[0].suggestion == "2.00"

    def test_rounding_within_tolerance(self) -> None:
        """Two-decimal rounding of the range is accepted."""
        text = "---\ndate: 2006-01-02\nstart: 10:00\nend: 10:07\n---\n- 10:00-10:07 0.12 x\n"

        assert _rules(text) == []

    def test_custom_tolerance(self) -> None:
        """A zero tolerance reports rounding differences."""
        text = "---\ndate: 2006-01-02\nstart: 10:00\nend: 10:07\n---\n- 10:00-10:07 0.12 x\n"
        diagnostics = Linter(SOURCE, duration_tolerance=timedelta(0)).lint(_journal(text))

        assert [d.rule for d in diagnostics] == [Rule.INCORRECT_DURATION]
        assert diagnostics[0].suggestion == "0.12"

    def test_invalid_end_time(self) -> None:
        """An unresolvable end is reported and withholds dependent checks."""
        text = FRONT_MATTER + "- 10:00-11:61 1.00 a\n- 11:00-12:00 1.00 b\n"
        diagnostics = lint(_journal(text), SOURCE)

        assert [d.rule for d in diagnostics] == [Rule.INVALID_END_TIME]
        assert diagnostics[0].span == Span(57, 62)

    def test_no_date_no_entry_checks(self) -> None:
        """Without a date no time can be resolved, so no entry rule fires."""
        text = "---\nstart: 10:00\nend: 12:00\n---\n- 10:00-09:00 5.00 x\n"

        assert _rules(text) == [Rule.MISSING_DATE]

    def test_diagnostics_in_traversal_order(self) -> None:
        """Findings come out in document order."""
        text = FRONT_MATTER + "- 09:00-11:00 1.00 a\n- 11:30-12:00 0.50 b\n"

        assert _rules(text, "/j/2006-01-05.md") == [
            Rule.MISMATCHED_DATES,
            Rule.MISMATCHED_START_TIME,
            Rule.INCORRECT_DURATION,
            Rule.TIME_JUMPED,
        ]


# ============================================================================
# LINTER API
# ============================================================================


class TestLinterApi:
    """Test Linter configuration and parse_and_lint."""

    def test_linter_is_reusable(self) -> None:
        """State does not leak between lint() calls."""
        linter = Linter(SOURCE)
        jumped = _journal(FRONT_MATTER + "- 10:00-11:00 1.00 a\n- 11:15-12:00 0.75 b\n")
        clean = _journal(FRONT_MATTER + "- 10:00-12:00 2.00 a\n")

        assert len(linter.lint(jumped)) == 1
        assert linter.lint(clean) == ()
        assert linter.source == SOURCE

    def test_parse_and_lint_puts_parse_errors_first(self) -> None:
        """Parse errors precede lint findings."""
        text = FRONT_MATTER + "- 10:00-12:00 1.00 a\n- 1 junk\n"
        journal, diagnostics = parse_and_lint(SOURCE, text)

        assert journal is not None
        assert [d.rule for d in diagnostics] == [Rule.PARSE_ERROR, Rule.INCORRECT_DURATION]

    def test_parse_and_lint_without_front_matter(self) -> None:
        """No journal means parse errors only."""
        journal, diagnostics = parse_and_lint(SOURCE, "no front matter\n")

        assert journal is None
        assert [d.rule for d in diagnostics] == [Rule.PARSE_ERROR]


# ============================================================================
# PROPERTIES
# ============================================================================


class TestLintProperties:
    """Property tests over generated journals."""

    @given(doc=consistent_journals())
    def test_consistent_journals_are_clean(self, doc: GeneratedJournal) -> None:
        """Generated consistent journals produce no findings."""
        assert lint(_journal(doc.text), f"/journals/{doc.day.isoformat()}.md") == ()

    @given(doc=consistent_journals())
    def test_wrong_file_name_reported_once(self, doc: GeneratedJournal) -> None:
        """A file name with another date yields exactly one date-mismatch."""
        other = doc.day + timedelta(days=1)

        assert _rules(doc.text, f"/journals/{other.isoformat()}.md") == [Rule.MISMATCHED_DATES]
