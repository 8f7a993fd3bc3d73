"""Primitive parsers for the journal grammar.

Low-level productions for time tokens, duration literals, whitespace-free
tokens and delimiter lines. Each returns a ParseResult on success and None
on failure; a failure description is recorded on the ParseContext.
"""

from datetime import timedelta
from typing import TYPE_CHECKING

from journalint.constants import FRONT_MATTER_DELIMITER_MIN
from journalint.syntax.cursor import Cursor, ParseResult, is_blank

if TYPE_CHECKING:
    from journalint.syntax.parser.rules import ParseContext

__all__ = [
    "is_duration_shaped",
    "is_entry_start",
    "parse_blanks",
    "parse_delimiter_line",
    "parse_duration_value",
    "parse_time",
    "parse_token",
]

# ASCII digits only. str.isdigit() accepts superscripts and other scripts'
# digits, which the time resolver would then reject.
_ASCII_DIGITS: frozenset[str] = frozenset("0123456789")

# Characters a duration literal may consist of.
_DURATION_CHARS: frozenset[str] = _ASCII_DIGITS | {"."}

_SECONDS_PER_HOUR: int = 3600


def is_entry_start(cursor: Cursor) -> bool:
    """Check whether a line looks like an entry: dash, blanks, digit.

    Lines passing this check are entries or syntax errors; every other line
    is free text.
    """
    if cursor.peek() != "-":
        return False
    after_dash = cursor.advance()
    if after_dash.is_eof or not is_blank(after_dash.current):
        return False
    after_blanks = after_dash.skip_blanks()
    return not after_blanks.is_eof and after_blanks.current in _ASCII_DIGITS


def parse_blanks(cursor: Cursor, context: "ParseContext", what: str) -> ParseResult[None] | None:
    """Parse one or more inline whitespace characters.

    Args:
        cursor: Current position in source
        context: Parse context receiving the failure description
        what: Name of the element the blanks separate, for the message
    """
    end = cursor.skip_blanks()
    if end.pos == cursor.pos:
        return context.fail(f"Expected whitespace {what}", cursor.span_to(cursor.skip_token()))
    return ParseResult(None, end)


def parse_time(cursor: Cursor, context: "ParseContext") -> ParseResult[str] | None:
    """Parse time token: digits ':' digits

    Digit counts are unconstrained; range checks happen at resolution time.

    Examples:
        09:00 -> "09:00"
        24:30 -> "24:30"
        9:5 -> "9:5"
    """
    hours_end = cursor.skip_while(_ASCII_DIGITS)
    colon = hours_end.expect(":") if hours_end.pos > cursor.pos else None
    minutes_end = colon.skip_while(_ASCII_DIGITS) if colon is not None else None
    if colon is None or minutes_end is None or minutes_end.pos == colon.pos:
        return context.fail(
            "Malformed time", cursor.span_to(cursor.skip_token()), expected=("HH:MM",)
        )
    return ParseResult(cursor.slice_to(minutes_end.pos), minutes_end)


def parse_token(cursor: Cursor) -> ParseResult[str] | None:
    """Parse a run of non-blank characters (a code or a duration candidate)."""
    end = cursor.skip_token()
    if end.pos == cursor.pos:
        return None
    return ParseResult(cursor.slice_to(end.pos), end)


def is_duration_shaped(text: str) -> bool:
    """Check that text consists of digits and dots only."""
    return bool(text) and all(ch in _DURATION_CHARS for ch in text)


def parse_duration_value(text: str) -> timedelta | None:
    """Convert a decimal-hours literal to a timedelta rounded to seconds.

    Examples:
        "1.25" -> 1:15:00
        ".12" -> 0:07:12
        "1.2.1" -> None

    Returns:
        Elapsed time, or None if text is not a decimal number
    """
    if not is_duration_shaped(text):
        return None
    try:
        hours = float(text)
    except ValueError:
        return None
    try:
        return timedelta(seconds=round(hours * _SECONDS_PER_HOUR))
    except OverflowError:
        return None


def parse_delimiter_line(cursor: Cursor) -> ParseResult[None] | None:
    """Parse a front matter delimiter line: three or more dashes.

    Trailing blanks are allowed. The line terminator is not consumed.
    """
    dashes_end = cursor.skip_while(frozenset("-"))
    if dashes_end.pos - cursor.pos < FRONT_MATTER_DELIMITER_MIN:
        return None
    end = dashes_end.skip_blanks()
    if not end.is_line_end:
        return None
    return ParseResult(None, end)
