"""Grammar rules for journal documents.

Front matter, entry lines and the fallback productions that keep the
parser going past malformed lines. Every rule takes an immutable Cursor
and returns ParseResult[T] | None; rules that fail record why on the
ParseContext so the caller can report it.
"""

import logging
from dataclasses import dataclass, field

from journalint.core import LooseDate, LooseTime
from journalint.syntax.ast import (
    Activity,
    Code,
    Duration,
    EndTime,
    Entry,
    FrontMatter,
    FrontMatterDate,
    FrontMatterEndTime,
    FrontMatterStartTime,
    Junk,
    Line,
    NonTargetLine,
    Span,
    StartTime,
)
from journalint.syntax.cursor import Cursor, ParseError, ParseResult
from journalint.syntax.parser.primitives import (
    is_duration_shaped,
    is_entry_start,
    parse_blanks,
    parse_delimiter_line,
    parse_duration_value,
    parse_time,
    parse_token,
)

__all__ = [
    "ParseContext",
    "parse_entry",
    "parse_front_matter",
    "parse_line",
]

logger = logging.getLogger(__name__)

# Codes allowed in front of the duration, most preferred first.
_CODE_COUNTS: tuple[int, ...] = (2, 1, 0)

_FRONT_MATTER_KEYS: tuple[str, ...] = ("date", "start", "end")


@dataclass(slots=True)
class ParseContext:
    """Explicit context for one parse invocation.

    Collects the non-fatal errors of the document and the description of
    the most recent failed production. Passed explicitly so parses of
    different documents share nothing.

    Attributes:
        errors: Non-fatal parse errors in source order
        failure: Why the last failed production failed
    """

    errors: list[ParseError] = field(default_factory=list)
    failure: ParseError | None = None

    def fail(self, message: str, span: Span, expected: tuple[str, ...] = ()) -> None:
        """Record why a production failed.

        Returns None so rules can ``return context.fail(...)``.
        """
        self.failure = ParseError(message, span, expected)

    def report(self, error: ParseError) -> None:
        """Add a non-fatal error to the document's error list."""
        self.errors.append(error)

    def take_failure(self, fallback: ParseError) -> ParseError:
        """Consume the recorded failure, or use fallback if none was recorded."""
        failure = self.failure if self.failure is not None else fallback
        self.failure = None
        return failure


# =============================================================================
# Front Matter
# =============================================================================


@dataclass(frozen=True, slots=True)
class _Field:
    """Raw ``key: value`` line inside the front matter."""

    key: str
    value: str
    span: Span


def _parse_field(cursor: Cursor) -> ParseResult[_Field] | None:
    """Parse front matter field: key blanks? ':' blanks? value

    The value is the rest of the line without trailing whitespace; its span
    covers the value only.

    Examples:
        date: 2006-01-02 -> _Field("date", "2006-01-02", ...)
        start :15:04 -> _Field("start", "15:04", ...)
    """
    for key in _FRONT_MATTER_KEYS:
        if cursor.slice_to(cursor.pos + len(key)) != key:
            continue
        colon = cursor.advance(len(key)).skip_blanks().expect(":")
        if colon is None:
            return None
        value_start = colon.skip_blanks()
        line_end = value_start.skip_to_line_end()
        value = value_start.slice_to(line_end.pos).rstrip()
        span = Span(value_start.pos, value_start.pos + len(value))
        return ParseResult(_Field(key, value, span), line_end)
    return None


def parse_front_matter(
    cursor: Cursor, context: ParseContext
) -> ParseResult[FrontMatter] | None:
    """Parse the front matter block.

    Grammar:
        front_matter ::= delimiter line_end (field line_end | blank_line)* delimiter

    Recovery:
        - Unknown lines inside the block are reported and skipped
        - A malformed date becomes Junk in the date slot and is reported
        - Repeated fields: the last occurrence wins

    Returns:
        ParseResult positioned at the end of the closing delimiter line
        (terminator not consumed), or None when the block is missing or
        unterminated. The failure is recorded on the context.
    """
    opening = parse_delimiter_line(cursor)
    if opening is None:
        first_line_end = cursor.skip_to_line_end()
        return context.fail(
            "Expected front matter opening delimiter",
            cursor.span_to(first_line_end),
            expected=("---",),
        )

    date: FrontMatterDate | Junk | None = None
    start: FrontMatterStartTime | None = None
    end: FrontMatterEndTime | None = None
    seen: set[str] = set()

    line = opening.cursor.skip_line_end()
    while not line.is_eof:
        closing = parse_delimiter_line(line)
        if closing is not None:
            front_matter = FrontMatter(
                date=date, start=start, end=end, span=cursor.span_to(closing.cursor)
            )
            return ParseResult(front_matter, closing.cursor)

        line_end = line.skip_to_line_end()
        if line.skip_blanks().pos == line_end.pos:
            line = line_end.skip_line_end()
            continue

        result = _parse_field(line)
        if result is None:
            context.report(
                ParseError(
                    "Unexpected line in front matter",
                    line.span_to(line_end),
                    expected=_FRONT_MATTER_KEYS,
                )
            )
            line = line_end.skip_line_end()
            continue

        parsed = result.value
        if parsed.key in seen:
            logger.debug(
                "Front matter field '%s' repeated at offset %d; last one wins",
                parsed.key,
                line.pos,
            )
        seen.add(parsed.key)

        match parsed.key:
            case "date":
                date = _front_matter_date(parsed, context)
            case "start":
                start = FrontMatterStartTime(LooseTime(parsed.value), parsed.span)
            case _:
                end = FrontMatterEndTime(LooseTime(parsed.value), parsed.span)
        line = result.cursor.skip_line_end()

    return context.fail(
        "Unterminated front matter",
        Span(cursor.pos, len(cursor.source)),
        expected=("---",),
    )


def _front_matter_date(parsed: _Field, context: ParseContext) -> FrontMatterDate | Junk:
    """Validate the date field, falling back to Junk."""
    try:
        return FrontMatterDate(LooseDate.parse(parsed.value), parsed.span)
    except ValueError as e:
        message = f"Unrecognizable date: {e}"
        context.report(ParseError(message, parsed.span, expected=("YYYY-MM-DD",)))
        return Junk(content=parsed.value, message=message, span=parsed.span)


# =============================================================================
# Entries
# =============================================================================


def _parse_duration(
    cursor: Cursor, context: ParseContext
) -> ParseResult[Duration | Junk] | None:
    """Parse duration literal: [0-9.]+ as decimal hours.

    A duration-shaped token that is not a number becomes Junk and a
    reported error rather than failing the entry.
    """
    token = parse_token(cursor)
    if token is None or not is_duration_shaped(token.value):
        return None
    span = cursor.span_to(token.cursor)
    value = parse_duration_value(token.value)
    if value is None:
        message = f"Unrecognizable duration: '{token.value}'"
        context.report(ParseError(message, span, expected=("decimal hours",)))
        return ParseResult(Junk(content=token.value, message=message, span=span), token.cursor)
    return ParseResult(Duration(value=value, raw=token.value, span=span), token.cursor)


def _is_decimal(text: str) -> bool:
    return "." in text and is_duration_shaped(text)


def _parse_codes_and_duration(
    cursor: Cursor, context: ParseContext
) -> ParseResult[tuple[tuple[Code, ...], Duration | Junk]] | None:
    """Parse (CODE blanks){0,2} DURATION

    Codes and durations are both whitespace-free tokens. The layout with
    the most codes whose next token is duration-shaped wins. A decimal
    token such as "1.00" always ends the codes.
    """
    tokens: list[ParseResult[Code]] = []
    token_cursor = cursor
    while len(tokens) < max(_CODE_COUNTS):
        token = parse_token(token_cursor)
        if token is None or _is_decimal(token.value):
            break
        code = Code(value=token.value, span=token_cursor.span_to(token.cursor))
        tokens.append(ParseResult(code, token.cursor))
        token_cursor = token.cursor.skip_blanks()

    for count in _CODE_COUNTS:
        if count > len(tokens):
            continue
        duration_cursor = tokens[count - 1].cursor.skip_blanks() if count else cursor
        duration = _parse_duration(duration_cursor, context)
        if duration is not None:
            codes = tuple(token.value for token in tokens[:count])
            return ParseResult((codes, duration.value), duration.cursor)

    return context.fail(
        "Expected a duration after at most two codes",
        cursor.span_to(cursor.skip_to_line_end()),
        expected=("CODE", "DURATION"),
    )


def parse_entry(cursor: Cursor, context: ParseContext) -> ParseResult[Entry] | None:
    """Parse entry line: '-' blanks TIME '-' TIME blanks (CODE blanks){0,2} DURATION ACTIVITY

    The activity is the rest of the line after the blanks that follow the
    duration, verbatim. The returned cursor is at the line terminator.

    Example:
        - 09:00-10:15 ABCDEFG8 AB3 1.00 foo: bar: baz
    """
    dash = cursor.expect("-")
    if dash is None:
        return context.fail("Expected '-'", cursor.span_to(cursor.advance()), expected=("-",))

    leading = parse_blanks(dash, context, "after '-'")
    if leading is None:
        return None

    start = parse_time(leading.cursor, context)
    if start is None:
        return None
    range_dash = start.cursor.expect("-")
    if range_dash is None:
        return context.fail(
            "Expected '-' between start and end time",
            start.cursor.span_to(start.cursor.skip_token()),
            expected=("-",),
        )
    end = parse_time(range_dash, context)
    if end is None:
        return None

    separator = parse_blanks(end.cursor, context, "after the time range")
    if separator is None:
        return None

    fields = _parse_codes_and_duration(separator.cursor, context)
    if fields is None:
        return None
    codes, duration = fields.value

    activity_start = fields.cursor.skip_blanks()
    line_end = activity_start.skip_to_line_end()
    activity = Activity(
        value=activity_start.slice_to(line_end.pos),
        span=activity_start.span_to(line_end),
    )

    entry = Entry(
        start=StartTime(LooseTime(start.value), leading.cursor.span_to(start.cursor)),
        end=EndTime(LooseTime(end.value), range_dash.span_to(end.cursor)),
        codes=codes,
        duration=duration,
        activity=activity,
        span=cursor.span_to(line_end),
    )
    return ParseResult(entry, line_end)


# =============================================================================
# Lines
# =============================================================================


def parse_line(cursor: Cursor, context: ParseContext) -> ParseResult[Line]:
    """Parse one body line; never fails.

    Lines that look like entries (dash, blanks, digit) are parsed as
    entries. If that fails the line becomes Junk and the first failing
    production is reported. Every other line is kept as a NonTargetLine.
    The returned cursor is past the line terminator.
    """
    line_end = cursor.skip_to_line_end()

    if not is_entry_start(cursor):
        line = NonTargetLine(content=cursor.slice_to(line_end.pos), span=cursor.span_to(line_end))
        return ParseResult(line, line_end.skip_line_end())

    result = parse_entry(cursor, context)
    if result is not None:
        return ParseResult(result.value, result.cursor.skip_line_end())

    span = cursor.span_to(line_end)
    error = context.take_failure(ParseError("Malformed entry", span))
    context.report(error)
    logger.debug("Malformed entry at offset %d: %s", cursor.pos, error.message)
    junk = Junk(content=cursor.slice_to(line_end.pos), message=error.describe(), span=span)
    return ParseResult(junk, line_end.skip_line_end())
