"""Immutable cursor infrastructure for type-safe parsing.

Implements the immutable cursor pattern for the journal parser.
Python 3.13+. Zero external dependencies.

Design Philosophy:
    - Cursor is immutable (frozen dataclass)
    - EOF is a state (is_eof), not a return value
    - Every advance() returns NEW cursor (prevents infinite loops)
    - Productions return ParseResult on success and None on failure;
      failures are described separately through ParseError records

Line Ending Support:
    - LF (Unix, \\n): Fully supported
    - CRLF (Windows, \\r\\n): Supported; the \\r never belongs to line content
    - CR-only (Classic Mac, \\r): NOT supported, a lone \\r is line content
"""

from dataclasses import dataclass, field

from journalint.diagnostics import Diagnostic, DiagnosticTemplate, Span

__all__ = ["Cursor", "ParseError", "ParseResult", "is_blank"]


def is_blank(char: str) -> bool:
    """Check for inline whitespace: any whitespace except line terminators."""
    return char.isspace() and char not in "\r\n"


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable source position tracker.

    Example:
        >>> cursor = Cursor("- 09:00", 0)
        >>> cursor.current
        '-'
        >>> cursor.advance().skip_blanks().pos
        2
        >>> Cursor("hi", 2).is_eof
        True
    """

    source: str
    pos: int

    @property
    def is_eof(self) -> bool:
        """Check if at end of input."""
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Get current character.

        Raises:
            EOFError: If at end of input
        """
        if self.is_eof:
            msg = f"Unexpected EOF at position {self.pos}"
            raise EOFError(msg)
        return self.source[self.pos]

    @property
    def is_line_end(self) -> bool:
        """Check if positioned on a line terminator or at EOF.

        A ``\\r`` only terminates a line when it starts a CRLF pair or is the
        last character of the source.
        """
        if self.is_eof:
            return True
        char = self.source[self.pos]
        if char == "\n":
            return True
        return char == "\r" and self.peek(1) in ("\n", None)

    def peek(self, offset: int = 0) -> str | None:
        """Peek at character with offset without advancing.

        Returns:
            Character at position + offset, or None if beyond EOF
        """
        target_pos = self.pos + offset
        if target_pos >= len(self.source):
            return None
        return self.source[target_pos]

    def advance(self, count: int = 1) -> "Cursor":
        """Return new cursor advanced by count positions (clamped to EOF)."""
        new_pos = min(self.pos + count, len(self.source))
        return Cursor(self.source, new_pos)

    def slice_to(self, end_pos: int) -> str:
        """Extract source slice from current position to end_pos (exclusive)."""
        return self.source[self.pos : end_pos]

    def span_to(self, end: "Cursor") -> Span:
        """Span from this cursor's position up to another cursor's position."""
        return Span(self.pos, end.pos)

    def expect(self, char: str) -> "Cursor | None":
        """Consume character if it matches expected, return None otherwise.

        Example:
            >>> Cursor("-x", 0).expect("-").pos
            1
            >>> Cursor("-x", 0).expect("x") is None
            True
        """
        if not self.is_eof and self.source[self.pos] == char:
            return self.advance()
        return None

    def skip_blanks(self) -> "Cursor":
        """Skip inline whitespace (spaces, tabs and other non-newline blanks).

        Returns:
            New cursor advanced past all consecutive blank characters
        """
        c = self
        while not c.is_eof and is_blank(c.current):
            c = c.advance()
        return c

    def skip_while(self, chars: frozenset[str]) -> "Cursor":
        """Skip characters that belong to a set."""
        c = self
        while not c.is_eof and c.current in chars:
            c = c.advance()
        return c

    def skip_token(self) -> "Cursor":
        """Skip a run of non-blank characters up to the line end."""
        c = self
        while not c.is_line_end and not is_blank(c.current):
            c = c.advance()
        return c

    def skip_to_line_end(self) -> "Cursor":
        """Advance to the line terminator (does not consume it).

        Example:
            >>> Cursor("hello\\r\\nworld", 0).skip_to_line_end().pos
            5
        """
        c = self
        while not c.is_line_end:
            c = c.advance()
        return c

    def skip_line_end(self) -> "Cursor":
        """Skip an LF or CRLF line ending.

        Returns:
            New cursor past the line ending, or unchanged if not on one
        """
        if self.is_eof:
            return self
        if self.current == "\r" and self.peek(1) == "\n":
            return self.advance(2)
        if self.current in ("\n", "\r"):
            return self.advance()
        return self


@dataclass(frozen=True, slots=True)
class ParseResult[T]:
    """Parser result containing parsed value and new cursor position.

    Example:
        >>> cursor = Cursor("hello", 0)
        >>> result = ParseResult("h", cursor.advance())
        >>> result.value
        'h'
        >>> result.cursor.pos
        1
    """

    value: T
    cursor: Cursor


@dataclass(frozen=True, slots=True)
class ParseError:
    """Syntax error with the span it applies to.

    Example:
        >>> error = ParseError("Expected a time", Span(2, 7), expected=("HH:MM",))
        >>> error.describe()
        "Expected a time (expected: 'HH:MM')"
    """

    message: str
    span: Span
    expected: tuple[str, ...] = field(default_factory=tuple)

    def describe(self) -> str:
        """Message with the expected tokens appended."""
        if not self.expected:
            return self.message
        expected_str = ", ".join(f"'{e}'" for e in self.expected)
        return f"{self.message} (expected: {expected_str})"

    def to_diagnostic(self) -> Diagnostic:
        """Convert to a PARSE_ERROR diagnostic with error severity."""
        return DiagnosticTemplate.parse_error(self.span, self.describe())
