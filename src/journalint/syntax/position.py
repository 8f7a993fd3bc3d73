"""Position utilities for journal source text.

Translates the character offsets carried by spans into 0-based line and
character positions for editors and terminal reports, and back.

Lines are delimited by ``\\n``; with CRLF endings the ``\\r`` stays at the
end of the preceding line's content range.
"""

from bisect import bisect_right
from dataclasses import dataclass

from journalint.diagnostics import Span

__all__ = ["LineMap", "Position", "Range"]


@dataclass(frozen=True, slots=True)
class Position:
    """0-based line and character (code point) position."""

    line: int
    character: int


@dataclass(frozen=True, slots=True)
class Range:
    """Pair of positions, end exclusive."""

    start: Position
    end: Position


class LineMap:
    """Cached line offset index for efficient position lookups.

    Precomputes line start offsets in a single pass, then answers offset to
    position queries with a binary search.

    Example:
        >>> line_map = LineMap("line1\\nline2\\nline3")
        >>> line_map.position(0)
        Position(line=0, character=0)
        >>> line_map.position(8)
        Position(line=1, character=2)
        >>> line_map.offset(Position(2, 1))
        13

    Thread Safety:
        Thread-safe. Internal state is only set during __init__.
    """

    __slots__ = ("_source", "_starts")

    def __init__(self, source: str) -> None:
        starts = [0]
        pos = source.find("\n")
        while pos >= 0:
            starts.append(pos + 1)
            pos = source.find("\n", pos + 1)
        self._starts: tuple[int, ...] = tuple(starts)
        self._source = source

    @property
    def line_count(self) -> int:
        """Number of lines; text after the last newline counts as a line."""
        return len(self._starts)

    def position(self, offset: int) -> Position:
        """Get the position of an offset.

        Offsets past the end of the source are clamped to its end.

        Raises:
            ValueError: If offset is negative
        """
        if offset < 0:
            msg = f"Offset must be >= 0, got {offset}"
            raise ValueError(msg)
        offset = min(offset, len(self._source))
        line = bisect_right(self._starts, offset) - 1
        return Position(line, offset - self._starts[line])

    def offset(self, position: Position) -> int:
        """Get the offset of a position.

        Lines past the last one map to the end of the source; characters
        past the end of a line map to the end of that line's content.

        Raises:
            ValueError: If line or character is negative
        """
        if position.line < 0 or position.character < 0:
            msg = f"Position components must be >= 0, got {position}"
            raise ValueError(msg)
        if position.line >= len(self._starts):
            return len(self._source)
        start = self._starts[position.line]
        return min(start + position.character, self._line_content_end(position.line))

    def line_text(self, line: int) -> str:
        """Content of a 0-based line without its terminator.

        Raises:
            IndexError: If the line does not exist
        """
        if not 0 <= line < len(self._starts):
            msg = f"Line {line} out of range (0..{len(self._starts) - 1})"
            raise IndexError(msg)
        return self._source[self._starts[line] : self._line_content_end(line)].rstrip("\r")

    def to_range(self, span: Span) -> Range:
        """Convert a span to a range."""
        return Range(self.position(span.start), self.position(span.end))

    def to_span(self, range_: Range) -> Span:
        """Convert a range to a span."""
        return Span(self.offset(range_.start), self.offset(range_.end))

    def _line_content_end(self, line: int) -> int:
        if line + 1 < len(self._starts):
            return self._starts[line + 1] - 1
        return len(self._source)
