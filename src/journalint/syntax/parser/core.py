"""Core journal parser implementation.

This module provides the JournalParser class that orchestrates parsing of
journal source text into the AST defined in :mod:`journalint.syntax.ast`.

Architecture:
    The parser uses an immutable cursor pattern (:class:`~journalint.syntax.cursor.Cursor`)
    to traverse source text. Each rule in :mod:`~journalint.syntax.parser.rules`
    and :mod:`~journalint.syntax.parser.primitives` returns either a
    :class:`~journalint.syntax.cursor.ParseResult` containing the parsed node
    and updated cursor position, or None on parse failure.

Recovery:
    Only the front matter is essential: without it no entry time can be
    resolved, so a missing or unterminated block yields no Journal. Body
    lines are parsed one at a time and a malformed entry line is replaced by
    a Junk node, so the rest of the document is still available to the
    linter.

Security:
    Includes a configurable input size limit.
"""

import logging

from journalint.constants import MAX_SOURCE_SIZE
from journalint.syntax.ast import Journal, Line, Span
from journalint.syntax.cursor import Cursor, ParseError
from journalint.syntax.parser.rules import ParseContext, parse_front_matter, parse_line

__all__ = ["JournalParser"]

logger = logging.getLogger(__name__)

_BYTE_ORDER_MARK = "\ufeff"


class JournalParser:
    """Recovering journal parser using the immutable cursor pattern.

    Design:
    - Immutable cursor prevents infinite loops (no manual guards needed)
    - Errors are collected, never raised, for anything found in the text
    - Parser instances hold configuration only and are safe to share

    Attributes:
        max_source_size: Maximum allowed source size in characters (default: 10 MiB)
    """

    __slots__ = ("_max_source_size",)

    def __init__(self, *, max_source_size: int | None = None) -> None:
        """Initialize parser with an optional size limit.

        Args:
            max_source_size: Maximum source size in characters (default: 10 MiB).
                            Set to 0 to disable the limit.
        """
        self._max_source_size = (
            max_source_size if max_source_size is not None else MAX_SOURCE_SIZE
        )

    @property
    def max_source_size(self) -> int:
        """Maximum allowed source size in characters."""
        return self._max_source_size

    def parse(self, source: str) -> tuple[Journal | None, tuple[ParseError, ...]]:
        """Parse journal source into a Journal AST.

        Args:
            source: Complete document text

        Returns:
            (journal, errors). journal is None when the front matter is
            missing or unterminated; errors lists every syntax error in
            source order.

        Raises:
            ValueError: If source exceeds max_source_size

        Example:
            >>> parser = JournalParser()
            >>> journal, errors = parser.parse(
            ...     "---\\ndate: 2006-01-02\\n---\\n- 09:00-10:00 1.00 work\\n"
            ... )
            >>> journal.entries[0].activity.value
            'work'
            >>> errors
            ()
        """
        if self._max_source_size > 0 and len(source) > self._max_source_size:
            msg = (
                f"Source size ({len(source):,} characters) exceeds maximum "
                f"({self._max_source_size:,} characters). "
                "Configure max_source_size in JournalParser constructor to increase limit."
            )
            raise ValueError(msg)

        context = ParseContext()
        cursor = Cursor(source, 0)
        if source.startswith(_BYTE_ORDER_MARK):
            cursor = cursor.advance()

        front_matter = parse_front_matter(cursor, context)
        if front_matter is None:
            fallback = ParseError("Invalid front matter", Span(cursor.pos, len(source)))
            context.report(context.take_failure(fallback))
            logger.debug("No journal produced: %s", context.errors[-1].message)
            return None, tuple(sorted(context.errors, key=_error_order))

        cursor = front_matter.cursor.skip_line_end()
        lines: list[Line] = []
        while not cursor.is_eof:
            result = parse_line(cursor, context)
            lines.append(result.value)
            cursor = result.cursor

        journal = Journal(
            front_matter=front_matter.value,
            lines=tuple(lines),
            span=Span(0, len(source)),
        )
        logger.debug(
            "Parsed journal: %d line(s), %d entries, %d error(s)",
            len(lines),
            len(journal.entries),
            len(context.errors),
        )
        return journal, tuple(context.errors)


def _error_order(error: ParseError) -> tuple[int, int]:
    return (error.span.start, error.span.end)
