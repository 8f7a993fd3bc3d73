"""Journal syntax package.

Provides the parser, AST definitions, the visitor protocol and position
utilities. Separate from the linter so other tools (exporters, auto-fix,
editor integrations) can consume the AST directly.

Python 3.13+.
"""

from .ast import (
    Activity,
    ASTNode,
    Code,
    Duration,
    EndTime,
    Entry,
    FrontMatter,
    FrontMatterDate,
    FrontMatterEndTime,
    FrontMatterStartTime,
    Journal,
    Junk,
    Line,
    NonTargetLine,
    Span,
    StartTime,
)
from .cursor import Cursor, ParseError, ParseResult
from .parser import JournalParser
from .position import LineMap, Position, Range
from .visitor import JournalVisitor, walk

__all__ = [
    "ASTNode",
    "Activity",
    "Code",
    "Cursor",
    "Duration",
    "EndTime",
    "Entry",
    "FrontMatter",
    "FrontMatterDate",
    "FrontMatterEndTime",
    "FrontMatterStartTime",
    "Journal",
    "JournalParser",
    "JournalVisitor",
    "Junk",
    "Line",
    "LineMap",
    "NonTargetLine",
    "ParseError",
    "ParseResult",
    "Position",
    "Range",
    "Span",
    "StartTime",
    "parse",
    "walk",
]


def parse(source: str) -> tuple[Journal | None, tuple[ParseError, ...]]:
    """Parse journal source into AST.

    Convenience function for JournalParser.parse().

    Args:
        source: Complete document text

    Returns:
        (journal, errors); journal is None when the front matter is unusable

    Example:
        >>> from journalint.syntax import parse
        >>> journal, errors = parse("---\\ndate: 2006-01-02\\n---\\n")
        >>> str(journal.front_matter.date.value)
        '2006-01-02'
    """
    parser = JournalParser()
    return parser.parse(source)
