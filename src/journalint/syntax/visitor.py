"""Visitor pattern for journal AST traversal.

Enables tools (the linter, the exporter, auto-fix locators) to react to
journal nodes without modifying node classes.

NOTE: This module follows Python stdlib ast.NodeVisitor naming convention.
Methods are named visit_NodeName (PascalCase) rather than visit_node_name
(snake_case). Completion callbacks are named leave_NodeName.

Traversal order is owned by walk() and is the same for every consumer:

    front matter: date, start, end, leave_FrontMatter
    each line in source order; for an Entry:
        visit_Entry, start, end, codes left to right, duration, activity,
        leave_Entry
    leave_Journal

Junk and NonTargetLine nodes are never dispatched. A callback that raises
aborts the walk and the exception propagates to the caller of walk().

Python 3.13+.
"""

from .ast import (
    Activity,
    Code,
    Duration,
    EndTime,
    Entry,
    FrontMatter,
    FrontMatterDate,
    FrontMatterEndTime,
    FrontMatterStartTime,
    Journal,
    StartTime,
)

__all__ = ["JournalVisitor", "walk"]


class JournalVisitor:
    """Base visitor with a no-op method per callback.

    Override the callbacks a consumer needs; per-traversal state belongs on
    the subclass instance, one instance per walk.

    Example:
        >>> class CodeCollector(JournalVisitor):
        ...     def __init__(self) -> None:
        ...         self.codes: list[str] = []
        ...
        ...     def visit_Code(self, node: Code) -> None:
        ...         self.codes.append(node.value)
        ...
        >>> collector = CodeCollector()
        >>> walk(journal, collector)
        >>> collector.codes
        ['ABCDEFG8', 'AB3']
    """

    __slots__ = ()

    def visit_FrontMatterDate(self, node: FrontMatterDate) -> None:
        """Called for a well-formed front matter date."""

    def visit_FrontMatterStartTime(self, node: FrontMatterStartTime) -> None:
        """Called for the front matter start time."""

    def visit_FrontMatterEndTime(self, node: FrontMatterEndTime) -> None:
        """Called for the front matter end time."""

    def leave_FrontMatter(self, node: FrontMatter) -> None:
        """Called after all front matter fields were visited."""

    def visit_Entry(self, node: Entry) -> None:
        """Called before the fields of an entry."""

    def visit_StartTime(self, node: StartTime) -> None:
        """Called for an entry's start time."""

    def visit_EndTime(self, node: EndTime) -> None:
        """Called for an entry's end time."""

    def visit_Code(self, node: Code) -> None:
        """Called for each code of an entry, left to right."""

    def visit_Duration(self, node: Duration) -> None:
        """Called for a well-formed duration literal."""

    def visit_Activity(self, node: Activity) -> None:
        """Called for an entry's activity text."""

    def leave_Entry(self, node: Entry) -> None:
        """Called after all fields of an entry were visited."""

    def leave_Journal(self, node: Journal) -> None:
        """Called after the last line."""


def walk(journal: Journal, visitor: JournalVisitor) -> None:
    """Traverse a journal, dispatching to the visitor in document order.

    Args:
        journal: Root of the AST
        visitor: Receiver of the callbacks

    Raises:
        Whatever a callback raises; traversal stops at that point.
    """
    front_matter = journal.front_matter
    if isinstance(front_matter.date, FrontMatterDate):
        visitor.visit_FrontMatterDate(front_matter.date)
    if front_matter.start is not None:
        visitor.visit_FrontMatterStartTime(front_matter.start)
    if front_matter.end is not None:
        visitor.visit_FrontMatterEndTime(front_matter.end)
    visitor.leave_FrontMatter(front_matter)

    for line in journal.lines:
        match line:
            case Entry():
                _walk_entry(line, visitor)
            case _:
                pass

    visitor.leave_Journal(journal)


def _walk_entry(entry: Entry, visitor: JournalVisitor) -> None:
    visitor.visit_Entry(entry)
    visitor.visit_StartTime(entry.start)
    visitor.visit_EndTime(entry.end)
    for code in entry.codes:
        visitor.visit_Code(code)
    if Duration.guard(entry.duration):
        visitor.visit_Duration(entry.duration)
    visitor.visit_Activity(entry.activity)
    visitor.leave_Entry(entry)
