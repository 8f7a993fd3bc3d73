"""Journal linting package.

Exports:
    Linter: Configurable single-pass rule checker
    LintState: Per-traversal linter state (for hand-driven traversals)
    lint: Check a parsed journal with the default configuration
    parse_and_lint: Parse a document and check it in one call
    date_from_source: Date encoded in a document identifier's file name

Python 3.13+.
"""

from .linter import LintState, Linter, date_from_source, lint, parse_and_lint

__all__ = ["LintState", "Linter", "date_from_source", "lint", "parse_and_lint"]
