"""journalint - parser, linter and auto-fixer for plain-text time-tracking journals.

A journal is a Markdown-like daily log: a front matter block with the day's
date and working hours, followed by entries such as

    - 09:00-10:15 ABCDEFG8 AB3 1.25 foo: bar: baz

journalint parses the document into a span-annotated AST, checks that the
front matter, the entries' times and their durations agree with each other,
and can rewrite the document to fix the findings it knows how to fix.

Public API:
    parse_journal - Parse journal text to AST
    parse_and_lint - Parse and check in one call
    Linter - Configurable rule checker
    fix_source - Apply all available auto-fixes to a document
    export - Write entries as JSON Lines or CSV
    Diagnostic - Positioned finding with rule, message and suggestion

Exceptions:
    JournalintError - Base exception class
    InvalidTimeValueError - Time token cannot be resolved against a date
    CommandError - Auto-fix command failure

Submodules:
    journalint.syntax - AST node types, parser, visitor and LineMap
    journalint.lint - Linter and per-traversal state
    journalint.fix - Auto-fix commands and text edits
    journalint.report - Terminal and JSON diagnostic rendering
    journalint.lsp - Language Server Protocol data shapes
"""

from .diagnostics import (
    CommandError,
    Diagnostic,
    InvalidTimeValueError,
    JournalintError,
    Rule,
)
from .export import export
from .fix import fix_source
from .lint import Linter, parse_and_lint
from .syntax import parse as parse_journal

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("journalint")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "CommandError",
    "Diagnostic",
    "InvalidTimeValueError",
    "JournalintError",
    "Linter",
    "Rule",
    "__version__",
    "export",
    "fix_source",
    "parse_and_lint",
    "parse_journal",
]
