"""Journal parser module.

This module provides the main JournalParser class and related parsing
utilities organized into focused submodules.

Module Organization:
- core.py: Main JournalParser class and parse() entry point
- primitives.py: Basic parsers (time tokens, durations, tokens, delimiters)
- rules.py: Grammar rules (front matter, entries, line recovery)

Public API:
    JournalParser: Main parser class
    ParseContext: Per-parse error collection (advanced usage)
"""

from journalint.syntax.parser.core import JournalParser
from journalint.syntax.parser.rules import ParseContext

__all__ = ["JournalParser", "ParseContext"]
