"""Diagnostic system for journal findings.

Provides positioned diagnostics with rule identifiers, suggestions and
related locations, plus the exception hierarchy of the package.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, RelatedInformation, Rule, Severity, Span
from .errors import (
    CommandError,
    CommandTargetNotFoundError,
    InvalidTimeValueError,
    JournalintError,
    MissingRequiredValueError,
    UnknownRuleError,
)
from .templates import DiagnosticTemplate

__all__ = [
    "CommandError",
    "CommandTargetNotFoundError",
    "Diagnostic",
    "DiagnosticTemplate",
    "InvalidTimeValueError",
    "JournalintError",
    "MissingRequiredValueError",
    "RelatedInformation",
    "Rule",
    "Severity",
    "Span",
    "UnknownRuleError",
]
