"""journalint exception hierarchy.

Problems found in journal text never surface as exceptions; they become
Diagnostic records. The exceptions below cover programmatic misuse and the
failures of collaborators that act on a parsed journal (time resolution,
auto-fix commands, rule lookup).

Python 3.13+. Zero external dependencies.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from journalint.enums import TimeErrorKind

    from .codes import Diagnostic

__all__ = [
    "CommandError",
    "CommandTargetNotFoundError",
    "InvalidTimeValueError",
    "JournalintError",
    "MissingRequiredValueError",
    "UnknownRuleError",
]


class JournalintError(Exception):
    """Base exception for all journalint errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: "str | Diagnostic") -> None:
        """Initialize JournalintError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, str):
            self.diagnostic: Diagnostic | None = None
            super().__init__(message)
        else:
            self.diagnostic = message
            super().__init__(f"{message.rule}: {message.message}")


class InvalidTimeValueError(JournalintError):
    """A loose time token cannot be resolved against a reference date.

    The token matched the time grammar (digits ':' digits or similar) but is
    semantically unusable: wrong field count, non-digit characters, minute
    beyond 59, or a day overflow past the last representable date.

    Attributes:
        value: The raw time token
        kind: Machine-readable failure category
        reason: Human-readable failure detail
    """

    def __init__(self, value: str, kind: "TimeErrorKind", reason: str) -> None:
        self.value = value
        self.kind = kind
        self.reason = reason
        super().__init__(f"{reason}: '{value}'")


class UnknownRuleError(JournalintError):
    """A rule identifier does not name any known rule."""

    def __init__(self, rule: str) -> None:
        self.rule = rule
        super().__init__(f"Unknown rule: '{rule}'")


class CommandError(JournalintError):
    """An auto-fix command could not compute its edit."""


class CommandTargetNotFoundError(CommandError):
    """No AST node of the kind a command edits overlaps the selection."""


class MissingRequiredValueError(CommandError):
    """A value the command's edit is computed from is absent.

    Examples:
    - The entry at the selection has no preceding entry
    - No document identifier was supplied to derive a date from
    """
