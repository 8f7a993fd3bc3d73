"""Language Server Protocol data shapes.

Converts diagnostics and auto-fix commands to the JSON-compatible
structures of the Language Server Protocol. Positions are 0-based line and
character offsets as produced by LineMap. No transport is provided here; a
server loop can pass the returned dictionaries straight to its JSON-RPC
layer.

Python 3.13+.
"""

from collections.abc import Iterable
from typing import Any

from journalint.constants import DIAGNOSTIC_SOURCE
from journalint.diagnostics import Diagnostic, Rule, Span, UnknownRuleError
from journalint.fix import AutofixCommand, TextEdit
from journalint.syntax import Journal, LineMap, Position, Range

__all__ = [
    "apply_command",
    "code_actions",
    "lsp_commands",
    "to_lsp_diagnostic",
    "to_lsp_range",
    "to_span",
]

type LspObject = dict[str, Any]

# DiagnosticSeverity of the protocol
_SEVERITY_ERROR = 1
_SEVERITY_WARNING = 2


def to_lsp_range(span: Span, line_map: LineMap) -> LspObject:
    """Convert a span to a protocol ``Range``."""
    range_ = line_map.to_range(span)
    return {
        "start": {"line": range_.start.line, "character": range_.start.character},
        "end": {"line": range_.end.line, "character": range_.end.character},
    }


def to_span(lsp_range: LspObject, line_map: LineMap) -> Span:
    """Convert a protocol ``Range`` to a span.

    Raises:
        KeyError: If the range lacks a position component
    """
    start = lsp_range["start"]
    end = lsp_range["end"]
    return line_map.to_span(
        Range(
            Position(start["line"], start["character"]),
            Position(end["line"], end["character"]),
        )
    )


def to_lsp_diagnostic(diagnostic: Diagnostic, line_map: LineMap) -> LspObject:
    """Convert a diagnostic to a protocol ``Diagnostic``.

    Related locations are assumed to lie in the document line_map indexes.
    """
    result: LspObject = {
        "range": to_lsp_range(diagnostic.span, line_map),
        "severity": _SEVERITY_ERROR if diagnostic.severity == "error" else _SEVERITY_WARNING,
        "code": diagnostic.rule.value,
        "source": DIAGNOSTIC_SOURCE,
        "message": diagnostic.message,
    }
    if diagnostic.related:
        result["relatedInformation"] = [
            {
                "location": {
                    "uri": related.uri,
                    "range": to_lsp_range(related.span, line_map),
                },
                "message": related.message,
            }
            for related in diagnostic.related
        ]
    if diagnostic.suggestion is not None:
        result["data"] = {"suggestion": diagnostic.suggestion}
    return result


def lsp_commands() -> list[str]:
    """Command identifiers for ``executeCommandProvider.commands``."""
    return [command.value for command in AutofixCommand]


def code_actions(
    uri: str, lsp_range: LspObject, diagnostics: Iterable[LspObject]
) -> list[LspObject]:
    """Protocol ``Command`` objects offered for diagnostics at a range.

    Diagnostics from other tools (a code that is not one of our rule
    identifiers) are ignored. Each command's arguments are the document URI
    and the range, the shape apply_command() accepts.
    """
    actions: list[LspObject] = []
    for diagnostic in diagnostics:
        code = diagnostic.get("code")
        if not isinstance(code, str):
            continue
        try:
            rule = Rule.parse(code)
        except UnknownRuleError:
            continue
        actions.extend(
            {"title": command.title, "command": command.value, "arguments": [uri, lsp_range]}
            for command in AutofixCommand
            if command.rule is rule
        )
    return actions


def apply_command(
    command_id: str,
    journal: Journal,
    line_map: LineMap,
    uri: str,
    lsp_range: LspObject,
) -> LspObject | None:
    """Execute an auto-fix command and build a protocol ``WorkspaceEdit``.

    Args:
        command_id: Identifier from lsp_commands()
        journal: Parsed document
        line_map: Line index of the same document
        uri: Document URI; its file name supplies the expected date
        lsp_range: Selection the command was invoked on

    Returns:
        ``{"label": ..., "edit": WorkspaceEdit}``, or None when the document
        already holds the fixed value

    Raises:
        ValueError: If command_id names no command
        CommandError: If the command cannot compute its edit
    """
    command = AutofixCommand(command_id)
    edit: TextEdit | None = command.execute(journal, to_span(lsp_range, line_map), uri)
    if edit is None:
        return None
    return {
        "label": command.title,
        "edit": {
            "changes": {
                uri: [{"range": to_lsp_range(edit.span, line_map), "newText": edit.new_text}],
            },
        },
    }
