"""Diagnostic report rendering.

Renders diagnostics against the document they were found in, for terminals
and for tooling. Positions are printed 1-based.

Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass

from journalint.diagnostics import Diagnostic
from journalint.enums import OutputFormat
from journalint.syntax import LineMap, Position

__all__ = ["STDIN_NAME", "DiagnosticFormatter"]

STDIN_NAME = "<STDIN>"

_RESET = "\033[0m"
_BOLD = "\033[1m"
_BOLD_RED = "\033[1;31m"
_BOLD_YELLOW = "\033[1;33m"
_CYAN = "\033[36m"


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Attributes:
        output_format: Output style (oneline, fancy, json)
        color: Enable ANSI color codes (for terminal output)
        filename: Name printed as the location of every diagnostic

    Example:
        >>> formatter = DiagnosticFormatter(filename="2006-01-02.md")
        >>> print(formatter.format(diagnostic, LineMap(text)))
        2006-01-02.md:6:27: incorrect-duration Incorrect duration: expected 1.25

        >>> formatter = DiagnosticFormatter(OutputFormat.FANCY, filename="2006-01-02.md")
        >>> print(formatter.format(diagnostic, LineMap(text)))
        warning[incorrect-duration]: Incorrect duration: expected 1.25
         --> 2006-01-02.md:6:27
          |
        6 | - 09:00-10:15 ABC 1.00 work
          |                   ^^^^
          = help: replace with `1.25`
    """

    output_format: OutputFormat = OutputFormat.ONELINE
    color: bool = False
    filename: str = STDIN_NAME

    def format(self, diagnostic: Diagnostic, line_map: LineMap) -> str:
        """Format a single diagnostic.

        Args:
            diagnostic: Diagnostic to format
            line_map: Line index of the document the diagnostic refers to

        Returns:
            Formatted diagnostic string, without a trailing newline
        """
        match self.output_format:
            case OutputFormat.ONELINE:
                return self._format_oneline(diagnostic, line_map)
            case OutputFormat.FANCY:
                return self._format_fancy(diagnostic, line_map)
            case OutputFormat.JSON:
                return self._format_json(diagnostic, line_map)

    def format_all(self, diagnostics: Iterable[Diagnostic], line_map: LineMap) -> str:
        """Format multiple diagnostics.

        Fancy reports are separated by a blank line, the others by a newline.
        """
        separator = "\n\n" if self.output_format is OutputFormat.FANCY else "\n"
        return separator.join(self.format(d, line_map) for d in diagnostics)

    def _paint(self, text: str, style: str) -> str:
        if not self.color:
            return text
        return f"{style}{text}{_RESET}"

    def _format_oneline(self, diagnostic: Diagnostic, line_map: LineMap) -> str:
        """Format diagnostic in single-line format.

        Example output:
            2006-01-02.md:6:27: incorrect-duration Incorrect duration: expected 1.25
        """
        start = line_map.position(diagnostic.span.start)
        colon = self._paint(":", _CYAN)
        return (
            f"{self._paint(self.filename, _BOLD)}{colon}{start.line + 1}{colon}"
            f"{start.character + 1}{colon} {self._paint(diagnostic.rule, _BOLD_RED)} "
            f"{diagnostic.message}"
        )

    def _format_fancy(self, diagnostic: Diagnostic, line_map: LineMap) -> str:
        """Format diagnostic as an annotated source excerpt.

        The caret underline covers the span on its first line; a span that
        continues onto later lines is underlined to the end of that line.
        """
        if diagnostic.severity == "error":
            severity = self._paint("error", _BOLD_RED)
        else:
            severity = self._paint("warning", _BOLD_YELLOW)
        start = line_map.position(diagnostic.span.start)
        end = line_map.position(diagnostic.span.end)
        text = line_map.line_text(start.line)

        number = str(start.line + 1)
        gutter = " " * len(number)
        end_character = end.character if end.line == start.line else len(text)
        width = max(1, min(end_character, len(text)) - start.character)

        parts = [
            f"{severity}[{diagnostic.rule}]: {diagnostic.message}",
            f"{gutter}--> {self.filename}:{_location(start)}",
            f"{gutter} |",
            f"{number} | {text}",
            f"{gutter} | {' ' * start.character}{self._paint('^' * width, _BOLD_RED)}",
        ]
        if diagnostic.suggestion is not None:
            parts.append(f"{gutter} = help: replace with `{diagnostic.suggestion}`")
        for related in diagnostic.related or ():
            location = _location(line_map.position(related.span.start))
            parts.append(f"{gutter} = note: {related.uri}:{location}: {related.message}")
        return "\n".join(parts)

    def _format_json(self, diagnostic: Diagnostic, line_map: LineMap) -> str:
        """Format diagnostic as JSON.

        Example output:
            {"file": "...", "line": 6, "column": 27, "rule": "incorrect-duration", ...}
        """
        start = line_map.position(diagnostic.span.start)
        data: dict[str, object] = {
            "file": self.filename,
            "line": start.line + 1,
            "column": start.character + 1,
            "start": diagnostic.span.start,
            "end": diagnostic.span.end,
            "rule": diagnostic.rule.value,
            "severity": diagnostic.severity,
            "message": diagnostic.message,
        }
        if diagnostic.suggestion is not None:
            data["suggestion"] = diagnostic.suggestion
        if diagnostic.related:
            data["related"] = [
                {
                    "uri": related.uri,
                    "start": related.span.start,
                    "end": related.span.end,
                    "message": related.message,
                }
                for related in diagnostic.related
            ]
        return json.dumps(data, ensure_ascii=False)


def _location(position: Position) -> str:
    return f"{position.line + 1}:{position.character + 1}"
