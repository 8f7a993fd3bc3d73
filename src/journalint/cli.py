"""Command line interface.

Usage:
    journalint FILE                     report diagnostics
    journalint FILE --fix               apply auto-fixes in place
    journalint FILE --export json       export entries as JSON Lines

Exit codes follow sysexits.h:
    0   nothing reported
    1   diagnostics reported
    64  usage error
    66  input file does not exist
    70  an auto-fix command failed
    74  the file could not be read or written
"""

import argparse
import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import NoReturn, TextIO

from journalint.constants import (
    EXIT_IO_ERROR,
    EXIT_NO_INPUT,
    EXIT_OK,
    EXIT_SOFTWARE,
    EXIT_USAGE,
    EXIT_VIOLATIONS,
)
from journalint.diagnostics import Diagnostic, JournalintError, Rule, UnknownRuleError
from journalint.enums import ExportFormat, OutputFormat
from journalint.export import export
from journalint.fix import fix_source
from journalint.lint import parse_and_lint
from journalint.report import DiagnosticFormatter
from journalint.syntax import LineMap

__all__ = ["main"]

logger = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with EX_USAGE instead of 2."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="journalint",
        description="Lint, fix and export plain-text time-tracking journals.",
    )
    parser.add_argument("file", metavar="FILE", type=Path, help="journal file to check")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--fix",
        action="store_true",
        help="apply auto-fixes and rewrite FILE in place",
    )
    mode.add_argument(
        "--export",
        type=ExportFormat,
        choices=list(ExportFormat),
        metavar="{json,csv}",
        help="write the entries to stdout in the given format",
    )
    parser.add_argument(
        "--split-activity-prefixes",
        action="store_true",
        help="with --export, move 'prefix: ' parts of the activity into codes",
    )
    parser.add_argument(
        "--format",
        type=OutputFormat,
        choices=list(OutputFormat),
        default=OutputFormat.ONELINE,
        metavar="{oneline,fancy,json}",
        help="diagnostic report format (default: oneline)",
    )
    parser.add_argument(
        "--rule",
        action="append",
        default=[],
        metavar="RULE",
        help="report only diagnostics of this rule (repeatable)",
    )
    parser.add_argument(
        "--color",
        choices=("auto", "always", "never"),
        default="auto",
        help="colorize terminal output (default: auto)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="log progress to stderr (-v info, -vv debug)",
    )
    return parser


def _configure_logging(verbosity: int) -> None:
    if verbosity <= 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _use_color(choice: str, stream: TextIO) -> bool:
    match choice:
        case "always":
            return True
        case "never":
            return False
        case _:
            return stream.isatty() and "NO_COLOR" not in os.environ


def _report(
    diagnostics: Sequence[Diagnostic],
    formatter: DiagnosticFormatter,
    line_map: LineMap,
    stream: TextIO,
) -> None:
    if diagnostics:
        stream.write(formatter.format_all(diagnostics, line_map))
        stream.write("\n")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line interface.

    Args:
        argv: Command line arguments without the program name (None uses sys.argv)

    Returns:
        Process exit code
    """
    args = _build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    try:
        rules = frozenset(Rule.parse(rule) for rule in args.rule)
    except UnknownRuleError as e:
        print(f"journalint: {e}", file=sys.stderr)
        return EXIT_USAGE

    path: Path = args.file
    filename = str(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        print(f"journalint: {filename}: No such file", file=sys.stderr)
        return EXIT_NO_INPUT
    except (OSError, UnicodeDecodeError) as e:
        print(f"journalint: failed to read {filename}: {e}", file=sys.stderr)
        return EXIT_IO_ERROR

    if args.fix:
        try:
            text, applied = fix_source(text, filename)
        except JournalintError as e:
            print(f"journalint: auto-fix failed: {e}", file=sys.stderr)
            return EXIT_SOFTWARE
        except ValueError as e:
            print(f"journalint: {filename}: {e}", file=sys.stderr)
            return EXIT_IO_ERROR
        if applied:
            try:
                path.write_text(text, encoding="utf-8")
            except OSError as e:
                print(f"journalint: failed to write {filename}: {e}", file=sys.stderr)
                return EXIT_IO_ERROR
            logger.info("Applied %d fix(es) to %s", applied, filename)

    try:
        journal, diagnostics = parse_and_lint(filename, text)
    except ValueError as e:
        print(f"journalint: {filename}: {e}", file=sys.stderr)
        return EXIT_IO_ERROR

    if rules:
        diagnostics = tuple(d for d in diagnostics if d.rule in rules)
    line_map = LineMap(text)

    if args.export is not None:
        formatter = DiagnosticFormatter(
            OutputFormat.ONELINE, color=_use_color(args.color, sys.stderr), filename=filename
        )
        _report(diagnostics, formatter, line_map, sys.stderr)
        if journal is not None:
            export(
                journal,
                args.export,
                sys.stdout,
                split_activity_prefixes=args.split_activity_prefixes,
            )
    else:
        formatter = DiagnosticFormatter(
            args.format, color=_use_color(args.color, sys.stdout), filename=filename
        )
        _report(diagnostics, formatter, line_map, sys.stdout)

    return EXIT_VIOLATIONS if diagnostics else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
