"""Shared constants for journalint.

This module provides centralized configuration constants used across
the syntax, lint and fix packages. Placing constants here avoids circular
imports and provides a single source of truth.

Constants are grouped by domain:
- Input limits: size guard for parsed documents
- Formats: date and time layouts of the journal format
- Lint tolerances: comparison slack for written durations
- Fix limits: bound on the iterative auto-fix loop
- Exit codes: process status values of the command line

Python 3.13+. Zero external dependencies.
"""

from datetime import timedelta

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Input limits
    "MAX_SOURCE_SIZE",
    # Formats
    "DATE_FORMAT",
    "FRONT_MATTER_DELIMITER_MIN",
    "DIAGNOSTIC_SOURCE",
    # Lint tolerances
    "DURATION_TOLERANCE",
    # Fix limits
    "MAX_FIX_ITERATIONS",
    # Exit codes
    "EXIT_OK",
    "EXIT_VIOLATIONS",
    "EXIT_USAGE",
    "EXIT_NO_INPUT",
    "EXIT_SOFTWARE",
    "EXIT_IO_ERROR",
]

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Maximum source size in characters (10 MiB).
# Journals are a few KB; anything larger is almost certainly the wrong file.
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# FORMATS
# ============================================================================

# Front matter date and file name stem layout.
DATE_FORMAT: str = "%Y-%m-%d"

# Minimum number of dashes in a front matter delimiter line.
FRONT_MATTER_DELIMITER_MIN: int = 3

# Value of the "source" field in editor-facing diagnostics.
DIAGNOSTIC_SOURCE: str = "journalint"

# ============================================================================
# LINT TOLERANCES
# ============================================================================

# A duration literal has two decimals, i.e. a precision of 0.01 h = 36 s.
# Half of that is the largest rounding error a correct literal can carry.
DURATION_TOLERANCE: timedelta = timedelta(seconds=18)

# ============================================================================
# FIX LIMITS
# ============================================================================

# Upper bound on parse/lint/apply rounds in fix_source().
MAX_FIX_ITERATIONS: int = 1000

# ============================================================================
# EXIT CODES (sysexits.h)
# ============================================================================

EXIT_OK: int = 0
EXIT_VIOLATIONS: int = 1
EXIT_USAGE: int = 64
EXIT_NO_INPUT: int = 66
EXIT_SOFTWARE: int = 70
EXIT_IO_ERROR: int = 74
