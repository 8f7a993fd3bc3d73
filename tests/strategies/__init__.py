"""Hypothesis strategies for journalint property-based testing.

Usage:
    from tests.strategies import consistent_journals, loose_time_tokens
"""

from .journal import (
    EXAMPLE_ENTRY,
    FRONT_MATTER,
    GeneratedJournal,
    activities,
    consistent_journals,
    entry_codes,
    format_hours,
    format_time,
    journal_dates,
    loose_time_tokens,
    minutes_of_day,
)

__all__ = [
    "EXAMPLE_ENTRY",
    "FRONT_MATTER",
    "GeneratedJournal",
    "activities",
    "consistent_journals",
    "entry_codes",
    "format_hours",
    "format_time",
    "journal_dates",
    "loose_time_tokens",
    "minutes_of_day",
]
