"""Core value types shared by the syntax and lint layers.

Exports:
    LooseDate: Strictly parsed YYYY-MM-DD date
    LooseTime: Verbatim HH:MM token resolved against a date on demand

Python 3.13+.
"""

from .loose import LooseDate, LooseTime

__all__ = ["LooseDate", "LooseTime"]
