"""Loose date and time values as written in journal text.

Journal times are wall-clock tokens that may run past midnight: "24:30" is
half past midnight of the following day and "50:15" is 02:15 two days
later. A LooseTime therefore stores its token verbatim and only acquires a
meaning once it is resolved against the front matter date.

Python 3.13+. Zero external dependencies.
"""

import re
from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta

from journalint.constants import DATE_FORMAT
from journalint.diagnostics import InvalidTimeValueError
from journalint.enums import TimeErrorKind

__all__ = ["LooseDate", "LooseTime"]

# Four-digit year, two-digit month and day, ASCII digits only.
_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

_ASCII_DIGITS = frozenset("0123456789")

_HOURS_PER_DAY = 24
_MAX_MINUTE = 59


def _is_ascii_number(text: str) -> bool:
    """Check that text is a non-empty run of ASCII digits.

    str.isdigit() accepts superscripts and other scripts' digits, which
    int() would then reject or misread.
    """
    return bool(text) and all(ch in _ASCII_DIGITS for ch in text)


@dataclass(frozen=True, slots=True)
class LooseDate:
    """Calendar date parsed strictly from ``YYYY-MM-DD``.

    Always holds a valid date; malformed or impossible dates are rejected
    by parse() and never constructed.
    """

    value: date

    @classmethod
    def parse(cls, text: str) -> "LooseDate":
        """Parse a ``YYYY-MM-DD`` date.

        Args:
            text: Date text without surrounding whitespace

        Returns:
            LooseDate wrapping the parsed date

        Raises:
            ValueError: If text is not a valid date in that exact layout
        """
        if _DATE_PATTERN.fullmatch(text) is None:
            msg = f"Expected a date in YYYY-MM-DD format, got '{text}'"
            raise ValueError(msg)
        year, month, day = (int(part) for part in text.split("-"))
        try:
            return cls(date(year, month, day))
        except ValueError as e:
            msg = f"Invalid calendar date '{text}': {e}"
            raise ValueError(msg) from e

    def __str__(self) -> str:
        return self.value.strftime(DATE_FORMAT)


@dataclass(frozen=True, slots=True)
class LooseTime:
    """Time-of-day token kept verbatim until resolved against a date.

    Example:
        >>> LooseTime("24:56").to_datetime(date(2006, 2, 3))
        datetime.datetime(2006, 2, 4, 0, 56, tzinfo=datetime.timezone.utc)
    """

    raw: str

    def __str__(self) -> str:
        return self.raw

    def to_datetime(self, reference: date) -> datetime:
        """Resolve the token to an absolute UTC timestamp.

        The hour may exceed 23; every full 24 hours moves the result one
        day past the reference date.

        Args:
            reference: Date the token is relative to

        Returns:
            Timezone-aware UTC datetime

        Raises:
            InvalidTimeValueError: If the token is not two numeric fields,
                the minute exceeds 59, or the day overflow leaves the
                supported calendar range
        """
        fields = self.raw.split(":")
        if len(fields) != 2:
            raise InvalidTimeValueError(
                self.raw,
                TimeErrorKind.NOT_TWO_FIELDS,
                "expected exactly two colon-separated fields",
            )
        hour_text, minute_text = fields
        if not _is_ascii_number(hour_text):
            raise InvalidTimeValueError(
                self.raw, TimeErrorKind.NON_NUMERIC_HOUR, "hour is not a number"
            )
        if not _is_ascii_number(minute_text):
            raise InvalidTimeValueError(
                self.raw, TimeErrorKind.NON_NUMERIC_MINUTE, "minute is not a number"
            )

        significant = minute_text.lstrip("0") or "0"
        minute = int(significant) if len(significant) <= 2 else _MAX_MINUTE + 1
        if minute > _MAX_MINUTE:
            raise InvalidTimeValueError(
                self.raw,
                TimeErrorKind.MINUTE_OUT_OF_RANGE,
                f"minute must be at most {_MAX_MINUTE}",
            )

        try:
            # int() refuses digit strings beyond sys.get_int_max_str_digits()
            day_offset, hour = divmod(int(hour_text), _HOURS_PER_DAY)
            day = reference + timedelta(days=day_offset)
        except (OverflowError, ValueError):
            raise InvalidTimeValueError(
                self.raw,
                TimeErrorKind.DATE_OVERFLOW,
                f"hour {hour_text} is out of range for {reference.isoformat()}",
            ) from None
        return datetime.combine(day, time(hour, minute), tzinfo=UTC)
