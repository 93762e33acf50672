"""Partial dates and the date formats accepted from the directory.

A birthday stored in the directory may omit its year ("July 4"). That is data,
not a parse failure, so `PartialDate` carries the year as an optional field and
every consumer branches on `has_year` instead of checking for a magic value.
"""
from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass
from datetime import date, datetime

logger = logging.getLogger(__name__)

# Leap year used to validate and parse month/day pairs that carry no year.
_LEAP_YEAR = 2000


@dataclass(frozen=True)
class PartialDate:
    year: int | None = None
    month: int | None = None
    day: int | None = None

    def __post_init__(self) -> None:
        if (self.month is None) != (self.day is None):
            raise ValueError("PartialDate needs both month and day, or neither.")
        if self.year is not None and not 1 <= self.year <= 9999:
            raise ValueError(f"Year out of range: {self.year}")
        if self.month is None:
            return
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month out of range: {self.month}")
        last = calendar.monthrange(self.year or _LEAP_YEAR, self.month)[1]
        if not 1 <= self.day <= last:
            raise ValueError(f"Day out of range for month {self.month}: {self.day}")

    # ── Variant checks ─────────────────────────────────────────────────────────

    @property
    def kind(self) -> str:
        """One of ``unknown``, ``year-only``, ``month-day`` or ``full``."""
        if self.month is None:
            return "year-only" if self.year is not None else "unknown"
        return "full" if self.year is not None else "month-day"

    @property
    def is_known(self) -> bool:
        return self.kind != "unknown"

    @property
    def has_year(self) -> bool:
        return self.year is not None

    @property
    def has_month_day(self) -> bool:
        return self.month is not None

    # ── Conversions ────────────────────────────────────────────────────────────

    @classmethod
    def from_date(cls, d: date) -> PartialDate:
        return cls(year=d.year, month=d.month, day=d.day)

    def on_year(self, year: int) -> date:
        """Place the month/day on `year`; Feb 29 rolls over to Mar 1 when needed."""
        if not self.has_month_day:
            raise ValueError("Cannot place a date without month and day on a year.")
        if self.month == 2 and self.day == 29 and not calendar.isleap(year):
            return date(year, 3, 1)
        return date(year, self.month, self.day)

    def to_date(self) -> date | None:
        if self.kind != "full":
            return None
        return date(self.year, self.month, self.day)

    # ── Rendering ──────────────────────────────────────────────────────────────

    def full_date(self) -> str:
        """Storage form: ``Monday, January 2, 2006`` or ``January 2``."""
        if not self.has_month_day:
            return ""
        month_day = f"{calendar.month_name[self.month]} {self.day}"
        if not self.has_year:
            return month_day
        return f"{self.day_of_week()}, {month_day}, {self.year:04d}"

    def short_date(self) -> str:
        """Listing form with a space-padded day: ``Jan  2, 2006`` or ``Jan  2``."""
        if not self.has_month_day:
            return ""
        month_day = f"{calendar.month_abbr[self.month]} {self.day:>2}"
        if not self.has_year:
            return month_day
        return f"{month_day}, {self.year:04d}"

    def day_of_week(self) -> str:
        """Weekday name, for the recorded year or the leap reference year."""
        if not self.has_month_day:
            return ""
        return calendar.day_name[self.on_year(self.year or _LEAP_YEAR).weekday()]

    def month_name(self) -> str:
        if not self.has_month_day:
            return ""
        return calendar.month_name[self.month]

    def __str__(self) -> str:
        if self.kind == "year-only":
            return f"{self.year:04d}"
        return self.full_date()


UNKNOWN = PartialDate()


# ── Parsing ────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class DateFormat:
    """A `strptime` pattern and whether it carries a year."""

    pattern: str
    has_year: bool

    def __post_init__(self) -> None:
        if self.has_year != ("%Y" in self.pattern or "%y" in self.pattern):
            raise ValueError(f"has_year does not match pattern {self.pattern!r}")
        if not self.has_year and not self.has_day:
            raise ValueError(f"Pattern {self.pattern!r} carries neither a year nor a day")

    @property
    def has_day(self) -> bool:
        return "%d" in self.pattern


# First match wins. `%d` accepts "2", "02" and, through the whitespace run in
# front of it, a space-padded " 2". Numeric forms are month/day.
DEFAULT_DATE_FORMATS: tuple[DateFormat, ...] = (
    DateFormat("%A, %B %d, %Y", True),
    DateFormat("%B %d, %Y", True),
    DateFormat("%B %d", False),
    DateFormat("%b %d, %Y", True),
    DateFormat("%b %d", False),
    DateFormat("%m/%d/%Y", True),
    DateFormat("%m/%d/%y", True),
    DateFormat("%m/%d", False),
    DateFormat("%Y", True),
)


class DateParser:
    """Parse directory date strings against an ordered, immutable format list."""

    def __init__(self, formats: tuple[DateFormat, ...] | list[DateFormat] = DEFAULT_DATE_FORMATS):
        self.formats: tuple[DateFormat, ...] = tuple(formats)

    def parse(self, text: str | None) -> PartialDate:
        given = (text or "").strip()
        if not given:
            return UNKNOWN
        for fmt in self.formats:
            parsed = self._try(fmt, given)
            if parsed is not None:
                return parsed
        logger.debug("no date format matches %r", given)
        return UNKNOWN

    @staticmethod
    def _try(fmt: DateFormat, given: str) -> PartialDate | None:
        try:
            if fmt.has_year:
                d = datetime.strptime(given, fmt.pattern)
                if not fmt.has_day:
                    return PartialDate(year=d.year)
                return PartialDate(year=d.year, month=d.month, day=d.day)
            # Parse yearless input inside a leap year so Feb 29 is accepted.
            d = datetime.strptime(f"{given} {_LEAP_YEAR}", f"{fmt.pattern} %Y")
            return PartialDate(month=d.month, day=d.day)
        except ValueError:
            return None


def parse_date(text: str | None) -> PartialDate:
    return DateParser().parse(text)
