"""Ages of partial dates and the yearly occurrences of anniversaries."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .age import Age, diff
from .dates import UNKNOWN, PartialDate


def _at(date: PartialDate, year: int, reference: datetime) -> datetime:
    d = date.on_year(year)
    return datetime(d.year, d.month, d.day, tzinfo=reference.tzinfo)


def age_as_of(date: PartialDate | None, reference: datetime | None) -> Age | None:
    """Age of `date` on `reference`, or None when no age can be computed.

    A date without a year is a recurring anniversary: the age is the time
    since its most recent occurrence on or before `reference`, so it is never
    negative and always under a year.
    """
    if date is None or reference is None or not date.has_month_day:
        return None
    if date.has_year:
        return diff(_at(date, date.year, reference), reference)

    candidate = _at(date, reference.year, reference)
    if candidate > reference:
        candidate = _at(date, reference.year - 1, reference)
    return diff(candidate, reference)


def next_occurrence(date: PartialDate | None, reference: datetime | None) -> datetime | None:
    """First occurrence of the month/day on or after `reference`'s calendar day.

    The recorded year, if any, is ignored.
    """
    if date is None or reference is None or not date.has_month_day:
        return None
    day_start = reference.replace(hour=0, minute=0, second=0, microsecond=0)
    candidate = _at(date, reference.year, reference)
    if candidate < day_start:
        candidate = _at(date, reference.year + 1, reference)
    return candidate


def days_until(date: PartialDate | None, reference: datetime | None) -> int | None:
    upcoming = next_occurrence(date, reference)
    if upcoming is None:
        return None
    return (upcoming.date() - reference.date()).days


@dataclass(frozen=True)
class Anniversary:
    name: str
    event: PartialDate = field(default=UNKNOWN)

    def age(self, as_of: datetime | None) -> str:
        age = age_as_of(self.event, as_of)
        return str(age) if age is not None else ""

    def until(self, as_of: datetime | None) -> str:
        """Composite time from `as_of` to the next occurrence; "" on the day itself."""
        upcoming = next_occurrence(self.event, as_of)
        if upcoming is None:
            return ""
        return str(diff(as_of.replace(hour=0, minute=0, second=0, microsecond=0), upcoming))

    def describe(self, as_of: datetime | None = None) -> str:
        if not self.event.has_month_day:
            return f"{'':<15} {self.name:<35}"
        as_of = as_of or datetime.now()
        if self.event.has_year:
            return f"{self.event.short_date():<15} {self.name:<35}  Age: {self.age(as_of)}"
        return f"{self.event.short_date():<15} {self.name:<35} Away: {self.until(as_of)}"
