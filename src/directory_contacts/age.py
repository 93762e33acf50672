"""Calendar distance between two instants, cascaded into years down to seconds."""
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Age:
    years: int = 0
    months: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0

    @classmethod
    def between(cls, a: datetime, b: datetime) -> Age:
        return diff(a, b)

    # ── Field rendering ────────────────────────────────────────────────────────

    def year(self) -> str:
        return _stringify(self.years, "Year", "Years")

    def month(self) -> str:
        return _stringify(self.months, "Month", "Months")

    def day(self) -> str:
        return _stringify(self.days, "Day", "Days")

    def hour(self) -> str:
        return _stringify(self.hours, "Hour", "Hours")

    def minute(self) -> str:
        return _stringify(self.minutes, "Minute", "Minutes")

    def second(self) -> str:
        return _stringify(self.seconds, "Second", "Seconds")

    # ── Composite rendering ────────────────────────────────────────────────────

    def __str__(self) -> str:
        return _join([self.year(), self.month(), self.day()])

    def full(self) -> str:
        return _join([
            self.year(), self.month(), self.day(),
            self.hour(), self.minute(), self.second(),
        ])

    def short(self) -> str:
        """Largest non-zero field only; "" when the instants are calendar-identical."""
        for render in (self.year, self.month, self.day, self.hour, self.minute, self.second):
            text = render()
            if text:
                return text
        return ""


def _local(dt: datetime) -> datetime:
    return dt.astimezone().replace(tzinfo=None)


def _same_context(a: datetime, b: datetime) -> datetime:
    """Return `b` expressed in `a`'s timezone context (naive means local)."""
    if a.tzinfo is b.tzinfo:
        return b
    if a.tzinfo is None:
        return _local(b)
    return b.astimezone(a.tzinfo)


def diff(a: datetime, b: datetime) -> Age:
    """Field-wise calendar difference between `a` and `b`, in either order.

    The instants are ordered by absolute time first; the later one is then
    read in the earlier one's timezone context.

    This is wall-clock distance, not elapsed physical time: each calendar field
    is subtracted on its own and negative fields borrow from the next larger
    unit. A negative day count borrows the length of the earlier instant's
    month.
    """
    if a > _same_context(a, b):
        a, b = b, a
    b = _same_context(a, b)

    years = b.year - a.year
    months = b.month - a.month
    days = b.day - a.day
    hours = b.hour - a.hour
    minutes = b.minute - a.minute
    seconds = b.second - a.second

    if seconds < 0:
        seconds += 60
        minutes -= 1
    if minutes < 0:
        minutes += 60
        hours -= 1
    if hours < 0:
        hours += 24
        days -= 1
    if days < 0:
        days += calendar.monthrange(a.year, a.month)[1]
        months -= 1
    if months < 0:
        months += 12
        years -= 1

    return Age(years, months, days, hours, minutes, seconds)


def _stringify(amount: int, singular: str, plural: str) -> str:
    if amount == 0:
        return ""
    if amount == 1:
        return f"1 {singular}"
    return f"{amount} {plural}"


def _join(items: list[str]) -> str:
    return " ".join(item for item in items if item)
