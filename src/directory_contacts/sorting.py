"""Deterministic orderings for contact listings and birthday calendars.

Comparators are three-way (-1, 0, 1) and tolerate ``None`` records, empty
names and unknown dates, so they can be fed straight to ``functools.cmp_to_key``.
Python's sort is stable: records whose keys tie keep their input order.
"""
from __future__ import annotations

import calendar
from functools import cmp_to_key
from typing import Iterable

from .anniversary import Anniversary
from .dates import PartialDate
from .model import Contact


def _cmp(lhs, rhs) -> int:
    return (lhs > rhs) - (lhs < rhs)


def _none_first(lhs: object, rhs: object) -> int | None:
    if lhs is rhs:
        return 0
    if lhs is None:
        return -1
    if rhs is None:
        return 1
    return None


def _date_key(d: PartialDate) -> tuple[int, int, int, int]:
    # Unknown dates sort as month/day 0; a missing year sorts before any year.
    month = d.month if d.has_month_day else 0
    day = d.day if d.has_month_day else 0
    return month, day, int(d.has_year), d.year or 0


# ── Contacts ───────────────────────────────────────────────────────────────────

def compare_display(lhs: Contact | None, rhs: Contact | None) -> int:
    early = _none_first(lhs, rhs)
    if early is not None:
        return early
    return _cmp(lhs.display_name(), rhs.display_name())


def compare_name(lhs: Contact | None, rhs: Contact | None) -> int:
    """Surname, then given name, then display name."""
    early = _none_first(lhs, rhs)
    if early is not None:
        return early
    return (
        _cmp(lhs.last or "", rhs.last or "")
        or _cmp(lhs.first or "", rhs.first or "")
        or compare_display(lhs, rhs)
    )


def compare_birthday(lhs: Contact | None, rhs: Contact | None) -> int:
    """Month, day, year, then display name; the current year plays no part."""
    early = _none_first(lhs, rhs)
    if early is not None:
        return early
    return _cmp(_date_key(lhs.birthday), _date_key(rhs.birthday)) or compare_display(lhs, rhs)


def by_name(contacts: Iterable[Contact | None]) -> list[Contact | None]:
    return sorted(contacts, key=cmp_to_key(compare_name))


def by_display_name(contacts: Iterable[Contact | None]) -> list[Contact | None]:
    return sorted(contacts, key=cmp_to_key(compare_display))


def by_birthday(contacts: Iterable[Contact | None]) -> list[Contact | None]:
    return sorted(contacts, key=cmp_to_key(compare_birthday))


def group_by_month(contacts: Iterable[Contact]) -> dict[str, list[Contact]]:
    """Birthday calendar: month name -> contacts, months in calendar order.

    Contacts without a birthday are left out.
    """
    grouped: dict[str, list[Contact]] = {name: [] for name in calendar.month_name[1:]}
    for c in by_birthday(contacts):
        if c is not None and c.birthday.has_month_day:
            grouped[c.birthday.month_name()].append(c)
    return {month: members for month, members in grouped.items() if members}


# ── Anniversaries ──────────────────────────────────────────────────────────────

def compare_anniversary_name(lhs: Anniversary, rhs: Anniversary) -> int:
    return _cmp(lhs.name, rhs.name)


def compare_month_day(lhs: Anniversary, rhs: Anniversary) -> int:
    return _cmp(_date_key(lhs.event), _date_key(rhs.event)) or compare_anniversary_name(lhs, rhs)


def compare_event(lhs: Anniversary, rhs: Anniversary) -> int:
    """Chronological order of the recorded dates, then name."""
    def key(a: Anniversary) -> tuple[int, int, int]:
        month, day, _, year = _date_key(a.event)
        return year, month, day

    return _cmp(key(lhs), key(rhs)) or compare_anniversary_name(lhs, rhs)


def sort_anniversaries(items: Iterable[Anniversary], order: str = "month-day") -> list[Anniversary]:
    comparators = {
        "month-day": compare_month_day,
        "event": compare_event,
        "name": compare_anniversary_name,
    }
    try:
        comparator = comparators[order]
    except KeyError:
        raise ValueError(f"Unknown anniversary order: {order!r}") from None
    return sorted(items, key=cmp_to_key(comparator))
