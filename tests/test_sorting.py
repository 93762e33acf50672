"""Tests for contact and anniversary orderings."""
from __future__ import annotations

import pytest

from directory_contacts.anniversary import Anniversary
from directory_contacts.dates import UNKNOWN, PartialDate
from directory_contacts.model import Contact
from directory_contacts.sorting import (
    by_birthday,
    by_display_name,
    by_name,
    compare_birthday,
    compare_display,
    compare_name,
    group_by_month,
    sort_anniversaries,
)


def _c(name: str = "", month: int | None = None, day: int | None = None,
       year: int | None = None, **kwargs) -> Contact:
    return Contact(name=name, birthday=PartialDate(year=year, month=month, day=day), **kwargs)


# ── By birthday ────────────────────────────────────────────────────────────────

def test_birthday_groups_by_month_day_then_name():
    records = [
        _c("Xmas", 12, 25),
        _c("", 1, 1),
        _c("B", 1, 1),
        _c("A", 1, 1),
    ]
    assert [c.display_name() for c in by_birthday(records)] == ["", "A", "B", "Xmas"]


def test_missing_year_sorts_before_real_year():
    with_year = _c("Zed", 7, 4, 1990)
    without = _c("Amy", 7, 4)
    assert compare_birthday(without, with_year) == -1
    assert by_birthday([with_year, without]) == [without, with_year]


def test_earlier_year_first_on_same_day():
    older = _c("Zed", 7, 4, 1950)
    younger = _c("Amy", 7, 4, 1990)
    assert by_birthday([younger, older]) == [older, younger]


def test_unknown_birthday_sorts_first():
    known = _c("Amy", 1, 1)
    unknown = Contact(name="Zed", birthday=UNKNOWN)
    assert by_birthday([known, unknown]) == [unknown, known]


def test_birthday_ignores_age():
    records = [_c("Old", 3, 1, 1920), _c("New", 2, 1, 2020)]
    assert [c.name for c in by_birthday(records)] == ["New", "Old"]


# ── By name ────────────────────────────────────────────────────────────────────

def test_name_orders_surname_then_given():
    records = [
        Contact(first="Ann", last="Smith"),
        Contact(first="Bob", last="Adams"),
        Contact(first="Al", last="Smith"),
    ]
    assert [c.display_name() for c in by_name(records)] == ["Bob Adams", "Al Smith", "Ann Smith"]


def test_name_falls_back_to_display_name():
    a = Contact(name="Zoe", first="Sam", last="Lee")
    b = Contact(name="Amy", first="Sam", last="Lee")
    assert compare_name(a, b) == 1
    assert by_name([a, b]) == [b, a]


def test_name_is_case_sensitive():
    assert by_display_name([_c("bob"), _c("Bob")])[0].name == "Bob"


def test_none_records_sort_first():
    c = _c("Amy")
    assert compare_display(None, c) == -1
    assert compare_display(c, None) == 1
    assert compare_display(None, None) == 0
    assert by_name([c, None]) == [None, c]
    assert by_birthday([c, None]) == [None, c]


def test_ties_keep_input_order():
    first = Contact(name="Same", emails=["one@example.com"])
    second = Contact(name="Same", emails=["two@example.com"])
    assert compare_name(first, second) == 0
    assert by_name([first, second])[0] is first
    assert by_name([second, first])[0] is second


def test_repeated_sorts_agree():
    records = [_c("C", 5, 5), _c("A", 5, 5, 1980), _c("B", 1, 9), _c("D"), _c("E", 5, 5)]
    once = by_birthday(records)
    assert by_birthday(list(reversed(records))) == once
    assert by_birthday(once) == once


# ── Calendar view ──────────────────────────────────────────────────────────────

def test_group_by_month():
    records = [_c("Dec", 12, 1), _c("Jan B", 1, 9), _c("Jan A", 1, 2), _c("None")]
    grouped = group_by_month(records)
    assert list(grouped) == ["January", "December"]
    assert [c.name for c in grouped["January"]] == ["Jan A", "Jan B"]


# ── Anniversaries ──────────────────────────────────────────────────────────────

def test_sort_anniversaries_month_day():
    items = [
        Anniversary("b", PartialDate(month=5, day=1)),
        Anniversary("a", PartialDate(year=2000, month=5, day=1)),
        Anniversary("c", PartialDate(month=1, day=1)),
    ]
    assert [a.name for a in sort_anniversaries(items)] == ["c", "b", "a"]


def test_sort_anniversaries_event():
    items = [
        Anniversary("b", PartialDate(year=2001, month=1, day=1)),
        Anniversary("a", PartialDate(year=1999, month=12, day=31)),
        Anniversary("c", PartialDate(year=1999, month=12, day=31)),
    ]
    assert [a.name for a in sort_anniversaries(items, "event")] == ["a", "c", "b"]


def test_sort_anniversaries_unknown_order():
    with pytest.raises(ValueError):
        sort_anniversaries([], "age")
