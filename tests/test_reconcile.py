"""Tests for attribute extraction and change-set classification."""
from __future__ import annotations

from directory_contacts.attributes import (
    apply_attributes,
    attribute_names,
    attribute_values,
    dedupe,
)
from directory_contacts.dates import PartialDate
from directory_contacts.model import Address, Contact
from directory_contacts.reconcile import BUCKETS, ChangeSet, reconcile


# ── reconcile ──────────────────────────────────────────────────────────────────

def test_single_to_multi_value_is_replace():
    ch = reconcile({"mail": ["a@x.com"]}, {"mail": ["a@x.com", "b@x.com"]})
    assert ch.replace == {"mail": ["a@x.com", "b@x.com"]}
    assert ch.bucket_of("mail") == "replace"


def test_single_value_change_is_modify():
    ch = reconcile({"mail": ["a@x.com"]}, {"mail": ["b@x.com"]})
    assert ch.modify == {"mail": ["b@x.com"]}
    assert not (ch.add or ch.delete or ch.replace)


def test_removed_attribute_is_delete_with_old_values():
    ch = reconcile({"label": ["x"]}, {})
    assert ch.delete == {"label": ["x"]}


def test_new_attribute_is_add():
    ch = reconcile({}, {"label": ["x", "y"]})
    assert ch.add == {"label": ["x", "y"]}


def test_multi_value_same_cardinality_is_replace():
    ch = reconcile({"mail": ["a", "b"]}, {"mail": ["a", "c"]})
    assert ch.replace == {"mail": ["a", "c"]}


def test_order_matters():
    ch = reconcile({"mail": ["a", "b"]}, {"mail": ["b", "a"]})
    assert ch.bucket_of("mail") == "replace"


def test_emptied_and_filled_values():
    assert reconcile({"mail": ["a"]}, {"mail": []}).delete == {"mail": ["a"]}
    assert reconcile({"mail": []}, {"mail": ["a"]}).add == {"mail": ["a"]}


def test_equal_sets_give_no_changes():
    attrs = {"mail": ["a", "b"], "sn": ["Smith"], "cn": ["Ann"]}
    assert reconcile(attrs, dict(attrs)) is None
    assert reconcile({}, {}) is None


def test_immutable_key_never_reported():
    ch = reconcile({"cn": ["Ann"], "sn": ["Smith"]}, {"cn": ["Anne"], "sn": ["Smith"]})
    assert ch is not None
    assert ch.is_empty
    ch = reconcile({"cn": ["Ann"]}, {"sn": ["Smith"]})
    assert "cn" not in ch.keys()
    assert ch.add == {"sn": ["Smith"]}


def test_custom_immutable_key():
    ch = reconcile({"uid": ["1"], "sn": ["A"]}, {"uid": ["2"], "sn": ["B"]}, immutable_key="uid")
    assert ch.keys() == {"sn"}


def test_every_key_in_at_most_one_bucket():
    original = {"a": ["1"], "b": ["1", "2"], "c": ["x"], "d": ["same"], "cn": ["n"]}
    updated = {"a": ["2"], "b": ["1"], "e": ["new"], "d": ["same"], "cn": ["m"]}
    ch = reconcile(original, updated)
    seen = [key for name in BUCKETS for key in getattr(ch, name)]
    assert len(seen) == len(set(seen))
    assert set(seen) == {"a", "b", "c", "e"}
    assert ch.bucket_of("d") is None


def test_as_dict():
    ch = ChangeSet(add={"sn": ["x"]})
    assert ch.as_dict() == {"add": {"sn": ["x"]}, "delete": {}, "modify": {}, "replace": {}}


# ── Contact attributes ─────────────────────────────────────────────────────────

def _contact() -> Contact:
    return Contact(
        id="id",
        name="Name",
        first="First",
        last="Last",
        birthday=PartialDate(1990, 1, 1),
        emails=["Email1", "Email2"],
        phones=["Phone", "Phone Alt"],
        labels=["Label", "Another Label"],
    )


def test_attribute_values_omit_empty_fields():
    vals = attribute_values(_contact())
    assert len(vals) == 7
    assert vals["birthDate"] == ["Monday, January 1, 1990"]
    assert "cn" not in vals
    assert "generationQualifier" not in vals


def test_contact_changes():
    c = _contact()
    c1 = Contact(
        id="id2",
        name="Name",
        last="Last",
        birthday=PartialDate(1991, 1, 1),
        emails=["Email1"],
        phones=["Phone", "Phone Alt", "Phone 3"],
        labels=["Label", "Another Label"],
    )
    ch = c.changes(c1)
    assert ch.add == {}
    assert ch.delete == {"givenName": ["First"]}
    assert set(ch.replace) == {"mail", "telephoneNumber"}
    assert ch.modify == {"birthDate": ["Tuesday, January 1, 1991"]}


def test_contact_changes_none_when_identical():
    assert _contact().changes(_contact()) is None


def test_apply_attributes():
    entry = {
        "displayName": ["Ann Smith"],
        "sn": ["Smith"],
        "birthDate": ["July 4"],
        "mail": ["a@x.com", "b@x.com"],
        "street": ["1 High St", "Flat 2"],
        "l": ["London"],
        "countryCode": ["GB"],
    }
    c = apply_attributes(Contact(first="stale"), entry)
    assert c.name == "Ann Smith"
    assert c.first == ""
    assert c.birthday == PartialDate(month=7, day=4)
    assert c.emails == ["a@x.com", "b@x.com"]
    assert c.address == Address(street=["1 High St", "Flat 2"], locality="London", country="GB")
    assert attribute_values(c) == entry


def test_apply_attributes_dedupes_entry_values():
    c = apply_attributes(Contact(), {
        "mail": ["a@x.com", "", "a@x.com", "b@x.com"],
        "street": ["1 High St", "1 High St"],
    })
    assert c.emails == ["a@x.com", "b@x.com"]
    assert c.address.street == ["1 High St"]


def test_year_only_birthday_kept():
    c = Contact(name="Ann", birthday=PartialDate(year=1980))
    vals = attribute_values(c)
    assert vals["birthDate"] == ["1980"]
    assert apply_attributes(Contact(), vals).birthday == PartialDate(year=1980)

    full = Contact(name="Ann", birthday=PartialDate(1980, 7, 4))
    ch = c.changes(full)
    assert ch.modify == {"birthDate": ["Friday, July 4, 1980"]}
    assert ch.add == {}


def test_attribute_names():
    names = attribute_names()
    assert names[0] == "displayName"
    assert {"cn", "birthDate", "mail", "label", "postalCode"} <= set(names)


def test_dedupe():
    assert dedupe(["a", "", "a", "b", "a"]) == ["a", "b"]
    assert dedupe(None) == []
