"""Mapping between `Contact` fields and directory attributes.

Each directory attribute is declared once as a (key, accessor, mutator) triple.
Extraction walks the registry in order and omits empty fields, so absence,
never an empty string, means "not set".
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Mapping

from .dates import DateParser
from .model import Contact

AttributeSet = dict[str, list[str]]


@dataclass(frozen=True)
class Attribute:
    key: str
    get: Callable[[Contact], list[str]]
    set: Callable[[Contact, list[str], DateParser], None]


def dedupe(values: Iterable[str] | None) -> list[str]:
    """Drop empty and repeated values, keeping first-seen order."""
    seen: set[str] = set()
    out: list[str] = []
    for v in values or ():
        if v and v not in seen:
            seen.add(v)
            out.append(v)
    return out


def _first(values: list[str]) -> str:
    return values[0] if values else ""


def _single(attr: str) -> Callable[[Contact], list[str]]:
    def get(c: Contact) -> list[str]:
        value = getattr(c, attr)
        return [value] if value else []
    return get


def _set_single(attr: str) -> Callable[[Contact, list[str], DateParser], None]:
    def set_(c: Contact, values: list[str], _parser: DateParser) -> None:
        setattr(c, attr, _first(values))
    return set_


def _multi(attr: str) -> Callable[[Contact], list[str]]:
    return lambda c: list(getattr(c, attr))


def _set_multi(attr: str) -> Callable[[Contact, list[str], DateParser], None]:
    def set_(c: Contact, values: list[str], _parser: DateParser) -> None:
        setattr(c, attr, dedupe(values))
    return set_


def _address_single(attr: str) -> Callable[[Contact], list[str]]:
    def get(c: Contact) -> list[str]:
        value = getattr(c.address, attr)
        return [value] if value else []
    return get


def _set_address_single(attr: str) -> Callable[[Contact, list[str], DateParser], None]:
    def set_(c: Contact, values: list[str], _parser: DateParser) -> None:
        setattr(c.address, attr, _first(values))
    return set_


def _get_street(c: Contact) -> list[str]:
    return list(c.address.street)


def _set_street(c: Contact, values: list[str], _parser: DateParser) -> None:
    c.address.street = dedupe(values)


def _get_birthday(c: Contact) -> list[str]:
    # "Monday, January 2, 2006", "January 2" or a bare "2006"
    text = str(c.birthday)
    return [text] if text else []


def _set_birthday(c: Contact, values: list[str], parser: DateParser) -> None:
    c.birthday = parser.parse(_first(values))


CONTACT_ATTRIBUTES: tuple[Attribute, ...] = (
    Attribute("displayName", _single("name"), _set_single("name")),
    Attribute("givenName", _single("first"), _set_single("first")),
    Attribute("sn", _single("last"), _set_single("last")),
    Attribute("generationQualifier", _single("suffix"), _set_single("suffix")),
    Attribute("birthDate", _get_birthday, _set_birthday),
    Attribute("mail", _multi("emails"), _set_multi("emails")),
    Attribute("telephoneNumber", _multi("phones"), _set_multi("phones")),
    Attribute("label", _multi("labels"), _set_multi("labels")),
    Attribute("cn", _single("common_name"), _set_single("common_name")),
    Attribute("street", _get_street, _set_street),
    Attribute("l", _address_single("locality"), _set_address_single("locality")),
    Attribute("st", _address_single("region"), _set_address_single("region")),
    Attribute("postalCode", _address_single("postal_code"), _set_address_single("postal_code")),
    Attribute("countryCode", _address_single("country"), _set_address_single("country")),
)


def attribute_names() -> list[str]:
    return [a.key for a in CONTACT_ATTRIBUTES]


def attribute_values(contact: Contact | None) -> AttributeSet:
    """The contact's mutable directory attributes; empty fields are omitted."""
    values: AttributeSet = {}
    if contact is None:
        return values
    for attr in CONTACT_ATTRIBUTES:
        v = attr.get(contact)
        if v:
            values[attr.key] = v
    return values


def apply_attributes(
    contact: Contact,
    entry: Mapping[str, list[str]],
    parser: DateParser | None = None,
) -> Contact:
    """Populate every registered field of `contact` from a directory entry.

    Attributes missing from `entry` reset their field to empty.
    """
    parser = parser or DateParser()
    for attr in CONTACT_ATTRIBUTES:
        attr.set(contact, list(entry.get(attr.key, [])), parser)
    return contact
