from __future__ import annotations

from pathlib import Path

import vobject

from .model import Contact
from .sorting import by_name


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace(",", "\\,").replace(";", "\\;")


def _bday_value(contact: Contact) -> str:
    bday = contact.birthday
    if bday.kind == "full":
        return f"{bday.year:04d}-{bday.month:02d}-{bday.day:02d}"
    if bday.kind == "month-day":
        return f"--{bday.month:02d}{bday.day:02d}"
    if bday.kind == "year-only":
        return f"{bday.year:04d}"
    return ""


def contact_to_vcard(contact: Contact) -> vobject.base.Component:
    v = vobject.vCard()
    v.add('version'); v.version.value = "4.0"
    v.add('fn'); v.fn.value = contact.display_name() or "Unnamed"
    v.add('n'); v.n.value = vobject.vcard.Name(
        family=contact.last, given=contact.first, suffix=contact.suffix,
    )
    bday = _bday_value(contact)
    if bday:
        it = v.add('bday'); it.value = bday
    for e in contact.emails:
        it = v.add('email'); it.value = e
    for t in contact.phones:
        it = v.add('tel'); it.value = t
    if contact.labels:
        # written pre-encoded so the text escaping of CATEGORIES is ours
        it = v.add('categories')
        it.value = ",".join(_escape(label) for label in contact.labels)
        it.encoded = True
    a = contact.address
    if a.street or a.locality or a.region or a.postal_code or a.country:
        it = v.add('adr')
        it.value = vobject.vcard.Address(
            street=list(a.street), city=a.locality, region=a.region,
            code=a.postal_code, country=a.country,
        )
    it = v.add('prodid'); it.value = "-//directory-contacts//EN"
    return v


def export_vcards(contacts: list[Contact], path: Path) -> int:
    """Write contacts as vCard 4.0, sorted by name for stable output."""
    ordered = [c for c in by_name(contacts) if c is not None]
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("".join(contact_to_vcard(c).serialize() for c in ordered), encoding="utf-8")
    return len(ordered)
