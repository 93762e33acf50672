from __future__ import annotations

import logging
import re
from pathlib import Path

import vobject

from .attributes import dedupe
from .dates import UNKNOWN, DateParser, PartialDate
from .model import Address, Contact

logger = logging.getLogger(__name__)

# vCard BDAY/ANNIVERSARY forms: 1980-07-04, 19800704, --0704, --07-04, 1980.
# A trailing time part (T...) is ignored.
_VCARD_FULL = re.compile(r"^(\d{4})-?(\d{2})-?(\d{2})(?:T.*)?$")
_VCARD_MONTH_DAY = re.compile(r"^--(\d{2})-?(\d{2})$")
_VCARD_YEAR = re.compile(r"^(\d{4})$")


def parse_vcard_date(text: str | None, parser: DateParser | None = None) -> PartialDate:
    """Parse a vCard date value, falling back to the directory formats."""
    given = (text or "").strip()
    if not given:
        return UNKNOWN
    full = _VCARD_FULL.match(given)
    month_day = _VCARD_MONTH_DAY.match(given)
    year_only = _VCARD_YEAR.match(given)
    try:
        if full:
            return PartialDate(year=int(full[1]), month=int(full[2]), day=int(full[3]))
        if month_day:
            return PartialDate(month=int(month_day[1]), day=int(month_day[2]))
        if year_only:
            return PartialDate(year=int(year_only[1]))
    except ValueError:
        logger.debug("invalid vCard date %r", given)
        return UNKNOWN
    return (parser or DateParser()).parse(given)


def _get_text(v, default: str = "") -> str:
    if v is None:
        return default
    value = v.value if hasattr(v, "value") else v
    if isinstance(value, (list, tuple)):
        value = " ".join(str(p) for p in value if p)
    return str(value).strip()


def _address(vc: vobject.base.Component) -> Address:
    adr = getattr(vc, "adr", None)
    if adr is None:
        return Address()
    a = adr.value
    street = a.street if isinstance(a.street, list) else [a.street]
    return Address(
        street=dedupe(s.strip() for s in street if s),
        locality=_get_text(a.city),
        region=_get_text(a.region),
        postal_code=_get_text(a.code),
        country=_get_text(a.country),
    )


def contact_from_vcard(vc: vobject.base.Component, parser: DateParser | None = None) -> Contact:
    n = getattr(vc, "n", None)
    first = _get_text(n.value.given) if n is not None else ""
    last = _get_text(n.value.family) if n is not None else ""
    suffix = _get_text(n.value.suffix) if n is not None else ""

    labels: list[str] = []
    for cat in getattr(vc, "categories_list", []):
        value = cat.value if isinstance(cat.value, list) else str(cat.value).split(",")
        labels.extend(v.strip() for v in value)

    return Contact(
        name=_get_text(getattr(vc, "fn", None)),
        first=first,
        last=last,
        suffix=suffix,
        birthday=parse_vcard_date(_get_text(getattr(vc, "bday", None)), parser),
        emails=dedupe(_get_text(e).lower() for e in getattr(vc, "email_list", [])),
        phones=dedupe(re.sub(r"\s+", " ", _get_text(t)) for t in getattr(vc, "tel_list", [])),
        labels=dedupe(labels),
        address=_address(vc),
    )


def read_contacts_from_files(paths: list[Path], parser: DateParser | None = None) -> list[Contact]:
    """Parse every VCARD component in the given .vcf files."""
    contacts: list[Contact] = []
    for p in paths:
        data = p.read_text(encoding="utf-8", errors="replace")
        for vc in vobject.readComponents(data, ignoreUnreadable=True):
            if vc.name.upper() != "VCARD":
                logger.debug("%s: skipping %s component", p.name, vc.name)
                continue
            contacts.append(contact_from_vcard(vc, parser))
    logger.debug("read %d contact(s) from %d file(s)", len(contacts), len(paths))
    return contacts


def collect_sources(path: Path) -> list[Path]:
    """A .vcf file itself, or every .vcf directly inside a directory, sorted."""
    if path.is_file():
        return [path] if path.suffix.lower() == ".vcf" else []
    if not path.is_dir():
        return []
    return sorted(p for p in path.iterdir() if p.suffix.lower() == ".vcf")
