"""Directory requests for contact entries.

These are plain values describing what to send; a directory client
translates them into protocol operations and submits them.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from .attributes import apply_attributes, attribute_names, attribute_values
from .dates import DateParser
from .model import Contact
from .reconcile import reconcile

logger = logging.getLogger(__name__)

CONTACT_OBJECT_CLASSES: tuple[str, ...] = (
    "contact",
    "inetOrgPerson",
    "organizationalPerson",
    "person",
    "top",
)


@dataclass(frozen=True)
class SearchRequest:
    base_dn: str
    filter: str
    attributes: tuple[str, ...]
    scope: str = "subtree"


@dataclass(frozen=True)
class ModifyRequest:
    dn: str
    # (operation, attribute, values); operation is "add", "delete" or "replace"
    operations: tuple[tuple[str, str, tuple[str, ...]], ...] = ()


@dataclass(frozen=True)
class AddRequest:
    dn: str
    attributes: dict[str, list[str]] = field(default_factory=dict)


@dataclass(frozen=True)
class DeleteRequest:
    dn: str


def contacts_dn(base_dn: str) -> str:
    return f"ou=contacts,{base_dn}"


def escape_filter_value(value: str) -> str:
    """Escape a value for use inside an RFC 4515 search filter."""
    out = []
    for ch in value:
        if ch in "\\*()\0":
            out.append(f"\\{ord(ch):02x}")
        else:
            out.append(ch)
    return "".join(out)


def build_search_request(base_dn: str, labels: Iterable[str] | None = None) -> SearchRequest:
    """All contacts under the base, restricted to those carrying every label."""
    label_filter = "".join(f"(label={escape_filter_value(label)})" for label in labels or ())
    return SearchRequest(
        base_dn=contacts_dn(base_dn),
        filter=f"(&(objectClass=contact){label_filter})",
        attributes=tuple(attribute_names()),
    )


def build_single_request(dn: str) -> SearchRequest:
    return SearchRequest(
        base_dn=dn,
        filter="(&(objectClass=contact))",
        attributes=tuple(attribute_names()),
        scope="base",
    )


def build_modify_request(
    original: Contact | None,
    updated: Contact | None,
    immutable_key: str = "cn",
) -> ModifyRequest | None:
    """Minimal modification of `updated.id`; None when nothing changed.

    Single-valued modifications go out as replace operations.
    """
    if updated is None:
        return None
    changes = reconcile(attribute_values(original), attribute_values(updated), immutable_key)
    if changes is None:
        return None
    ops: list[tuple[str, str, tuple[str, ...]]] = []
    ops.extend(("delete", k, tuple(v)) for k, v in changes.delete.items())
    ops.extend(("add", k, tuple(v)) for k, v in changes.add.items())
    ops.extend(("replace", k, tuple(v)) for k, v in changes.modify.items())
    ops.extend(("replace", k, tuple(v)) for k, v in changes.replace.items())
    return ModifyRequest(dn=updated.id, operations=tuple(ops))


def build_add_request(
    base_dn: str,
    contact: Contact | None,
    object_classes: Iterable[str] = CONTACT_OBJECT_CLASSES,
) -> AddRequest | None:
    """Request creating `contact`; assigns its DN from the display name."""
    if contact is None:
        return None
    contact.id = f"cn={contact.display_name()},{contacts_dn(base_dn)}"
    attrs = {"objectClass": list(object_classes)}
    attrs.update(attribute_values(contact))
    return AddRequest(dn=contact.id, attributes=attrs)


def build_delete_request(dn: str) -> DeleteRequest:
    return DeleteRequest(dn=dn)


def contact_from_entry(
    dn: str,
    entry: Mapping[str, list[str]],
    parser: DateParser | None = None,
) -> Contact:
    return apply_attributes(Contact(id=dn), entry, parser)


def plan_save(
    base_dn: str,
    original: Contact | None,
    updated: Contact | None,
    immutable_key: str = "cn",
    object_classes: Iterable[str] = CONTACT_OBJECT_CLASSES,
) -> ModifyRequest | AddRequest | None:
    """Choose between updating an existing entry and creating a new one."""
    if updated is None:
        return None
    original = original or Contact()
    if updated.id and original.id == updated.id:
        request = build_modify_request(original, updated, immutable_key)
        if request is None:
            logger.debug("no changes for %s", updated.id)
        return request
    return build_add_request(base_dn, updated, object_classes)
