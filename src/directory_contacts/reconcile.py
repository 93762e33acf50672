"""Classify attribute differences into directory update operations.

The directory protocol treats "add a value", "delete an attribute", "replace a
multi-valued attribute" and "modify a single value" as different operations
with different failure modes, so every changed attribute lands in exactly one
of those four buckets.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping, Sequence

logger = logging.getLogger(__name__)

BUCKETS = ("add", "delete", "modify", "replace")


@dataclass(frozen=True)
class ChangeSet:
    add: dict[str, list[str]] = field(default_factory=dict)
    delete: dict[str, list[str]] = field(default_factory=dict)
    modify: dict[str, list[str]] = field(default_factory=dict)
    replace: dict[str, list[str]] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not (self.add or self.delete or self.modify or self.replace)

    def keys(self) -> set[str]:
        return set(self.add) | set(self.delete) | set(self.modify) | set(self.replace)

    def bucket_of(self, key: str) -> str | None:
        for name in BUCKETS:
            if key in getattr(self, name):
                return name
        return None

    def as_dict(self) -> dict[str, dict[str, list[str]]]:
        return {name: dict(getattr(self, name)) for name in BUCKETS}


def _classify(pre: Sequence[str], new: Sequence[str]) -> tuple[str, list[str]]:
    if len(pre) == len(new):
        return ("replace" if len(pre) > 1 else "modify"), list(new)
    if not new:
        return "delete", list(pre)
    if not pre:
        return "add", list(new)
    return "replace", list(new)


def reconcile(
    original: Mapping[str, Sequence[str]],
    updated: Mapping[str, Sequence[str]],
    immutable_key: str = "cn",
) -> ChangeSet | None:
    """Partition the differences between two attribute sets.

    Returns None when the sets are equal; an empty ChangeSet means only the
    immutable key differed. Value lists compare in order.
    """
    if _normalized(original) == _normalized(updated):
        return None

    buckets: dict[str, dict[str, list[str]]] = {name: {} for name in BUCKETS}
    for key, new in updated.items():
        if key == immutable_key:
            continue
        if key not in original:
            buckets["add"][key] = list(new)
            continue
        pre = original[key]
        if list(pre) == list(new):
            continue
        bucket, values = _classify(pre, new)
        buckets[bucket][key] = values

    for key, pre in original.items():
        if key == immutable_key or key in updated:
            continue
        buckets["delete"][key] = list(pre)

    changes = ChangeSet(**buckets)
    logger.debug(
        "reconciled: %s",
        ", ".join(f"{name}={len(getattr(changes, name))}" for name in BUCKETS),
    )
    return changes


def _normalized(attrs: Mapping[str, Sequence[str]]) -> dict[str, list[str]]:
    return {k: list(v) for k, v in attrs.items()}
