from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from .age import Age, diff
from .dates import UNKNOWN, PartialDate

if TYPE_CHECKING:
    from .reconcile import ChangeSet


@dataclass
class Address:
    street: list[str] = field(default_factory=list)
    locality: str = ""
    region: str = ""
    postal_code: str = ""
    country: str = ""  # ISO country code, as stored in countryCode


@dataclass
class Contact:
    id: str = ""                      # directory DN; empty until created
    name: str = ""                    # explicit display name
    first: str = ""
    last: str = ""
    suffix: str = ""
    birthday: PartialDate = UNKNOWN
    emails: list[str] = field(default_factory=list)
    phones: list[str] = field(default_factory=list)
    labels: list[str] = field(default_factory=list)
    common_name: str = ""
    address: Address = field(default_factory=Address)

    def display_name(self) -> str:
        if self.name:
            return self.name
        if self.common_name:
            return self.common_name
        return " ".join(p for p in (self.first.strip(), self.last.strip()) if p)

    # ── Birthday views ─────────────────────────────────────────────────────────

    def age(self) -> str:
        return self.age_on(datetime.now())

    def age_on(self, when: datetime | None) -> str:
        """Short age on `when`; "" when the birthday has no year."""
        if when is None:
            return ""
        age = self.exact_age_on(when)
        return age.short() if age is not None else ""

    def exact_age_on(self, when: datetime) -> Age | None:
        if self.birthday.kind != "full":
            return None
        born = self.birthday.to_date()
        return diff(datetime(born.year, born.month, born.day, tzinfo=when.tzinfo), when)

    def birth_date(self) -> str:
        return self.birthday.short_date()

    def full_birth_date(self) -> str:
        return self.birthday.full_date()

    def birth_day_of_week(self) -> str:
        return self.birthday.day_of_week()

    def birth_day_of_month(self) -> int:
        return self.birthday.day if self.birthday.has_month_day else -1

    def birth_month(self) -> str:
        return self.birthday.month_name()

    def birth_year(self) -> int:
        return self.birthday.year if self.birthday.has_year else -1

    # ── Reconciliation ─────────────────────────────────────────────────────────

    def changes(self, other: Contact, immutable_key: str = "cn") -> ChangeSet | None:
        from .attributes import attribute_values
        from .reconcile import reconcile
        return reconcile(attribute_values(self), attribute_values(other), immutable_key=immutable_key)
