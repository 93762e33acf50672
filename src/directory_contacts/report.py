from __future__ import annotations

from datetime import datetime

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .anniversary import days_until
from .directory import AddRequest, ModifyRequest
from .model import Contact
from .reconcile import BUCKETS, ChangeSet

console = Console()

# ── Palette ────────────────────────────────────────────────────────────────────
_ACCENT  = "#4d9fff"
_GREEN   = "#3ecf8e"
_AMBER   = "#f0a500"
_RED     = "#f05c5c"
_DIM     = "#546075"
_BORDER  = "#2a3347"

_BUCKET_COLOURS = {"add": _GREEN, "delete": _RED, "modify": _AMBER, "replace": _ACCENT}


def make_title(main: str, *parts: str) -> str:
    return " :: ".join([main, *parts])


def print_contacts(contacts: list[Contact], labels: list[str] | None = None, owner: str = "Contacts") -> None:
    table = Table(title=make_title(owner, *(labels or [])), border_style=_BORDER, header_style="bold")
    table.add_column("Name")
    table.add_column("Email")
    table.add_column("Phone")
    table.add_column("Labels", style=f"dim {_DIM}")
    for c in contacts:
        table.add_row(c.display_name(), ", ".join(c.emails), ", ".join(c.phones), ", ".join(c.labels))
    console.print(table)


def _upcoming(contact: Contact, as_of: datetime) -> str:
    days = days_until(contact.birthday, as_of)
    if days is None:
        return ""
    if days == 0:
        return "today"
    return "tomorrow" if days == 1 else f"in {days} days"


def print_birthdays(
    by_month: dict[str, list[Contact]],
    as_of: datetime,
    labels: list[str] | None = None,
    owner: str = "Contacts",
) -> None:
    """Birthday calendar, one panel per month."""
    console.print(Text(f"  {make_title(owner, 'Birthdays', *(labels or [])).upper()}", style=f"dim {_DIM}"))
    if not by_month:
        console.print("[dim]No birthdays recorded.[/dim]")
        return
    for month, members in by_month.items():
        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column("Date", style=f"bold {_ACCENT}")
        table.add_column("Name")
        table.add_column("Age")
        table.add_column("Next", style=f"dim {_DIM}")
        for c in members:
            table.add_row(c.birth_date(), c.display_name(), c.age_on(as_of), _upcoming(c, as_of))
        console.print(Panel(table, title=month, title_align="left", border_style=_BORDER))


def print_changes(name: str, changes: ChangeSet | None) -> None:
    if changes is None or changes.is_empty:
        console.print(f"[dim]{name}: unchanged[/dim]")
        return
    table = Table(title=name, border_style=_BORDER, header_style="bold")
    table.add_column("Operation")
    table.add_column("Attribute")
    table.add_column("Values")
    for bucket in BUCKETS:
        for key, values in getattr(changes, bucket).items():
            table.add_row(Text(bucket, style=_BUCKET_COLOURS[bucket]), key, ", ".join(values))
    console.print(table)


def print_request(request: ModifyRequest | AddRequest | None) -> None:
    if request is None:
        return
    if isinstance(request, AddRequest):
        classes = ", ".join(request.attributes.get("objectClass", []))
        console.print(f"  [{_GREEN}]add entry[/] {request.dn} [dim]({classes})[/dim]")
        return
    for op, key, values in request.operations:
        console.print(f"  [dim]{op:<8}[/dim] {key}: {', '.join(values)}")
