from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

import typer
from rich.logging import RichHandler

from .config import Settings, load_settings
from .directory import build_delete_request, contacts_dn, plan_save
from .io import collect_sources, read_contacts_from_files
from .model import Contact
from .report import console, print_birthdays, print_changes, print_contacts, print_request
from .sorting import by_name, group_by_month

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="directory-contacts: list contacts, birthdays and pending directory changes.",
)

_state: dict[str, Settings] = {}


@app.callback()
def main(
    config: Path | None = typer.Option(None, "--config", "-c", help="TOML settings file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    _state["settings"] = load_settings(config)


def _settings() -> Settings:
    return _state.get("settings") or Settings()


def _load(source: Path) -> list[Contact]:
    files = collect_sources(source)
    if not files:
        console.print(f"[bold red]No .vcf files found at {source}[/bold red]")
        raise typer.Exit(code=2)
    return read_contacts_from_files(files, _settings().date_parser())


def _with_labels(contacts: list[Contact], labels: list[str]) -> list[Contact]:
    return [c for c in contacts if all(label in c.labels for label in labels)]


def _parse_as_of(value: str | None) -> datetime:
    if not value:
        return datetime.now()
    try:
        return datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        console.print(f"[bold red]--as-of must be YYYY-MM-DD, got {value!r}[/bold red]")
        raise typer.Exit(code=2)


@app.command()
def contacts(
    source: Path = typer.Argument(..., help=".vcf file or folder of .vcf files"),
    label: list[str] = typer.Option([], "--label", "-l", help="Only contacts carrying this label"),
) -> None:
    """List contacts ordered by surname, given name and display name."""
    records = by_name(_with_labels(_load(source), label))
    print_contacts(records, label, _settings().owner_name)


@app.command()
def birthdays(
    source: Path = typer.Argument(..., help=".vcf file or folder of .vcf files"),
    label: list[str] = typer.Option([], "--label", "-l", help="Only contacts carrying this label"),
    as_of: str | None = typer.Option(None, "--as-of", help="Reference date, YYYY-MM-DD (default: now)"),
) -> None:
    """Birthday calendar grouped by month, with ages and the next occurrence."""
    reference = _parse_as_of(as_of)
    records = _with_labels(_load(source), label)
    print_birthdays(group_by_month(records), reference, label, _settings().owner_name)


@app.command()
def changes(
    original: Path = typer.Argument(..., help="Contacts as currently stored"),
    updated: Path = typer.Argument(..., help="Contacts as edited"),
) -> None:
    """Show the directory operations that turn ORIGINAL into UPDATED.

    Contacts are matched by display name.
    """
    settings = _settings()
    base = contacts_dn(settings.base_dn)

    def keyed(records: list[Contact]) -> dict[str, Contact]:
        out: dict[str, Contact] = {}
        for c in by_name(records):
            c.id = f"cn={c.display_name()},{base}"
            out.setdefault(c.display_name(), c)
        return out

    before = keyed(_load(original))
    after = keyed(_load(updated))

    for name, new in after.items():
        old = before.get(name)
        if old is None:
            new.id = ""
            console.print(f"[bold]{name}[/bold]")
        else:
            print_changes(name, old.changes(new, settings.immutable_key))
        print_request(plan_save(settings.base_dn, old, new, settings.immutable_key, settings.object_classes))

    for name, old in before.items():
        if name not in after:
            console.print(f"[bold]{name}[/bold]")
            console.print(f"  [dim]delete entry[/dim] {build_delete_request(old.id).dn}")


if __name__ == "__main__":
    app()
