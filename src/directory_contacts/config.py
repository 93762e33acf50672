from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import tomllib

from .dates import DEFAULT_DATE_FORMATS, DateFormat, DateParser
from .directory import CONTACT_OBJECT_CLASSES

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    owner_name: str = "Contacts"
    base_dn: str = "dc=example,dc=com"
    immutable_key: str = "cn"
    object_classes: tuple[str, ...] = CONTACT_OBJECT_CLASSES
    date_formats: tuple[DateFormat, ...] = field(default=DEFAULT_DATE_FORMATS)

    def date_parser(self) -> DateParser:
        return DateParser(self.date_formats)


DEFAULT_CONF = """# directory-contacts local config (TOML)
owner_name = "Contacts"
base_dn = "dc=example,dc=com"
immutable_key = "cn"

# Optional: replace the accepted birthday formats (strptime patterns).
# date_formats = ["%B %d, %Y", "%B %d", "%m/%d/%Y", "%m/%d"]
"""


def _parse_formats(patterns: list[str]) -> tuple[DateFormat, ...]:
    return tuple(DateFormat(p, "%Y" in p or "%y" in p) for p in patterns)


def load_settings(conf_file: Path | None = None) -> Settings:
    """Read settings from a TOML file; missing keys keep their defaults.

    A missing or malformed file yields the defaults.
    """
    settings = Settings()
    if conf_file is None or not conf_file.exists():
        return settings
    try:
        data = tomllib.loads(conf_file.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning("ignoring config %s: %s", conf_file, exc)
        return settings

    return Settings(
        owner_name=str(data.get("owner_name", settings.owner_name)),
        base_dn=str(data.get("base_dn", settings.base_dn)),
        immutable_key=str(data.get("immutable_key", settings.immutable_key)),
        object_classes=tuple(data.get("object_classes", settings.object_classes)),
        date_formats=_parse_formats(data["date_formats"]) if "date_formats" in data else settings.date_formats,
    )


def write_default_config(conf_file: Path) -> None:
    """Create the config file with defaults if it does not exist yet."""
    conf_file.parent.mkdir(parents=True, exist_ok=True)
    if not conf_file.exists():
        conf_file.write_text(DEFAULT_CONF, encoding="utf-8")
