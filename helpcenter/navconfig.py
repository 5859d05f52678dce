"""Navigator settings: the tab shown last and the start page URL."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Union

from helpcenter.navigator import HOME_URL

PathLike = Union[str, "os.PathLike[str]"]

GENERAL_GROUP = "General"
CURRENT_TAB_KEY = "CurrentTab"
START_URL_KEY = "StartUrl"

_LOCALIZED_KEY = re.compile(r"^StartUrl\[([^\]]+)\]$")

_Config = dict[str, dict[str, str]]


class Tab(Enum):
    """The tabs of the navigator."""

    CONTENT = "Content"
    SEARCH = "Search"
    GLOSSARY = "Glossary"

    @classmethod
    def from_config(cls, value: str) -> Tab:
        """The tab named by a config value; anything unknown is the contents tab."""
        for tab in cls:
            if tab.value.lower() == value.strip().lower():
                return tab
        return cls.CONTENT


def _environment_language() -> str:
    for var in ("LANGUAGE", "LC_ALL", "LC_MESSAGES", "LANG"):
        setting = os.environ.get(var, "")
        first = setting.split(":", 1)[0]
        code = first.split(".", 1)[0].split("@", 1)[0]
        if code and code not in ("C", "POSIX"):
            return code
    return ""


def _read_config(path: Path) -> _Config:
    config: _Config = {"": {}}
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return config
    group = ""
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("[") and line.endswith("]"):
            group = line[1:-1]
            config.setdefault(group, {})
            continue
        if "=" in line:
            key, _, value = line.partition("=")
            config.setdefault(group, {})[key.strip()] = value.strip()
    return config


def _write_config(path: Path, config: _Config) -> None:
    lines: list[str] = []
    for group, entries in config.items():
        if not group and not entries:
            continue
        if group:
            if lines:
                lines.append("")
            lines.append(f"[{group}]")
        lines.extend(f"{key}={value}" for key, value in entries.items())
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def _path_entry(value: str) -> str:
    """Expand ``$VAR`` references and a leading ``~`` as path entries do."""
    return os.path.expanduser(os.path.expandvars(value))


@dataclass
class NavigatorConfig:
    """What the navigator remembers between sessions."""

    current_tab: Tab = Tab.CONTENT
    start_url: str = ""
    localized_start_urls: dict[str, str] = field(default_factory=dict)
    language: str = ""

    @classmethod
    def load(cls, path: PathLike) -> NavigatorConfig:
        """Read the settings; missing values fall back to their defaults."""
        general = _read_config(Path(path)).get(GENERAL_GROUP, {})
        localized: dict[str, str] = {}
        for key, value in general.items():
            match = _LOCALIZED_KEY.match(key)
            if match:
                localized[match.group(1)] = _path_entry(value)
        return cls(
            current_tab=Tab.from_config(general.get(CURRENT_TAB_KEY, "")),
            start_url=_path_entry(general.get(START_URL_KEY, "")),
            localized_start_urls=localized,
            language=_environment_language(),
        )

    def save(self, path: PathLike) -> None:
        """Write the settings, keeping every other group and key of the file."""
        target = Path(path)
        config = _read_config(target)
        general = config.setdefault(GENERAL_GROUP, {})
        general[CURRENT_TAB_KEY] = self.current_tab.value
        if self.start_url:
            general[START_URL_KEY] = self.start_url
        for lang, url in self.localized_start_urls.items():
            general[f"{START_URL_KEY}[{lang}]"] = url
        _write_config(target, config)

    def home_url(self) -> str:
        """The start page: a localized URL first, then the plain one, then home."""
        if self.language:
            for code in (self.language, self.language.split("_", 1)[0]):
                url = self.localized_start_urls.get(code)
                if url:
                    return url
        return self.start_url or HOME_URL