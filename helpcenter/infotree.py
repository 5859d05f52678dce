"""Tree of GNU info documents read from info ``dir`` files."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from helpcenter.docentry import DocEntry

_log = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

CATEGORY_ICON = "help-contents"


def _index_of(text: str, char: str, start: int) -> int:
    """Find ``char`` from ``start``; a negative start counts from the end."""
    if start < 0:
        start = max(len(text) + start, 0)
    return text.find(char, start)


def _mid(text: str, pos: int, length: int) -> str:
    """Substring with clamping: a negative length means to the end."""
    size = len(text)
    if pos > size:
        return ""
    if pos < 0:
        if length < 0 or length + pos >= size:
            return text
        if length + pos <= 0:
            return ""
        length += pos
        pos = 0
    elif length < 0 or length > size - pos:
        length = size - pos
    return text[pos : pos + length]


def _first_upper(name: str) -> str:
    first = name[:1]
    upper = first.upper()
    return upper if len(upper) == 1 else first


@dataclass
class InfoItem:
    """A node of the info tree holding its documentation entry."""

    entry: DocEntry
    children: list[InfoItem] = field(default_factory=list)
    icon: str = ""

    @property
    def name(self) -> str:
        return self.entry.name

    def add(self, name: str, url: str = "", icon: str = "") -> InfoItem:
        item = InfoItem(DocEntry(name, url), icon=icon)
        self.children.append(item)
        return item

    def sort_children(self) -> None:
        self.children.sort(key=lambda item: item.name)


class InfoTree:
    """Info documents, grouped alphabetically and by category."""

    def __init__(self) -> None:
        self._reset()

    def _reset(self) -> None:
        self.alphab_item = InfoItem(DocEntry("Alphabetically"))
        self.category_item = InfoItem(DocEntry("By Category"))

    def build(self, search_paths: Iterable[PathLike]) -> list[InfoItem]:
        """Read every ``dir`` file on the search paths and ``$INFOPATH``."""
        _log.debug("Populating info tree.")
        self._reset()
        dirs = [os.fspath(p) for p in search_paths]
        info_path = os.environ.get("INFOPATH", "")
        if info_path:
            dirs.extend(info_path.split(":"))
        for directory in dirs:
            dir_file = Path(directory + "/dir")
            if dir_file.exists():
                self.parse_info_dir_file(dir_file)
        self.alphab_item.sort_children()
        return [self.alphab_item, self.category_item]

    def parse_info_dir_file(self, path: PathLike) -> None:
        """Add the menu entries of one info ``dir`` file to the tree."""
        _log.debug("Parsing info dir file %s", path)
        try:
            text = Path(path).read_text(encoding="utf-8", errors="replace")
        except OSError:
            return

        lines = iter(text.splitlines())
        for line in lines:
            if line.startswith("* Menu:"):
                break

        sections: dict[str, InfoItem] = {}
        for line in lines:
            if not line.strip():
                continue
            category = self.category_item.add(line, icon=CATEGORY_ICON)
            for node in lines:
                if not node:
                    break
                if node.startswith("*"):
                    self._add_node(node, category, sections)
            category.sort_children()

        for section in sections.values():
            section.sort_children()
        self.alphab_item.sort_children()
        self.category_item.sort_children()

    def _add_node(
        self, line: str, category: InfoItem, sections: dict[str, InfoItem]
    ) -> None:
        colon = _index_of(line, ":", 0)
        open_brace = _index_of(line, "(", colon)
        close_brace = _index_of(line, ")", open_brace)
        dot = _index_of(line, ".", close_brace)

        app_name = _mid(line, 2, colon - 2)
        url = "info:/" + _mid(line, open_brace + 1, close_brace - open_brace - 1)
        if dot - close_brace > 1:
            url += "/" + _mid(line, close_brace + 1, dot - close_brace - 1)
        else:
            url += "/Top"

        category.add(app_name, url)
        if not app_name:
            return
        first = _first_upper(app_name)
        section = sections.get(first)
        if section is None:
            section = self.alphab_item.add(first, icon=CATEGORY_ICON)
            sections[first] = section
        section.add(app_name, url)