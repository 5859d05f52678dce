"""Documentation entries and the tree they form."""

from __future__ import annotations

import logging
import os
import secrets
import string
from bisect import bisect_right
from pathlib import Path
from typing import Optional, Union
from urllib.parse import urlsplit
from urllib.request import url2pathname

_log = logging.getLogger(__name__)

_DESKTOP_GROUP = "Desktop Entry"
_ESCAPES = {"s": " ", "n": "\n", "t": "\t", "r": "\r", "\\": "\\"}
_ID_ALPHABET = string.ascii_letters + string.digits
_ID_LENGTH = 15
_TRUE_WORDS = {"true", "on", "yes", "1"}
_FALSE_WORDS = {"false", "off", "no", "0"}

PathLike = Union[str, "os.PathLike[str]"]


def _unescape(value: str) -> str:
    """Resolve the backslash escapes allowed in desktop file values."""
    out = []
    chars = iter(value)
    for char in chars:
        if char != "\\":
            out.append(char)
            continue
        nxt = next(chars, None)
        if nxt is None:
            out.append("\\")
        else:
            out.append(_ESCAPES.get(nxt, "\\" + nxt))
    return "".join(out)


def _read_desktop_group(path: PathLike) -> dict[str, str]:
    """Return the keys of the ``[Desktop Entry]`` group of a desktop file."""
    try:
        text = Path(path).read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError:
        return {}
    entries: dict[str, str] = {}
    group: Optional[str] = None
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("[") and line.endswith("]"):
            group = line[1:-1]
            continue
        if group != _DESKTOP_GROUP or "=" not in line:
            continue
        key, _, value = line.partition("=")
        entries[key.strip()] = _unescape(value.strip())
    return entries


def _read_bool(entries: dict[str, str], key: str, default: bool) -> bool:
    value = entries.get(key)
    if value is None:
        return default
    lowered = value.strip().lower()
    if lowered in _TRUE_WORDS:
        return True
    if lowered in _FALSE_WORDS or not lowered:
        return False
    return default


def _read_int(entries: dict[str, str], key: str, default: int) -> int:
    try:
        return int(entries.get(key, default))
    except ValueError:
        return default


def _complete_base_name(path: PathLike) -> str:
    name = Path(path).name
    base, dot, _ = name.rpartition(".")
    return base if dot else name


class DocEntry:
    """One documentation item: its metadata and its place in the tree."""

    def __init__(self, name: str = "", url: str = "", icon: str = "") -> None:
        self.name = name
        self._url = url
        self._icon = icon
        self.search = ""
        self.info = ""
        self.lang = ""
        self._identifier = ""
        self.indexer = ""
        self.index_test_file = ""
        self.search_method = ""
        self.document_type = ""
        self.khelpcenter_special = ""
        self.weight = 0
        self.search_enabled = False
        self.search_enabled_default = False
        self.is_directory = False
        self.parent: Optional[DocEntry] = None
        self.next_sibling: Optional[DocEntry] = None
        self._children: list[DocEntry] = []

    def __repr__(self) -> str:
        return f"DocEntry(name={self.name!r}, url={self._url!r})"

    @property
    def icon(self) -> str:
        """The icon name, or a fallback chosen from the entry's state."""
        if self._icon:
            return self._icon
        if not self.doc_exists():
            return "unknown"
        if self.is_directory:
            return "help-contents"
        return "text-plain"

    @icon.setter
    def icon(self, value: str) -> None:
        self._icon = value

    @property
    def identifier(self) -> str:
        """A stable identifier; a random one is made on first use if unset."""
        if not self._identifier:
            self._identifier = "".join(
                secrets.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH)
            )
        return self._identifier

    @identifier.setter
    def identifier(self, value: str) -> None:
        self._identifier = value

    @property
    def url(self) -> str:
        """The document URL, or an internal ``khelpcenter:`` URL."""
        if self._url:
            return self._url
        identifier = self.identifier
        if not identifier:
            return ""
        return "khelpcenter:" + identifier

    @url.setter
    def url(self, value: str) -> None:
        self._url = value

    @property
    def children(self) -> list[DocEntry]:
        """A copy of the child list, ordered by weight."""
        return list(self._children)

    def read_from_file(self, path: PathLike) -> bool:
        """Fill the entry from a desktop file."""
        abs_path = os.path.abspath(os.fspath(path))
        entries = _read_desktop_group(abs_path)

        self.name = entries.get("Name", "")
        self.search = entries.get("X-DOC-Search", "")
        self._icon = entries.get("Icon", "")
        self._url = entries.get("X-DocPath", entries.get("DocPath", ""))
        info = entries.get("Info")
        self.info = entries.get("Comment", "") if info is None else info
        self.lang = entries.get("Lang", "en")
        self._identifier = entries.get("X-DOC-Identifier", "")
        if not self._identifier:
            self._identifier = _complete_base_name(abs_path)
        self.indexer = entries.get("X-DOC-Indexer", "").replace("%f", abs_path)
        self.index_test_file = entries.get("X-DOC-IndexTestFile", "")
        self.search_enabled_default = _read_bool(
            entries, "X-DOC-SearchEnabledDefault", False
        )
        self.search_enabled = self.search_enabled_default
        self.weight = _read_int(entries, "X-DOC-Weight", 0)
        self.search_method = entries.get("X-DOC-SearchMethod", "")
        self.document_type = entries.get("X-DOC-DocumentType", "")
        self.khelpcenter_special = entries.get("X-KDE-KHelpcenter-Special", "")
        return True

    def doc_exists(self) -> bool:
        """False only when the URL names a local file that is missing."""
        if self._url:
            parts = urlsplit(self._url)
            if parts.scheme == "file":
                if not os.path.exists(url2pathname(parts.path)):
                    return False
        return True

    def add_child(self, entry: DocEntry) -> None:
        """Insert a child after all children of lower or equal weight."""
        entry.parent = self
        index = bisect_right(self._children, entry.weight, key=lambda e: e.weight)
        if index > 0:
            self._children[index - 1].next_sibling = entry
        if index < len(self._children):
            entry.next_sibling = self._children[index]
        self._children.insert(index, entry)

    def has_children(self) -> bool:
        return bool(self._children)

    def first_child(self) -> DocEntry:
        """The first child; raises IndexError when there is none."""
        if not self._children:
            raise IndexError("entry has no children")
        return self._children[0]

    def is_searchable(self) -> bool:
        return bool(self.search) and self.doc_exists()

    def dump(self) -> str:
        """Describe the entry as a small XML-like block, also logged."""
        text = "\n".join(
            [
                "  <docentry>",
                f"    <name>{self.name}</name>",
                f"    <searchmethod>{self.search_method}</searchmethod>",
                f"    <search>{self.search}</search>",
                f"    <indexer>{self.indexer}</indexer>",
                f"    <indextestfile>{self.index_test_file}</indextestfile>",
                f"    <icon>{self._icon}</icon>",
                f"    <url>{self._url}</url>",
                f"    <documenttype>{self.document_type}</documenttype>",
                "  </docentry>",
            ]
        )
        _log.debug("%s", text)
        return text