"""Glossary entries read from a cached XML rendering of the glossary."""

from __future__ import annotations

import logging
import os
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Union

_log = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

BY_TOPIC_TITLE = "By Topic"
ALPHABETICAL_TITLE = "Alphabetically"

Section = tuple[str, list["GlossaryEntryXRef"]]


class CacheStatus(Enum):
    """Whether the cached glossary still matches its source."""

    NEED_REBUILD = "need_rebuild"
    CACHE_OK = "cache_ok"


@dataclass(frozen=True)
class GlossaryEntryXRef:
    """A reference from one glossary entry to another."""

    term: str = ""
    id: str = ""


@dataclass(frozen=True)
class GlossaryEntry:
    """One glossary term with its definition and cross references."""

    id: str = ""
    term: str = ""
    definition: str = ""
    see_also: list[GlossaryEntryXRef] = field(default_factory=list)


def child_element(element: ET.Element, name: str) -> Optional[ET.Element]:
    """The first direct child element called ``name``, or None."""
    for child in element:
        if child.tag == name:
            return child
    return None


def _simplified(text: str) -> str:
    return " ".join(text.split())


def _text_of(element: Optional[ET.Element]) -> str:
    if element is None:
        return ""
    return _simplified("".join(element.itertext()))


def _descendants(element: ET.Element, tag: str) -> list[ET.Element]:
    return [e for e in element.iter(tag) if e is not element]


def _first_upper(term: str) -> str:
    first = term[:1]
    upper = first.upper()
    return upper if len(upper) == 1 else first


class Glossary:
    """Glossary entries grouped by topic and alphabetically."""

    def __init__(self, source_file: PathLike, cache_file: PathLike) -> None:
        self.source_file = os.fspath(source_file)
        self.cache_file = os.fspath(cache_file)
        Path(self.cache_file).resolve().parent.mkdir(parents=True, exist_ok=True)
        self.status = CacheStatus.NEED_REBUILD
        self.current_id: Optional[str] = None
        self._reset()

    def _reset(self) -> None:
        self.by_topic: list[Section] = []
        self.alphabetical: list[Section] = []
        self._entries: dict[str, GlossaryEntry] = {}

    @property
    def entry_ids(self) -> list[str]:
        return list(self._entries)

    def source_ctime(self) -> int:
        """Change time of the source file in whole seconds; 0 if it is missing."""
        try:
            return int(os.stat(self.source_file).st_ctime)
        except OSError:
            return 0

    def cache_status(
        self, cached_source: Optional[str], cached_timestamp: Optional[int]
    ) -> CacheStatus:
        """Compare the cache with the source recorded when it was built."""
        if (
            not os.path.exists(self.cache_file)
            or cached_source != self.source_file
            or cached_timestamp != self.source_ctime()
        ):
            return CacheStatus.NEED_REBUILD
        return CacheStatus.CACHE_OK

    def build_glossary_tree(self) -> bool:
        """Read the cache file; False if it cannot be opened or parsed."""
        try:
            root = ET.parse(self.cache_file).getroot()
        except (OSError, ET.ParseError) as exc:
            _log.warning("cannot read glossary cache %s: %s", self.cache_file, exc)
            return False

        self._reset()
        alphab: dict[str, list[GlossaryEntryXRef]] = {}

        for section in _descendants(root, "section"):
            topic: list[GlossaryEntryXRef] = []
            self.by_topic.append((section.get("title", ""), topic))

            for entry_element in _descendants(section, "entry"):
                entry_id = entry_element.get("id")
                if entry_id is None:
                    continue
                term = _text_of(child_element(entry_element, "term"))
                item = GlossaryEntryXRef(term, entry_id)
                topic.append(item)
                if term:
                    alphab.setdefault(_first_upper(term), []).append(item)

                definition = _text_of(child_element(entry_element, "definition"))
                references = child_element(entry_element, "references")
                see_also = [
                    GlossaryEntryXRef(ref.get("term", ""), ref.get("id", ""))
                    for ref in (
                        _descendants(references, "reference")
                        if references is not None
                        else []
                    )
                ]
                self._entries[entry_id] = GlossaryEntry(
                    entry_id, term, definition, see_also
                )

        self.alphabetical = list(alphab.items())
        for sections in (self.by_topic, self.alphabetical):
            sections.sort(key=lambda s: s[0])
            for _, items in sections:
                items.sort(key=lambda x: x.term)
        return True

    def entry(self, entry_id: str) -> GlossaryEntry:
        """The entry with the given id; raises KeyError if unknown."""
        return self._entries[entry_id]

    def select_entry(self, entry_id: str) -> bool:
        """Make an entry current; True if the selection changed."""
        if entry_id not in self._entries or self.current_id == entry_id:
            return False
        self.current_id = entry_id
        return True