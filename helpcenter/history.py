"""Back and forward navigation history of visited documents."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

_log = logging.getLogger(__name__)

POPUP_TITLE_WIDTH = 50
_POPUP_LIMIT = 10
_GO_MENU_SIZE = 9
_GO_MENU_HALF = 4

PopupItem = tuple[int, str, bool]


def _csqueeze(text: str, max_len: int) -> str:
    """Shorten ``text`` in the middle with an ellipsis if it is too long."""
    if len(text) > max_len and max_len > 3:
        part = (max_len - 3) // 2
        return text[:part] + "..." + text[len(text) - part :]
    return text


@dataclass
class HistoryEntry:
    """One visited document; an entry that was never visited is a placeholder."""

    url: str = ""
    title: str = ""
    search: bool = False
    visited: bool = False


class History:
    """Visited documents, newest first, with a movable current position.

    Index 0 holds the newest entry; going back moves towards higher indices.
    """

    def __init__(self) -> None:
        self._entries: list[HistoryEntry] = []
        self._current = 0
        self._go_menu_start = -1
        self._go_menu_current = 0

    @property
    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    @property
    def current_index(self) -> int:
        """Position of the current entry; equals the length when there is none."""
        return self._current

    @property
    def current(self) -> Optional[HistoryEntry]:
        if self._current < len(self._entries):
            return self._entries[self._current]
        return None

    def create_entry(self) -> None:
        """Drop the forward history and make a new, empty current entry."""
        _log.debug("History.create_entry()")
        if self._current < len(self._entries):
            del self._entries[: self._current]
            self._current = 0
            if not self._entries[0].visited:
                return
        self._entries.insert(self._current, HistoryEntry())

    def update_current_entry(self, url: str, title: str, search: bool = False) -> None:
        """Record the document shown in the current entry."""
        current = self.current
        if current is None:
            return
        _log.debug("History.update_current_entry(): %s (URL: %s)", title, url)
        current.url = url
        current.title = title
        current.search = search
        current.visited = True

    def can_go_back(self) -> bool:
        return len(self._entries) > 1 and self._current != len(self._entries) - 1

    def can_go_forward(self) -> bool:
        return self._current != 0 and len(self._entries) > 1

    def back(self) -> Optional[HistoryEntry]:
        return self.go_history(-1)

    def forward(self) -> Optional[HistoryEntry]:
        return self.go_history(1)

    def go_history(self, steps: int) -> Optional[HistoryEntry]:
        """Move by ``steps`` (negative is back) and return the new current entry.

        An unvisited current entry is discarded first. Returns None, leaving the
        position unchanged, when the target does not exist or was never visited.
        """
        _log.debug("History.go_history(): %d", steps)
        current = self.current
        if current is not None and not current.visited:
            del self._entries[self._current]

        new_pos = self._current - steps
        if not 0 <= new_pos < len(self._entries):
            _log.warning("No history entry at position %d", new_pos)
            return None
        entry = self._entries[new_pos]
        if not entry.visited:
            _log.warning("Empty history entry.")
            return None
        self._current = new_pos
        return entry

    def history_popup(
        self, only_back: bool = False, only_forward: bool = False, start_pos: int = 0
    ) -> list[PopupItem]:
        """Menu items as ``(data, text, checked)`` for a history popup."""
        count = len(self._entries)
        check_current = not only_back and not only_forward
        current = self.current
        pos = 0
        if only_back or only_forward:
            pos = self._current
            if not only_forward:
                if pos != count:
                    pos += 1
            elif pos != 0:
                pos -= 1
        elif start_pos:
            pos = start_pos

        items: list[PopupItem] = []
        index = 0
        while 0 <= pos < count:
            entry = self._entries[pos]
            text = _csqueeze(entry.title, POPUP_TITLE_WIDTH).replace("&", "&&")
            items.append((index, text, check_current and entry is current))
            index += 1
            if index > _POPUP_LIMIT:
                break
            if not only_forward:
                pos += 1
            elif pos == 0:
                pos = count
            else:
                pos -= 1
        return items

    def go_menu(self) -> list[PopupItem]:
        """Items for the "Go" menu; remembers positions for ``go_menu_activated``."""
        count = len(self._entries)
        if count == 0:
            self._go_menu_start = -1
            return []
        if count <= _GO_MENU_SIZE:
            start = count - 1
        else:
            start = self._current + _GO_MENU_HALF
            if start > count - _GO_MENU_HALF:
                start = count - 1
        self._go_menu_start = start
        self._go_menu_current = self._current
        return self.history_popup(False, False, start)

    def go_menu_activated(self, index: int) -> Optional[HistoryEntry]:
        """Go to the ``index``-th (1-based) item of the last "Go" menu."""
        if index <= 0 or self._go_menu_start < 0:
            return None
        steps = (self._go_menu_start + 1) - index - self._go_menu_current
        return self.go_history(steps)