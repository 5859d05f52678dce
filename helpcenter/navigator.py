"""The contents tree of the navigator and the overview pages built from it."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

from helpcenter.docentry import DocEntry

_log = logging.getLogger(__name__)

HOME_URL = "khelpcenter:home"
START_PAGE_TITLE = "Start Page"
START_PAGE_NAME = "KDE Help Center"


class NavigatorItem:
    """A node of the contents tree, showing one documentation entry."""

    def __init__(
        self, entry: DocEntry, parent: Optional[NavigatorItem] = None
    ) -> None:
        self.entry = entry
        self.parent = parent
        self.children: list[NavigatorItem] = []
        self.expanded = False
        self.hidden = False
        if parent is not None:
            parent.children.append(self)

    def __repr__(self) -> str:
        return f"NavigatorItem({self.entry.name!r})"

    def walk(self) -> Iterator[NavigatorItem]:
        """Yield this item and then all its descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()


def create_children_list(item: NavigatorItem, level: int) -> str:
    """An HTML list of the item's children, nested one level deep at most."""
    parts = ["<ul>\n"]
    for child in item.children:
        entry = child.entry
        parts.append('<li><a href="' + entry.url + '">')
        if entry.is_directory:
            parts.append("<b>")
        parts.append(entry.name)
        if entry.is_directory:
            parts.append("</b>")
        parts.append("</a>")
        if entry.info:
            parts.append("<br>" + entry.info)
        if child.children and level < 1:
            parts.append(create_children_list(child, level + 1))
        parts.append("</li>\n")
    parts.append("</ul>\n")
    return "".join(parts)


def _without_fragment(url: str) -> tuple[str, str]:
    """Split ``url`` into the URL without its fragment and the fragment."""
    parts = urlsplit(url)
    base = urlunsplit((parts.scheme, parts.netloc, parts.path, parts.query, ""))
    return base, parts.fragment


def _anchor_form(url: str) -> str:
    """``help:/foo#bar`` in its ``help:/foo?anchor=bar`` form."""
    parts = urlsplit(url)
    return urlunsplit(
        (parts.scheme, parts.netloc, parts.path, "anchor=" + parts.fragment, "")
    )


class Navigator:
    """Holds the contents tree and tracks which item is current."""

    def __init__(self, home_url: str = HOME_URL) -> None:
        self.root = NavigatorItem(DocEntry())
        self.home_url = home_url
        self.current_item: Optional[NavigatorItem] = None
        self.selected = False

    @property
    def top_level_items(self) -> list[NavigatorItem]:
        return list(self.root.children)

    def _items(self) -> Iterator[NavigatorItem]:
        for child in self.root.children:
            yield from child.walk()

    def _make_current(self, item: NavigatorItem) -> None:
        self.current_item = item
        item.expanded = True
        self.selected = True

    def select_item(self, url: str) -> Optional[NavigatorItem]:
        """Make the item showing ``url`` current and return it, or None.

        A URL with a fragment also matches its ``?anchor=`` form, and falls
        back to the item for the URL without the fragment.
        """
        _log.debug("Navigator.select_item(): %s", url)
        if url == HOME_URL:
            self.clear_selection()
            return None

        alternative = url
        contents_url = url
        base, fragment = _without_fragment(url)
        if fragment:
            alternative = _anchor_form(url)
            contents_url = base

        current = self.current_item
        if current is not None and self.selected:
            if current.entry.url in (url, alternative):
                _log.debug("URL already shown.")
                return current

        fallback: Optional[NavigatorItem] = None
        for item in self._items():
            item_url = item.entry.url
            if item_url in (url, alternative):
                self._make_current(item)
                return item
            if fallback is None and item_url == contents_url:
                fallback = item

        if fallback is not None:
            self._make_current(fallback)
            return fallback
        self.clear_selection()
        return None

    def clear_selection(self) -> None:
        """Mark that no item is selected any more."""
        self.selected = False

    def overview_content(
        self, item: Optional[NavigatorItem] = None
    ) -> tuple[str, str, str]:
        """Title, name and HTML body of the overview of ``item``.

        Without an item the overview is the start page listing the top level.
        """
        content = ""
        if item is not None:
            title = item.entry.name
            name = item.entry.name
            if item.entry.info:
                content = "<p>" + item.entry.info + "</p>\n"
            node = item
        else:
            title = START_PAGE_TITLE
            name = START_PAGE_NAME
            node = self.root

        if node.children:
            content += create_children_list(node, 0)
        else:
            content += "<p></p>"
        return title, name, content

    def search_result_url(self, url: str, words: str) -> str:
        """Fill the search words into a result URL's ``%k`` placeholder."""
        return url.replace("%k", words)