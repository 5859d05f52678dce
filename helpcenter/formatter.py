"""Rendering of overview, glossary and search pages from HTML templates."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional, Union

import jinja2

if TYPE_CHECKING:
    from helpcenter.docentry import DocEntry
    from helpcenter.glossary import GlossaryEntry

_log = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def _default_template_dirs() -> list[str]:
    home = os.environ.get("XDG_DATA_HOME") or os.path.join(
        os.path.expanduser("~"), ".local", "share"
    )
    system = os.environ.get("XDG_DATA_DIRS") or "/usr/local/share:/usr/share"
    dirs = [home] + [d for d in system.split(":") if d]
    return [
        str(Path(d) / "khelpcenter" / "templates")
        for d in dirs
        if (Path(d) / "khelpcenter" / "templates").is_dir()
    ]


def _html_escaped(text: str) -> str:
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


class TemplateFormatter:
    """Fills named templates; values are inserted without escaping."""

    def __init__(self, template_dirs: Optional[Iterable[PathLike]] = None) -> None:
        dirs = (
            _default_template_dirs()
            if template_dirs is None
            else [os.fspath(d) for d in template_dirs]
        )
        self.template_dirs = dirs
        self._env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(dirs), autoescape=False
        )

    def _render(self, name: str, context: dict[str, Any]) -> str:
        try:
            return self._env.get_template(name).render(**context)
        except jinja2.TemplateError as exc:
            _log.warning("template rendering error in %s: %s", name, exc)
            return ""

    def format_overview(self, title: str, name: str, content: str) -> str:
        return self._render(
            "index.html", {"title": title, "name": name, "content": content}
        )

    def format_glossary_entry(self, entry: "GlossaryEntry") -> str:
        see_also = [
            f'<a href="glossentry:{xref.id}">{xref.term}</a>'
            for xref in entry.see_also
        ]
        return self._render(
            "glossary.html",
            {
                "htmltitle": f"KDE Glossary: {entry.term}",
                "title": "KDE Glossary",
                "term": entry.term,
                "definition": entry.definition,
                "seeAlsoCount": len(see_also),
                "seeAlso": "See also: " + ", ".join(see_also),
            },
        )

    def format_search_results(
        self, words: str, results: Sequence[tuple["DocEntry", str]]
    ) -> str:
        items = [{"title": entry.name, "content": content} for entry, content in results]
        return self._render(
            "search.html",
            {
                "htmltitle": "Search Results",
                "title": f"Search Results for '{_html_escaped(words)}':",
                "results": items,
            },
        )