"""Documentation URLs for applications described by service properties."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Optional


def documentation_url(properties: Mapping[str, object]) -> Optional[str]:
    """Return the help URL for an application, or None if it has none.

    ``DocPath`` is preferred over ``X-DocPath``. File and HTTP URLs are
    returned as they are; anything else is taken as a ``help:/`` path.
    """
    doc_path = str(properties.get("DocPath") or "")
    if not doc_path:
        doc_path = str(properties.get("X-DocPath") or "")
        if not doc_path:
            return None
    if doc_path.startswith("file:") or doc_path.startswith("http"):
        return doc_path
    return "help:/" + doc_path