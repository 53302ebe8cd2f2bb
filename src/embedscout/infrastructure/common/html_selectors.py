"""CSS-selector-based HTML querying backed by BeautifulSoup.

``SoupDocument`` satisfies :class:`~embedscout.domain.ports.HtmlDocumentPort`.
"""

from __future__ import annotations

import soupsieve
from bs4 import BeautifulSoup, Tag


def id_selector(element_id: str) -> str:
    """Build a CSS id selector, escaping characters CSS would reject."""
    return "#" + soupsieve.escape(element_id)


class SoupDocument:
    """A page parsed with ``lxml``."""

    def __init__(self, html: str) -> None:
        self._soup = BeautifulSoup(html, "lxml")

    def select_all(self, selector: str) -> list[Tag]:
        return self._soup.select(selector)

    def select_first(self, selector: str) -> Tag | None:
        return self._soup.select_one(selector)

    def attr(self, element: Tag, name: str) -> str | None:
        val = element.get(name)
        if val is None:
            return None
        # Multi-valued attributes (class, rel) come back as lists.
        if isinstance(val, list):
            return " ".join(val)
        return str(val)

    def text(self, element: Tag) -> str:
        return element.get_text()
