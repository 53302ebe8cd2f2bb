"""Port for querying a parsed HTML document."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class HtmlDocumentPort(Protocol):
    """Minimal DOM query capability the pipeline needs.

    Elements are opaque to callers; they are only passed back into
    ``attr`` and ``text``.
    """

    def select_all(self, selector: str) -> list[Any]:
        """Return every element matching a CSS selector, in document order."""
        ...

    def select_first(self, selector: str) -> Any | None:
        """Return the first element matching a CSS selector, or None."""
        ...

    def attr(self, element: Any, name: str) -> str | None:
        """Return an attribute value, or None when absent."""
        ...

    def text(self, element: Any) -> str:
        """Return the element's text content."""
        ...
