"""Tests for the BeautifulSoup-backed HTML document."""

from __future__ import annotations

from embedscout.domain.ports import HtmlDocumentPort
from embedscout.infrastructure.common.html_selectors import SoupDocument, id_selector

_HTML = """
<html><head><title>Page</title></head><body>
<ul class="list">
  <li class="item" data-x="1">One</li>
  <li class="item">Two</li>
</ul>
<div id="9abc">payload</div>
</body></html>
"""


class TestSoupDocument:
    def test_satisfies_port(self) -> None:
        assert isinstance(SoupDocument(_HTML), HtmlDocumentPort)

    def test_select_all_document_order(self) -> None:
        doc = SoupDocument(_HTML)
        items = doc.select_all(".list .item")
        assert [doc.text(i) for i in items] == ["One", "Two"]

    def test_select_all_no_match(self) -> None:
        assert SoupDocument(_HTML).select_all(".missing") == []

    def test_select_first(self) -> None:
        doc = SoupDocument(_HTML)
        title = doc.select_first("title")
        assert title is not None
        assert doc.text(title) == "Page"

    def test_select_first_none(self) -> None:
        assert SoupDocument(_HTML).select_first("iframe") is None

    def test_attr_present_and_absent(self) -> None:
        doc = SoupDocument(_HTML)
        first, second = doc.select_all("li.item")
        assert doc.attr(first, "data-x") == "1"
        assert doc.attr(second, "data-x") is None

    def test_attr_multi_valued_joined(self) -> None:
        doc = SoupDocument('<p class="a b">x</p>')
        p = doc.select_first("p")
        assert p is not None
        assert doc.attr(p, "class") == "a b"


class TestIdSelector:
    def test_plain_id(self) -> None:
        assert id_selector("payload") == "#payload"

    def test_leading_digit_is_selectable(self) -> None:
        doc = SoupDocument(_HTML)
        el = doc.select_first(id_selector("9abc"))
        assert el is not None
        assert doc.text(el) == "payload"
