"""Server list parser for the embed page.

The embed page carries an ``<iframe>`` whose ``src`` points at the current
player domain (it rotates), plus a ``.serversList`` container with one
``.server`` element per source::

    <iframe src="//whisperingauroras.com/rcp/..."></iframe>
    <div class="serversList">
        <div class="server" data-hash="abc...">CloudStream Pro</div>
    </div>
"""

from __future__ import annotations

from urllib.parse import urlparse

import structlog

from embedscout.domain.entities import ResolutionContext, ServerEntry, ServerListing
from embedscout.domain.ports import HtmlDocumentPort
from embedscout.infrastructure.common.html_selectors import SoupDocument

from .constants import SERVER_HASH_ATTR, SERVER_SELECTOR

log = structlog.get_logger(__name__)


def derive_base_domain(src: str | None, default: str) -> str:
    """Derive the player origin from an iframe ``src``.

    Falls back to *default* when the attribute is missing or malformed.
    """
    if src is None or not src.strip():
        log.warning("base_domain_missing_iframe", default=default)
        return default

    src = src.strip()
    if src.startswith(("http://", "https://")):
        candidate = src
    elif src.startswith("//"):
        candidate = "https:" + src
    else:
        log.warning("base_domain_malformed_iframe", src=src, default=default)
        return default

    try:
        parsed = urlparse(candidate)
        host = parsed.hostname
        port = parsed.port
    except ValueError:
        host = None
    if not host:
        log.warning("base_domain_malformed_iframe", src=src, default=default)
        return default
    origin = f"{parsed.scheme}://{host}"
    return f"{origin}:{port}" if port is not None else origin


def parse_server_list(
    html: str,
    context: ResolutionContext,
    document: HtmlDocumentPort | None = None,
) -> ServerListing:
    """Extract title, base domain and servers from the embed page."""
    doc = document if document is not None else SoupDocument(html)

    title_el = doc.select_first("title")
    title = doc.text(title_el) if title_el is not None else ""

    iframe = doc.select_first("iframe")
    src = doc.attr(iframe, "src") if iframe is not None else None
    base_domain = derive_base_domain(src, context.base_domain)
    if base_domain != context.base_domain:
        context = context.with_base_domain(base_domain)

    servers = [
        ServerEntry(
            display_name=doc.text(el).strip(),
            hash_token=doc.attr(el, SERVER_HASH_ATTR),
        )
        for el in doc.select_all(SERVER_SELECTOR)
    ]

    log.debug(
        "server_list_parsed",
        base_domain=context.base_domain,
        servers=len(servers),
        title=title,
    )
    return ServerListing(context=context, title=title, servers=servers)
