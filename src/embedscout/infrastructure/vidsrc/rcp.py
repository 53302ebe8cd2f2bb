"""rcp redirect resolver.

Every server hash maps to ``{base}/rcp/{hash}``; the response embeds the
player config with a ``src: '/prorcp/...'`` assignment pointing at the page
that carries the encrypted stream.
"""

from __future__ import annotations

import asyncio

import httpx
import structlog

from embedscout.domain.entities import RedirectRecord, ResolutionContext, ServerEntry
from embedscout.infrastructure.common.patterns import RCP_SOURCE

log = structlog.get_logger(__name__)


def extract_redirect(html: str) -> RedirectRecord | None:
    """Pull the redirect path out of an rcp page."""
    captured = RCP_SOURCE.search(html)
    if captured is None:
        return None
    return RedirectRecord(image_placeholder="", redirect_path=captured[0])


class RcpResolver:
    """Resolves server hashes to redirect records concurrently."""

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._http = http_client

    async def _fetch(self, url: str) -> str | None:
        try:
            resp = await self._http.get(url)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            log.warning("rcp_http_error", url=url, status=exc.response.status_code)
            return None
        except httpx.HTTPError as exc:
            log.warning("rcp_request_failed", url=url, error=str(exc))
            return None
        except httpx.InvalidURL as exc:
            # Hash tokens are page data; httpx rejects control characters.
            log.warning("rcp_invalid_url", url=url, error=str(exc))
            return None
        return resp.text

    async def resolve_all(
        self,
        context: ResolutionContext,
        servers: list[ServerEntry],
    ) -> list[RedirectRecord]:
        """Fetch every hashed server's rcp page and extract redirects.

        Output order follows *servers*; entries without a hash, failed
        fetches and pages without a match are dropped.
        """
        urls = [
            f"{context.base_domain}/rcp/{server.hash_token}"
            for server in servers
            if server.hash_token is not None
        ]
        # gather returns results in submission order, not completion order
        pages = await asyncio.gather(*(self._fetch(url) for url in urls))

        records: list[RedirectRecord] = []
        for url, page in zip(urls, pages):
            if page is None:
                continue
            record = extract_redirect(page)
            if record is None:
                log.info("rcp_no_redirect", url=url)
                continue
            records.append(record)

        log.debug("rcp_resolved", requested=len(urls), resolved=len(records))
        return records
