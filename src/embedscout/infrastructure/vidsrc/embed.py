"""Embed page fetcher.

Embed URLs follow the pattern:
    {site}/embed/movie?id={media_id}
    {site}/embed/tv?id={media_id}&season={season}&episode={episode}
"""

from __future__ import annotations

from urllib.parse import urlencode

import httpx
import structlog

from embedscout.domain.entities import MediaRequest

log = structlog.get_logger(__name__)


def build_embed_url(site: str, request: MediaRequest) -> str:
    """Build the embed page URL for *request*."""
    params: dict[str, object] = {"id": request.media_id}
    if request.kind == "tv":
        params["season"] = request.season
        params["episode"] = request.episode
    return f"{site.rstrip('/')}/embed/{request.kind}?{urlencode(params)}"


class EmbedFetcher:
    """Retrieves the embed page HTML.

    Transport failures and non-2xx responses propagate as
    ``httpx.HTTPError``; the caller decides whether that is fatal.
    """

    def __init__(self, http_client: httpx.AsyncClient, site: str) -> None:
        self._http = http_client
        self._site = site

    async def fetch(self, request: MediaRequest) -> str:
        url = build_embed_url(self._site, request)
        log.info("embed_fetch", url=url)
        resp = await self._http.get(url)
        resp.raise_for_status()
        return resp.text
