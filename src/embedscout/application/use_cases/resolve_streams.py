"""Stream resolution use case.

media id -> embed page -> servers -> rcp redirects (concurrent)
-> prorcp pages (concurrent) -> decrypted stream URLs -> StreamResult list.
"""

from __future__ import annotations

import asyncio
from typing import Protocol

import structlog

from embedscout.domain.entities import (
    MediaRequest,
    RedirectRecord,
    ResolutionContext,
    ServerEntry,
    ServerListing,
    StreamResult,
)
from embedscout.domain.exceptions import ResolutionFailedError

# ---------------------------------------------------------------------------
# Protocols: what this use case needs from its dependencies.
# Infrastructure components satisfy these via structural subtyping.
# ---------------------------------------------------------------------------


class _EmbedFetcher(Protocol):
    async def fetch(self, request: MediaRequest) -> str: ...


class _ServerListParser(Protocol):
    def __call__(self, html: str, context: ResolutionContext) -> ServerListing: ...


class _RcpResolver(Protocol):
    async def resolve_all(
        self, context: ResolutionContext, servers: list[ServerEntry]
    ) -> list[RedirectRecord]: ...


class _ProrcpDecoder(Protocol):
    async def decode(
        self, context: ResolutionContext, record: RedirectRecord
    ) -> str | None: ...


log = structlog.get_logger(__name__)


def assemble_results(
    title: str,
    media_id: str,
    context: ResolutionContext,
    records: list[RedirectRecord],
    streams: list[str | None],
) -> list[StreamResult]:
    """Pair decoded streams with page metadata, dropping failed records.

    *streams* is index-aligned with *records*.
    """
    results: list[StreamResult] = []
    for record, stream in zip(records, streams):
        if not stream:
            continue
        results.append(
            StreamResult(
                title=title,
                image=record.image_placeholder,
                media_id=media_id,
                stream_url=stream,
                referer=context.base_domain,
            )
        )
    return results


class ResolveStreamsUseCase:
    """Resolves a media id to playable stream URLs.

    Invalid input fails before any I/O. Failures while fetching the embed
    page or parsing its server list raise ``ResolutionFailedError``; anything
    that goes wrong for an individual server only shortens the result list.
    """

    def __init__(
        self,
        *,
        embed_fetcher: _EmbedFetcher,
        server_parser: _ServerListParser,
        rcp_resolver: _RcpResolver,
        prorcp_decoder: _ProrcpDecoder,
        default_base_domain: str,
        redirect_prefix: str = "/prorcp/",
    ) -> None:
        self._embed = embed_fetcher
        self._parse_servers = server_parser
        self._rcp = rcp_resolver
        self._prorcp = prorcp_decoder
        self._default_base_domain = default_base_domain
        self._prefix = redirect_prefix

    async def execute(self, request: MediaRequest) -> list[StreamResult]:
        log.info(
            "resolution_started",
            media_id=request.media_id,
            kind=request.kind,
            season=request.season,
            episode=request.episode,
        )
        try:
            return await self._run(request)
        except Exception as exc:
            log.error(
                "resolution_failed",
                media_id=request.media_id,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise ResolutionFailedError(request.media_id) from exc

    async def _run(self, request: MediaRequest) -> list[StreamResult]:
        context = ResolutionContext(base_domain=self._default_base_domain)
        html = await self._embed.fetch(request)
        listing = self._parse_servers(html, context)
        context = listing.context

        records = await self._rcp.resolve_all(context, listing.servers)
        pro_records = [r for r in records if r.is_pro_redirect(self._prefix)]

        streams = await asyncio.gather(
            *(self._prorcp.decode(context, record) for record in pro_records)
        )
        results = assemble_results(
            listing.title, request.media_id, context, pro_records, list(streams)
        )

        log.info(
            "resolution_finished",
            media_id=request.media_id,
            base_domain=context.base_domain,
            servers=len(listing.servers),
            redirects=len(records),
            pro_redirects=len(pro_records),
            streams=len(results),
        )
        return results

    async def resolve(
        self,
        media_id: str,
        kind: str,
        season: int | None = None,
        episode: int | None = None,
    ) -> list[StreamResult]:
        """Validate the raw arguments and run the pipeline."""
        request = MediaRequest.create(media_id, kind, season, episode)
        return await self.execute(request)
