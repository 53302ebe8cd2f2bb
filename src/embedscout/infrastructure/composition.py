"""Composition root: wires config, HTTP client and pipeline stages."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
import structlog

from embedscout.application.use_cases import ResolveStreamsUseCase
from embedscout.domain.entities import StreamResult
from embedscout.domain.ports import DecryptorPort
from embedscout.infrastructure.config import AppConfig
from embedscout.infrastructure.vidsrc import (
    EmbedFetcher,
    ProrcpDecoder,
    RcpResolver,
    SchemeDecryptor,
    parse_server_list,
)

log = structlog.get_logger(__name__)


def create_http_client(config: AppConfig) -> httpx.AsyncClient:
    """Build the shared HTTP client from config."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(config.http_timeout_seconds),
        headers={"User-Agent": config.http_user_agent},
        follow_redirects=config.http_follow_redirects,
    )


def build_use_case(
    config: AppConfig,
    http_client: httpx.AsyncClient,
    decryptor: DecryptorPort | None = None,
) -> ResolveStreamsUseCase:
    """Wire every pipeline stage around one shared client."""
    decoy_scripts = tuple(config.decoy_scripts)
    return ResolveStreamsUseCase(
        embed_fetcher=EmbedFetcher(http_client, config.embed_site_url),
        server_parser=parse_server_list,
        rcp_resolver=RcpResolver(http_client),
        prorcp_decoder=ProrcpDecoder(
            http_client,
            decryptor if decryptor is not None else SchemeDecryptor(),
            redirect_prefix=config.redirect_prefix,
            decoy_scripts=decoy_scripts,
        ),
        default_base_domain=config.default_base_domain,
        redirect_prefix=config.redirect_prefix,
    )


@asynccontextmanager
async def resolver_session(
    config: AppConfig,
    *,
    http_client: httpx.AsyncClient | None = None,
    decryptor: DecryptorPort | None = None,
) -> AsyncIterator[ResolveStreamsUseCase]:
    """Yield a ready use case; closes the HTTP client only if it created it."""
    owns_client = http_client is None
    client = http_client if http_client is not None else create_http_client(config)
    log.debug("http_client_initialized", owned=owns_client)
    try:
        yield build_use_case(config, client, decryptor)
    finally:
        if owns_client:
            await client.aclose()
            log.debug("http_client_closed")


async def resolve(
    media_id: str,
    kind: str,
    season: int | None = None,
    episode: int | None = None,
    *,
    config: AppConfig | None = None,
    http_client: httpx.AsyncClient | None = None,
    decryptor: DecryptorPort | None = None,
) -> list[StreamResult]:
    """Resolve *media_id* to stream results in one call.

    Raises ``InvalidInputError`` before any I/O for bad arguments and
    ``ResolutionFailedError`` when the embed page cannot be processed.
    An empty list means no stream was found.
    """
    async with resolver_session(
        config if config is not None else AppConfig(),
        http_client=http_client,
        decryptor=decryptor,
    ) as use_case:
        return await use_case.resolve(media_id, kind, season, episode)
