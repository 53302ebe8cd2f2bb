"""End-to-end pipeline tests against mocked embed, rcp and prorcp hosts.

Every HTTP exchange goes through respx; the real stages, parser and
composition root are wired exactly as in production.
"""

from __future__ import annotations

import httpx
import pytest
import respx

import embedscout
from embedscout.domain.exceptions import InvalidCombinationError, ResolutionFailedError
from embedscout.infrastructure.composition import build_use_case, resolver_session
from embedscout.infrastructure.config import AppConfig

pytestmark = pytest.mark.integration

_STREAM = "https://cdn.test/hls/master.m3u8"


def _mock_player_host(
    pages,
    *,
    rcp: dict[str, str | None],
    prorcp: dict[str, str],
    base: str | None = None,
) -> None:
    base = base or pages.base
    for hash_token, src in rcp.items():
        respx.get(f"{base}/rcp/{hash_token}").respond(200, text=pages.rcp(src))
    for token, html in prorcp.items():
        respx.get(f"{base}/prorcp/{token}").respond(200, text=html)
    respx.get(f"{base}/player.js").respond(200, text=pages.player_js())


class TestMoviePipeline:
    @respx.mock
    @pytest.mark.asyncio()
    async def test_single_server_resolves(
        self, app_config: AppConfig, identity_decryptor, pages
    ) -> None:
        respx.get(f"{pages.embed_site}/embed/movie", params={"id": "550"}).respond(
            200, text=pages.embed()
        )
        _mock_player_host(pages, rcp={"abc": "/prorcp/xyz"}, prorcp={"xyz": pages.prorcp()})

        async with httpx.AsyncClient() as client:
            results = await embedscout.resolve(
                "550",
                "movie",
                config=app_config,
                http_client=client,
                decryptor=identity_decryptor,
            )

        assert [r.to_dict() for r in results] == [
            {
                "name": "Big Buck Bunny",
                "image": "",
                "mediaId": "550",
                "stream": _STREAM,
                "referer": pages.base,
            }
        ]

    @respx.mock
    @pytest.mark.asyncio()
    async def test_unresolvable_server_does_not_block_others(
        self, app_config: AppConfig, identity_decryptor, pages
    ) -> None:
        servers = [("One", "h1"), ("Two", "h2"), ("Three", "h3")]
        respx.get(f"{pages.embed_site}/embed/movie").respond(
            200, text=pages.embed(servers=servers)
        )
        _mock_player_host(
            pages,
            rcp={"h1": "/prorcp/one", "h2": None, "h3": "/prorcp/three"},
            prorcp={
                "one": pages.prorcp(payloads={"S": "https://cdn.test/one.m3u8"}),
                "three": pages.prorcp(payloads={"S": "https://cdn.test/three.m3u8"}),
            },
        )

        async with httpx.AsyncClient() as client:
            async with resolver_session(
                app_config, http_client=client, decryptor=identity_decryptor
            ) as use_case:
                results = await use_case.resolve("550", "movie")

        assert [r.stream_url for r in results] == [
            "https://cdn.test/one.m3u8",
            "https://cdn.test/three.m3u8",
        ]

    @respx.mock
    @pytest.mark.asyncio()
    async def test_unusable_hash_does_not_block_others(
        self, app_config: AppConfig, identity_decryptor, pages
    ) -> None:
        respx.get(f"{pages.embed_site}/embed/movie").respond(
            200, text=pages.embed(servers=[("Good", "abc"), ("Broken", "x\x7fy")])
        )
        _mock_player_host(pages, rcp={"abc": "/prorcp/xyz"}, prorcp={"xyz": pages.prorcp()})

        async with httpx.AsyncClient() as client:
            results = await embedscout.resolve(
                "550",
                "movie",
                config=app_config,
                http_client=client,
                decryptor=identity_decryptor,
            )

        assert [r.stream_url for r in results] == [_STREAM]

    @respx.mock
    @pytest.mark.asyncio()
    async def test_unusable_redirect_does_not_block_others(
        self, app_config: AppConfig, identity_decryptor, pages
    ) -> None:
        respx.get(f"{pages.embed_site}/embed/movie").respond(
            200, text=pages.embed(servers=[("Good", "h1"), ("Broken", "h2")])
        )
        _mock_player_host(
            pages,
            rcp={"h1": "/prorcp/xyz", "h2": "/prorcp/a\tb"},
            prorcp={"xyz": pages.prorcp()},
        )

        async with httpx.AsyncClient() as client:
            results = await embedscout.resolve(
                "550",
                "movie",
                config=app_config,
                http_client=client,
                decryptor=identity_decryptor,
            )

        assert [r.stream_url for r in results] == [_STREAM]

    @respx.mock
    @pytest.mark.asyncio()
    async def test_missing_iframe_uses_default_domain(
        self, app_config: AppConfig, identity_decryptor, pages
    ) -> None:
        fallback = app_config.default_base_domain
        respx.get(f"{pages.embed_site}/embed/movie").respond(
            200, text=pages.embed(iframe_src=None)
        )
        _mock_player_host(
            pages, rcp={"abc": "/prorcp/xyz"}, prorcp={"xyz": pages.prorcp()}, base=fallback
        )

        async with httpx.AsyncClient() as client:
            results = await build_use_case(
                app_config, client, identity_decryptor
            ).resolve("550", "movie")

        assert [r.referer for r in results] == [fallback]

    @respx.mock
    @pytest.mark.asyncio()
    async def test_no_servers_is_empty(
        self, app_config: AppConfig, identity_decryptor, pages
    ) -> None:
        respx.get(f"{pages.embed_site}/embed/movie").respond(
            200, text=pages.embed(servers=[])
        )

        async with httpx.AsyncClient() as client:
            results = await embedscout.resolve(
                "550",
                "movie",
                config=app_config,
                http_client=client,
                decryptor=identity_decryptor,
            )

        assert results == []


class TestTvPipeline:
    @respx.mock
    @pytest.mark.asyncio()
    async def test_episode_resolves(
        self, app_config: AppConfig, identity_decryptor, pages
    ) -> None:
        embed_route = respx.get(
            f"{pages.embed_site}/embed/tv",
            params={"id": "1399", "season": "1", "episode": "2"},
        ).respond(200, text=pages.embed(title="Winter Is Coming"))
        _mock_player_host(pages, rcp={"abc": "/prorcp/xyz"}, prorcp={"xyz": pages.prorcp()})

        async with httpx.AsyncClient() as client:
            results = await embedscout.resolve(
                "1399",
                "series",
                1,
                2,
                config=app_config,
                http_client=client,
                decryptor=identity_decryptor,
            )

        assert embed_route.called
        assert [(r.title, r.stream_url) for r in results] == [("Winter Is Coming", _STREAM)]


class TestFailures:
    @respx.mock
    @pytest.mark.asyncio()
    async def test_embed_failure_raises_resolution_failed(
        self, app_config: AppConfig, identity_decryptor, pages
    ) -> None:
        respx.get(f"{pages.embed_site}/embed/movie").respond(502)

        async with httpx.AsyncClient() as client:
            with pytest.raises(ResolutionFailedError) as exc_info:
                await embedscout.resolve(
                    "550",
                    "movie",
                    config=app_config,
                    http_client=client,
                    decryptor=identity_decryptor,
                )

        assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)

    @respx.mock
    @pytest.mark.asyncio()
    async def test_invalid_combination_makes_no_request(
        self, app_config: AppConfig, identity_decryptor, pages
    ) -> None:
        route = respx.get(f"{pages.embed_site}/embed/movie").respond(
            200, text=pages.embed()
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(InvalidCombinationError):
                await embedscout.resolve(
                    "550",
                    "movie",
                    1,
                    1,
                    config=app_config,
                    http_client=client,
                    decryptor=identity_decryptor,
                )

        assert not route.called

    @respx.mock
    @pytest.mark.asyncio()
    async def test_caller_client_left_open(
        self, app_config: AppConfig, identity_decryptor, pages
    ) -> None:
        respx.get(f"{pages.embed_site}/embed/movie").respond(
            200, text=pages.embed(servers=[])
        )

        async with httpx.AsyncClient() as client:
            await embedscout.resolve(
                "550",
                "movie",
                config=app_config,
                http_client=client,
                decryptor=identity_decryptor,
            )
            assert not client.is_closed
