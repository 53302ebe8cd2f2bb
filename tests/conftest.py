"""Shared test fixtures for embedscout test suite."""

from __future__ import annotations

import pytest

from embedscout.domain.entities import ResolutionContext
from embedscout.infrastructure.config import AppConfig

# ---------------------------------------------------------------------------
# Page builders
# ---------------------------------------------------------------------------


class PlayerPages:
    """Builds the embed, rcp and prorcp pages and the player script."""

    base = "https://player.test"
    embed_site = "https://embed.test"

    @staticmethod
    def embed(
        *,
        iframe_src: str | None = "//player.test/rcp/first",
        servers: list[tuple[str, str | None]] | None = None,
        title: str | None = "Big Buck Bunny",
    ) -> str:
        """Embed page with an iframe and a server list."""
        if servers is None:
            servers = [("CloudStream Pro", "abc")]
        iframe = f'<iframe src="{iframe_src}"></iframe>' if iframe_src is not None else ""
        items = "".join(
            f'<div class="server" data-hash="{h}">{name}</div>'
            if h is not None
            else f'<div class="server">{name}</div>'
            for name, h in servers
        )
        head = f"<title>{title}</title>" if title is not None else ""
        return (
            f"<html><head>{head}</head><body>{iframe}"
            f'<div class="serversList">{items}</div></body></html>'
        )

    @staticmethod
    def rcp(src: str | None = "/prorcp/xyz") -> str:
        """rcp page with a player config assignment."""
        if src is None:
            return "<html><body><p>nothing here</p></body></html>"
        return (
            "<html><body><script>"
            f"$('#the_frame').html('');loadIframe({{ src: '{src}', frameborder: 0 }});"
            "</script></body></html>"
        )

    @staticmethod
    def prorcp(
        *,
        scripts: list[str] | None = None,
        payloads: dict[str, str] | None = None,
    ) -> str:
        """prorcp page with versioned script tags and hidden payload elements."""
        if scripts is None:
            scripts = ["sbx.js?_=100", "player.js?_=200"]
        if payloads is None:
            payloads = {"S": "https://cdn.test/hls/master.m3u8"}
        tags = "".join(f'<script src="/{ref}"></script>' for ref in scripts)
        divs = "".join(
            f'<div id="{element_id}" style="display:none;">{text}</div>'
            for element_id, text in payloads.items()
        )
        return f"<html><head>{tags}</head><body>{divs}</body></html>"

    @staticmethod
    def player_js(key: str = "K", seed: str = "S") -> str:
        """Player script installing the window-scoped decoder."""
        return (
            "var a=function(){};a.init=null;var b={}"
            f'}}window[{key}("{seed}")]=function(){{return 1;}};'
        )


class IdentityDecryptor:
    """DecryptorPort that returns the ciphertext unchanged."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    async def decrypt(self, ciphertext: str, key: str) -> str | None:
        self.calls.append((ciphertext, key))
        return ciphertext


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def pages() -> PlayerPages:
    return PlayerPages()


@pytest.fixture()
def context(pages: PlayerPages) -> ResolutionContext:
    return ResolutionContext(base_domain=pages.base)


@pytest.fixture()
def identity_decryptor() -> IdentityDecryptor:
    return IdentityDecryptor()


@pytest.fixture()
def app_config(pages: PlayerPages) -> AppConfig:
    """Config pointing at the test hosts."""
    return AppConfig(
        embed_site_url=pages.embed_site,
        default_base_domain="https://fallback.test",
        environment="test",
    )
