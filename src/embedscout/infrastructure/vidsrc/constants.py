"""Shared constants for the vidsrc embed network."""

from __future__ import annotations

REDIRECT_PREFIX = "/prorcp/"
DECOY_SCRIPTS: tuple[str, ...] = ("cpt.js",)

SERVER_SELECTOR = ".serversList .server"
SERVER_HASH_ATTR = "data-hash"


def script_headers(base_domain: str) -> dict[str, str]:
    """Headers a Chromium browser sends when loading the player script."""
    return {
        "accept": "*/*",
        "accept-language": "en-US,en;q=0.9",
        "priority": "u=1",
        "sec-ch-ua": '"Chromium";v="128", "Not;A=Brand";v="24", "Google Chrome";v="128"',
        "sec-ch-ua-mobile": "?0",
        "sec-ch-ua-platform": '"Windows"',
        "sec-fetch-dest": "script",
        "sec-fetch-mode": "no-cors",
        "sec-fetch-site": "same-origin",
        "Referer": f"{base_domain}/",
        "Referrer-Policy": "origin",
    }
