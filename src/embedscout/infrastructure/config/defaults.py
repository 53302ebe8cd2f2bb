"""Hardcoded default configuration values.

Single source for defaults: AppConfig field defaults read from here.
"""

from __future__ import annotations

from typing import Any

from embedscout.infrastructure.vidsrc.constants import DECOY_SCRIPTS, REDIRECT_PREFIX

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "embedscout",
    "environment": "dev",
    "site": {
        "embed_url": "https://vidsrc.net",
        "default_base_domain": "https://whisperingauroras.com",
        "redirect_prefix": REDIRECT_PREFIX,
        "decoy_scripts": list(DECOY_SCRIPTS),
    },
    "http": {
        "timeout_seconds": 15.0,
        "follow_redirects": True,
        "user_agent": (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/128.0.0.0 Safari/537.36"
        ),
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
}
