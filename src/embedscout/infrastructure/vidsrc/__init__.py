"""vidsrc embed network pipeline stages."""

from __future__ import annotations

from .decoder import SchemeDecryptor
from .embed import EmbedFetcher, build_embed_url
from .prorcp import ProrcpDecoder, extract_key_material, find_script_refs, select_script
from .rcp import RcpResolver, extract_redirect
from .servers import derive_base_domain, parse_server_list

__all__ = [
    "EmbedFetcher",
    "ProrcpDecoder",
    "RcpResolver",
    "SchemeDecryptor",
    "build_embed_url",
    "derive_base_domain",
    "extract_key_material",
    "extract_redirect",
    "find_script_refs",
    "parse_server_list",
    "select_script",
]
