"""Common infrastructure utilities."""

from __future__ import annotations

from .html_selectors import SoupDocument, id_selector
from .patterns import RCP_SOURCE, VERSIONED_SCRIPT, WINDOW_KEY, ExtractionRule

__all__ = [
    "ExtractionRule",
    "RCP_SOURCE",
    "SoupDocument",
    "VERSIONED_SCRIPT",
    "WINDOW_KEY",
    "id_selector",
]
