"""Resolve playable stream URLs from vidsrc-style embed pages."""

from __future__ import annotations

from embedscout.domain.entities import MediaRequest, StreamResult
from embedscout.domain.exceptions import (
    EmbedScoutError,
    InvalidCombinationError,
    InvalidInputError,
    ResolutionFailedError,
)
from embedscout.infrastructure.composition import resolve, resolver_session

__all__ = [
    "EmbedScoutError",
    "InvalidCombinationError",
    "InvalidInputError",
    "MediaRequest",
    "ResolutionFailedError",
    "StreamResult",
    "resolve",
    "resolver_session",
]
