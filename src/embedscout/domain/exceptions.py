"""Resolution error hierarchy."""

from __future__ import annotations


class EmbedScoutError(Exception):
    """Base class for all embedscout errors."""


class InvalidInputError(EmbedScoutError, ValueError):
    """Raised before any I/O when a request is malformed."""


class InvalidCombinationError(InvalidInputError):
    """Raised when a movie request carries season/episode data."""


class ResolutionFailedError(EmbedScoutError):
    """Raised when the embed page or server list cannot be obtained.

    The original exception is available as ``__cause__``.
    """

    def __init__(self, media_id: str, message: str = "resolution failed") -> None:
        super().__init__(f"{message}: {media_id}")
        self.media_id = media_id
