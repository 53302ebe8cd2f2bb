"""Domain entities for embed stream resolution.

Pure value objects with no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Literal

from embedscout.domain.exceptions import InvalidCombinationError, InvalidInputError

MediaKind = Literal["movie", "tv"]

# "series" is the catalogue name, "tv" is what the embed site expects.
_KIND_ALIASES: dict[str, MediaKind] = {
    "movie": "movie",
    "tv": "tv",
    "series": "tv",
}


@dataclass(frozen=True)
class MediaRequest:
    """A validated resolution request.

    Use :meth:`create` to build one; it enforces the movie/series invariants
    before any network I/O can happen.
    """

    media_id: str
    kind: MediaKind
    season: int | None = None
    episode: int | None = None

    @classmethod
    def create(
        cls,
        media_id: str,
        kind: str,
        season: int | None = None,
        episode: int | None = None,
    ) -> MediaRequest:
        normalized = _KIND_ALIASES.get((kind or "").strip().lower())
        if normalized == "movie" and (season is not None or episode is not None):
            raise InvalidCombinationError(
                "movie requests cannot carry season/episode data"
            )
        if not media_id or not media_id.strip():
            raise InvalidInputError("media_id must not be empty")
        if season is not None and episode is None:
            raise InvalidInputError("season given without episode")
        if normalized is None:
            raise InvalidInputError(f"unsupported media kind: {kind!r}")
        if normalized == "tv" and (season is None or episode is None):
            raise InvalidInputError("tv requests need both season and episode")
        return cls(
            media_id=media_id.strip(),
            kind=normalized,
            season=season,
            episode=episode,
        )


@dataclass(frozen=True)
class ResolutionContext:
    """Per-call resolution state.

    Only the server list parser replaces ``base_domain``; every later stage
    reads it.
    """

    base_domain: str

    def with_base_domain(self, base_domain: str) -> ResolutionContext:
        return replace(self, base_domain=base_domain.rstrip("/"))


@dataclass(frozen=True)
class ServerEntry:
    """A server option listed on the embed page."""

    display_name: str | None
    hash_token: str | None


@dataclass(frozen=True)
class ServerListing:
    """Everything the server list parser derives from the embed page."""

    context: ResolutionContext
    title: str
    servers: list[ServerEntry] = field(default_factory=list)


@dataclass(frozen=True)
class RedirectRecord:
    """Redirect path found on an rcp page."""

    image_placeholder: str
    redirect_path: str

    def is_pro_redirect(self, prefix: str) -> bool:
        return self.redirect_path.startswith(prefix)

    def token(self, prefix: str) -> str:
        """Path with the redirect prefix stripped."""
        if not self.is_pro_redirect(prefix):
            return self.redirect_path
        return self.redirect_path[len(prefix):]


@dataclass(frozen=True)
class KeyMaterial:
    """Key pair pulled out of the player script."""

    selector_seed: str  # decodes to the id of the element holding the payload
    cipher_key: str


@dataclass(frozen=True)
class StreamResult:
    """A resolved stream, as handed back to callers."""

    title: str
    image: str | None
    media_id: str
    stream_url: str | None
    referer: str

    def to_dict(self) -> dict[str, Any]:
        """Render the external record shape."""
        return {
            "name": self.title,
            "image": self.image,
            "mediaId": self.media_id,
            "stream": self.stream_url,
            "referer": self.referer,
        }
