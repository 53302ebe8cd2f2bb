from .media import (
    KeyMaterial,
    MediaKind,
    MediaRequest,
    RedirectRecord,
    ResolutionContext,
    ServerEntry,
    ServerListing,
    StreamResult,
)

__all__ = [
    "KeyMaterial",
    "MediaKind",
    "MediaRequest",
    "RedirectRecord",
    "ResolutionContext",
    "ServerEntry",
    "ServerListing",
    "StreamResult",
]
