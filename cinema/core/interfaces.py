from __future__ import annotations

from typing import Callable, Optional, Protocol, Sequence

from cinema.core.models import MediaItem, SelectionPolicy, UserContext

RatingOrdinal = Callable[[str], Optional[int]]
PolicyLoader = Callable[[], SelectionPolicy]


class RemoteTrailerError(RuntimeError):
    """Raised when the remote trailer listing cannot be retrieved.

    Callers should treat it as transient and retry later.
    """


class LibraryService(Protocol):
    def recursive_items(self, user: UserContext) -> Sequence[MediaItem]:
        ...

    def is_played(self, item: MediaItem, user: UserContext) -> bool:
        ...


class TrailerChannel(Protocol):
    async def query_trailers(self, user: UserContext) -> Sequence[MediaItem]:
        ...


class EntitlementService(Protocol):
    def is_entitled(self, user: UserContext) -> bool:
        ...
