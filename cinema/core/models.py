from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class ItemKind(str, Enum):
    MOVIE = "movie"
    EPISODE = "episode"
    TRAILER = "trailer"
    SERIES = "series"
    OTHER = "other"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "ItemKind":
        token = (raw or "").strip().lower()
        for kind in cls:
            if kind.value == token:
                return kind
        return cls.OTHER


class CandidateSource(str, Enum):
    LIBRARY_TRAILER = "library_trailer"
    CHANNEL_TRAILER = "channel_trailer"
    ITEM_WITH_TRAILER = "item_with_trailer"


@dataclass(frozen=True)
class Person:
    name: str
    type: Optional[str] = None
    role: Optional[str] = None


@dataclass(frozen=True)
class MediaItem:
    """
    Read-only view of a playable item.

    ``tags``, ``keywords`` and ``trailer_ids`` are optional capabilities: ``None``
    means the item does not expose the capability at all, while an empty tuple
    means it does but carries no entries.
    """

    id: str
    name: str = ""
    kind: ItemKind = ItemKind.OTHER
    official_rating: Optional[str] = None
    genres: Tuple[str, ...] = ()
    studios: Tuple[str, ...] = ()
    people: Tuple[Person, ...] = ()
    tags: Optional[Tuple[str, ...]] = None
    keywords: Optional[Tuple[str, ...]] = None
    trailer_ids: Optional[Tuple[str, ...]] = None

    @property
    def has_trailers(self) -> bool:
        return bool(self.trailer_ids)


@dataclass(frozen=True)
class UserContext:
    user_id: str
    name: Optional[str] = None


@dataclass(frozen=True)
class IntroResult:
    item_id: Optional[str] = None
    path: Optional[str] = None

    @property
    def is_custom(self) -> bool:
        return self.path is not None


@dataclass(frozen=True)
class SelectionPolicy:
    enable_intros_for_movies: bool = True
    enable_intros_for_episodes: bool = False
    enable_intros_from_library_trailers: bool = True
    enable_intros_from_remote_trailers: bool = True
    enable_custom_intro: bool = True
    enable_intros_parental_control: bool = True
    enable_intros_for_watched_content: bool = False
    custom_intro_path: str = ""
