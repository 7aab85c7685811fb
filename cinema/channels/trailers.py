from __future__ import annotations

import asyncio
import logging
from threading import Lock
from typing import Any, Dict, List, Optional, Sequence, Tuple

import httpx
from cachetools import TTLCache

from cinema import config
from cinema.channels.tmdb_client import TMDBClient
from cinema.core.interfaces import RemoteTrailerError
from cinema.core.models import ItemKind, MediaItem, Person, UserContext

logger = logging.getLogger(__name__)

_CAST_LIMIT = 10
_CREW_TYPES = {
    "director": "Director",
    "screenplay": "Writer",
    "writer": "Writer",
    "original music composer": "Composer",
    "music": "Composer",
}


def _names(entries: Any) -> Tuple[str, ...]:
    names: List[str] = []
    for entry in entries or []:
        name = entry.get("name") if isinstance(entry, dict) else None
        if name:
            names.append(str(name))
    return tuple(names)


def _certification(payload: Dict[str, Any], region: str) -> Optional[str]:
    for country in (payload.get("release_dates") or {}).get("results", []):
        if country.get("iso_3166_1") != region:
            continue
        for release in country.get("release_dates", []):
            certification = (release.get("certification") or "").strip()
            if certification:
                return certification
    return None


def _people(credits: Dict[str, Any]) -> Tuple[Person, ...]:
    people: List[Person] = []
    cast = sorted(credits.get("cast") or [], key=lambda c: c.get("order", 0))
    for member in cast[:_CAST_LIMIT]:
        if member.get("name"):
            people.append(
                Person(name=member["name"], type="Actor", role=member.get("character"))
            )
    for member in credits.get("crew") or []:
        person_type = _CREW_TYPES.get(str(member.get("job") or "").lower())
        if person_type and member.get("name"):
            people.append(Person(name=member["name"], type=person_type))
    return tuple(people)


def trailer_from_tmdb(payload: Dict[str, Any], region: str = "US") -> MediaItem:
    """Build a trailer item from a TMDB movie details payload."""
    keywords = (payload.get("keywords") or {}).get("keywords")
    return MediaItem(
        id=f"tmdb:{payload['id']}",
        name=payload.get("title") or payload.get("original_title") or "",
        kind=ItemKind.TRAILER,
        official_rating=_certification(payload, region),
        genres=_names(payload.get("genres")),
        studios=_names(payload.get("production_companies")),
        people=_people(payload.get("credits") or {}),
        keywords=_names(keywords),
    )


class TmdbTrailerChannel:
    """Upcoming-release trailers sourced from TMDB."""

    def __init__(
        self,
        client: TMDBClient,
        region: str = config.TRAILER_REGION,
        pages: int = config.REMOTE_TRAILER_PAGES,
        limit: int = config.REMOTE_TRAILER_LIMIT,
        timeout: float = config.REMOTE_TRAILER_TIMEOUT,
        cache_ttl: int = config.REMOTE_TRAILER_CACHE_TTL,
    ):
        self.client = client
        self.region = region
        self.pages = max(1, pages)
        self.limit = max(0, limit)
        self.timeout = timeout
        self._cache: TTLCache[Tuple[str, int, int], Tuple[MediaItem, ...]] = TTLCache(
            maxsize=16, ttl=max(1, cache_ttl)
        )
        self._cache_lock = Lock()

    async def query_trailers(self, user: UserContext) -> Sequence[MediaItem]:
        # The upcoming listing is the same for every user.
        cache_key = (self.region, self.pages, self.limit)
        with self._cache_lock:
            cached = self._cache.get(cache_key)
        if cached is not None:
            return cached

        try:
            trailers = await asyncio.wait_for(self._fetch(), timeout=self.timeout)
        except asyncio.TimeoutError as exc:
            raise RemoteTrailerError(
                f"Trailer listing timed out after {self.timeout:.1f}s"
            ) from exc
        except httpx.HTTPError as exc:
            raise RemoteTrailerError(f"Trailer listing failed: {exc}") from exc
        except (ValueError, KeyError, TypeError) as exc:
            raise RemoteTrailerError(
                f"Trailer listing returned an unusable payload: {exc!r}"
            ) from exc

        with self._cache_lock:
            self._cache[cache_key] = trailers
        logger.info(
            "Fetched %d remote trailers for region %s (requested by %s)",
            len(trailers),
            self.region,
            user.user_id,
        )
        return trailers

    async def _fetch(self) -> Tuple[MediaItem, ...]:
        ids: List[int] = []
        if self.limit == 0:
            return ()
        async for entry in self.client.iter_upcoming(self.pages, region=self.region):
            if entry.get("id") is None:
                continue
            ids.append(int(entry["id"]))
            if len(ids) >= self.limit:
                break
        trailers: List[MediaItem] = []
        for tmdb_id in ids:
            details = await self.client.details(tmdb_id)
            trailers.append(trailer_from_tmdb(details, self.region))
        return tuple(trailers)


class SupporterEntitlement:
    """Remote trailers are a supporter feature: any configured key unlocks them."""

    def __init__(self, supporter_key: str = config.SUPPORTER_KEY):
        self.supporter_key = (supporter_key or "").strip()

    def is_entitled(self, user: UserContext) -> bool:
        return bool(self.supporter_key)
