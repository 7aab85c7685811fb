from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional, Set, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session

from cinema.core.models import ItemKind, MediaItem, Person, UserContext
from cinema.db.models import Item, UserHistory

logger = logging.getLogger(__name__)

PLAYED_EVENT_TYPES = frozenset({"watched", "played", "completed"})


def _strings(values: Optional[Iterable[Any]]) -> Tuple[str, ...]:
    return tuple(str(value).strip() for value in values or () if str(value).strip())


def _optional_strings(values: Optional[Iterable[Any]]) -> Optional[Tuple[str, ...]]:
    if values is None:
        return None
    return _strings(values)


def _people(raw: Optional[Iterable[Any]]) -> Tuple[Person, ...]:
    people: List[Person] = []
    for entry in raw or ():
        if not isinstance(entry, dict):
            continue
        name = str(entry.get("name") or "").strip()
        if not name:
            continue
        people.append(Person(name=name, type=entry.get("type"), role=entry.get("role")))
    return tuple(people)


def item_to_media(item: Item) -> MediaItem:
    return MediaItem(
        id=str(item.id),
        name=item.title or "",
        kind=ItemKind.parse(item.kind),
        official_rating=item.official_rating,
        genres=_strings(item.genres),
        studios=_strings(item.studios),
        people=_people(item.people),
        tags=_optional_strings(item.tags),
        keywords=_optional_strings(item.keywords),
        trailer_ids=_optional_strings(item.trailer_ids),
    )


class SqlLibrary:
    """Library and watch history backed by the ``items``/``user_history`` tables.

    Meant to live for a single request: the played set is loaded once per user.
    """

    def __init__(self, db: Session):
        self.db = db
        self._played: dict[str, Set[str]] = {}

    def get_item(self, item_id: int) -> MediaItem | None:
        row = self.db.execute(select(Item).where(Item.id == item_id)).scalars().first()
        if row is None:
            return None
        return item_to_media(row)

    def recursive_items(self, user: UserContext) -> List[MediaItem]:
        rows = self.db.execute(select(Item)).scalars().all()
        return [item_to_media(row) for row in rows]

    def is_played(self, item: MediaItem, user: UserContext) -> bool:
        return item.id in self._played_ids(user)

    def _played_ids(self, user: UserContext) -> Set[str]:
        cached = self._played.get(user.user_id)
        if cached is not None:
            return cached
        stmt = select(UserHistory.item_id).where(
            UserHistory.user_id == user.user_id,
            UserHistory.event_type.in_(sorted(PLAYED_EVENT_TYPES)),
        )
        played = {str(item_id) for item_id in self.db.execute(stmt).scalars().all()}
        logger.debug("Loaded %d played items for user %s", len(played), user.user_id)
        self._played[user.user_id] = played
        return played
