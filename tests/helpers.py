from __future__ import annotations

import random
from typing import Any, Dict, Iterable, List, Sequence

from cinema.core.models import ItemKind, MediaItem, Person, UserContext


def make_item(
    item_id: str,
    kind: ItemKind = ItemKind.MOVIE,
    rating: str | None = None,
    genres: Iterable[str] = (),
    studios: Iterable[str] = (),
    people: Iterable[Person] = (),
    tags: Iterable[str] | None = None,
    keywords: Iterable[str] | None = None,
    trailer_ids: Iterable[str] | None = None,
) -> MediaItem:
    return MediaItem(
        id=item_id,
        name=f"Item {item_id}",
        kind=kind,
        official_rating=rating,
        genres=tuple(genres),
        studios=tuple(studios),
        people=tuple(people),
        tags=tuple(tags) if tags is not None else None,
        keywords=tuple(keywords) if keywords is not None else None,
        trailer_ids=tuple(trailer_ids) if trailer_ids is not None else None,
    )


class ZeroRandom(random.Random):
    """
    Random source whose jitter is always zero, for deterministic scores.

    Tie-break keys still come from the seeded generator.
    """

    def __init__(self, seed: int = 7):
        super().__init__(seed)
        self.randrange_calls = 0

    def randrange(self, start, stop=None, step=1):  # type: ignore[override]
        self.randrange_calls += 1
        return 0


class FakeLibrary:
    def __init__(
        self,
        items: Sequence[MediaItem] = (),
        played: Iterable[str] = (),
    ):
        self.items = list(items)
        self.played = set(played)
        self.played_calls: List[str] = []

    def get_item(self, item_id: int) -> MediaItem | None:
        for item in self.items:
            if item.id == str(item_id):
                return item
        return None

    def recursive_items(self, user: UserContext) -> List[MediaItem]:
        return list(self.items)

    def is_played(self, item: MediaItem, user: UserContext) -> bool:
        self.played_calls.append(item.id)
        return item.id in self.played


class FakeChannel:
    def __init__(self, trailers: Sequence[MediaItem] = (), error: Exception | None = None):
        self.trailers = list(trailers)
        self.error = error
        self.calls: List[str] = []

    async def query_trailers(self, user: UserContext) -> List[MediaItem]:
        self.calls.append(user.user_id)
        if self.error is not None:
            raise self.error
        return list(self.trailers)


class FakeEntitlement:
    def __init__(self, entitled: bool = True):
        self.entitled = entitled

    def is_entitled(self, user: UserContext) -> bool:
        return self.entitled


class FakeResult:
    """
    Minimal result wrapper to emulate SQLAlchemy scalar result contract.
    """

    def __init__(self, rows: Sequence[Any]):
        self._rows = list(rows)

    def scalars(self) -> "FakeResult":
        return self

    def all(self) -> List[Any]:
        return list(self._rows)

    def first(self) -> Any | None:
        if not self._rows:
            return None
        return self._rows[0]


class FakeSession:
    """
    Stub session that answers ``execute`` calls from queued results.
    """

    def __init__(self, results: Sequence[Sequence[Any]] = ()):
        self._results = [list(rows) for rows in results]
        self.statements: List[Any] = []
        self.added: List[Any] = []
        self.commits = 0

    def execute(self, statement, params: Dict[str, Any] | None = None) -> FakeResult:
        self.statements.append(statement)
        rows = self._results.pop(0) if self._results else []
        return FakeResult(rows)

    def add(self, obj: Any) -> None:
        self.added.append(obj)

    def commit(self) -> None:
        self.commits += 1

    def close(self) -> None:
        pass
