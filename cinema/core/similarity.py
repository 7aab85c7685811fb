from __future__ import annotations

import random
from typing import Iterable, Optional, Sequence, Set

from cinema.core.models import MediaItem, Person

RATING_POINTS = 10
GENRE_POINTS = 10
TAG_POINTS = 10
KEYWORD_POINTS = 10
STUDIO_POINTS = 5
RANDOM_JITTER_UPPER = 50

# Ordered: the first category matching a person's type or role wins.
_PERSON_POINTS: Sequence[tuple[str, int]] = (
    ("director", 5),
    ("actor", 3),
    ("composer", 3),
    ("gueststar", 3),
    ("writer", 2),
)
_DEFAULT_PERSON_POINTS = 1


def _folded(values: Optional[Iterable[str]]) -> Set[str]:
    return {value.casefold() for value in values or () if value}


def _shared_count(left: Optional[Iterable[str]], right: Optional[Iterable[str]]) -> int:
    return len(_folded(left) & _folded(right))


def _normalize_person_kind(value: Optional[str]) -> str:
    return (value or "").replace(" ", "").casefold()


def person_points(person: Person) -> int:
    kind = _normalize_person_kind(person.type)
    role = _normalize_person_kind(person.role)
    for category, points in _PERSON_POINTS:
        if kind == category or role == category:
            return points
    return _DEFAULT_PERSON_POINTS


def metadata_score(target: MediaItem, candidate: MediaItem) -> int:
    """Score the metadata overlap between two items, without any jitter."""
    points = 0

    if target.official_rating and (
        target.official_rating.casefold() == (candidate.official_rating or "").casefold()
    ):
        points += RATING_POINTS

    points += GENRE_POINTS * _shared_count(target.genres, candidate.genres)

    if target.tags is not None and candidate.tags is not None:
        points += TAG_POINTS * _shared_count(target.tags, candidate.tags)

    if target.keywords is not None and candidate.keywords is not None:
        points += KEYWORD_POINTS * _shared_count(target.keywords, candidate.keywords)

    points += STUDIO_POINTS * _shared_count(target.studios, candidate.studios)

    candidate_names = _folded(person.name for person in candidate.people)
    for person in target.people:
        if person.name and person.name.casefold() in candidate_names:
            points += person_points(person)

    return points


def similarity_score(
    target: MediaItem, candidate: MediaItem, rng: random.Random
) -> int:
    # Jitter keeps the same pair from always producing the same top picks.
    return metadata_score(target, candidate) + rng.randrange(0, RANDOM_JITTER_UPPER)
