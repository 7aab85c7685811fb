from __future__ import annotations

from typing import Optional

from cinema.core.interfaces import RatingOrdinal

_CANONICAL_ALIASES = {
    "G": "G",
    "E": "G",
    "U": "G",
    "PG": "PG",
    "PG13": "PG-13",
    "PG-13": "PG-13",
    "12": "PG-13",
    "12A": "PG-13",
    "R": "R",
    "NC17": "NC-17",
    "NC-17": "NC-17",
    "NR": "NR",
    "NOTRATED": "NR",
    "NOT-RATED": "NR",
    "UNRATED": "NR",
    "TVY": "TV-Y",
    "TV-Y": "TV-Y",
    "TVG": "TV-G",
    "TV-G": "TV-G",
    "TVY7": "TV-Y7",
    "TV-Y7": "TV-Y7",
    "TVY7FV": "TV-Y7-FV",
    "TV-Y7-FV": "TV-Y7-FV",
    "TVPG": "TV-PG",
    "TV-PG": "TV-PG",
    "TV14": "TV-14",
    "TV-14": "TV-14",
    "TVMA": "TV-MA",
    "TV-MA": "TV-MA",
    "MA15": "MA15+",
    "MA15+": "MA15+",
    "15": "MA15+",
    "16": "MA15+",
    "M": "M",
    "18": "NC-17",
    "18+": "NC-17",
    "R18": "NC-17",
    "R18+": "NC-17",
}

# Lower levels are more permissive.
_RATING_LEVELS: dict[str, int] = {
    "TV-Y": 0,
    "TV-G": 0,
    "G": 0,
    "TV-Y7": 7,
    "TV-Y7-FV": 7,
    "PG": 10,
    "TV-PG": 10,
    "PG-13": 13,
    "TV-14": 14,
    "MA15+": 15,
    "M": 15,
    "R": 17,
    "TV-MA": 17,
    "NC-17": 18,
    "NR": 99,
}


def normalize_rating(raw: Optional[str]) -> Optional[str]:
    if raw is None:
        return None
    cleaned = raw.strip()
    if not cleaned:
        return None
    token = cleaned.upper().replace("_", "-")
    # Region prefixes such as "US-PG-13" or "GB-15".
    if (
        len(token) > 3
        and token[2] == "-"
        and token[:2].isalpha()
        and not token.startswith("TV-")
    ):
        prefixed = token[3:]
        if prefixed.replace(" ", "") in _CANONICAL_ALIASES:
            token = prefixed
    compact = token.replace(" ", "")

    normalized = _CANONICAL_ALIASES.get(compact)
    if normalized:
        return normalized

    normalized = _CANONICAL_ALIASES.get(token)
    if normalized:
        return normalized

    return token


def rating_level(raw: Optional[str]) -> Optional[int]:
    normalized = normalize_rating(raw)
    if normalized is None:
        return None
    return _RATING_LEVELS.get(normalized)


class RatingPolicy:
    """Resolves official ratings to comparable maturity levels."""

    def __init__(self, ordinal: RatingOrdinal = rating_level):
        self._ordinal = ordinal

    def level(self, rating: Optional[str]) -> Optional[int]:
        if rating is None or not rating.strip():
            return None
        return self._ordinal(rating)

    def allows(self, max_level: Optional[int], rating: Optional[str]) -> bool:
        """True when content rated *rating* may play before a *max_level* item.

        Without a maximum there is nothing to compare against, so everything
        passes. Unrated content never passes a defined maximum.
        """
        if max_level is None:
            return True
        level = self.level(rating)
        return level is not None and level <= max_level
