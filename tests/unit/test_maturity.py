from cinema.core.maturity import RatingPolicy, normalize_rating, rating_level


def test_normalize_rating_handles_aliases():
    assert normalize_rating("tvma") == "TV-MA"
    assert normalize_rating("pg13") == "PG-13"
    assert normalize_rating("US-PG-13") == "PG-13"
    assert normalize_rating("  ") is None


def test_rating_level_maps_known_values():
    assert rating_level("G") == 0
    assert rating_level("TV-Y7-FV") == 7
    assert rating_level("PG-13") == 13
    assert rating_level("12A") == 13
    assert rating_level("Unknown") is None


def test_rating_policy_skips_lookup_for_blank_ratings():
    calls = []

    def ordinal(rating):
        calls.append(rating)
        return 5

    policy = RatingPolicy(ordinal)

    assert policy.level(None) is None
    assert policy.level("   ") is None
    assert calls == []
    assert policy.level("anything") == 5
    assert calls == ["anything"]


def test_rating_policy_allows_same_or_lower_levels():
    policy = RatingPolicy()

    assert policy.allows(13, "PG") is True
    assert policy.allows(13, "PG-13") is True
    assert policy.allows(13, "R") is False
    assert policy.allows(13, None) is False
    assert policy.allows(13, "Unknown") is False


def test_rating_policy_without_maximum_allows_everything():
    policy = RatingPolicy()

    assert policy.allows(None, "NC-17") is True
    assert policy.allows(None, None) is True
